import numpy as np

from models_code.unet.errors import InvalidConfiguration
from scripts.color_logger import ColorLogger

logger = ColorLogger("Labels").get_logger()

VOC_LABELS = (
    'background', 'aeroplane', 'bicycle', 'bird', 'boat',
    'bottle', 'bus', 'car', 'cat', 'chair', 'cow',
    'diningtable', 'dog', 'horse', 'motorbike', 'person',
    'potted plant', 'sheep', 'sofa', 'train', 'tv/monitor',
)

VOC_COLORMAP = (
    (0, 0, 0), (128, 0, 0), (0, 128, 0), (128, 128, 0),
    (0, 0, 128), (128, 0, 128), (0, 128, 128), (128, 128, 128),
    (64, 0, 0), (192, 0, 0), (64, 128, 0), (192, 128, 0),
    (64, 0, 128), (192, 0, 128), (64, 128, 128), (192, 128, 128),
    (0, 64, 0), (128, 64, 0), (0, 192, 0), (128, 192, 0),
    (0, 64, 128),
)

BINARY_LABELS = ('background', 'object')

BINARY_COLORMAP = ((0, 0, 0), (255, 255, 255))

voc_labels = VOC_LABELS
voc_colormap = VOC_COLORMAP
binary_labels = BINARY_LABELS
binary_colormap = BINARY_COLORMAP

LABEL_SCHEMES = {
    'voc': (VOC_LABELS, VOC_COLORMAP),
    'binary': (BINARY_LABELS, BINARY_COLORMAP),
}


def get_label_scheme(name):
    key = name.lower() if isinstance(name, str) else name
    if key not in LABEL_SCHEMES:
        raise InvalidConfiguration(
            f"Unknown label scheme: {name}. Available schemes: {', '.join(LABEL_SCHEMES)}"
        )
    return LABEL_SCHEMES[key]


def probabilities_to_mask(probs):
    """Collapse per-pixel class probabilities ``(..., H, W, C)`` to class indices."""
    return np.argmax(np.asarray(probs), axis=-1)


def mask_to_rgb(mask, colormap):
    mask = np.asarray(mask)
    if not np.issubdtype(mask.dtype, np.integer):
        raise ValueError(f"Class mask must hold integer indices, got dtype {mask.dtype}")
    palette = np.asarray(colormap, dtype=np.uint8)
    if mask.size and (mask.min() < 0 or mask.max() >= len(palette)):
        raise ValueError(
            f"Class index out of range for a {len(palette)}-color map: "
            f"[{mask.min()}, {mask.max()}]"
        )
    return palette[mask]


def rgb_to_mask(image, colormap):
    image = np.asarray(image)
    if image.ndim < 3 or image.shape[-1] != 3:
        raise ValueError(f"Expected an RGB image with a trailing channel axis of 3, got shape {image.shape}")
    mask = np.zeros(image.shape[:-1], dtype=np.int32)
    matched = np.zeros(image.shape[:-1], dtype=bool)
    for index, color in enumerate(colormap):
        hit = np.all(image == np.asarray(color), axis=-1)
        mask[hit] = index
        matched |= hit
    unmatched = int((~matched).sum())
    if unmatched:
        logger.warning(f"{unmatched} pixels did not match any colormap entry and were set to background")
    return mask
