import numpy as np
import pytest

from models_code import labels
from models_code.labels import (
    BINARY_COLORMAP, BINARY_LABELS, VOC_COLORMAP, VOC_LABELS,
    get_label_scheme, mask_to_rgb, probabilities_to_mask, rgb_to_mask,
)
from models_code.unet.errors import InvalidConfiguration


def test_table_sizes():
    assert len(VOC_LABELS) == len(VOC_COLORMAP) == 21
    assert len(BINARY_LABELS) == len(BINARY_COLORMAP) == 2


def test_voc_index_pairs_name_with_color():
    assert VOC_LABELS[1] == 'aeroplane'
    assert VOC_COLORMAP[1] == (128, 0, 0)
    assert VOC_LABELS[-1] == 'tv/monitor'
    assert VOC_COLORMAP[-1] == (0, 64, 128)


def test_background_is_black_and_binary_object_is_white():
    assert VOC_LABELS[0] == BINARY_LABELS[0] == 'background'
    assert VOC_COLORMAP[0] == BINARY_COLORMAP[0] == (0, 0, 0)
    assert BINARY_COLORMAP[1] == (255, 255, 255)


def test_colors_are_valid_and_unique():
    for colormap in (VOC_COLORMAP, BINARY_COLORMAP):
        assert len(set(colormap)) == len(colormap)
        assert all(len(color) == 3 and all(0 <= c <= 255 for c in color) for color in colormap)


def test_tables_are_immutable():
    assert isinstance(VOC_LABELS, tuple)
    assert isinstance(VOC_COLORMAP, tuple)
    with pytest.raises(TypeError):
        VOC_COLORMAP[0] = (1, 1, 1)


def test_lowercase_aliases():
    assert labels.voc_labels is VOC_LABELS
    assert labels.voc_colormap is VOC_COLORMAP
    assert labels.binary_labels is BINARY_LABELS
    assert labels.binary_colormap is BINARY_COLORMAP


def test_get_label_scheme():
    assert get_label_scheme('voc') == (VOC_LABELS, VOC_COLORMAP)
    assert get_label_scheme('Binary') == (BINARY_LABELS, BINARY_COLORMAP)
    with pytest.raises(InvalidConfiguration, match="Unknown label scheme"):
        get_label_scheme('cityscapes')


def test_mask_to_rgb():
    mask = np.array([[0, 1], [15, 20]])
    rgb = mask_to_rgb(mask, VOC_COLORMAP)

    assert rgb.shape == (2, 2, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[0, 1]) == (128, 0, 0)
    assert tuple(rgb[1, 0]) == (192, 128, 128)
    assert tuple(rgb[1, 1]) == (0, 64, 128)


def test_mask_to_rgb_rejects_bad_input():
    with pytest.raises(ValueError, match="out of range"):
        mask_to_rgb(np.array([[0, 2]]), BINARY_COLORMAP)
    with pytest.raises(ValueError, match="integer"):
        mask_to_rgb(np.array([[0.5]]), BINARY_COLORMAP)


def test_probabilities_to_mask_then_colors():
    probs = np.zeros((1, 2, 2, 2), dtype=np.float32)
    probs[0, 0, 0] = [0.9, 0.1]
    probs[0, 0, 1] = [0.2, 0.8]
    probs[0, 1, 0] = [0.3, 0.7]
    probs[0, 1, 1] = [0.6, 0.4]

    mask = probabilities_to_mask(probs)
    assert mask.tolist() == [[[0, 1], [1, 0]]]
    assert mask_to_rgb(mask[0], BINARY_COLORMAP)[0, 1].tolist() == [255, 255, 255]


def test_rgb_to_mask_recovers_indices():
    image = np.array([[[0, 0, 0], [128, 0, 0]], [[0, 128, 0], [64, 0, 0]]], dtype=np.uint8)
    assert rgb_to_mask(image, VOC_COLORMAP).tolist() == [[0, 1], [2, 8]]


def test_rgb_to_mask_unknown_color_is_background():
    image = np.array([[[255, 255, 255], [1, 2, 3]]], dtype=np.uint8)
    assert rgb_to_mask(image, BINARY_COLORMAP).tolist() == [[1, 0]]

    with pytest.raises(ValueError, match="RGB"):
        rgb_to_mask(np.zeros((4, 4)), BINARY_COLORMAP)
