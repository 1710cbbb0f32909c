import os

CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))

SUPPORTED_MODELS = ["unet"]
SUPPORTED_LABEL_SCHEMES = ["voc", "binary"]

UNET_CONFIG = {
    "net_h": 256,
    "net_w": 256,
    "grayscale": False,
    "blocks": 4,
    "filters": 16,
    "dropout_rate": 0.1,
    "batch_normalization": True,
    "kernel_initializer": "he_normal",
}

CONFIG_FILES = {
    scheme: os.path.join(CONFIG_DIR, f"config_{scheme}.json")
    for scheme in SUPPORTED_LABEL_SCHEMES
}
