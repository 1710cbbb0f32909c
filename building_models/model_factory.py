import json

from building_models.config import CONFIG_FILES, SUPPORTED_LABEL_SCHEMES, SUPPORTED_MODELS, UNET_CONFIG
from models_code.labels import get_label_scheme
from models_code.unet.errors import InvalidConfiguration
from models_code.unet.unet import u_net
from scripts.color_logger import ColorLogger

logger = ColorLogger("ModelFactory").get_logger()

ALLOWED_KEYS = set(UNET_CONFIG) | {"num_classes", "name"}


class ModelFactory:
    @staticmethod
    def merge_params(params, config, source):
        config = dict(config)
        if "input_shape" in config:
            input_shape = config.pop("input_shape")
            if not isinstance(input_shape, (list, tuple)) or len(input_shape) != 3:
                raise InvalidConfiguration(f"input_shape must be (height, width, channels), got {input_shape!r}")
            net_h, net_w, channels = input_shape
            if channels not in (1, 3):
                raise InvalidConfiguration(f"input_shape must have 1 or 3 channels, got {channels}")
            params.update(net_h=net_h, net_w=net_w, grayscale=channels == 1)
        unknown = sorted(set(config) - ALLOWED_KEYS)
        if unknown:
            raise InvalidConfiguration(
                f"Unknown U-Net parameter(s) in {source}: {', '.join(unknown)}. "
                f"Allowed: input_shape, {', '.join(sorted(ALLOWED_KEYS))}"
            )
        params.update(config)
        return params

    @staticmethod
    def load_config(label_scheme):
        if label_scheme not in SUPPORTED_LABEL_SCHEMES:
            raise InvalidConfiguration(
                f"Unsupported label scheme: {label_scheme}. "
                f"Available schemes: {', '.join(SUPPORTED_LABEL_SCHEMES)}"
            )
        with open(CONFIG_FILES[label_scheme], 'r') as f:
            config = json.load(f)

        return ModelFactory.merge_params(dict(UNET_CONFIG), config, CONFIG_FILES[label_scheme])

    @staticmethod
    def create_model(label_scheme="binary", architecture="unet", **overrides):
        if architecture.lower() not in SUPPORTED_MODELS:
            raise InvalidConfiguration(
                f"Unsupported model type: {architecture}. Available models: {', '.join(SUPPORTED_MODELS)}"
            )
        label_scheme = label_scheme.lower()
        labels, _ = get_label_scheme(label_scheme)

        params = ModelFactory.load_config(label_scheme)
        params = ModelFactory.merge_params(params, overrides, "overrides")
        num_classes = params.pop("num_classes", len(labels))
        if num_classes != len(labels):
            raise InvalidConfiguration(
                f"Label scheme '{label_scheme}' has {len(labels)} classes, got num_classes={num_classes}"
            )
        name = params.pop("name", f"{architecture.lower()}_{label_scheme}")

        logger.info(f"Creating {architecture} for '{label_scheme}' labels ({len(labels)} classes)")
        return u_net(num_classes=num_classes, name=name, **params)
