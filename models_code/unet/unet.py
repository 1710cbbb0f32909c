import numbers
from dataclasses import dataclass
from typing import Union

import tensorflow as tf
from tensorflow.keras import layers, models

from models_code.unet.blocks import conv_block, encoder_block, decoder_block
from models_code.unet.errors import InvalidConfiguration
from scripts.color_logger import ColorLogger

logger = ColorLogger("UNet").get_logger()


def _is_int(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_power_of_two(value):
    return _is_int(value) and value > 0 and value & (value - 1) == 0


@dataclass(frozen=True)
class UNetConfig:
    """Hyperparameters of a U-Net.

    ``height`` and ``width`` must be powers of two so that ``blocks`` rounds of
    2x pooling and 2x transpose convolution restore the input resolution
    exactly. ``filters`` is the width of the first encoder block; every block
    below it doubles the width.
    """
    height: int
    width: int
    grayscale: bool
    blocks: int = 4
    num_classes: int = 2
    filters: int = 16
    dropout_rate: float = 0.1
    batch_normalization: bool = True
    kernel_initializer: Union[str, tf.keras.initializers.Initializer] = 'he_normal'

    @property
    def channels(self) -> int:
        return 1 if self.grayscale else 3

    @property
    def input_shape(self):
        return self.height, self.width, self.channels

    @property
    def max_blocks(self) -> int:
        return min(self.height, self.width).bit_length() - 1

    def validate(self):
        for dim_name in ("height", "width"):
            dim = getattr(self, dim_name)
            if not _is_power_of_two(dim):
                raise InvalidConfiguration(f"{dim_name} must be a positive power of two, got {dim!r}")
        if not isinstance(self.grayscale, bool):
            raise InvalidConfiguration(f"grayscale must be a bool, got {self.grayscale!r}")
        if not _is_int(self.blocks) or self.blocks < 1:
            raise InvalidConfiguration(f"blocks must be an integer >= 1, got {self.blocks!r}")
        if self.blocks > self.max_blocks:
            raise InvalidConfiguration(
                f"blocks={self.blocks} would pool a {self.height}x{self.width} input below 1x1 "
                f"(at most {self.max_blocks} blocks allowed)"
            )
        if not _is_int(self.num_classes) or self.num_classes < 2:
            raise InvalidConfiguration(f"num_classes must be an integer >= 2, got {self.num_classes!r}")
        if not _is_int(self.filters) or self.filters < 1:
            raise InvalidConfiguration(f"filters must be an integer >= 1, got {self.filters!r}")
        if (not isinstance(self.dropout_rate, numbers.Real) or isinstance(self.dropout_rate, bool)
                or not 0 <= self.dropout_rate < 1):
            raise InvalidConfiguration(f"dropout_rate must be in [0, 1), got {self.dropout_rate!r}")
        if not isinstance(self.batch_normalization, bool):
            raise InvalidConfiguration(
                f"batch_normalization must be a bool, got {self.batch_normalization!r}"
            )
        if not isinstance(self.kernel_initializer, (str, tf.keras.initializers.Initializer)):
            raise InvalidConfiguration(
                f"kernel_initializer must be a name or an Initializer, got {self.kernel_initializer!r}"
            )
        return self


class UNET:
    def __init__(self, config: UNetConfig, name='u_net'):
        self.config = config
        self.name = name

    def build_model(self):
        config = self.config
        try:
            config.validate()
        except InvalidConfiguration as e:
            logger.error(f"Invalid U-Net configuration: {e}")
            raise

        blocks = config.blocks
        block_kwargs = {
            "dropout_rate": config.dropout_rate,
            "batch_normalization": config.batch_normalization,
            "kernel_initializer": config.kernel_initializer,
        }

        inputs = layers.Input(shape=config.input_shape, name='input_img')

        # conv_layers[b - 1] holds block b; encoder 1..blocks, bottleneck, decoder
        conv_layers = []
        x = inputs
        for block in range(1, blocks + 1):
            skip, x = encoder_block(x, config.filters * 2 ** (block - 1), **block_kwargs)
            conv_layers.append(skip)

        conv_layers.append(conv_block(x, config.filters * 2 ** blocks, kernel_size=3,
                                      batch_normalization=config.batch_normalization,
                                      kernel_initializer=config.kernel_initializer))

        for block in range(1, blocks + 1):
            mirror = conv_layers[blocks - block]
            conv_layers.append(decoder_block(conv_layers[blocks + block - 1], mirror,
                                             config.filters * 2 ** (blocks - block), **block_kwargs))

        outputs = layers.Conv2D(config.num_classes, kernel_size=(1, 1), activation='softmax')(conv_layers[-1])
        model = models.Model(inputs=inputs, outputs=outputs, name=self.name)

        logger.info(
            f"Built {self.name}: input {model.input_shape}, output {model.output_shape}, "
            f"{blocks} blocks, {model.count_params()} parameters"
        )
        return model


def build_u_net(config: UNetConfig, name='u_net'):
    return UNET(config, name=name).build_model()


def u_net(net_h, net_w, grayscale, blocks=4, num_classes=2, filters=16, dropout_rate=0.1,
          batch_normalization=True, kernel_initializer='he_normal', name='u_net'):
    """Create a U-Net model.

    Args:
        net_h: Input height, a power of two.
        net_w: Input width, a power of two.
        grayscale: One input channel if True, three otherwise.
        blocks: Number of encoder (and decoder) blocks.
        num_classes: Number of output classes, background included. Minimum 2.
        filters: Filters of the first block, doubled at each level down.
        dropout_rate: Dropout applied after pooling and after each skip merge.
        batch_normalization: Insert batch normalization after every convolution.
        kernel_initializer: Initializer for the convolution kernels.
        name: Name of the returned model.

    Returns:
        Uncompiled ``tf.keras.Model`` mapping ``(N, net_h, net_w, channels)``
        to per-pixel softmax probabilities ``(N, net_h, net_w, num_classes)``.

    Raises:
        InvalidConfiguration: before any layer is created, if the
            hyperparameters are invalid.
    """
    config = UNetConfig(
        height=net_h,
        width=net_w,
        grayscale=grayscale,
        blocks=blocks,
        num_classes=num_classes,
        filters=filters,
        dropout_rate=dropout_rate,
        batch_normalization=batch_normalization,
        kernel_initializer=kernel_initializer,
    )
    return build_u_net(config, name=name)
