from tensorflow.keras import layers


def conv_block(inputs, filters, kernel_size=3, batch_normalization=True, kernel_initializer='he_normal'):
    x = inputs
    for _ in range(2):
        x = layers.Conv2D(filters, kernel_size=kernel_size, padding='same',
                          kernel_initializer=kernel_initializer)(x)
        if batch_normalization:
            x = layers.BatchNormalization()(x)
        x = layers.Activation('relu')(x)
    return x


u_net_double_conv2d = conv_block


def encoder_block(inputs, filters, dropout_rate=0.1, batch_normalization=True, kernel_initializer='he_normal'):
    x = conv_block(inputs, filters, kernel_size=3, batch_normalization=batch_normalization,
                   kernel_initializer=kernel_initializer)
    p = layers.MaxPooling2D(pool_size=(2, 2))(x)
    p = layers.Dropout(dropout_rate)(p)
    return x, p


def decoder_block(inputs, skip_features, filters, dropout_rate=0.1, batch_normalization=True,
                  kernel_initializer='he_normal'):
    x = layers.Conv2DTranspose(filters, kernel_size=(2, 2), strides=(2, 2), padding='same')(inputs)
    x = layers.Concatenate()([x, skip_features])
    x = layers.Dropout(dropout_rate)(x)
    x = conv_block(x, filters, kernel_size=3, batch_normalization=batch_normalization,
                   kernel_initializer=kernel_initializer)
    return x
