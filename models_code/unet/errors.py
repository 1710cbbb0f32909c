class InvalidConfiguration(ValueError):
    """Raised when U-Net hyperparameters cannot produce a valid layer graph."""
