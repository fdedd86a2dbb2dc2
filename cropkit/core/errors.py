"""
Exception hierarchy for cropkit.

Configuration errors are raised by the builder at the call that triggers
them. Processing errors are raised by the executor and codecs.
"""


class CropkitError(Exception):
    """Base class for all cropkit errors."""


class ConfigurationError(CropkitError):
    """Invalid pipeline configuration."""


class InvalidDriverError(ConfigurationError, ValueError):
    """Unknown image backend name."""

    def __init__(self, driver):
        self.driver = driver
        super().__init__(f'The driver "{driver}" is not a valid image driver.')


class InvalidOptionError(ConfigurationError, ValueError):
    """Option value outside its allowed range."""


class MissingCapabilityError(ConfigurationError):
    """A required capability is not available in this environment."""


class ProcessingError(CropkitError):
    """Failure while transforming an image."""


class DecodeError(ProcessingError):
    """Source image could not be read."""


class CropBoundsError(ProcessingError):
    """Crop rectangle is not valid for the image."""


class InvalidCropInstructionError(ProcessingError, ValueError):
    """Crop payload is malformed."""


class EncodeError(ProcessingError):
    """Image could not be serialized."""
