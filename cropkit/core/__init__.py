"""
Core module - Interfaces, value types and errors for cropkit.
"""
from .interfaces import (
    # Enums
    Driver,

    # Value types
    ImageDimensions,
    CropInstruction,
    PipelineConfig,
    TransformResult,

    # Abstract interfaces
    IImageCodec,
    IUploadedFile,
    ITransformExecutor,
)
from .capabilities import Capabilities, default_capabilities
from .errors import (
    CropkitError,
    ConfigurationError,
    InvalidDriverError,
    InvalidOptionError,
    MissingCapabilityError,
    ProcessingError,
    DecodeError,
    CropBoundsError,
    InvalidCropInstructionError,
    EncodeError,
)

__all__ = [
    # Enums
    "Driver",

    # Value types
    "ImageDimensions",
    "CropInstruction",
    "PipelineConfig",
    "TransformResult",

    # Abstract interfaces
    "IImageCodec",
    "IUploadedFile",
    "ITransformExecutor",

    # Capabilities
    "Capabilities",
    "default_capabilities",

    # Errors
    "CropkitError",
    "ConfigurationError",
    "InvalidDriverError",
    "InvalidOptionError",
    "MissingCapabilityError",
    "ProcessingError",
    "DecodeError",
    "CropBoundsError",
    "InvalidCropInstructionError",
    "EncodeError",
]
