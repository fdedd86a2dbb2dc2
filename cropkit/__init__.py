"""
cropkit - Post-processing pipeline for uploaded images.

Configures and runs a deterministic sequence on a single uploaded image:
- EXIF-based re-orientation
- Interactive cropping from browser widget coordinates
- Aspect-preserving resizing
- Re-encoding in the original format at full quality

Example usage:
    from cropkit import PipelineBuilder, TransformExecutor, LocalUpload, CropInstruction

    config = (
        PipelineBuilder()
        .crop_aspect_ratio(1.0, min_width=100, min_height=100)
        .resize(width=512)
        .auto_orientate()
        .build()
    )

    executor = TransformExecutor()
    crop = CropInstruction.from_payload('{"width": 800, "height": 800, "x": 40, "y": 0}')
    result = executor.run(config, LocalUpload("avatar.jpg"), crop)
    print(result.steps)
"""

from .transformable import TransformableImage
from .pipeline import PipelineBuilder, TransformExecutor, ExecutorSettings, LocalUpload
from .image import CodecRegistry, PillowCodec, MagickCodec, OrientationFixer, fit_dimensions
from .core.capabilities import Capabilities, default_capabilities
from .core.interfaces import (
    Driver,
    ImageDimensions,
    CropInstruction,
    PipelineConfig,
    TransformResult,
    IImageCodec,
    IUploadedFile,
)
from .core.errors import (
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

__version__ = "1.0.0"

__all__ = [
    # Main facade
    "TransformableImage",

    # Pipeline
    "PipelineBuilder",
    "TransformExecutor",
    "ExecutorSettings",
    "LocalUpload",

    # Codecs
    "CodecRegistry",
    "PillowCodec",
    "MagickCodec",
    "OrientationFixer",
    "fit_dimensions",

    # Core types
    "Capabilities",
    "default_capabilities",
    "Driver",
    "ImageDimensions",
    "CropInstruction",
    "PipelineConfig",
    "TransformResult",
    "IImageCodec",
    "IUploadedFile",

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
