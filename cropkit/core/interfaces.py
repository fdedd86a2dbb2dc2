"""
Abstract interfaces and value types for cropkit.
Defines contracts for codecs, uploads and the transform executor.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from dataclasses import dataclass
from enum import Enum
import json
import math

from .errors import InvalidCropInstructionError, InvalidDriverError


class Driver(Enum):
    """Image processing backends."""
    GD = "gd"
    IMAGICK = "imagick"

    @classmethod
    def parse(cls, name) -> "Driver":
        """Resolve a backend name, raising InvalidDriverError if unknown."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise InvalidDriverError(name) from None


@dataclass(frozen=True)
class ImageDimensions:
    """Represents image dimensions with utility properties."""
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height > 0 else 0

    @property
    def is_portrait(self) -> bool:
        return self.height > self.width

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height


@dataclass(frozen=True)
class CropInstruction:
    """Crop rectangle in source-image pixel coordinates."""
    width: int
    height: int
    x: int
    y: int

    FIELDS = ("width", "height", "x", "y")

    def __post_init__(self):
        for name in self.FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidCropInstructionError(f"Crop {name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidCropInstructionError(f"Crop {name} must be non-negative, got {value}")

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["CropInstruction"]:
        """
        Build an instruction from the data posted by the cropping widget.

        Accepts a JSON string, a mapping or an object exposing width, height,
        x and y attributes. Fractional values are rounded to the nearest pixel.
        Returns None for an empty payload.
        """
        if payload is None or payload == "" or payload == {}:
            return None
        if isinstance(payload, CropInstruction):
            return payload

        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except ValueError as e:
                raise InvalidCropInstructionError(f"Crop payload is not valid JSON: {e}") from e
            if payload is None:
                return None

        values = {}
        for name in cls.FIELDS:
            if isinstance(payload, dict):
                raw = payload.get(name)
            else:
                raw = getattr(payload, name, None)
            if raw is None:
                raise InvalidCropInstructionError(f"Crop payload is missing '{name}'")
            try:
                values[name] = int(math.floor(float(raw) + 0.5))
            except (TypeError, ValueError, OverflowError) as e:
                raise InvalidCropInstructionError(f"Crop {name} is not a number: {raw!r}") from e

        return cls(**values)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Rectangle as (left, upper, right, lower)."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class PipelineConfig:
    """
    Finalized transformation options for one image field.

    Instances are immutable and may be shared between concurrent executions.
    """
    driver: Optional[Driver] = None
    cropping_enabled: bool = False
    crop_aspect_ratio: Optional[float] = None
    min_crop_box_width: int = 0
    min_crop_box_height: int = 0
    crop_box_resizable: bool = True
    crop_zoom_enabled: bool = False
    target_width: Optional[int] = None
    target_height: Optional[int] = None
    auto_orientate: bool = False

    @property
    def resize_enabled(self) -> bool:
        return bool(self.target_width or self.target_height)

    @property
    def is_passthrough(self) -> bool:
        """True when no step would run, so the upload is left untouched."""
        return not self.cropping_enabled and not self.resize_enabled

    def widget_options(self) -> Dict[str, Any]:
        """Options consumed by the browser-side cropping widget."""
        return {
            "croppable": self.cropping_enabled,
            "aspectRatio": self.crop_aspect_ratio,
            "minCropBoxWidth": self.min_crop_box_width,
            "minCropBoxHeight": self.min_crop_box_height,
            "cropBoxResizable": self.crop_box_resizable,
            "zoomable": self.crop_zoom_enabled,
        }


@dataclass(frozen=True)
class TransformResult:
    """Outcome of one executor run."""
    data: Optional[bytes] = None
    format: Optional[str] = None
    mime_type: Optional[str] = None
    steps: Tuple[str, ...] = ()
    size: Optional[ImageDimensions] = None

    @property
    def passthrough(self) -> bool:
        return self.data is None


class IImageCodec(ABC):
    """Interface for pixel-level image backends."""

    driver: Driver

    @abstractmethod
    def decode(self, path: Path) -> Any:
        """Load an image and return a backend handle."""
        pass

    @abstractmethod
    def format_of(self, handle: Any) -> str:
        """Container format captured at decode time (e.g. 'JPEG')."""
        pass

    @abstractmethod
    def size_of(self, handle: Any) -> ImageDimensions:
        """Current dimensions of the handle."""
        pass

    @abstractmethod
    def orientate(self, handle: Any) -> Any:
        """Apply EXIF orientation to the pixels."""
        pass

    @abstractmethod
    def crop(self, handle: Any, width: int, height: int, x: int, y: int) -> Any:
        """Crop to the given rectangle."""
        pass

    @abstractmethod
    def resize(
        self,
        handle: Any,
        width: Optional[int],
        height: Optional[int],
        upsize: bool = True,
        aspect_ratio: bool = True
    ) -> Any:
        """Resize towards the target dimensions."""
        pass

    @abstractmethod
    def encode(self, handle: Any, quality: int, format: str) -> bytes:
        """Serialize the handle in the given format."""
        pass

    @abstractmethod
    def release(self, handle: Any) -> None:
        """Free resources held by the handle."""
        pass


class IUploadedFile(ABC):
    """Interface for an uploaded file stored at a path."""

    @property
    @abstractmethod
    def path(self) -> Path:
        """Storage path of the upload."""
        pass

    @abstractmethod
    def read_bytes(self) -> bytes:
        pass

    @abstractmethod
    def write_bytes(self, data: bytes) -> None:
        """Overwrite the upload in place."""
        pass


class ITransformExecutor(ABC):
    """Interface for running a configured pipeline on an upload."""

    @abstractmethod
    def run(
        self,
        config: PipelineConfig,
        upload: IUploadedFile,
        crop: Optional[CropInstruction] = None
    ) -> TransformResult:
        """Transform the upload and overwrite it in place."""
        pass
