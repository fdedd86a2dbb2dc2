"""
ImageMagick image backend, selected by the ``imagick`` driver.

Operations are accumulated as command-line arguments and executed in a
single ``magick``/``convert`` call when the image is encoded.
"""
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
import subprocess
import logging

from .geometry import crop_fits, fit_dimensions
from ..core.errors import CropBoundsError, DecodeError, EncodeError
from ..core.interfaces import Driver, IImageCodec, ImageDimensions

logger = logging.getLogger(__name__)

# EXIF orientations (as ImageMagick names them) that swap width and height
TRANSPOSED_ORIENTATIONS = {"LeftTop", "RightTop", "RightBottom", "LeftBottom"}


@dataclass
class MagickImage:
    """Source file, its current geometry and the pending operations."""
    source: Path
    format: str
    width: int
    height: int
    orientation: str = "Undefined"
    operations: List[str] = field(default_factory=list)


class MagickCodec(IImageCodec):
    """Processes images by shelling out to ImageMagick."""

    driver = Driver.IMAGICK

    def __init__(self, binary: str = "convert", timeout: int = 30):
        self.binary = binary
        self.timeout = timeout

    def decode(self, path: Path) -> MagickImage:
        path = Path(path)
        cmd = [self.binary, f"{path}[0]", "-format", "%m %w %h %[orientation]", "info:"]
        result = self._run(cmd, DecodeError, f"Cannot decode {path.name}")

        try:
            fmt, width, height, orientation = result.stdout.decode().split()[:4]
            return MagickImage(
                source=path,
                format=fmt,
                width=int(width),
                height=int(height),
                orientation=orientation,
            )
        except ValueError as e:
            raise DecodeError(f"Cannot decode {path.name}: unexpected identify output") from e

    def format_of(self, handle: MagickImage) -> str:
        return handle.format

    def size_of(self, handle: MagickImage) -> ImageDimensions:
        return ImageDimensions(handle.width, handle.height)

    def orientate(self, handle: MagickImage) -> MagickImage:
        handle.operations.append("-auto-orient")
        if handle.orientation in TRANSPOSED_ORIENTATIONS:
            handle.width, handle.height = handle.height, handle.width
        handle.orientation = "TopLeft"
        return handle

    def crop(self, handle: MagickImage, width: int, height: int, x: int, y: int) -> MagickImage:
        size = self.size_of(handle)
        if not crop_fits(size, width, height, x, y):
            raise CropBoundsError(
                f"Crop {width}x{height}+{x}+{y} is outside image {size.width}x{size.height}"
            )
        handle.operations += ["-crop", f"{width}x{height}+{x}+{y}", "+repage"]
        handle.width, handle.height = width, height
        return handle

    def resize(
        self,
        handle: MagickImage,
        width: Optional[int],
        height: Optional[int],
        upsize: bool = True,
        aspect_ratio: bool = True
    ) -> MagickImage:
        target = fit_dimensions(
            handle.width, handle.height, width, height,
            upsize=upsize, aspect_ratio=aspect_ratio
        )
        if (target.width, target.height) != (handle.width, handle.height):
            handle.operations += ["-resize", f"{target.width}x{target.height}!"]
            handle.width, handle.height = target.width, target.height
        return handle

    def encode(self, handle: MagickImage, quality: int, format: str) -> bytes:
        cmd = [
            self.binary, f"{handle.source}[0]",
            *handle.operations,
            "-quality", str(quality),
            f"{format}:-",
        ]
        result = self._run(cmd, EncodeError, f"Cannot encode {handle.source.name} as {format}")
        return result.stdout

    def release(self, handle: MagickImage) -> None:
        handle.operations.clear()

    def _run(self, cmd: List[str], error, message: str) -> subprocess.CompletedProcess:
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise error(f"{message}: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip()
            raise error(f"{message}: {stderr}")
        return result
