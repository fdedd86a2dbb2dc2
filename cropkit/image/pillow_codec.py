"""
Pillow image backend, selected by the ``gd`` driver.
"""
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
from io import BytesIO
from PIL import Image
import logging
import struct

from .geometry import crop_fits, fit_dimensions
from .orientation import OrientationFixer
from ..core.errors import CropBoundsError, DecodeError, EncodeError
from ..core.interfaces import Driver, IImageCodec, ImageDimensions

logger = logging.getLogger(__name__)

EXIF_FORMATS = {"JPEG", "PNG", "WEBP"}
ICC_FORMATS = {"JPEG", "PNG", "WEBP", "TIFF"}


def _webp_is_lossless(path: Path) -> bool:
    """Check whether a WebP file stores its image as a VP8L (lossless) bitstream."""
    with open(path, "rb") as f:
        data = f.read()

    if data[:4] != b"RIFF" or data[8:12] != b"WEBP":
        return False

    offset = 12
    while offset + 8 <= len(data):
        fourcc = data[offset:offset + 4]
        size, = struct.unpack("<I", data[offset + 4:offset + 8])
        if fourcc == b"VP8L":
            return True
        if fourcc == b"VP8 ":
            return False
        # chunks are padded to an even length
        offset += 8 + size + (size & 1)
    return False


@dataclass
class PillowImage:
    """Decoded image plus the metadata carried to the encoder."""
    image: Image.Image
    format: str
    source: Path
    exif: Optional[Image.Exif] = None
    icc_profile: Optional[bytes] = None
    lossless: bool = False


class PillowCodec(IImageCodec):
    """Processes images in memory with Pillow."""

    driver = Driver.GD

    def decode(self, path: Path) -> PillowImage:
        path = Path(path)
        try:
            img = Image.open(path)
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(f"Cannot decode {path.name}: {e}") from e

        try:
            img.load()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            img.close()
            raise DecodeError(f"Cannot decode {path.name}: {e}") from e

        # MPO is a JPEG with extra frames; the first frame is kept as plain JPEG
        fmt = "JPEG" if img.format == "MPO" else img.format

        return PillowImage(
            image=img,
            format=fmt,
            source=path,
            exif=img.getexif(),
            icc_profile=img.info.get("icc_profile"),
            lossless=fmt == "WEBP" and _webp_is_lossless(path),
        )

    def format_of(self, handle: PillowImage) -> str:
        return handle.format

    def size_of(self, handle: PillowImage) -> ImageDimensions:
        return ImageDimensions(*handle.image.size)

    def orientate(self, handle: PillowImage) -> PillowImage:
        self._replace(handle, OrientationFixer.fix_pil_image(handle.image, handle.exif))
        return handle

    def crop(self, handle: PillowImage, width: int, height: int, x: int, y: int) -> PillowImage:
        size = self.size_of(handle)
        if not crop_fits(size, width, height, x, y):
            raise CropBoundsError(
                f"Crop {width}x{height}+{x}+{y} is outside image {size.width}x{size.height}"
            )
        self._replace(handle, handle.image.crop((x, y, x + width, y + height)))
        return handle

    def resize(
        self,
        handle: PillowImage,
        width: Optional[int],
        height: Optional[int],
        upsize: bool = True,
        aspect_ratio: bool = True
    ) -> PillowImage:
        w, h = handle.image.size
        target = fit_dimensions(w, h, width, height, upsize=upsize, aspect_ratio=aspect_ratio)
        if (target.width, target.height) != (w, h):
            resized = handle.image.resize((target.width, target.height), Image.Resampling.LANCZOS)
            self._replace(handle, resized)
        return handle

    def encode(self, handle: PillowImage, quality: int, format: str) -> bytes:
        buffer = BytesIO()
        try:
            handle.image.save(buffer, format=format, **self._save_options(handle, quality, format))
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(f"Cannot encode {handle.source.name} as {format}: {e}") from e
        return buffer.getvalue()

    def release(self, handle: PillowImage) -> None:
        handle.image.close()

    def _replace(self, handle: PillowImage, image: Image.Image) -> None:
        """Swap the working image, closing the previous one."""
        if image is not handle.image:
            handle.image.close()
            handle.image = image

    def _prepare_for_jpeg(self, img: Image.Image) -> Image.Image:
        """Convert image to a mode JPEG can store."""
        if img.mode in ("RGBA", "LA"):
            background = Image.new("RGB", img.size, (255, 255, 255))
            alpha = img.split()[-1]
            background.paste(img.convert("RGB"), mask=alpha)
            return background
        if img.mode not in ("RGB", "L", "CMYK"):
            return img.convert("RGB")
        return img

    def _save_options(self, handle: PillowImage, quality: int, format: str) -> dict:
        """Encoder keyword arguments for the target format."""
        options = {}
        format = format.upper()

        if format == "JPEG":
            prepared = self._prepare_for_jpeg(handle.image)
            self._replace(handle, prepared)
            options.update(quality=quality, optimize=True)
            if quality >= 100:
                options["subsampling"] = 0
        elif format == "WEBP":
            options["quality"] = quality
            if handle.lossless:
                options["lossless"] = True

        if format in EXIF_FORMATS and handle.exif:
            options["exif"] = handle.exif.tobytes()
        if format in ICC_FORMATS and handle.icc_profile:
            options["icc_profile"] = handle.icc_profile

        return options
