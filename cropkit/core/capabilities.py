"""
Environment capabilities, resolved once and injected where needed.
"""
from dataclasses import dataclass
from typing import Optional
import logging
import shutil

from PIL import Image

logger = logging.getLogger(__name__)

MAGICK_BINARIES = ("magick", "convert")


@dataclass(frozen=True)
class Capabilities:
    """What the host environment can do."""
    exif: bool = True
    imagemagick: Optional[str] = None

    @classmethod
    def detect(cls) -> "Capabilities":
        """
        Detect Pillow EXIF support and the ImageMagick binary.

        Every supported Pillow release reads EXIF, so ``exif`` is always True
        here; hosts that must forbid auto-orientation construct
        ``Capabilities(exif=False)`` themselves. Only ``imagemagick`` varies
        with the environment.
        """
        exif = hasattr(Image.Image, "getexif")
        binary = None
        for name in MAGICK_BINARIES:
            binary = shutil.which(name)
            if binary:
                break

        logger.debug(f"Detected capabilities: exif={exif}, imagemagick={binary}")
        return cls(exif=exif, imagemagick=binary)


_detected: Optional[Capabilities] = None


def default_capabilities() -> Capabilities:
    """Capabilities of the running process, detected on first use."""
    global _detected
    if _detected is None:
        _detected = Capabilities.detect()
    return _detected
