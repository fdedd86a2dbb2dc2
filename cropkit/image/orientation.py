"""
Image orientation correction using EXIF data.
Follows Single Responsibility Principle - only handles orientation.
"""
from typing import Optional
from PIL import Image
import logging

logger = logging.getLogger(__name__)


class OrientationFixer:
    """Fixes image orientation based on EXIF metadata."""

    ORIENTATION_TAG = 0x0112

    _TRANSFORMS = {
        2: lambda img: img.transpose(Image.Transpose.FLIP_LEFT_RIGHT),
        3: lambda img: img.transpose(Image.Transpose.ROTATE_180),
        4: lambda img: img.transpose(Image.Transpose.FLIP_TOP_BOTTOM),
        5: lambda img: img.transpose(Image.Transpose.TRANSPOSE),
        6: lambda img: img.transpose(Image.Transpose.ROTATE_270),
        7: lambda img: img.transpose(Image.Transpose.TRANSVERSE),
        8: lambda img: img.transpose(Image.Transpose.ROTATE_90),
    }

    @classmethod
    def get_orientation(cls, exif: Optional[Image.Exif]) -> int:
        """Orientation value from EXIF, 1 when absent or unreadable."""
        if not exif:
            return 1
        try:
            return int(exif.get(cls.ORIENTATION_TAG, 1))
        except (TypeError, ValueError):
            return 1

    @classmethod
    def fix_pil_image(cls, img: Image.Image, exif: Optional[Image.Exif] = None) -> Image.Image:
        """
        Rotate/flip pixels so they match the EXIF orientation.

        The orientation tag is removed from ``exif`` (or the image's own EXIF)
        so the result is not rotated a second time by viewers.

        Args:
            img: Source image
            exif: EXIF block to consume, defaults to ``img.getexif()``

        Returns:
            The upright image (``img`` itself when no transform applies)
        """
        if exif is None:
            exif = img.getexif()

        orientation = cls.get_orientation(exif)
        transform = cls._TRANSFORMS.get(orientation)

        if cls.ORIENTATION_TAG in exif:
            del exif[cls.ORIENTATION_TAG]

        if transform is None:
            return img

        logger.debug(f"Applying EXIF orientation {orientation}")
        return transform(img)
