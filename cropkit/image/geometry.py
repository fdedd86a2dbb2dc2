"""
Target size computation shared by all codecs.
"""
from typing import Optional
import math

from ..core.interfaces import ImageDimensions


def _round(value: float) -> int:
    return max(1, int(math.floor(value + 0.5)))


def fit_dimensions(
    src_width: int,
    src_height: int,
    width: Optional[int] = None,
    height: Optional[int] = None,
    upsize: bool = True,
    aspect_ratio: bool = True
) -> ImageDimensions:
    """
    Compute the output size for a resize.

    With aspect_ratio, a single target derives the other side proportionally
    and two targets fit the image inside the box. Without upsize the result
    never exceeds the source size.
    """
    if not width and not height:
        return ImageDimensions(src_width, src_height)

    if not aspect_ratio:
        new_w = width or src_width
        new_h = height or src_height
        if not upsize:
            new_w = min(new_w, src_width)
            new_h = min(new_h, src_height)
        return ImageDimensions(new_w, new_h)

    if width and height:
        scale = min(width / src_width, height / src_height)
    elif width:
        scale = width / src_width
    else:
        scale = height / src_height

    if not upsize:
        scale = min(scale, 1.0)

    if width and scale == width / src_width:
        return ImageDimensions(width, _round(src_height * scale))
    if height and scale == height / src_height:
        return ImageDimensions(_round(src_width * scale), height)
    return ImageDimensions(_round(src_width * scale), _round(src_height * scale))


def crop_fits(image: ImageDimensions, width: int, height: int, x: int, y: int) -> bool:
    """Check that a non-empty rectangle lies inside the image."""
    return (
        width > 0 and height > 0
        and x >= 0 and y >= 0
        and x + width <= image.width
        and y + height <= image.height
    )
