"""
Image backends for cropkit.
"""
from .orientation import OrientationFixer
from .geometry import fit_dimensions, crop_fits
from .pillow_codec import PillowCodec, PillowImage
from .magick_codec import MagickCodec, MagickImage
from .codecs import CodecRegistry

__all__ = [
    'OrientationFixer',
    'fit_dimensions',
    'crop_fits',
    'PillowCodec',
    'PillowImage',
    'MagickCodec',
    'MagickImage',
    'CodecRegistry',
]
