"""
Fluent builder for pipeline configuration.
"""
from dataclasses import replace
from numbers import Real
from typing import Optional
import logging
import math

from ..core.capabilities import Capabilities, default_capabilities
from ..core.errors import InvalidOptionError, MissingCapabilityError
from ..core.interfaces import Driver, PipelineConfig

logger = logging.getLogger(__name__)


def _check_bound(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidOptionError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def _check_dimension(name: str, value) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidOptionError(f"{name} must be a positive integer or None, got {value!r}")
    return value


class PipelineBuilder:
    """
    Accumulates transformation options through chained calls.

    Every method validates its arguments before touching the configuration,
    so a rejected call leaves the builder as it was.

    Example:
        config = (
            PipelineBuilder()
            .crop_aspect_ratio(16 / 9)
            .resize(width=1920)
            .auto_orientate()
            .build()
        )
    """

    def __init__(self, capabilities: Optional[Capabilities] = None):
        self.capabilities = capabilities or default_capabilities()
        self._config = PipelineConfig()

    def driver(self, name) -> "PipelineBuilder":
        """Override the host's default image backend (``gd`` or ``imagick``)."""
        self._set(driver=Driver.parse(name))
        return self

    def croppable(self, enabled: bool = True, min_width: int = 0, min_height: int = 0) -> "PipelineBuilder":
        """
        Enable or disable interactive cropping.

        The minimum crop-box bounds are always overwritten. A fixed aspect
        ratio set earlier is kept, even when cropping is disabled. Use
        ``crop_aspect_ratio`` to lock the crop box to a ratio.
        """
        if not isinstance(enabled, bool):
            raise InvalidOptionError(
                f"enabled must be a bool, got {enabled!r}; use crop_aspect_ratio() for a fixed ratio"
            )
        self._set(
            cropping_enabled=enabled,
            min_crop_box_width=_check_bound("min_width", min_width),
            min_crop_box_height=_check_bound("min_height", min_height),
        )
        return self

    def crop_aspect_ratio(self, ratio: float, min_width: int = 0, min_height: int = 0) -> "PipelineBuilder":
        """Enable cropping with the crop box locked to ``width / height == ratio``."""
        if isinstance(ratio, bool) or not isinstance(ratio, Real) or not 0 < ratio < math.inf:
            raise InvalidOptionError(f"Crop aspect ratio must be a positive number, got {ratio!r}")

        self._set(
            cropping_enabled=True,
            crop_aspect_ratio=float(ratio),
            min_crop_box_width=_check_bound("min_width", min_width),
            min_crop_box_height=_check_bound("min_height", min_height),
        )
        return self

    def no_crop_box_resize(self) -> "PipelineBuilder":
        """Prevent the crop box from being resized in the widget."""
        self._set(crop_box_resizable=False)
        return self

    def enable_crop_zoom(self) -> "PipelineBuilder":
        """Enable zooming inside the crop window."""
        self._set(crop_zoom_enabled=True)
        return self

    def resize(self, width: Optional[int] = None, height: Optional[int] = None) -> "PipelineBuilder":
        """Set the target size. A missing side is derived from the aspect ratio."""
        self._set(
            target_width=_check_dimension("width", width),
            target_height=_check_dimension("height", height),
        )
        return self

    def auto_orientate(self) -> "PipelineBuilder":
        """Rotate the image to the orientation stored in its EXIF data."""
        if not self.capabilities.exif:
            raise MissingCapabilityError(
                "EXIF support must be available to use auto-orientation."
            )
        self._set(auto_orientate=True)
        return self

    def build(self) -> PipelineConfig:
        """Immutable snapshot of the current options."""
        return self._config

    def _set(self, **changes) -> None:
        self._config = replace(self._config, **changes)
        logger.debug(f"Pipeline option set: {changes}")
