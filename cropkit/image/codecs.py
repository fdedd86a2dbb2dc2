"""
Driver to codec resolution.
"""
from typing import Callable, Dict, Optional
import logging

from .magick_codec import MagickCodec
from .pillow_codec import PillowCodec
from ..core.capabilities import Capabilities, default_capabilities
from ..core.errors import MissingCapabilityError
from ..core.interfaces import Driver, IImageCodec

logger = logging.getLogger(__name__)

CodecFactory = Callable[[], IImageCodec]


class CodecRegistry:
    """
    Maps drivers to codec instances.

    Codecs hold no per-image state, so one instance per driver is shared.
    """

    def __init__(self, factories: Optional[Dict[Driver, CodecFactory]] = None):
        self._factories: Dict[Driver, CodecFactory] = dict(factories or {})
        self._instances: Dict[Driver, IImageCodec] = {}

    @classmethod
    def default(cls, capabilities: Optional[Capabilities] = None) -> "CodecRegistry":
        """Registry with Pillow, plus ImageMagick when its binary is present."""
        capabilities = capabilities or default_capabilities()
        registry = cls({Driver.GD: PillowCodec})

        if capabilities.imagemagick:
            binary = capabilities.imagemagick
            registry.register(Driver.IMAGICK, lambda: MagickCodec(binary))
        else:
            logger.debug("ImageMagick not found, imagick driver unavailable")

        return registry

    def register(self, driver: Driver, factory: CodecFactory) -> None:
        driver = Driver.parse(driver)
        self._factories[driver] = factory
        self._instances.pop(driver, None)

    def available(self, driver: Driver) -> bool:
        return Driver.parse(driver) in self._factories

    def get(self, driver: Driver) -> IImageCodec:
        """Codec for the driver, raising MissingCapabilityError if not registered."""
        driver = Driver.parse(driver)
        if driver not in self._instances:
            factory = self._factories.get(driver)
            if factory is None:
                raise MissingCapabilityError(
                    f'No image backend is available for the "{driver.value}" driver.'
                )
            self._instances[driver] = factory()
        return self._instances[driver]
