"""
Runs a finalized pipeline configuration against one uploaded image.
"""
from pathlib import Path
from typing import Optional
from dataclasses import dataclass
from PIL import Image
import logging
import time

from ..core.errors import InvalidOptionError, ProcessingError
from ..core.interfaces import (
    CropInstruction,
    Driver,
    ITransformExecutor,
    IUploadedFile,
    PipelineConfig,
    TransformResult,
)
from ..image.codecs import CodecRegistry

logger = logging.getLogger(__name__)


@dataclass
class ExecutorSettings:
    """Host-level settings for the executor."""
    default_driver: Driver = Driver.GD
    quality: int = 100

    def __post_init__(self):
        self.default_driver = Driver.parse(self.default_driver)
        if isinstance(self.quality, bool) or not isinstance(self.quality, int) or not 1 <= self.quality <= 100:
            raise InvalidOptionError(f"quality must be an integer between 1 and 100, got {self.quality!r}")


class TransformExecutor(ITransformExecutor):
    """
    Applies orientate, crop and resize steps, then re-encodes in the
    original format.

    The executor keeps no per-call state, so one instance can serve
    concurrent uploads. The decoded image lives only for the duration of
    a call and is released on every exit path.

    Example:
        executor = TransformExecutor()
        result = executor.run(config, LocalUpload("avatar.jpg"), crop)
        if not result.passthrough:
            print(f"Saved {result.size.width}x{result.size.height} {result.format}")
    """

    def __init__(
        self,
        codecs: Optional[CodecRegistry] = None,
        settings: Optional[ExecutorSettings] = None
    ):
        self.codecs = codecs or CodecRegistry.default()
        self.settings = settings or ExecutorSettings()

    def run(
        self,
        config: PipelineConfig,
        upload: IUploadedFile,
        crop: Optional[CropInstruction] = None
    ) -> TransformResult:
        """
        Transform the upload and overwrite it in place.

        Args:
            config: Finalized pipeline configuration
            upload: Uploaded file to transform
            crop: Crop rectangle from the cropping widget, if any

        Returns:
            TransformResult; ``passthrough`` is True when the file was not touched
        """
        result = self.transform(config, upload.path, crop)
        if result.passthrough:
            return result

        upload.write_bytes(result.data)
        logger.info(
            f"Saved {upload.path.name}: {result.size.width}x{result.size.height} "
            f"{result.format} ({len(result.data)} bytes)"
        )
        return result

    def transform(
        self,
        config: PipelineConfig,
        source_path: Path,
        crop: Optional[CropInstruction] = None
    ) -> TransformResult:
        """Run the pipeline on a file and return the encoded bytes without writing them."""
        source_path = Path(source_path)

        if config.is_passthrough:
            if crop is not None:
                logger.warning(f"Crop data ignored for {source_path.name}: cropping is disabled")
            return TransformResult()

        start_time = time.time()
        codec = self.codecs.get(config.driver or self.settings.default_driver)

        try:
            handle = codec.decode(source_path)
        except ProcessingError as e:
            logger.error(f"Error decoding {source_path.name}: {e}")
            raise

        steps = ["decode"]
        try:
            original_format = codec.format_of(handle)

            if config.auto_orientate:
                handle = codec.orientate(handle)
                steps.append("orientate")

            if config.cropping_enabled and crop is not None:
                handle = codec.crop(handle, crop.width, crop.height, crop.x, crop.y)
                steps.append("crop")
            elif crop is not None:
                logger.debug(f"Crop data ignored for {source_path.name}: cropping is disabled")

            if config.resize_enabled:
                handle = codec.resize(
                    handle,
                    config.target_width,
                    config.target_height,
                    upsize=True,
                    aspect_ratio=True,
                )
                steps.append("resize")

            data = codec.encode(handle, self.settings.quality, original_format)
            steps.append("encode")
            size = codec.size_of(handle)
        except ProcessingError as e:
            logger.error(f"Error transforming {source_path.name}: {e}")
            raise
        finally:
            codec.release(handle)

        elapsed = time.time() - start_time
        logger.debug(f"Transformed {source_path.name} [{', '.join(steps)}] in {elapsed:.3f}s")

        return TransformResult(
            data=data,
            format=original_format,
            mime_type=Image.MIME.get(original_format.upper()),
            steps=tuple(steps),
            size=size,
        )
