"""
TransformableImage - facade for an image upload field.
Combines the configuration builder and the executor behind one fluent API.
"""
from numbers import Real
from typing import Any, Dict, Optional, Union
from pathlib import Path
import logging

from .core.capabilities import Capabilities
from .core.interfaces import CropInstruction, IUploadedFile, PipelineConfig, TransformResult
from .pipeline.builder import PipelineBuilder
from .pipeline.executor import TransformExecutor
from .pipeline.upload import LocalUpload

logger = logging.getLogger(__name__)


class TransformableImage:
    """
    Image field that post-processes its upload.

    Example:
        field = (
            TransformableImage()
            .croppable(16 / 9)
            .resize(1920)
            .auto_orientate()
        )

        # Sent to the cropping widget
        options = field.widget_options()

        # On upload
        field.transform_image(LocalUpload(path), request_data.get("cropper"))
    """

    def __init__(
        self,
        executor: Optional[TransformExecutor] = None,
        capabilities: Optional[Capabilities] = None
    ):
        self.builder = PipelineBuilder(capabilities)
        self.executor = executor or TransformExecutor()

    def driver(self, name) -> "TransformableImage":
        self.builder.driver(name)
        return self

    def croppable(
        self,
        param: Union[bool, float] = True,
        min_width: int = 0,
        min_height: int = 0
    ) -> "TransformableImage":
        """
        Make the image croppable.

        A number locks the crop box to that aspect ratio; a boolean turns
        cropping on or off.
        """
        if isinstance(param, Real) and not isinstance(param, bool):
            self.builder.crop_aspect_ratio(param, min_width, min_height)
        else:
            self.builder.croppable(param, min_width, min_height)
        return self

    def no_crop_box_resize(self) -> "TransformableImage":
        self.builder.no_crop_box_resize()
        return self

    def enable_crop_zoom(self) -> "TransformableImage":
        self.builder.enable_crop_zoom()
        return self

    def resize(self, width: Optional[int] = None, height: Optional[int] = None) -> "TransformableImage":
        self.builder.resize(width, height)
        return self

    def auto_orientate(self) -> "TransformableImage":
        self.builder.auto_orientate()
        return self

    @property
    def config(self) -> PipelineConfig:
        return self.builder.build()

    def widget_options(self) -> Dict[str, Any]:
        return self.config.widget_options()

    def transform_image(
        self,
        upload: Union[IUploadedFile, Path, str],
        cropper_data: Any = None
    ) -> TransformResult:
        """
        Transform an uploaded file in place.

        Args:
            upload: Upload handle or path to the stored file
            cropper_data: Crop payload posted by the widget (JSON string,
                mapping or object), or None

        Returns:
            TransformResult of the executor run
        """
        if not isinstance(upload, IUploadedFile):
            upload = LocalUpload(upload)

        crop = CropInstruction.from_payload(cropper_data)
        return self.executor.run(self.config, upload, crop)
