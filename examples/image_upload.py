"""
Example: Post-processing an uploaded image with cropkit

This example demonstrates how to:
- Configure a pipeline with the fluent builder
- Run it on an uploaded file with crop data from the browser widget
- Use the field facade the way an admin panel would
"""
from pathlib import Path
import json
import logging

from cropkit import (
    CropInstruction,
    LocalUpload,
    PipelineBuilder,
    TransformableImage,
    TransformExecutor,
)


def transform_with_builder(path: Path, cropper_json: str):
    """Configure and run the pipeline explicitly."""
    config = (
        PipelineBuilder()
        .crop_aspect_ratio(1.0, min_width=200, min_height=200)
        .enable_crop_zoom()
        .resize(width=512)
        .auto_orientate()
        .build()
    )
    print(f"Widget options: {json.dumps(config.widget_options())}")

    executor = TransformExecutor()
    crop = CropInstruction.from_payload(cropper_json)
    result = executor.run(config, LocalUpload(path), crop)

    if result.passthrough:
        print("Nothing to do, file left untouched")
    else:
        print(f"Steps: {', '.join(result.steps)}")
        print(f"Saved {result.size.width}x{result.size.height} {result.mime_type}")

    return result


def transform_with_field(path: Path, cropper_json: str):
    """Use the facade, as an upload field would."""
    field = TransformableImage().croppable(16 / 9).resize(1920).auto_orientate()
    return field.transform_image(path, cropper_json)


if __name__ == "__main__":
    import sys

    logging.basicConfig(level=logging.INFO)

    if len(sys.argv) < 2:
        print("Usage: python image_upload.py <image_path> [cropper_json]")
        sys.exit(1)

    image_path = Path(sys.argv[1])
    if not image_path.exists():
        print(f"File not found: {image_path}")
        sys.exit(1)

    payload = sys.argv[2] if len(sys.argv) > 2 else None
    transform_with_builder(image_path, payload)
