"""
Pytest configuration and fixtures for cropkit tests.
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image
import numpy as np

from cropkit import Capabilities, CodecRegistry, Driver, ImageDimensions, IImageCodec


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="cropkit_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_image(temp_dir) -> Path:
    """Create a sample landscape JPEG."""
    image_path = temp_dir / "test_image.jpg"
    img = Image.new("RGB", (800, 600), color="blue")
    img.save(image_path, "JPEG", quality=90)
    return image_path


@pytest.fixture
def pattern_array() -> np.ndarray:
    """Deterministic 200x200 RGB noise pattern."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(200, 200, 3), dtype=np.uint8)


@pytest.fixture
def pattern_png(temp_dir, pattern_array) -> Path:
    """Lossless 200x200 PNG holding the noise pattern."""
    image_path = temp_dir / "pattern.png"
    Image.fromarray(pattern_array, "RGB").save(image_path, "PNG")
    return image_path


@pytest.fixture
def png_image(temp_dir) -> Path:
    """Create a PNG image with transparency."""
    image_path = temp_dir / "transparent.png"
    img = Image.new("RGBA", (400, 400), color=(255, 0, 0, 128))
    img.save(image_path, "PNG")
    return image_path


@pytest.fixture
def rotated_jpeg(temp_dir) -> Path:
    """
    300x200 JPEG stored sideways with EXIF orientation 6.

    Left half red, right half blue; displayed upright it is 200x300 with
    red on top.
    """
    image_path = temp_dir / "rotated.jpg"
    img = Image.new("RGB", (300, 200), color="blue")
    img.paste((255, 0, 0), (0, 0, 150, 200))

    exif = Image.Exif()
    exif[0x0112] = 6
    img.save(image_path, "JPEG", quality=95, exif=exif.tobytes())
    return image_path


@pytest.fixture
def mpo_image(temp_dir) -> Path:
    """
    Two-frame MPO, as written by phone cameras.

    The first frame is 400x400 noise with EXIF orientation 6; Pillow opens
    the file with format "MPO".
    """
    image_path = temp_dir / "phone.jpg"
    rng = np.random.default_rng(7)
    first = Image.fromarray(rng.integers(0, 256, size=(400, 400, 3), dtype=np.uint8), "RGB")
    second = Image.new("RGB", (400, 400), color="gray")

    exif = Image.Exif()
    exif[0x0112] = 6
    first.save(
        image_path, "MPO",
        save_all=True, append_images=[second], quality=95, exif=exif.tobytes()
    )
    return image_path


@pytest.fixture
def corrupt_file(temp_dir) -> Path:
    """File with an image extension but no image data."""
    path = temp_dir / "broken.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0 definitely not a jpeg")
    return path


@pytest.fixture
def capabilities() -> Capabilities:
    return Capabilities(exif=True, imagemagick=None)


@pytest.fixture
def no_exif_capabilities() -> Capabilities:
    return Capabilities(exif=False, imagemagick=None)


class FakeCodec(IImageCodec):
    """Codec that records calls instead of touching pixels."""

    def __init__(self, driver: Driver = Driver.GD, size=(200, 200), fmt="JPEG", fail_on=None):
        self.driver = driver
        self.size = size
        self.fmt = fmt
        self.fail_on = fail_on
        self.calls = []
        self.released = []

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.fail_on == name:
            from cropkit import CropBoundsError, DecodeError, EncodeError
            errors = {"decode": DecodeError, "crop": CropBoundsError, "encode": EncodeError}
            raise errors.get(name, EncodeError)(f"{name} failed")

    def decode(self, path):
        self._record("decode", Path(path))
        return {"path": Path(path), "size": self.size}

    def format_of(self, handle):
        return self.fmt

    def size_of(self, handle):
        return ImageDimensions(*handle["size"])

    def orientate(self, handle):
        self._record("orientate")
        return handle

    def crop(self, handle, width, height, x, y):
        self._record("crop", width, height, x, y)
        handle["size"] = (width, height)
        return handle

    def resize(self, handle, width, height, upsize=True, aspect_ratio=True):
        self._record("resize", width, height, upsize, aspect_ratio)
        return handle

    def encode(self, handle, quality, format):
        self._record("encode", quality, format)
        return b"encoded"

    def release(self, handle):
        self.released.append(handle)


@pytest.fixture
def fake_codec() -> FakeCodec:
    return FakeCodec()


@pytest.fixture
def fake_registry(fake_codec) -> CodecRegistry:
    """Registry serving the same fake codec for every driver."""
    return CodecRegistry({
        Driver.GD: lambda: fake_codec,
        Driver.IMAGICK: lambda: fake_codec,
    })


@pytest.fixture
def fake_codec_class():
    """The FakeCodec class, for tests needing custom instances."""
    return FakeCodec
