"""
Pytest configuration and fixtures for TransformKit tests.
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from PIL import Image
import numpy as np

from transformkit.core.interfaces import IImageSource, IExifReader
from transformkit.handlers.base import BaseHandler


class FakeImageSource(IImageSource):
    """Image source with fixed dimensions, nothing on disk."""

    def __init__(self, width: int, height: int, path: str = "fake.jpg"):
        self._width = width
        self._height = height
        self._path = Path(path)
        self.load_count = 0

    def load(self) -> None:
        self.load_count += 1

    @property
    def path(self) -> Path:
        return self._path

    @property
    def orig_width(self) -> int:
        return self._width

    @property
    def orig_height(self) -> int:
        return self._height


class FakeExifReader(IExifReader):
    def __init__(self, tags: Optional[Dict[str, Any]] = None, supported: bool = True):
        self.tags = tags or {}
        self._supported = supported

    @property
    def supported(self) -> bool:
        return self._supported

    def read(self, path: Path) -> Dict[str, Any]:
        return dict(self.tags)


class RecordingHandler(BaseHandler):
    """Backend that records every call instead of touching pixels."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []
        self.orientation_reset = False

    def process(self, action):
        self.calls.append((action, self._pending.copy()))
        return self

    def _rotate(self, angle):
        self.calls.append(("rotate", angle))

    def _flip(self, direction):
        self.calls.append(("flip", direction))

    def _reset_orientation(self):
        self.orientation_reset = True

    def save(self, target=None, quality=90):
        self.calls.append(("save", target, quality))
        return Path(target) if target else self.image.path

    def get_version(self):
        return "recording"

    @property
    def actions(self):
        return [call[0] for call in self.calls]


class FailingHandler(RecordingHandler):
    """Backend whose process() always fails."""

    def process(self, action):
        raise OSError(f"backend failed during {action}")


@pytest.fixture
def make_handler():
    """Factory for a RecordingHandler bound to a fake width x height image."""
    def _make(width=4000, height=3000, exif=None, exif_supported=True, handler_class=RecordingHandler):
        handler = handler_class(exif_reader=FakeExifReader(exif, exif_supported))
        return handler.with_image(FakeImageSource(width, height))
    return _make


@pytest.fixture
def temp_dir():
    """Scratch directory removed after the test."""
    work_dir = Path(tempfile.mkdtemp(prefix="transformkit_"))
    yield work_dir
    shutil.rmtree(work_dir, ignore_errors=True)


@pytest.fixture
def sample_image(temp_dir) -> Path:
    """Plain 800x600 landscape JPEG without EXIF."""
    image_path = temp_dir / "landscape.jpg"
    Image.new("RGB", (800, 600), color=(30, 60, 200)).save(image_path, "JPEG", quality=90)
    return image_path


@pytest.fixture
def pixel_array() -> np.ndarray:
    """A 4x6 RGB array where every pixel is distinct."""
    return np.arange(4 * 6 * 3, dtype=np.uint8).reshape((4, 6, 3))


@pytest.fixture
def pixel_image(temp_dir, pixel_array) -> Path:
    """Lossless image of pixel_array."""
    image_path = temp_dir / "pixels.png"
    Image.fromarray(pixel_array).save(image_path, "PNG")
    return image_path


@pytest.fixture
def png_image(temp_dir) -> Path:
    """Half transparent 320x240 RGBA overlay."""
    image_path = temp_dir / "overlay.png"
    Image.new("RGBA", (320, 240), color=(0, 160, 0, 96)).save(image_path, "PNG")
    return image_path


@pytest.fixture
def exif_image(temp_dir):
    """Factory for a 60x40 JPEG, red left half and blue right half, with an EXIF orientation."""
    def _make(orientation: int) -> Path:
        image_path = temp_dir / f"orientation_{orientation}.jpg"
        img = Image.new("RGB", (60, 40), color="blue")
        img.paste((255, 0, 0), (0, 0, 30, 40))
        exif = Image.Exif()
        exif[0x0112] = orientation
        img.save(image_path, "JPEG", quality=95, exif=exif.tobytes())
        return image_path
    return _make
