"""
Image information extraction.
"""
from pathlib import Path
from typing import Union
from PIL import Image, UnidentifiedImageError
import logging

from ..core.interfaces import IImageSource, ImageDimensions
from ..core.exceptions import ImageException

logger = logging.getLogger(__name__)


class ImageFile(IImageSource):
    """
    An image on disk and the properties the handlers need from it.

    Width and height are read as stored, EXIF orientation is not applied.
    """

    def __init__(self, input_path: Union[str, Path]):
        self.input_path = Path(input_path)
        self._loaded = False
        self._width = 0
        self._height = 0
        self._format = ""
        self._mode = ""

    def load(self) -> None:
        """Load image properties."""
        if self._loaded:
            return

        if not self.input_path.is_file():
            raise FileNotFoundError(f"Image file does not exist: {self.input_path}")

        try:
            with Image.open(self.input_path) as img:
                self._width, self._height = img.size
                self._format = img.format or ""
                self._mode = img.mode
        except UnidentifiedImageError as e:
            raise ImageException(f"Not a readable image: {self.input_path}") from e

        self._loaded = True
        logger.debug(f"Loaded {self.input_path.name}: {self._width}x{self._height} {self._format}")

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError("ImageFile not loaded. Call load() first.")

    @property
    def path(self) -> Path:
        return self.input_path

    @property
    def orig_width(self) -> int:
        self._ensure_loaded()
        return self._width

    @property
    def orig_height(self) -> int:
        self._ensure_loaded()
        return self._height

    @property
    def dimensions(self) -> ImageDimensions:
        return ImageDimensions(self.orig_width, self.orig_height)

    @property
    def format(self) -> str:
        self._ensure_loaded()
        return self._format

    @property
    def mode(self) -> str:
        self._ensure_loaded()
        return self._mode
