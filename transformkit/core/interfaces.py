"""
Abstract interfaces following Interface Segregation Principle (SOLID).
Defines contracts and data types shared by all transformkit components.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
from dataclasses import dataclass, field, replace
from enum import Enum


class MasterDim(str, Enum):
    """Axis that drives aspect-ratio preserving derivation of the other."""
    AUTO = "auto"
    WIDTH = "width"
    HEIGHT = "height"

    @classmethod
    def coerce(cls, value: Any) -> "MasterDim":
        """Anything that is not width/height resolves to AUTO."""
        if isinstance(value, str):
            value = value.lower()
        if value in (cls.WIDTH, cls.HEIGHT):
            return cls(value)
        return cls.AUTO


class FlipDirection(str, Enum):
    """Axis an image can be mirrored along."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class ImageDimensions:
    """Represents image dimensions with utility properties."""
    width: int
    height: int

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height if self.height > 0 else 0

    @property
    def is_portrait(self) -> bool:
        return self.height > self.width

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height

    def swapped(self) -> "ImageDimensions":
        """Dimensions after a quarter turn."""
        return ImageDimensions(self.height, self.width)


@dataclass(frozen=True)
class CropRegion:
    """Rectangle cut out of an image, anchored at its top-left corner."""
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom) as expected by Pillow."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def fits_within(self, dimensions: ImageDimensions) -> bool:
        return (
            self.x >= 0
            and self.y >= 0
            and self.x + self.width <= dimensions.width
            and self.y + self.height <= dimensions.height
        )


@dataclass
class PendingTransform:
    """
    Working geometry of a handler.

    Between operations width/height hold the current canvas size. The crop
    origin is only set while a crop is being dispatched.
    """
    width: Optional[int]
    height: Optional[int]
    x: Optional[int] = None
    y: Optional[int] = None
    master_dim: MasterDim = MasterDim.AUTO

    @property
    def dimensions(self) -> ImageDimensions:
        return ImageDimensions(self.width or 0, self.height or 0)

    @property
    def crop_region(self) -> CropRegion:
        return CropRegion(self.x or 0, self.y or 0, self.width or 0, self.height or 0)

    def clear_origin(self) -> None:
        self.x = None
        self.y = None

    def copy(self) -> "PendingTransform":
        return replace(self)


@dataclass
class HandlerConfig:
    """
    Configuration for image handlers. Only backends read it.

    options holds backend specific output settings, ImageMagick passes them
    to convert as extra arguments on save.
    """
    progressive: bool = True
    resample: str = "lanczos"
    library_path: str = "convert"
    timeout: int = 30
    options: Dict[str, Any] = field(default_factory=dict)


class IImageSource(ABC):
    """Interface for the image a handler is bound to."""

    @abstractmethod
    def load(self) -> None:
        """Read the image properties."""
        pass

    @property
    @abstractmethod
    def path(self) -> Path:
        """Location of the source image."""
        pass

    @property
    @abstractmethod
    def orig_width(self) -> int:
        """Width of the image as stored on disk."""
        pass

    @property
    @abstractmethod
    def orig_height(self) -> int:
        """Height of the image as stored on disk."""
        pass


class IExifReader(ABC):
    """Interface for EXIF metadata extraction."""

    @property
    @abstractmethod
    def supported(self) -> bool:
        """Whether EXIF data can be read at all."""
        pass

    @abstractmethod
    def read(self, path: Path) -> Dict[str, Any]:
        """Return a mapping of EXIF tag name to value."""
        pass


class IImageHandler(ABC):
    """Interface for geometric image transformations."""

    @abstractmethod
    def with_file(self, path: Union[str, Path]) -> "IImageHandler":
        """Bind the handler to an image file."""
        pass

    @abstractmethod
    def resize(
        self,
        width: int,
        height: int,
        maintain_ratio: bool = False,
        master_dim: Union[str, MasterDim] = MasterDim.AUTO
    ) -> "IImageHandler":
        """Resize the image."""
        pass

    @abstractmethod
    def crop(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        x: Optional[int] = None,
        y: Optional[int] = None,
        maintain_ratio: bool = False,
        master_dim: Union[str, MasterDim] = MasterDim.AUTO
    ) -> "IImageHandler":
        """Crop the image."""
        pass

    @abstractmethod
    def rotate(self, angle: int) -> "IImageHandler":
        """Rotate the image by a multiple of 90 degrees."""
        pass

    @abstractmethod
    def flip(self, direction: Union[str, FlipDirection]) -> "IImageHandler":
        """Mirror the image along an axis."""
        pass

    @abstractmethod
    def fit(self, width: int, height: Optional[int] = None, position: str = "center") -> "IImageHandler":
        """Crop and resize to exact dimensions."""
        pass

    @abstractmethod
    def reorient(self, silent: bool = False) -> "IImageHandler":
        """Apply the EXIF orientation to the pixels."""
        pass

    @abstractmethod
    def save(self, target: Optional[Union[str, Path]] = None, quality: int = 90) -> Path:
        """Persist the transformed image."""
        pass

    @abstractmethod
    def get_version(self) -> str:
        """Version of the underlying imaging library."""
        pass
