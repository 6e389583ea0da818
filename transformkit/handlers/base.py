"""
Base image handler.

Turns high-level intents (resize, crop, rotate, flip, fit, reorient) into
concrete pending geometry and hands it to the backend implemented by
subclasses. Follows Template Method Pattern - subclasses only implement the
pixel work.
"""
from abc import abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from ..core.interfaces import (
    IImageHandler,
    IImageSource,
    IExifReader,
    ImageDimensions,
    PendingTransform,
    HandlerConfig,
    MasterDim,
    FlipDirection,
)
from ..core.exceptions import ImageException
from ..image.info import ImageFile
from ..image.exif import PillowExifReader
from ..image.geometry import reproportion, calc_aspect_ratio, calc_crop_coords, ceil_div
from ..image.orientation import OrientationResolver

logger = logging.getLogger(__name__)


class BaseHandler(IImageHandler):
    """
    Orchestrates geometric transformations for a single image.

    A handler keeps mutable pending geometry across chained calls and is
    not safe for concurrent use. Own one handler per transform session, or
    create a fresh handler per image.

    Example:
        handler = PillowHandler().with_file("photo.jpg")
        handler.reorient(silent=True).fit(320, 240, "top").save("thumb.jpg")
    """

    ROTATION_ANGLES = (90, 180, 270)

    def __init__(
        self,
        config: Optional[HandlerConfig] = None,
        exif_reader: Optional[IExifReader] = None
    ):
        self.config = config or HandlerConfig()
        self.exif_reader = exif_reader or PillowExifReader()
        self.image: Optional[IImageSource] = None
        self._pending = PendingTransform(width=None, height=None)
        self._resource: Any = None

    def with_file(self, path: Union[str, Path]) -> "BaseHandler":
        """Bind the handler to an image file and read its properties."""
        return self.with_image(ImageFile(path))

    def with_image(self, source: IImageSource) -> "BaseHandler":
        """Bind the handler to an already constructed image source."""
        source.load()
        self._release_resource()

        self.image = source
        self._pending = PendingTransform(width=source.orig_width, height=source.orig_height)

        logger.info(f"Bound {source.path.name} ({source.orig_width}x{source.orig_height})")
        return self

    def close(self) -> None:
        """Release the working image. The handler can be bound again."""
        self._release_resource()

    def __enter__(self) -> "BaseHandler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_file(self) -> Optional[IImageSource]:
        return self.image

    def get_resource(self) -> Any:
        """The backend's working image, for things this package does not do."""
        return self._resource

    @property
    def pending(self) -> PendingTransform:
        return self._pending.copy()

    @property
    def width(self) -> Optional[int]:
        return self._pending.width

    @property
    def height(self) -> Optional[int]:
        return self._pending.height

    def resize(
        self,
        width: int,
        height: int,
        maintain_ratio: bool = False,
        master_dim: Union[str, MasterDim] = MasterDim.AUTO
    ) -> "BaseHandler":
        """
        Resize the image.

        Args:
            width: Target width
            height: Target height
            maintain_ratio: Derive one axis from the other to keep proportions
            master_dim: Axis that stays as requested when maintaining ratio

        Returns:
            The handler, for chaining
        """
        source = self._source_dimensions()

        if width == source.width and height == source.height:
            logger.debug(f"Image already {width}x{height}, skipping resize")
            return self

        self._pending.width = width
        self._pending.height = height

        if maintain_ratio:
            self._reproportion(source, master_dim)

        logger.debug(f"Resizing {source.width}x{source.height} -> {self._pending.width}x{self._pending.height}")
        self.process("resize")
        return self

    def crop(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        x: Optional[int] = None,
        y: Optional[int] = None,
        maintain_ratio: bool = False,
        master_dim: Union[str, MasterDim] = MasterDim.AUTO
    ) -> "BaseHandler":
        """
        Crop the image to width x height starting at (x, y).

        A missing width or height extends to the edge of the image from the
        origin, a missing origin starts at the top-left corner.
        """
        canvas = self._current_dimensions()

        self._pending.width = width
        self._pending.height = height
        self._pending.x = x
        self._pending.y = y

        try:
            if maintain_ratio:
                self._reproportion(self._source_dimensions(), master_dim)

            if self._pending.width is None:
                self._pending.width = canvas.width - (x or 0)
            if self._pending.height is None:
                self._pending.height = canvas.height - (y or 0)

            region = self._pending.crop_region
            if not region.fits_within(canvas):
                logger.warning(
                    f"Crop {region.width}x{region.height}+{region.x}+{region.y} "
                    f"exceeds image bounds {canvas.width}x{canvas.height}"
                )

            logger.debug(f"Cropping {region.width}x{region.height} at ({region.x}, {region.y})")
            self.process("crop")
        finally:
            self._pending.clear_origin()

        return self

    def rotate(self, angle: int) -> "BaseHandler":
        """Rotate counter-clockwise by 90, 180 or 270 degrees."""
        if isinstance(angle, bool) or not isinstance(angle, (int, float)) or angle not in self.ROTATION_ANGLES:
            raise ImageException.for_invalid_angle(angle)

        angle = int(angle)
        self._ensure_image()

        if angle in (90, 270):
            turned = self._pending.dimensions.swapped()
            self._pending.width = turned.width
            self._pending.height = turned.height

        logger.debug(f"Rotating {angle} degrees")
        self._rotate(angle)
        return self

    def flip(self, direction: Union[str, FlipDirection]) -> "BaseHandler":
        """Mirror the image along its horizontal or vertical axis."""
        if isinstance(direction, FlipDirection):
            direction = direction.value

        if not isinstance(direction, str) or direction.lower() not in (FlipDirection.HORIZONTAL, FlipDirection.VERTICAL):
            raise ImageException.for_invalid_direction(direction)

        direction = direction.lower()
        self._ensure_image()

        logger.debug(f"Flipping {direction}")
        self._flip(direction)
        return self

    def get_exif(self, key: Optional[str] = None, silent: bool = False) -> Any:
        """
        Read EXIF data of the bound image.

        Args:
            key: Only return this tag (None when missing)
            silent: Return None instead of raising when EXIF is unsupported
        """
        self._ensure_image()

        if not self.exif_reader.supported:
            if silent:
                return None
            raise ImageException.for_exif_unsupported()

        exif: Dict[str, Any] = self.exif_reader.read(self.image.path)

        if key is not None:
            return exif.get(key)
        return exif

    def reorient(self, silent: bool = False) -> "BaseHandler":
        """
        Rotate/flip the pixels to match the EXIF orientation flag.

        Phones store images sensor-up and only set the flag, so viewers that
        ignore EXIF show them sideways.
        """
        orientation = self.get_exif(OrientationResolver.ORIENTATION_TAG, silent)
        if not OrientationResolver.resolve(orientation):
            return self

        OrientationResolver.apply(self, orientation)
        self._reset_orientation()
        return self

    def fit(self, width: int, height: Optional[int] = None, position: str = "center") -> "BaseHandler":
        """
        Crop and resize in one step.

        Supported positions: top-left, top, top-right, left, center, right,
        bottom-left, bottom, bottom-right.
        """
        source = self._source_dimensions()

        crop_width, crop_height = calc_aspect_ratio(width, height, source.width, source.height)

        if height is None:
            height = ceil_div(width * crop_height, crop_width) if crop_width else 0

        x, y = calc_crop_coords(crop_width, crop_height, source.width, source.height, position)

        return self.crop(crop_width, crop_height, x, y).resize(width, height)

    def _source_dimensions(self) -> ImageDimensions:
        """Original size of the bound image, unaffected by transforms."""
        self._ensure_image()
        return ImageDimensions(self.image.orig_width, self.image.orig_height)

    def _current_dimensions(self) -> ImageDimensions:
        self._ensure_image()
        return self._pending.dimensions

    def _ensure_image(self) -> None:
        if self.image is None:
            raise ImageException("No image bound to handler. Call with_file() first.")

    def _reproportion(self, source: ImageDimensions, master_dim: Union[str, MasterDim]) -> None:
        width, height, master = reproportion(
            self._pending.width,
            self._pending.height,
            source.width,
            source.height,
            MasterDim.coerce(master_dim)
        )
        self._pending.width = width
        self._pending.height = height
        self._pending.master_dim = master

    def _release_resource(self) -> None:
        """Drop the backend's working image."""
        self._resource = None

    def _reset_orientation(self) -> None:
        """Mark the working image as upright once reorient() corrected its pixels."""
        pass

    @abstractmethod
    def process(self, action: str) -> Any:
        """
        Execute "resize" or "crop" using the current pending geometry.

        The crop origin is self._pending.x/y (None meaning 0).
        """
        pass

    @abstractmethod
    def _rotate(self, angle: int) -> None:
        """Rotate the working image counter-clockwise by 90, 180 or 270."""
        pass

    @abstractmethod
    def _flip(self, direction: str) -> None:
        """Flip the working image, direction is 'horizontal' or 'vertical'."""
        pass
