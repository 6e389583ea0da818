"""
TransformKit - Geometric image transformations with pluggable backends.

Reduces high-level intents to exact pixel geometry:
- Resizing with aspect-ratio preservation
- Cropping by coordinates or named position
- Rotation in 90 degree increments and flipping
- Combined crop and resize ("fit")
- EXIF orientation correction

The geometry is computed here, the pixel work is done by a backend
(Pillow or ImageMagick).

Example usage:
    from transformkit import get_handler

    handler = get_handler("pillow").with_file("photo.jpg")

    # Upright, 800px wide, centred 4:3 crop
    handler.reorient(silent=True).fit(800, 600).save("photo_800.jpg")

    # Thumbnail keeping proportions
    handler = get_handler().with_file("photo.jpg")
    handler.resize(320, 320, maintain_ratio=True).save("thumb.jpg", quality=80)
"""

from .core.interfaces import (
    MasterDim,
    FlipDirection,
    ImageDimensions,
    CropRegion,
    PendingTransform,
    HandlerConfig,
)
from .core.exceptions import (
    ImageException,
    InvalidArgumentError,
    UnsupportedCapabilityError,
)
from .image import (
    reproportion,
    calc_aspect_ratio,
    calc_crop_coords,
    CROP_POSITIONS,
    OrientationResolver,
    OrientationStep,
    ImageFile,
    PillowExifReader,
)
from .handlers import (
    BaseHandler,
    PillowHandler,
    ImageMagickHandler,
    get_handler,
)

__version__ = "1.0.0"

__all__ = [
    # Core types
    "MasterDim",
    "FlipDirection",
    "ImageDimensions",
    "CropRegion",
    "PendingTransform",
    "HandlerConfig",

    # Exceptions
    "ImageException",
    "InvalidArgumentError",
    "UnsupportedCapabilityError",

    # Geometry
    "reproportion",
    "calc_aspect_ratio",
    "calc_crop_coords",
    "CROP_POSITIONS",

    # Orientation and metadata
    "OrientationResolver",
    "OrientationStep",
    "ImageFile",
    "PillowExifReader",

    # Handlers
    "BaseHandler",
    "PillowHandler",
    "ImageMagickHandler",
    "get_handler",
]
