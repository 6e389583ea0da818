"""
Core module - Interfaces, data types and exceptions for transformkit.
"""
from .interfaces import (
    # Enums
    MasterDim,
    FlipDirection,

    # Data classes
    ImageDimensions,
    CropRegion,
    PendingTransform,
    HandlerConfig,

    # Abstract interfaces
    IImageSource,
    IExifReader,
    IImageHandler,
)
from .exceptions import (
    ImageException,
    InvalidArgumentError,
    UnsupportedCapabilityError,
)

__all__ = [
    # Enums
    "MasterDim",
    "FlipDirection",

    # Data classes
    "ImageDimensions",
    "CropRegion",
    "PendingTransform",
    "HandlerConfig",

    # Abstract interfaces
    "IImageSource",
    "IExifReader",
    "IImageHandler",

    # Exceptions
    "ImageException",
    "InvalidArgumentError",
    "UnsupportedCapabilityError",
]
