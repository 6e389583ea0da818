"""
Image module for transformkit: geometry, orientation and image metadata.
"""
from .geometry import reproportion, calc_aspect_ratio, calc_crop_coords, CROP_POSITIONS
from .orientation import OrientationResolver, OrientationStep
from .info import ImageFile
from .exif import PillowExifReader

__all__ = [
    'reproportion',
    'calc_aspect_ratio',
    'calc_crop_coords',
    'CROP_POSITIONS',
    'OrientationResolver',
    'OrientationStep',
    'ImageFile',
    'PillowExifReader',
]
