"""
Geometry calculations for image transformations.

Pure functions only: nothing here touches pixels or a backend. Degenerate
input never raises, the values are handed back unchanged instead.
"""
from typing import Any, Optional, Tuple
import logging

from ..core.interfaces import MasterDim

logger = logging.getLogger(__name__)

CROP_POSITIONS = (
    "top-left",
    "top",
    "top-right",
    "left",
    "center",
    "right",
    "bottom-left",
    "bottom",
    "bottom-right",
)

_LEFT_ANCHORED = {"top-left", "left", "bottom-left"}
_RIGHT_ANCHORED = {"top-right", "right", "bottom-right"}
_TOP_ANCHORED = {"top-left", "top", "top-right"}
_BOTTOM_ANCHORED = {"bottom-left", "bottom", "bottom-right"}


def _is_digit(value: Any) -> bool:
    """True for non-negative whole numbers, including digit-only strings."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    if isinstance(value, float):
        return value >= 0 and value.is_integer()
    if isinstance(value, str):
        return value.isdigit()
    return False


def ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def reproportion(
    width: Any,
    height: Any,
    orig_width: Any,
    orig_height: Any,
    master_dim: Any = MasterDim.AUTO
) -> Tuple[Any, Any, Any]:
    """
    Re-proportion a target width/height to the aspect ratio of the original.

    Exactly one axis is authoritative (the master dimension) and the other is
    always derived from it, so repeated calls never drift.

    Args:
        width: Requested width
        height: Requested height
        orig_width: Width of the image being transformed
        orig_height: Height of the image being transformed
        master_dim: "width", "height" or "auto" to infer it

    Returns:
        (width, height, master_dim), or the unchanged inputs when the
        geometry is degenerate
    """
    unchanged = (width, height, master_dim)

    if not _is_digit(orig_width) or not _is_digit(orig_height):
        return unchanged
    if not _is_digit(width) and not _is_digit(height):
        return unchanged

    orig_width = int(orig_width)
    orig_height = int(orig_height)
    if orig_width == 0 or orig_height == 0:
        return unchanged

    width = int(width) if _is_digit(width) else 0
    height = int(height) if _is_digit(height) else 0
    if width == 0 and height == 0:
        return unchanged

    master = MasterDim.coerce(master_dim)

    if master is MasterDim.AUTO:
        if width > 0 and height > 0:
            # Compares orig_h/orig_w with height/width without float error
            if orig_height * width - height * orig_width < 0:
                master = MasterDim.WIDTH
            else:
                master = MasterDim.HEIGHT
        else:
            master = MasterDim.WIDTH if height == 0 else MasterDim.HEIGHT
    elif (master is MasterDim.WIDTH and width == 0) or (master is MasterDim.HEIGHT and height == 0):
        return unchanged

    if master is MasterDim.WIDTH:
        height = ceil_div(width * orig_height, orig_width)
    else:
        width = ceil_div(orig_width * height, orig_height)

    return width, height, master


def calc_aspect_ratio(
    width: int,
    height: Optional[int],
    orig_width: int,
    orig_height: int
) -> Tuple[int, int]:
    """
    Calculate the crop extent used by fit().

    Without a height the original is scaled by the width ratio. Otherwise
    both original dimensions are scaled by the smaller of the width and
    height ratios. Results are truncated to whole pixels.
    """
    if not orig_width or not orig_height:
        return width, height or 0

    if height is None:
        return width, (width * orig_height) // orig_width

    # x_ratio > y_ratio, cross-multiplied
    if width * orig_height > height * orig_width:
        return (orig_width * height) // orig_height, height

    return width, (orig_height * width) // orig_width


def calc_crop_coords(
    width: int,
    height: int,
    orig_width: int,
    orig_height: int,
    position: str = "center"
) -> Tuple[int, int]:
    """
    Determine the x/y origin of a width x height crop anchored at position.

    Unknown positions fall back to the top-left corner.
    """
    position = str(position).lower()

    if position not in CROP_POSITIONS:
        logger.debug(f"Unknown crop position '{position}', using top-left")
        return 0, 0

    if position in _LEFT_ANCHORED:
        x = 0
    elif position in _RIGHT_ANCHORED:
        x = orig_width - width
    else:
        x = (orig_width - width) // 2

    if position in _TOP_ANCHORED:
        y = 0
    elif position in _BOTTOM_ANCHORED:
        y = orig_height - height
    else:
        y = (orig_height - height) // 2

    return x, y
