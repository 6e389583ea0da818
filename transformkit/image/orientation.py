"""
Image orientation correction using EXIF data.
Follows Single Responsibility Principle - only maps orientation codes to
rotate/flip steps, the handler performs them.
"""
from typing import TYPE_CHECKING, Any, NamedTuple, Tuple, Union
import logging

if TYPE_CHECKING:
    from ..handlers.base import BaseHandler

logger = logging.getLogger(__name__)


class OrientationStep(NamedTuple):
    """A single corrective operation: ("rotate", angle) or ("flip", axis)."""
    operation: str
    argument: Union[int, str]


_ROTATE_90 = OrientationStep("rotate", 90)
_ROTATE_180 = OrientationStep("rotate", 180)
_ROTATE_270 = OrientationStep("rotate", 270)
_FLIP_HORIZONTAL = OrientationStep("flip", "horizontal")


class OrientationResolver:
    """Resolves EXIF orientation codes into corrective rotate/flip steps."""

    ORIENTATION_TAG = 'Orientation'

    _STEPS = {
        1: (),
        2: (_FLIP_HORIZONTAL,),
        3: (_ROTATE_180,),
        4: (_ROTATE_180, _FLIP_HORIZONTAL),
        5: (_ROTATE_270, _FLIP_HORIZONTAL),
        6: (_ROTATE_270,),
        7: (_ROTATE_90, _FLIP_HORIZONTAL),
        8: (_ROTATE_90,),
    }

    @classmethod
    def resolve(cls, orientation: Any) -> Tuple[OrientationStep, ...]:
        """Steps for an orientation code. Unknown codes need no correction."""
        if isinstance(orientation, bool) or not isinstance(orientation, int):
            return ()
        return cls._STEPS.get(orientation, ())

    @classmethod
    def apply(cls, handler: "BaseHandler", orientation: Any) -> "BaseHandler":
        """Run the corrective steps through the handler's own rotate/flip."""
        steps = cls.resolve(orientation)
        if steps:
            logger.debug(f"Orientation {orientation}: {', '.join(f'{s.operation} {s.argument}' for s in steps)}")

        for step in steps:
            if step.operation == "rotate":
                handler = handler.rotate(step.argument)
            else:
                handler = handler.flip(step.argument)

        return handler
