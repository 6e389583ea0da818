"""
Image handlers: the transform orchestration and its backends.
"""
from typing import Dict, Optional, Type

from .base import BaseHandler
from .pillow import PillowHandler
from .imagemagick import ImageMagickHandler
from ..core.interfaces import HandlerConfig
from ..core.exceptions import InvalidArgumentError

HANDLERS: Dict[str, Type[BaseHandler]] = {
    "pillow": PillowHandler,
    "imagemagick": ImageMagickHandler,
}


def get_handler(name: str = "pillow", config: Optional[HandlerConfig] = None, **kwargs) -> BaseHandler:
    """Create a new handler by backend name."""
    try:
        handler_class = HANDLERS[name.lower()]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown image handler '{name}'. Available: {', '.join(sorted(HANDLERS))}"
        ) from None
    return handler_class(config, **kwargs)


__all__ = [
    'BaseHandler',
    'PillowHandler',
    'ImageMagickHandler',
    'HANDLERS',
    'get_handler',
]
