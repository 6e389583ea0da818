"""
Pillow backend.
"""
from pathlib import Path
from typing import Optional, Union
from PIL import Image
from PIL.ImageFile import ImageFile
import PIL
import logging

from .base import BaseHandler
from ..core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

ImageFile.LOAD_TRUNCATED_IMAGES = True


class PillowHandler(BaseHandler):
    """Executes transformations on an in-memory Pillow image."""

    RESAMPLING = {
        "nearest": Image.Resampling.NEAREST,
        "bilinear": Image.Resampling.BILINEAR,
        "bicubic": Image.Resampling.BICUBIC,
        "lanczos": Image.Resampling.LANCZOS,
    }

    _ROTATIONS = {
        90: Image.Transpose.ROTATE_90,
        180: Image.Transpose.ROTATE_180,
        270: Image.Transpose.ROTATE_270,
    }

    _FLIPS = {
        "horizontal": Image.Transpose.FLIP_LEFT_RIGHT,
        "vertical": Image.Transpose.FLIP_TOP_BOTTOM,
    }

    def _ensure_resource(self) -> Image.Image:
        """Open the source lazily, the first transform pays for decoding."""
        if self._resource is None:
            self._ensure_image()
            with Image.open(self.image.path) as img:
                img.load()
                self._resource = img.copy()
        return self._resource

    def process(self, action: str) -> Image.Image:
        img = self._ensure_resource()

        if action == "resize":
            resample = self.RESAMPLING.get(self.config.resample, Image.Resampling.LANCZOS)
            self._resource = img.resize((self._pending.width, self._pending.height), resample)
        elif action == "crop":
            self._resource = img.crop(self._pending.crop_region.box)
        else:
            raise InvalidArgumentError(f"Unknown action: {action}")

        return self._resource

    def _rotate(self, angle: int) -> None:
        self._resource = self._ensure_resource().transpose(self._ROTATIONS[angle])

    def _flip(self, direction: str) -> None:
        self._resource = self._ensure_resource().transpose(self._FLIPS[direction])

    def _reset_orientation(self) -> None:
        self._ensure_resource().info.pop("exif", None)

    @staticmethod
    def _flatten(img: Image.Image) -> Image.Image:
        """JPEG has no alpha channel, composite transparent images onto white."""
        if img.mode in ("RGB", "L"):
            return img
        if "A" not in img.getbands():
            return img.convert("RGB")

        canvas = Image.new("RGB", img.size, "white")
        canvas.paste(img.convert("RGB"), mask=img.getchannel("A"))
        return canvas

    def save(self, target: Optional[Union[str, Path]] = None, quality: int = 90) -> Path:
        """
        Save the transformed image.

        Args:
            target: Output path (defaults to overwriting the source)
            quality: JPEG/WebP quality

        Returns:
            Path to the saved image
        """
        self._ensure_image()
        target = Path(target) if target is not None else self.image.path
        img = self._ensure_resource()

        suffix = target.suffix.lower()
        if suffix in (".jpg", ".jpeg"):
            self._flatten(img).save(
                target,
                format="JPEG",
                quality=quality,
                optimize=True,
                progressive=self.config.progressive
            )
        elif suffix == ".webp":
            img.save(target, format="WEBP", quality=quality)
        else:
            img.save(target)

        logger.info(f"Saved {target.name} ({img.width}x{img.height})")
        return target

    def get_version(self) -> str:
        return PIL.__version__
