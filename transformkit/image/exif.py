"""
EXIF metadata extraction.
"""
from pathlib import Path
from typing import Any, Dict
from PIL import Image
from PIL.ExifTags import TAGS
import logging

from ..core.interfaces import IExifReader

logger = logging.getLogger(__name__)


class PillowExifReader(IExifReader):
    """Reads EXIF tags with Pillow, keyed by tag name."""

    @property
    def supported(self) -> bool:
        return hasattr(Image.Image, "getexif")

    def read(self, path: Path) -> Dict[str, Any]:
        tags: Dict[str, Any] = {}

        with Image.open(path) as img:
            exif = img.getexif()

        for tag_id, value in exif.items():
            tag_name = TAGS.get(tag_id, str(tag_id))
            if isinstance(value, bytes):
                value = value.decode('utf-8', errors='ignore')
            tags[tag_name] = value

        logger.debug(f"Read {len(tags)} EXIF tags from {Path(path).name}")
        return tags
