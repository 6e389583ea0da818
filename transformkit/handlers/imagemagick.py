"""
ImageMagick backend.
Drives the `convert` command line tool on a temporary working copy.
"""
from pathlib import Path
from typing import List, Optional, Union
import os
import re
import shutil
import subprocess
import tempfile
import logging

from .base import BaseHandler
from ..core.exceptions import ImageException, InvalidArgumentError, UnsupportedCapabilityError

logger = logging.getLogger(__name__)


class ImageMagickHandler(BaseHandler):
    """
    Executes transformations with ImageMagick.

    The source is copied to a temporary file on the first transform so the
    original stays untouched until save().
    """

    def _ensure_resource(self) -> Path:
        if self._resource is None:
            self._ensure_image()
            fd, temp_path = tempfile.mkstemp(prefix="transformkit_", suffix=self.image.path.suffix)
            os.close(fd)
            shutil.copyfile(self.image.path, temp_path)
            self._resource = Path(temp_path)
        return self._resource

    def _release_resource(self) -> None:
        if self._resource is not None:
            Path(self._resource).unlink(missing_ok=True)
        super()._release_resource()

    def __del__(self) -> None:
        if getattr(self, "_resource", None) is not None:
            self._release_resource()

    def _run(self, *args: str) -> str:
        cmd = [self.config.library_path, *args]
        logger.debug(f"Command: {' '.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.config.timeout)
        except FileNotFoundError as e:
            raise UnsupportedCapabilityError(
                f"ImageMagick not found at '{self.config.library_path}'. Install ImageMagick and add it to PATH"
            ) from e

        if result.returncode != 0:
            raise ImageException(f"ImageMagick failed: {result.stderr.strip()}")

        return result.stdout

    def _convert(self, *operations: str) -> None:
        """Apply operations to the working copy in place."""
        resource = str(self._ensure_resource())
        self._run(resource, *operations, resource)

    def process(self, action: str) -> Path:
        if action == "resize":
            self._convert("-resize", f"{self._pending.width}x{self._pending.height}!")
        elif action == "crop":
            region = self._pending.crop_region
            self._convert("-crop", f"{region.width}x{region.height}+{region.x}+{region.y}", "+repage")
        else:
            raise InvalidArgumentError(f"Unknown action: {action}")

        return self._resource

    def _rotate(self, angle: int) -> None:
        # -rotate turns clockwise
        self._convert("-rotate", str((360 - angle) % 360))

    def _flip(self, direction: str) -> None:
        self._convert("-flop" if direction == "horizontal" else "-flip")

    def _reset_orientation(self) -> None:
        # convert keeps the EXIF profile, viewers would turn the pixels again
        self._convert("-orient", "TopLeft")

    def save(self, target: Optional[Union[str, Path]] = None, quality: int = 90) -> Path:
        """
        Write the working copy to target.

        Args:
            target: Output path (defaults to overwriting the source)
            quality: Output quality (1-100)

        Returns:
            Path to the saved image
        """
        self._ensure_image()
        target = Path(target) if target is not None else self.image.path

        self._run(
            str(self._ensure_resource()),
            "-quality", str(quality),
            *self._option_args(),
            str(target)
        )

        logger.info(f"Saved {target.name}")
        return target

    def _option_args(self) -> List[str]:
        """
        Extra output settings from config.options.

        {"strip": True, "density": 300} becomes ["-strip", "-density", "300"];
        False or None leaves the setting out.
        """
        args = []
        for name, value in self.config.options.items():
            if value is None or value is False:
                continue
            args.append(f"-{name}")
            if value is not True:
                args.append(str(value))
        return args

    def get_version(self) -> str:
        output = self._run("-version")
        match = re.search(r"ImageMagick\s+(\S+)", output)
        if match:
            return match.group(1)
        return output.splitlines()[0] if output else ""
