"""
Exceptions raised by transformkit.
"""


class ImageException(Exception):
    """Base error for image handling failures."""

    @classmethod
    def for_invalid_angle(cls, angle) -> "InvalidArgumentError":
        return InvalidArgumentError(f"Rotation angle must be one of 90, 180 or 270, got {angle!r}")

    @classmethod
    def for_invalid_direction(cls, direction) -> "InvalidArgumentError":
        return InvalidArgumentError(f"Flip direction must be 'vertical' or 'horizontal', got {direction!r}")

    @classmethod
    def for_exif_unsupported(cls) -> "UnsupportedCapabilityError":
        return UnsupportedCapabilityError("EXIF data is not supported by this installation")


class InvalidArgumentError(ImageException, ValueError):
    """An enum-like argument (angle, direction, name) has an unsupported value."""


class UnsupportedCapabilityError(ImageException, RuntimeError):
    """The environment lacks a capability the operation needs."""
