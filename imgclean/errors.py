"""Exceptions raised while reading and writing images."""


class ImageCleanError(ValueError):
    """Base class for image cleaning errors."""


class UnsupportedFormatError(ImageCleanError):
    """The file extension does not map to a supported image format."""


class MalformedImageError(ImageCleanError):
    """The image data is unreadable or inconsistent with its header."""
