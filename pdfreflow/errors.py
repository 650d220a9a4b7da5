"""Exceptions raised by the conversion core.

Only `PageModelError` ever reaches the caller of a conversion; the image
errors are caught per item by the extractor and turn into dropped images.
"""


class PageModelError(RuntimeError):
    """The page model (text runs or operator list) could not be read."""


class ImageError(Exception):
    """An image could not be turned into an image item."""


class ImageUnavailable(ImageError):
    """The image reference did not resolve, or not within the time limit."""


class UnsupportedPixelLayout(ImageError, ValueError):
    """Pixel data that cannot be interpreted as an image."""
