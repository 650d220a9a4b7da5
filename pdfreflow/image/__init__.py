"""Image normalization (raw provider images to PNG)."""

from .processing import (
    pixel_buffer_to_image,
    to_png_bytes,
)

__all__ = [
    "pixel_buffer_to_image",
    "to_png_bytes",
]
