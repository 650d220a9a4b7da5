"""Image normalization: every raw image becomes PNG bytes.

The page-model provider hands images over in whatever form it has them
(already encoded bytes, a raw pixel buffer or a decoded PIL image); the
rest of the pipeline only deals with PNG.
"""

from __future__ import annotations

import io

import numpy as np
from PIL import Image, UnidentifiedImageError

from pdfreflow.docs.model import EncodedBitmap, ImageHandle, PixelBuffer, RawImage
from pdfreflow.errors import UnsupportedPixelLayout

_MODES_BY_CHANNELS = {1: "L", 3: "RGB", 4: "RGBA"}
_PNG_MODES = {"1", "L", "LA", "I", "P", "RGB", "RGBA"}


def pixel_buffer_to_image(buf: PixelBuffer) -> Image.Image:
    """Interpret a tightly packed 8-bit pixel buffer as a PIL image.

    Doxygen:
    - @param buf: Raw pixels, row-major, `channels` bytes per pixel.
    - @return: PIL image of size (width, height).
    - @throws UnsupportedPixelLayout: On unknown channel counts or size mismatch.
    """
    mode = _MODES_BY_CHANNELS.get(buf.channels)
    if mode is None:
        raise UnsupportedPixelLayout(f"Unsupported channel count: {buf.channels}")
    if buf.width <= 0 or buf.height <= 0:
        raise UnsupportedPixelLayout(f"Invalid image size: {buf.width}x{buf.height}")
    expected = buf.width * buf.height * buf.channels
    if len(buf.data) != expected:
        raise UnsupportedPixelLayout(
            f"Pixel buffer holds {len(buf.data)} bytes, expected {expected} "
            f"for {buf.width}x{buf.height}x{buf.channels}"
        )
    arr = np.frombuffer(buf.data, dtype=np.uint8)
    if buf.channels == 1:
        arr = arr.reshape(buf.height, buf.width)
    else:
        arr = arr.reshape(buf.height, buf.width, buf.channels)
    img = Image.fromarray(arr)
    if img.mode != mode:
        img = img.convert(mode)
    return img


def _open_encoded(data: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise UnsupportedPixelLayout(f"Undecodable image data: {exc}") from exc
    return img


def to_png_bytes(raw: RawImage) -> bytes:
    """Normalize any raw image variant into PNG-encoded bytes."""
    if isinstance(raw, EncodedBitmap):
        img = _open_encoded(raw.data)
    elif isinstance(raw, PixelBuffer):
        img = pixel_buffer_to_image(raw)
    elif isinstance(raw, ImageHandle):
        img = raw.image
    else:
        raise UnsupportedPixelLayout(f"Unknown raw image type: {type(raw).__name__}")

    out = io.BytesIO()
    try:
        if img.mode not in _PNG_MODES:
            # CMYK, YCbCr and friends
            img = img.convert("RGBA" if "A" in img.getbands() else "RGB")
        img.save(out, format="PNG")
    except (Image.DecompressionBombError, OSError, ValueError) as exc:
        raise UnsupportedPixelLayout(f"Could not encode image as PNG: {exc}") from exc
    return out.getvalue()
