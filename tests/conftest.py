import io

import pytest
from PIL import Image


def _png(width: int = 4, height: int = 2, color=(200, 30, 30)) -> bytes:
    out = io.BytesIO()
    Image.new("RGB", (width, height), color).save(out, format="PNG")
    return out.getvalue()


@pytest.fixture
def make_png():
    return _png


@pytest.fixture
def png_bytes() -> bytes:
    return _png()
