from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from PIL import Image


@dataclass(frozen=True)
class TransformMatrix:
    """Affine map (x, y) -> (a*x + c*y + e, b*x + d*y + f)."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def from_values(cls, values) -> "TransformMatrix":
        a, b, c, d, e, f = (float(v) for v in values)
        return cls(a, b, c, d, e, f)

    @property
    def width(self) -> float:
        return math.hypot(self.a, self.b)

    @property
    def height(self) -> float:
        return math.hypot(self.c, self.d)


IDENTITY = TransformMatrix()


# Raw images as handed over by the page-model provider


@dataclass
class EncodedBitmap:
    data: bytes


@dataclass
class PixelBuffer:
    data: bytes
    width: int
    height: int
    channels: int = 4


@dataclass
class ImageHandle:
    image: Image.Image


RawImage = Union[EncodedBitmap, PixelBuffer, ImageHandle]
ImageResolver = Callable[[str, float], Optional[RawImage]]


# Instruction stream


@dataclass
class GlyphRun:
    text: str
    x: float
    y: float
    font_size: float
    end_of_line: bool = False


@dataclass
class PaintText:
    run: GlyphRun


@dataclass
class Save:
    pass


@dataclass
class Restore:
    pass


@dataclass
class Concat:
    matrix: TransformMatrix


@dataclass
class PaintImage:
    name: Optional[str] = None
    inline: Optional[RawImage] = None


TransformOp = Union[Save, Restore, Concat]
Instruction = Union[PaintText, Save, Restore, Concat, PaintImage]


@dataclass
class PageModel:
    index: int
    instructions: List[Instruction] = field(default_factory=list)
    resolver: Optional[ImageResolver] = None


# Content items (page space, y grows upward)


@dataclass
class TextItem:
    text: str
    x: float
    y: float
    font_size: float
    end_of_line: bool = False


@dataclass
class ImageItem:
    data: bytes
    x: float
    y: float
    width: float
    height: float


ContentItem = Union[TextItem, ImageItem]


@dataclass
class Line:
    items: List[ContentItem] = field(default_factory=list)

    @property
    def y(self) -> float:
        return self.items[0].y


# Output blocks


@dataclass
class TextRun:
    text: str
    size: Optional[int] = None  # half-points


@dataclass
class ImageRun:
    data: bytes
    width: float  # points
    height: float


Run = Union[TextRun, ImageRun]


@dataclass
class Block:
    runs: List[Run] = field(default_factory=list)
    left_indent: int = 0  # twips

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs if isinstance(r, TextRun))


@dataclass(frozen=True)
class PageBreak:
    pass


DocumentBlock = Union[Block, PageBreak]
