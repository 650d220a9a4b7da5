"""Document layer around the layout core (PDF in, DOCX/TXT out).

Exposes:
- Data model: instructions, content items, lines, blocks and runs
- Reader: PdfPageSource (pikepdf operators + PyMuPDF text spans)
- Writers: docx (python-docx), txt
"""

from .model import (
    Block,
    ContentItem,
    DocumentBlock,
    ImageItem,
    ImageRun,
    Line,
    PageBreak,
    PageModel,
    TextItem,
    TextRun,
    TransformMatrix,
)

__all__ = [
    "Block",
    "ContentItem",
    "DocumentBlock",
    "ImageItem",
    "ImageRun",
    "Line",
    "PageBreak",
    "PageModel",
    "TextItem",
    "TextRun",
    "TransformMatrix",
]
