from __future__ import annotations

import io
import logging
from typing import Optional, Sequence

from docx import Document as DocxDocument
from docx.shared import Pt, Twips

from .model import Block, DocumentBlock, ImageRun, PageBreak, TextRun

logger = logging.getLogger(__name__)


def _length(points: float) -> Optional[Pt]:
    return Pt(points) if points > 0 else None


def _write_block(d, block: Block) -> None:
    p = d.add_paragraph()
    fmt = p.paragraph_format
    fmt.space_before = Pt(0)
    fmt.space_after = Pt(0)
    fmt.line_spacing = 1.0
    fmt.left_indent = Twips(block.left_indent)

    for run in block.runs:
        if isinstance(run, TextRun):
            r = p.add_run(run.text)
            if run.size:
                r.font.size = Pt(run.size / 2)
        elif isinstance(run, ImageRun):
            p.add_run().add_picture(
                io.BytesIO(run.data),
                width=_length(run.width),
                height=_length(run.height),
            )


def write_docx(blocks: Sequence[DocumentBlock], out_path: str) -> str:
    """Write the block sequence as a single-section .docx file."""
    d = DocxDocument()
    for block in blocks:
        if isinstance(block, PageBreak):
            d.add_page_break()
        else:
            _write_block(d, block)
    d.save(out_path)
    logger.info("Wrote %s", out_path)
    return out_path

