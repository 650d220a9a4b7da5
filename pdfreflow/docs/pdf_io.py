from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Optional

import fitz
import pikepdf
from pikepdf.models.image import UnsupportedImageTypeError

from pdfreflow.errors import PageModelError

from .model import (
    Concat,
    EncodedBitmap,
    GlyphRun,
    ImageHandle,
    ImageResolver,
    Instruction,
    PageModel,
    PaintImage,
    PaintText,
    RawImage,
    Restore,
    Save,
    TransformMatrix,
)

logger = logging.getLogger(__name__)

# Nested form XObjects deeper than this are not entered
MAX_FORM_DEPTH = 8

_IMAGE_DECODE_ERRORS = (pikepdf.PdfError, UnsupportedImageTypeError, NotImplementedError, ValueError, OSError)


def _raw_image(xobj: pikepdf.Stream) -> RawImage:
    filters = xobj.get("/Filter")
    if isinstance(filters, pikepdf.Array) and len(filters) == 1:
        filters = filters[0]
    if filters == pikepdf.Name.DCTDecode:
        return EncodedBitmap(bytes(xobj.read_raw_bytes()))
    return ImageHandle(pikepdf.PdfImage(xobj).as_pil_image())


def _image_resolver(images: Dict[str, pikepdf.Stream], is_open: Callable[[], bool]) -> ImageResolver:
    def resolve(name: str, timeout: float) -> Optional[RawImage]:
        xobj = images.get(name)
        # an abandoned resolve must not touch a closed file
        if xobj is None or not is_open():
            return None
        return _raw_image(xobj)

    return resolve


def _inline_image(inst) -> Optional[RawImage]:
    try:
        return ImageHandle(inst.iimage.as_pil_image())
    except _IMAGE_DECODE_ERRORS as exc:
        logger.warning("Skipping undecodable inline image: %s", exc)
        return None


def _walk_content(
    owner,
    resources,
    prefix: str,
    depth: int,
    out: List[Instruction],
    images: Dict[str, pikepdf.Stream],
) -> None:
    """Append the instructions of one content stream, flattening form XObjects."""
    xobjects = resources.get("/XObject") if resources is not None else None

    for inst in pikepdf.parse_content_stream(owner):
        op = str(inst.operator)
        if op == "q":
            out.append(Save())
        elif op == "Q":
            out.append(Restore())
        elif op == "cm":
            if len(inst.operands) == 6:
                out.append(Concat(TransformMatrix.from_values(inst.operands)))
        elif op == "INLINE IMAGE":
            raw = _inline_image(inst)
            if raw is not None:
                out.append(PaintImage(inline=raw))
        elif op == "Do" and inst.operands:
            name = str(inst.operands[0])
            key = prefix + name
            xobj = xobjects.get(name) if xobjects is not None else None
            subtype = xobj.get("/Subtype") if xobj is not None else None

            if subtype == pikepdf.Name.Form:
                if depth >= MAX_FORM_DEPTH:
                    logger.warning("Form %s nested too deep, skipped", key)
                    continue
                out.append(Save())
                matrix = xobj.get("/Matrix")
                if matrix is not None:
                    out.append(Concat(TransformMatrix.from_values(matrix)))
                _walk_content(xobj, xobj.get("/Resources", resources), key, depth + 1, out, images)
                out.append(Restore())
                continue

            if subtype == pikepdf.Name.Image:
                images[key] = xobj
            out.append(PaintImage(name=key))


class PdfPageSource:
    """Page-model provider for a PDF file.

    Text spans come from PyMuPDF, the operator stream and image data from
    pikepdf. Both views are opened once and shared by all pages.
    """

    def __init__(self, path: str) -> None:
        if not os.path.exists(path):
            raise FileNotFoundError(f"PDF file not found: {path}")
        self.path = path
        self._closed = False
        try:
            self._pdf = pikepdf.open(path)
        except pikepdf.PdfError as exc:
            raise PageModelError(f"Cannot open PDF {path}: {exc}") from exc
        try:
            self._doc = fitz.open(path)
        except RuntimeError as exc:
            self._pdf.close()
            raise PageModelError(f"Cannot open PDF {path}: {exc}") from exc

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def glyph_runs(self, index: int) -> List[GlyphRun]:
        page = self._doc[index]
        # MuPDF space (top-left origin) back to PDF user space
        to_pdf = ~page.transformation_matrix
        runs: List[GlyphRun] = []
        for block in page.get_text("dict").get("blocks", []):
            if block.get("type", 0) != 0:
                continue
            for line in block.get("lines", []):
                spans = line.get("spans", [])
                for k, span in enumerate(spans):
                    origin = fitz.Point(span["origin"]) * to_pdf
                    runs.append(GlyphRun(
                        text=span.get("text", ""),
                        x=origin.x,
                        y=origin.y,
                        font_size=float(span.get("size", 0.0)),
                        end_of_line=k == len(spans) - 1,
                    ))
        return runs

    def instructions(self, index: int) -> tuple[List[Instruction], Dict[str, pikepdf.Stream]]:
        page = self._pdf.pages[index]
        out: List[Instruction] = []
        images: Dict[str, pikepdf.Stream] = {}
        _walk_content(page, page.resources, "", 0, out, images)
        return out, images

    def load_page(self, index: int) -> PageModel:
        try:
            runs = self.glyph_runs(index)
            ops, images = self.instructions(index)
        except (pikepdf.PdfError, RuntimeError, ValueError, IndexError) as exc:
            raise PageModelError(f"Cannot read page {index + 1} of {self.path}: {exc}") from exc

        instructions: List[Instruction] = [PaintText(r) for r in runs]
        instructions.extend(ops)
        logger.debug("Page %d: %d text runs, %d operators, %d images", index + 1, len(runs), len(ops), len(images))
        return PageModel(index=index, instructions=instructions, resolver=_image_resolver(images, lambda: not self._closed))

    def close(self) -> None:
        self._closed = True
        self._doc.close()
        self._pdf.close()

    def __enter__(self) -> "PdfPageSource":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def read_pdf(path: str) -> PdfPageSource:
    """Open a PDF for conversion; close it (or use it as a context manager) when done."""
    return PdfPageSource(path)
