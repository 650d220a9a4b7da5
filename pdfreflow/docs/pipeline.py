from __future__ import annotations

import os
from typing import Dict, Optional

from pdfreflow.config import ConversionSettings, load_settings
from pdfreflow.pipeline.process import ProgressCallback, convert_pages

from .docx_io import write_docx
from .pdf_io import read_pdf
from .txt import write_txt

OUT_FORMATS = ("docx", "txt")


def process_document(
    file_path: str,
    out_format: str = "docx",
    out_path: Optional[str] = None,
    on_progress: Optional[ProgressCallback] = None,
    settings: Optional[ConversionSettings] = None,
) -> Dict[str, str]:
    """High-level pipeline for PDFs: read → recover blocks → write DOCX (or TXT).

    - The output defaults to `<name>.docx` / `<name>.txt` next to the input.
    - A page model that cannot be read raises PageModelError; nothing is written then.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    if os.path.splitext(file_path)[1].lower() != ".pdf":
        raise ValueError(f"Unsupported file type: {file_path}")
    fmt = out_format.lower()
    if fmt not in OUT_FORMATS:
        raise ValueError(f"Unsupported output format: {out_format}")

    settings = settings or load_settings()

    with read_pdf(file_path) as source:
        blocks = convert_pages(source, on_progress=on_progress, settings=settings)

    if out_path is None:
        base = os.path.splitext(file_path)[0]
        out_path = f"{base}.{fmt}"

    if fmt == "txt":
        return {"txt": write_txt(blocks, out_path)}
    return {"docx": write_docx(blocks, out_path)}
