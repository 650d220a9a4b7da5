"""
Entry point and compatibility facade for the PDF → blocks → DOCX pipeline.

This module exposes a stable API and a CLI.

Packages:
- pdfreflow.layout: matrix tracking, item extraction, reading order, block emission
- pdfreflow.image: raw image normalization to PNG
- pdfreflow.docs: data model, PDF page-model provider, DOCX/TXT writers
- pdfreflow.pipeline: page driver (`convert_pages`) and console progress bar
"""

from __future__ import annotations

import logging
import time

from pdfreflow.config import ConversionSettings, load_settings
from pdfreflow.docs.pdf_io import PdfPageSource, read_pdf
from pdfreflow.docs.docx_io import write_docx
from pdfreflow.docs.txt import blocks_to_text, write_txt
from pdfreflow.docs.pipeline import process_document
from pdfreflow.errors import PageModelError
from pdfreflow.layout import classify_gap, compose, emit, extract_items, reconstruct
from pdfreflow.pipeline.process import convert_pages, print_progress_bar

__all__ = [
    # config
    "ConversionSettings",
    "load_settings",
    # layout core
    "compose",
    "extract_items",
    "reconstruct",
    "classify_gap",
    "emit",
    "convert_pages",
    # documents
    "PdfPageSource",
    "read_pdf",
    "write_docx",
    "write_txt",
    "blocks_to_text",
    "process_document",
    "PageModelError",
]


def _cli() -> None:
    """CLI for PDF conversion.

    --file / -f: Path to input PDF
    --out-format: docx|txt (default: docx)
    --out / -o: Output path (default: next to the input)
    --config: Settings JSON (default: config/conversion.json)
    --verbose / -v: Debug logging
    """
    import argparse

    parser = argparse.ArgumentParser(description="Convert a PDF into an editable document, recovering lines, spacing and images.")
    parser.add_argument("--file", "-f", type=str, help="Path to input PDF")
    parser.add_argument("--out-format", type=str, default="docx", choices=["docx", "txt"], help="Output format (default: docx)")
    parser.add_argument("--out", "-o", type=str, default=None, help="Output path (default: input name with new extension)")
    parser.add_argument("--config", type=str, default=None, help="Path to a settings JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.file:
        print("Please provide --file path to a PDF.")
        print("Example:\n  python main.py --file path/to/doc.pdf --out-format docx")
        raise SystemExit(2)

    settings = load_settings(args.config)
    started = time.monotonic()

    def _on_progress(percent: int) -> None:
        print_progress_bar(percent, time.monotonic() - started)

    try:
        result = process_document(
            file_path=args.file,
            out_format=args.out_format,
            out_path=args.out,
            on_progress=_on_progress,
            settings=settings,
        )
    except (FileNotFoundError, ValueError, PageModelError) as e:
        print()
        print(f"Conversion failed: {e}")
        raise SystemExit(1)

    print()
    for k, v in result.items():
        print(f"{k}: {v}")


if __name__ == "__main__":
    _cli()
