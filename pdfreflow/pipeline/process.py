"""Page driver: run extraction, reading order and block emission page by page.

Pages are processed strictly in order. After each page the caller's
progress callback receives the completed percentage and a page break is
placed between consecutive pages' blocks.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from pdfreflow.config import DEFAULT_SETTINGS, ConversionSettings
from pdfreflow.docs.model import DocumentBlock, PageBreak, PageModel
from pdfreflow.layout.blocks import emit, round_half_up
from pdfreflow.layout.extract import extract_items
from pdfreflow.layout.reading_order import reconstruct

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def print_progress_bar(percent: int, elapsed: float, width: int = 10) -> None:
    """Render a colored one-line progress bar with an ETA.

    Doxygen:
    - @param percent: Completed percentage, 0..100.
    - @param elapsed: Seconds since the conversion started.
    - @param width: Number of bar segments (default 10).
    """
    pct = max(0, min(100, int(percent)))
    segments = max(1, int(width))
    filled = segments if pct >= 100 else int(pct / 100 * segments)
    pending = max(0, segments - filled)
    eta = elapsed / pct * (100 - pct) if pct > 0 else 0.0
    GREEN = "\x1b[32m"
    RED = "\x1b[31m"
    RESET = "\x1b[0m"
    bar = f"{GREEN}{'█'*filled}{RESET}{RED}{'█'*pending}{RESET} {pct:3d}% ETA {eta:5.1f}s"
    print(f"\r{bar}", end="", flush=True)


def convert_page(page: PageModel, settings: ConversionSettings = DEFAULT_SETTINGS) -> List[DocumentBlock]:
    items = extract_items(page.instructions, page.resolver, settings)
    lines = reconstruct(items, settings.line_tolerance)
    blocks = emit(lines, settings)
    logger.debug("Page %d: %d items, %d lines", page.index + 1, len(items), len(lines))
    return list(blocks)


def convert_pages(
    source,
    on_progress: Optional[ProgressCallback] = None,
    settings: Optional[ConversionSettings] = None,
) -> List[DocumentBlock]:
    """Convert every page of `source` into one block sequence.

    Doxygen:
    - @param source: Object with `page_count` and `load_page(index) -> PageModel`.
    - @param on_progress: Called with an integer percentage after each page.
    - @param settings: Conversion settings; defaults when None.
    - @return: Blocks of all pages, separated by PageBreak markers.
    - @throws PageModelError: When the source cannot provide a page model.
    """
    settings = settings or DEFAULT_SETTINGS
    total = int(source.page_count)
    safe_total = max(total, 1)
    out: List[DocumentBlock] = []

    for i in range(1, total + 1):
        page = source.load_page(i - 1)
        out.extend(convert_page(page, settings))
        if i < total:
            out.append(PageBreak())
        if on_progress is not None:
            on_progress(min(100, round_half_up(i / safe_total * 100)))

    logger.info("Converted %d pages into %d blocks", total, sum(1 for b in out if not isinstance(b, PageBreak)))
    return out
