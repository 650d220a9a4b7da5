"""Turn reading-order lines into paragraph blocks of text and image runs.

Each visual line becomes one block. Horizontal gaps between consecutive
text items are rendered as a tab, a space or nothing, using a monospace
width estimate because no glyph metrics are available at this point.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from pdfreflow.config import DEFAULT_SETTINGS, ConversionSettings
from pdfreflow.docs.model import Block, ImageItem, ImageRun, Line, Run, TextItem, TextRun

logger = logging.getLogger(__name__)

TAB = "\t"
SPACE = " "


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_gap(gap: float, settings: ConversionSettings = DEFAULT_SETTINGS) -> Optional[str]:
    """Return the separator for a horizontal gap between two text items.

    Doxygen:
    - @param gap: Distance from the previous text's estimated right edge to the next item's left edge.
    - @param settings: Supplies tab_gap and space_gap thresholds.
    - @return: TAB above tab_gap, SPACE above space_gap, otherwise None.
    """
    if gap > settings.tab_gap:
        return TAB
    if gap > settings.space_gap:
        return SPACE
    return None


def estimate_text_width(item: TextItem) -> float:
    return len(item.text) * (item.font_size / 2)


def emit_line(line: Line, settings: ConversionSettings = DEFAULT_SETTINGS) -> Block:
    """Build one block from one line.

    Images are placed inline and do not move the horizontal cursor, so the
    gap before a text that follows an image is measured from the last text.
    """
    runs: List[Run] = []
    first_x = line.items[0].x if line.items else 0.0
    cursor = 0.0

    for k, item in enumerate(line.items):
        if isinstance(item, ImageItem):
            runs.append(ImageRun(data=item.data, width=item.width, height=item.height))
            continue

        if k > 0:
            separator = classify_gap(item.x - cursor, settings)
            if separator is not None:
                runs.append(TextRun(text=separator))

        runs.append(TextRun(text=item.text, size=round_half_up(item.font_size * settings.font_size_scale)))
        cursor = item.x + estimate_text_width(item)

    indent = round_half_up(max(0.0, first_x * settings.indent_scale))
    return Block(runs=runs, left_indent=indent)


def emit(lines: Sequence[Line], settings: ConversionSettings = DEFAULT_SETTINGS) -> List[Block]:
    blocks = [emit_line(line, settings) for line in lines]
    logger.debug("Emitted %d blocks", len(blocks))
    return blocks
