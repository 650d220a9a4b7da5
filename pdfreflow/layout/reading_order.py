"""Reading order reconstruction: sort page items and cluster them into lines.

A content stream carries no line or paragraph markers, so vertical
proximity is the only signal. Items whose baselines lie within the line
tolerance of each other form one visual row.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import List, Sequence

from pdfreflow.docs.model import ContentItem, Line

LINE_TOLERANCE = 5.0


def compare_items(a: ContentItem, b: ContentItem, tolerance: float = LINE_TOLERANCE) -> float:
    """Order two items top to bottom, left to right within a row.

    Doxygen:
    - @param a: First item.
    - @param b: Second item.
    - @param tolerance: Maximum y distance (exclusive) for two items to share a row.
    - @return: Negative if `a` reads before `b`, positive if after, 0 if tied.
    """
    if abs(a.y - b.y) < tolerance:
        return a.x - b.x
    # y grows upward, higher items come first
    return b.y - a.y


def sort_items(items: Sequence[ContentItem], tolerance: float = LINE_TOLERANCE) -> List[ContentItem]:
    return sorted(items, key=cmp_to_key(lambda a, b: compare_items(a, b, tolerance)))


def group_items_to_lines(ordered: Sequence[ContentItem], tolerance: float = LINE_TOLERANCE) -> List[Line]:
    """Cluster already sorted items into lines anchored at each line's first item."""
    lines: List[Line] = []
    current: Line | None = None
    for item in ordered:
        if current is not None and abs(item.y - current.y) < tolerance:
            current.items.append(item)
            continue
        current = Line(items=[item])
        lines.append(current)
    return lines


def reconstruct(items: Sequence[ContentItem] | None, tolerance: float = LINE_TOLERANCE) -> List[Line]:
    """Turn an unordered item list into lines in reading order.

    Doxygen:
    - @param items: Items of one page; None or empty yields no lines.
    - @param tolerance: Line band tolerance in page units.
    - @return: Lines from the top of the page down, items left to right.
    """
    if not items:
        return []
    return group_items_to_lines(sort_items(items, tolerance), tolerance)
