"""Layout recovery: matrix tracking, item extraction, reading order, blocks.

Built for content streams that carry absolute positions only; the stages
turn them into lines and paragraph blocks in reading order.
"""

from .transform import TransformTracker, compose
from .extract import extract_items, resolve_image
from .reading_order import LINE_TOLERANCE, compare_items, reconstruct, sort_items
from .blocks import SPACE, TAB, classify_gap, emit, emit_line

__all__ = [
    "TransformTracker",
    "compose",
    "extract_items",
    "resolve_image",
    "LINE_TOLERANCE",
    "compare_items",
    "reconstruct",
    "sort_items",
    "SPACE",
    "TAB",
    "classify_gap",
    "emit",
    "emit_line",
]
