"""High-level orchestration: pages -> items -> lines -> blocks."""

from .process import (
    convert_page,
    convert_pages,
    print_progress_bar,
)

__all__ = [
    "convert_page",
    "convert_pages",
    "print_progress_bar",
]
