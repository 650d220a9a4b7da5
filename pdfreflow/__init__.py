"""Recover reading-order text and image blocks from PDF pages."""

__version__ = "0.1.0"
