"""Cursor-based page layout: section renderers, page breaks and emission."""

from .base import Canvas, TableRenderer
from .cursor import LayoutCursor

__all__ = ["Canvas", "LayoutCursor", "TableRenderer"]
