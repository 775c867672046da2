"""Output emission: hand the finished canvas to the backend encoder."""

from __future__ import annotations

from dataclasses import dataclass

from billpress.document.normalizer import NormalizedView

from .base import Canvas

__all__ = ["RenderedDocument", "emit"]


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    """Encoded PDF plus the file name it should be saved under."""

    filename: str
    data: bytes
    page_count: int


def emit(canvas: Canvas, view: NormalizedView) -> RenderedDocument:
    """Finish ``canvas`` and name the result ``<DOCTYPE>-<number>.pdf``."""

    pages = canvas.page_count
    return RenderedDocument(filename=view.filename, data=canvas.finish(), page_count=pages)
