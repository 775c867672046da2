"""Page break controller.

The controller owns every page break.  Before a section is drawn the engine
asks :meth:`PageBreakController.ensure_room` with the section's estimated
height; when the block would cross the bottom margin a new page is started
and the continuation header drawn first.  The item table paginates itself and
calls :meth:`PageBreakController.start_table_page` whenever it needs a page.

Footers are checked as one combined block so that a signature never ends up
beside a half-drawn terms column on another page.
"""

from __future__ import annotations

from dataclasses import dataclass

from billpress.config import ConfigModel
from billpress.document.normalizer import NormalizedView
from billpress.utils.logging import get_logger

from . import sections
from .base import Canvas
from .cursor import LayoutCursor, checked_height

__all__ = ["PageBreak", "PageBreakController"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PageBreak:
    """Record of one page break: the page started and why."""

    page_index: int
    reason: str


class PageBreakController:
    """Decide and perform page breaks for one render call."""

    def __init__(
        self,
        canvas: Canvas,
        cursor: LayoutCursor,
        view: NormalizedView,
        cfg: ConfigModel,
    ) -> None:
        self.canvas = canvas
        self.cursor = cursor
        self.view = view
        self.cfg = cfg
        self.breaks: list[PageBreak] = []
        self._top_y = cfg.page.margin + cfg.spacing.continuation_offset

    def break_page(self, reason: str = "overflow") -> float:
        """Start a new page, draw the continuation header, return the new ``y``."""

        self.canvas.new_page()
        self.cursor.break_page()
        y = sections.draw_continuation_header(self.canvas, self.cursor, self.view, self.cfg)
        self.breaks.append(PageBreak(self.cursor.page_index, reason))
        logger.debug("Page %d started (%s)", self.cursor.page_index + 1, reason)
        return y

    def ensure_room(self, height: float | None, what: str = "block") -> bool:
        """Break the page if a block of ``height`` does not fit.

        Returns ``True`` when a page was started.  A block taller than an
        empty page is drawn where it is; starting more pages cannot help it.

        Raises
        ------
        OverflowComputationError
            If ``height`` is negative or undefined.
        """

        needed = checked_height(height, f"{what} height")
        if not self.cursor.would_overflow(needed):
            return False
        if self.cursor.y <= self._top_y:
            logger.warning("%s (%.1fpt) is taller than a page; drawing it anyway", what, needed)
            return False
        self.break_page(what)
        return True

    def start_table_page(self) -> float:
        """Page-break callback for the table primitive."""

        return self.break_page("item table")
