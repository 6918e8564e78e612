"""Screen geometry for the three-pane layout.

Row 1 is the header, the last row is the status line, and the rows between
are split into columns: breadcrumb │ listing │ preview. Terminal coordinates
are 1-based, matching SGR mouse reports.
"""

from __future__ import annotations

from dataclasses import dataclass

HEADER_ROWS = 1
STATUS_ROWS = 1

BREADCRUMB_PANE = "breadcrumb"
LISTING_PANE = "listing"
PREVIEW_PANE = "preview"


@dataclass(frozen=True)
class PaneHit:
    """A pointer position resolved to a pane and a 0-based visible row."""

    pane: str
    row: int


@dataclass(frozen=True)
class PaneLayout:
    columns: int
    rows: int
    breadcrumb_width: int
    listing_width: int

    @property
    def content_rows(self) -> int:
        return max(1, self.rows - HEADER_ROWS - STATUS_ROWS)

    @property
    def first_content_row(self) -> int:
        return HEADER_ROWS + 1

    @property
    def listing_col(self) -> int:
        return self.breadcrumb_width + 2

    @property
    def preview_col(self) -> int:
        return self.listing_col + self.listing_width + 1

    @property
    def preview_width(self) -> int:
        return max(1, self.columns - self.preview_col + 1)

    def pane_at(self, col: int, row: int) -> PaneHit | None:
        """Resolve a 1-based terminal cell to the pane row under it.

        Divider columns, the header, and the status line resolve to ``None``.
        """
        visible_row = row - self.first_content_row
        if not (0 <= visible_row < self.content_rows):
            return None
        if 1 <= col <= self.breadcrumb_width:
            return PaneHit(BREADCRUMB_PANE, visible_row)
        if self.listing_col <= col < self.listing_col + self.listing_width:
            return PaneHit(LISTING_PANE, visible_row)
        if self.preview_col <= col <= self.columns:
            return PaneHit(PREVIEW_PANE, visible_row)
        return None


def compute_layout(columns: int, rows: int) -> PaneLayout:
    """Choose pane widths for a ``columns`` x ``rows`` terminal."""
    columns = max(10, columns)
    rows = max(HEADER_ROWS + STATUS_ROWS + 1, rows)
    breadcrumb = max(8, min(32, columns // 5))
    listing = max(12, min(48, columns // 3))
    # Preview keeps at least a quarter of the screen on narrow terminals.
    overflow = breadcrumb + listing + 2 + max(8, columns // 4) - columns
    if overflow > 0:
        shrink_breadcrumb = min(overflow, max(0, breadcrumb - 4))
        breadcrumb -= shrink_breadcrumb
        listing = max(4, listing - (overflow - shrink_breadcrumb))
    return PaneLayout(columns=columns, rows=rows, breadcrumb_width=breadcrumb, listing_width=listing)


def breadcrumb_start(count: int, visible_rows: int) -> int:
    """First breadcrumb row shown; deep paths keep the innermost levels visible."""
    return max(0, count - max(1, visible_rows))


__all__ = [
    "BREADCRUMB_PANE",
    "LISTING_PANE",
    "PREVIEW_PANE",
    "PaneHit",
    "PaneLayout",
    "breadcrumb_start",
    "compute_layout",
]
