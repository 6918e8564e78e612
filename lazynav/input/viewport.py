"""Scroll offsets for the listing and preview panes."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_DETAIL_STEP = 5


@dataclass
class DetailViewport:
    """Scroll position of the preview pane.

    ``offset`` always stays in ``[0, content_rows - visible_rows]``. The
    renderer reports the pane's size every frame through ``set_extent``.
    """

    step: int = DEFAULT_DETAIL_STEP
    offset: int = 0
    content_rows: int = 0
    visible_rows: int = 1
    target: str | None = None

    @property
    def max_offset(self) -> int:
        return max(0, self.content_rows - max(1, self.visible_rows))

    def set_extent(self, content_rows: int, visible_rows: int) -> None:
        self.content_rows = max(0, content_rows)
        self.visible_rows = max(1, visible_rows)
        self.offset = max(0, min(self.offset, self.max_offset))

    def follow(self, target: str | None) -> None:
        """Reset to the top when the previewed item changes."""
        if target != self.target:
            self.target = target
            self.offset = 0

    def scroll(self, direction: int) -> bool:
        """Scroll by one step; ``direction`` is +1 (down) or -1 (up)."""
        previous = self.offset
        self.offset = max(0, min(self.offset + direction * self.step, self.max_offset))
        return self.offset != previous


@dataclass
class ListViewport:
    """First visible row of the listing; keeps the selection on screen."""

    start: int = 0

    def follow(self, selected: int | None, count: int, visible_rows: int) -> int:
        visible_rows = max(1, visible_rows)
        max_start = max(0, count - visible_rows)
        if selected is not None:
            if selected < self.start:
                self.start = selected
            elif selected >= self.start + visible_rows:
                self.start = selected - visible_rows + 1
        self.start = max(0, min(self.start, max_start))
        return self.start


__all__ = ["DEFAULT_DETAIL_STEP", "DetailViewport", "ListViewport"]
