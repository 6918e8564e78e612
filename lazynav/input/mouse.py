"""Pointer handling for the breadcrumb, listing, and preview panes."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from ..runtime.layout import BREADCRUMB_PANE, LISTING_PANE, PREVIEW_PANE, PaneLayout, breadcrumb_start
from ..runtime.navigation import NavigationController
from .keys import parse_mouse_token
from .viewport import DetailViewport, ListViewport

DEFAULT_DOUBLE_CLICK_SECONDS = 0.35


class MouseHandlers:
    """Translate SGR mouse tokens into navigation operations.

    A left press on a listing row selects it; a second press on the same row
    within ``double_click_seconds`` enters it. A press on a breadcrumb row
    shows that level's parent with the level selected. Wheel events move the
    selection over the listing and scroll the detail viewport over the preview.
    """

    def __init__(
        self,
        *,
        controller: NavigationController,
        layout: Callable[[], PaneLayout],
        list_viewport: ListViewport,
        detail_viewport: DetailViewport,
        spawn: Callable[[Awaitable[object]], None],
        on_change: Callable[[], None],
        double_click_seconds: float = DEFAULT_DOUBLE_CLICK_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._controller = controller
        self._layout = layout
        self._list_viewport = list_viewport
        self._detail_viewport = detail_viewport
        self._spawn = spawn
        self._on_change = on_change
        self._double_click_seconds = double_click_seconds
        self._monotonic = monotonic
        self._last_click_index = -1
        self._last_click_time = 0.0

    def handle(self, token: str) -> bool:
        """Handle one mouse token; returns ``False`` for non-mouse tokens."""
        if token == "MOUSE":
            return True
        parsed = parse_mouse_token(token)
        if parsed is None:
            return False
        kind, col, row = parsed
        hit = self._layout().pane_at(col, row)
        if hit is None:
            return True
        if kind == "LEFT_DOWN":
            if hit.pane == LISTING_PANE:
                self._click_listing(hit.row)
            elif hit.pane == BREADCRUMB_PANE:
                self._click_breadcrumb(hit.row)
        elif kind in ("WHEEL_UP", "WHEEL_DOWN"):
            direction = -1 if kind == "WHEEL_UP" else 1
            if hit.pane == LISTING_PANE:
                self._controller.move_selection(direction)
            elif hit.pane == PREVIEW_PANE and self._detail_viewport.scroll(direction):
                self._on_change()
        return True

    def _click_listing(self, visible_row: int) -> None:
        index = self._list_viewport.start + visible_row
        if not (0 <= index < len(self._controller.current_nodes())):
            return
        self._controller.select_index(index)
        now = self._monotonic()
        is_double = index == self._last_click_index and (now - self._last_click_time) <= self._double_click_seconds
        if is_double:
            self._last_click_index = -1
            self._last_click_time = 0.0
            self._spawn(self._controller.enter_index(index))
            return
        self._last_click_index = index
        self._last_click_time = now

    def _click_breadcrumb(self, visible_row: int) -> None:
        crumbs = self._controller.views.breadcrumb
        index = breadcrumb_start(len(crumbs), self._layout().content_rows) + visible_row
        if not (0 <= index < len(crumbs)):
            return
        self._last_click_index = -1
        self._spawn(self._controller.select_breadcrumb(crumbs[index].directory_path))


__all__ = ["DEFAULT_DOUBLE_CLICK_SECONDS", "MouseHandlers"]
