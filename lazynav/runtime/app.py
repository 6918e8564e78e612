"""Composition root: wire fetcher, cache, controller, input, and renderer."""

from __future__ import annotations

import asyncio
import logging
import sys

from ..api_client import NodeFetcher
from ..errors import FetchError
from ..input import DetailViewport, FocusState, InputDispatcher, KeyReader, ListViewport, MouseHandlers
from ..render import render_screen
from ..tree_cache import TreeCache
from ..ui_theme import UITheme
from .config import NavigatorSettings, save_last_path
from .layout import compute_layout
from .loop import RuntimeLoop
from .navigation import NavigationController
from .terminal import TerminalController
from .views import NavigationViews

log = logging.getLogger(__name__)


async def load_views(settings: NavigatorSettings, path: str | None) -> NavigationViews:
    """Open ``path`` once, wait for its preview, and return the resulting views.

    Raises ``FetchError`` when the level cannot be opened.
    """
    async with NodeFetcher(settings.api_url, timeout=settings.request_timeout) as fetcher:
        cache = TreeCache(fetcher, max_paths=settings.max_cached_paths)
        controller = NavigationController(cache)
        try:
            if not await controller.navigate_to(path):
                raise FetchError(controller.listing_status.error or "navigation failed", path)
            await controller.settle()
            return controller.views
        finally:
            controller.close()


async def _run_session(
    settings: NavigatorSettings,
    theme: UITheme,
    terminal: TerminalController,
    initial_path: str | None,
) -> str | None:
    nav_loop = RuntimeLoop(terminal, KeyReader(terminal.stdin_fd))
    async with NodeFetcher(settings.api_url, timeout=settings.request_timeout) as fetcher:
        cache = TreeCache(fetcher, max_paths=settings.max_cached_paths)
        controller = NavigationController(cache, on_change=nav_loop.request_redraw)
        list_viewport = ListViewport()
        detail_viewport = DetailViewport(step=settings.detail_scroll_step)
        focus = FocusState()

        def layout():
            return compute_layout(*terminal.size())

        mouse = MouseHandlers(
            controller=controller,
            layout=layout,
            list_viewport=list_viewport,
            detail_viewport=detail_viewport,
            spawn=nav_loop.spawn,
            on_change=nav_loop.request_redraw,
            double_click_seconds=settings.double_click_seconds,
        )
        dispatcher = InputDispatcher(
            controller,
            spawn=nav_loop.spawn,
            detail_viewport=detail_viewport,
            focus=focus,
            mouse=mouse,
            on_change=nav_loop.request_redraw,
        )

        def render() -> str:
            return render_screen(
                controller.views,
                layout(),
                list_viewport=list_viewport,
                detail_viewport=detail_viewport,
                focus=focus,
                theme=theme,
            )

        nav_loop.spawn(controller.start(initial_path))
        try:
            await nav_loop.run(dispatcher, render)
        finally:
            controller.close()
        return controller.state.current_path


def run_navigator(
    settings: NavigatorSettings,
    theme: UITheme,
    initial_path: str | None = None,
) -> int:
    """Run the interactive navigator on the controlling terminal."""
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    log.info(f"Starting navigator against {settings.api_url}")
    with terminal.raw_mode():
        last_path = asyncio.run(_run_session(settings, theme, terminal, initial_path))
    save_last_path(last_path)
    return 0


__all__ = ["load_views", "run_navigator"]
