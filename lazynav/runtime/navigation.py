"""Navigation store: the single owner of where the user is.

All state changes go through the operations below. Async operations capture a
generation before their first await and commit only if no newer navigation has
started since; stale completions are dropped without touching any state.
Pane projections are derived from cache + state through ``ViewSelector``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import replace

from ..errors import FetchError
from ..tree_cache import TreeCache
from ..tree_model import UiNode, first_directory_index, index_of_directory
from ..tree_path import normalize_path, parent_of
from .sequencer import RequestSequencer, StaleResult
from .state import IDLE, LOADING, NavigationState, PaneStatus
from .views import NavigationViews, ViewSelector, listing_nodes, preview_target_for

log = logging.getLogger(__name__)


def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        log.error("Background preview load failed", exc_info=exc)


class NavigationController:
    """Owns ``NavigationState`` and keeps breadcrumb/listing/preview consistent."""

    def __init__(self, cache: TreeCache, *, on_change: Callable[[], None] | None = None) -> None:
        self._cache = cache
        self._on_change = on_change
        self._state = NavigationState()
        self._listing_status = IDLE
        self._preview_status = IDLE
        self._navigation = RequestSequencer("navigation")
        self._preview = RequestSequencer("preview")
        self._selector = ViewSelector(cache)
        self._preview_tasks: set[asyncio.Task] = set()
        self._unsubscribe = cache.subscribe(self._on_cache_changed)

    @property
    def cache(self) -> TreeCache:
        return self._cache

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def listing_status(self) -> PaneStatus:
        return self._listing_status

    @property
    def preview_status(self) -> PaneStatus:
        return self._preview_status

    @property
    def views(self) -> NavigationViews:
        return self._selector.select(self._state, self._listing_status, self._preview_status)

    def current_nodes(self) -> list[UiNode]:
        return listing_nodes(self._cache, self._state.current_path)

    def selected_node(self) -> UiNode | None:
        index = self._state.selected_index
        nodes = self.current_nodes()
        if index is None or not (0 <= index < len(nodes)):
            return None
        return nodes[index]

    # ── Navigation ───────────────────────────────────────────────────────

    async def start(self, initial_path: str | None = None) -> bool:
        """Load the first listing, falling back to the root if ``initial_path`` fails."""
        if await self.navigate_to(initial_path):
            return True
        error = self._listing_status.error
        if not normalize_path(initial_path) or error is None:
            return False
        log.warning(f"Could not open {initial_path}: {error}; falling back to root")
        if not await self.navigate_to(None):
            return False
        self._set_listing_status(PaneStatus(error=f"could not open {initial_path}: {error}"))
        return True

    async def navigate_to(self, target: str | None, preferred_index: int | None = None) -> bool:
        """Make ``target`` the current level once it and its ancestors are loaded.

        Returns ``True`` when the navigation committed, ``False`` when it
        failed or was superseded by a newer navigation.
        """
        target_key = normalize_path(target)
        generation = self._begin_navigation()
        log.debug(f"Navigate to {target_key or '<root>'} (generation {generation})")
        asset_error: str | None = None
        try:
            with self._cache.protect(target_key):
                await self._cache.ensure_path_and_ancestors(target_key)
                try:
                    await self._cache.ensure_assets(target_key)
                except FetchError as e:
                    asset_error = f"assets unavailable: {e}"
        except FetchError as e:
            self._fail_navigation(generation, target_key, e)
            return False
        try:
            self._navigation.check(generation)
        except StaleResult:
            return False
        self._commit(target_key, preferred_index, listing_error=asset_error)
        return True

    async def enter_selection(self) -> bool:
        """Descend into the selected row if it is a directory with children."""
        node = self.selected_node()
        if node is None or not node.is_enterable:
            return False
        return await self.navigate_to(node.directory_path)

    async def enter_index(self, index: int) -> bool:
        if not self.select_index(index) and self._state.selected_index != index:
            return False
        return await self.enter_selection()

    async def go_back(self) -> bool:
        """Go to the parent level with the cursor on the level we came from."""
        current = normalize_path(self._state.current_path)
        if not current:
            return False
        return await self.select_breadcrumb(current)

    async def select_breadcrumb(self, path: str | None) -> bool:
        """Show the level containing ``path`` with ``path`` selected."""
        path = normalize_path(path)
        if not path:
            return await self.navigate_to(None)
        parent = parent_of(path)
        generation = self._begin_navigation()
        try:
            await self._cache.ensure_children(parent)
        except FetchError as e:
            self._fail_navigation(generation, parent, e)
            return False
        try:
            await self._cache.ensure_assets(parent)
        except FetchError as e:
            # navigate_to retries the assets and reports the failure.
            log.debug(f"Assets of {parent} unavailable while locating {path}: {e}")
        try:
            self._navigation.check(generation)
        except StaleResult:
            return False
        index = index_of_directory(listing_nodes(self._cache, parent), path)
        return await self.navigate_to(parent, index)

    async def reload(self) -> bool:
        """Drop every cached listing and re-open the current level."""
        state = self._state
        self._cache.reload()
        return await self.navigate_to(state.current_path, state.selected_index)

    def _begin_navigation(self) -> int:
        generation = self._navigation.begin()
        self._set_listing_status(LOADING)
        return generation

    def _fail_navigation(self, generation: int, path: str, error: FetchError) -> None:
        if not self._navigation.is_current(generation):
            log.debug(f"Ignoring failure of superseded navigation to {path or '<root>'}: {error}")
            return
        log.warning(f"Navigation to {path or '<root>'} failed: {error}")
        self._set_listing_status(PaneStatus(error=str(error)))

    def _commit(self, path: str, preferred_index: int | None, listing_error: str | None) -> None:
        nodes = listing_nodes(self._cache, path)
        if not nodes:
            index = None
        elif preferred_index is None:
            index = first_directory_index(nodes)
        else:
            index = max(0, min(preferred_index, len(nodes) - 1))
        self._state = NavigationState(
            current_path=path or None,
            selected_index=index,
            preview_target=preview_target_for(nodes, index),
        )
        self._listing_status = PaneStatus(error=listing_error)
        self._start_preview_load()
        self._notify()

    # ── Selection ────────────────────────────────────────────────────────

    def move_selection(self, delta: int) -> bool:
        """Move the cursor by ``delta`` rows, clamped to the listing."""
        nodes = self.current_nodes()
        if not nodes:
            return self._apply_selection(nodes, None)
        current = self._state.selected_index if self._state.selected_index is not None else 0
        return self._apply_selection(nodes, max(0, min(current + delta, len(nodes) - 1)))

    def select_index(self, index: int) -> bool:
        """Put the cursor on absolute row ``index``; out-of-range rows are ignored."""
        nodes = self.current_nodes()
        if not (0 <= index < len(nodes)):
            return False
        return self._apply_selection(nodes, index)

    def _apply_selection(self, nodes: list[UiNode], index: int | None) -> bool:
        target = preview_target_for(nodes, index)
        state = self._state
        if index == state.selected_index and target == state.preview_target:
            return False
        self._state = replace(state, selected_index=index, preview_target=target)
        if target != state.preview_target:
            self._start_preview_load()
        self._notify()
        return True

    def _on_cache_changed(self) -> None:
        nodes = self.current_nodes()
        index = self._state.selected_index
        if not nodes:
            healed = None
        elif index is None or index >= len(nodes):
            healed = first_directory_index(nodes)
        else:
            healed = index
        if not self._apply_selection(nodes, healed):
            self._notify()

    # ── Preview ──────────────────────────────────────────────────────────

    def _start_preview_load(self) -> None:
        target = self._state.preview_target
        generation = self._preview.begin()
        self._cache.pin(self._state.current_path, target)
        if target is None or (self._cache.has_children_entry(target) and self._cache.has_assets_entry(target)):
            self._preview_status = IDLE
            return
        self._preview_status = LOADING
        task = asyncio.get_running_loop().create_task(self._load_preview(target, generation))
        self._preview_tasks.add(task)
        task.add_done_callback(self._preview_tasks.discard)
        task.add_done_callback(_log_task_failure)

    async def _load_preview(self, target: str, generation: int) -> None:
        error: str | None = None
        try:
            with self._cache.protect(target):
                await self._cache.ensure_children(target)
                await self._cache.ensure_assets(target)
        except FetchError as e:
            error = str(e)
        try:
            self._preview.check(generation)
        except StaleResult:
            return
        if error is not None:
            log.warning(f"Preview of {target} failed: {error}")
        self._preview_status = PaneStatus(error=error)
        self._notify()

    async def settle(self) -> None:
        """Wait until no preview load is outstanding."""
        while self._preview_tasks:
            await asyncio.wait(list(self._preview_tasks))

    # ── Plumbing ─────────────────────────────────────────────────────────

    def _set_listing_status(self, status: PaneStatus) -> None:
        if status != self._listing_status:
            self._listing_status = status
            self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def close(self) -> None:
        self._unsubscribe()
        for task in list(self._preview_tasks):
            task.cancel()


__all__ = ["NavigationController"]
