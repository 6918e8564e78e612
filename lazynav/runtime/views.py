"""Derived pane projections.

Everything here is a pure function of the cache contents and the navigation
state. ``ViewSelector`` memoizes the last projection so renderers can ask for
views on every frame without recomputing them.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..tree_cache import TreeCache
from ..tree_model import NodeKind, UiNode, build_ui_nodes, directory_row
from ..tree_path import last_label, normalize_path, parent_of, split_levels
from .state import IDLE, NavigationState, PaneStatus


@dataclass(frozen=True)
class NavigationViews:
    """Snapshot of the three panes for one render."""

    current_path: str | None
    breadcrumb: tuple[UiNode, ...]
    breadcrumb_highlight: str | None
    current_nodes: tuple[UiNode, ...]
    selected_index: int | None
    listing_loaded: bool
    preview_target: str | None
    preview_nodes: tuple[UiNode, ...]
    preview_loaded: bool
    listing_status: PaneStatus = IDLE
    preview_status: PaneStatus = IDLE

    @property
    def selected_node(self) -> UiNode | None:
        if self.selected_index is None:
            return None
        if not (0 <= self.selected_index < len(self.current_nodes)):
            return None
        return self.current_nodes[self.selected_index]


def listing_nodes(cache: TreeCache, path: str | None) -> list[UiNode]:
    """Rows for the listing of ``path``: cached children then cached assets."""
    directories = cache.children(path) or ()
    assets = cache.assets(path) or ()
    return build_ui_nodes(directories, assets)


def breadcrumb_nodes(cache: TreeCache, path: str | None) -> list[UiNode]:
    """One row per level of ``path``, root-to-leaf; empty at the root."""
    rows: list[UiNode] = []
    for level in split_levels(path):
        siblings = cache.children(parent_of(level)) or ()
        match = next((node for node in siblings if node.path == level), None)
        if match is not None:
            rows.append(directory_row(match))
        else:
            rows.append(
                UiNode(
                    id=level,
                    label=last_label(level),
                    kind=NodeKind.DIRECTORY,
                    directory_path=level,
                    raw_path=level,
                    has_children=True,
                )
            )
    return rows


def preview_target_for(nodes: list[UiNode] | tuple[UiNode, ...], index: int | None) -> str | None:
    """Return the path to preview for the row at ``index``, if any."""
    if index is None or not (0 <= index < len(nodes)):
        return None
    node = nodes[index]
    return node.directory_path if node.is_enterable else None


def derive_views(
    cache: TreeCache,
    state: NavigationState,
    listing_status: PaneStatus = IDLE,
    preview_status: PaneStatus = IDLE,
) -> NavigationViews:
    current_key = normalize_path(state.current_path)
    if state.preview_target is not None:
        preview_nodes = tuple(listing_nodes(cache, state.preview_target))
        preview_loaded = cache.has_children_entry(state.preview_target) and cache.has_assets_entry(
            state.preview_target
        )
    else:
        preview_nodes = ()
        preview_loaded = False
    return NavigationViews(
        current_path=state.current_path,
        breadcrumb=tuple(breadcrumb_nodes(cache, current_key)),
        breadcrumb_highlight=current_key or None,
        current_nodes=tuple(listing_nodes(cache, current_key)),
        selected_index=state.selected_index,
        listing_loaded=cache.has_children_entry(current_key),
        preview_target=state.preview_target,
        preview_nodes=preview_nodes,
        preview_loaded=preview_loaded,
        listing_status=listing_status,
        preview_status=preview_status,
    )


class ViewSelector:
    """Memoize ``derive_views`` on cache version, state, and pane statuses."""

    def __init__(self, cache: TreeCache) -> None:
        self._cache = cache
        self._key: tuple[object, ...] | None = None
        self._views: NavigationViews | None = None

    def select(
        self,
        state: NavigationState,
        listing_status: PaneStatus = IDLE,
        preview_status: PaneStatus = IDLE,
    ) -> NavigationViews:
        key = (self._cache.version, state, listing_status, preview_status)
        if self._views is None or key != self._key:
            self._views = derive_views(self._cache, state, listing_status, preview_status)
            self._key = key
        return self._views


__all__ = [
    "NavigationViews",
    "ViewSelector",
    "breadcrumb_nodes",
    "derive_views",
    "listing_nodes",
    "preview_target_for",
]
