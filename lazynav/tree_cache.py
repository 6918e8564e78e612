"""Path-indexed lazy cache of fetched directory listings and assets.

Cache contract:
  - Entry present → load completed for that path (possibly empty), serve it
  - Entry missing, fetch in flight → join the in-flight fetch
  - Entry missing, nothing in flight → fetch, then insert
  - Fetch failed → nothing is written, so the next ensure re-fetches

Entries are never refreshed behind the caller's back; ``reload()`` drops
everything at once. With ``max_paths`` set, least-recently-used paths are
evicted, except root and anything on the path to a pinned or protected node.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import Counter, OrderedDict
from collections.abc import Awaitable, Callable, Iterator, Sequence
from typing import Protocol

from .tree_model import AssetNode, DirectoryNode
from .tree_path import ROOT_PATH, is_ancestor_or_self, normalize_path, split_levels

log = logging.getLogger(__name__)


class NodeSource(Protocol):
    """Backend operations the cache needs; ``NodeFetcher`` implements it."""

    async def fetch_root(self) -> list[DirectoryNode]: ...

    async def fetch_children(self, path: str) -> list[DirectoryNode]: ...

    async def fetch_assets(self, path: str) -> list[AssetNode]: ...


def _retrieve_exception(task: asyncio.Task) -> None:
    # Waiters may all have been cancelled; keep asyncio from reporting the
    # failure as never retrieved.
    if not task.cancelled():
        task.exception()


class TreeCache:
    """Children and asset listings keyed by path, with in-flight dedup."""

    def __init__(self, source: NodeSource, max_paths: int | None = None) -> None:
        if max_paths is not None and max_paths < 1:
            raise ValueError("max_paths must be >= 1")
        self._source = source
        self._max_paths = max_paths

        self._nodes: dict[str, tuple[DirectoryNode, ...]] = {}
        self._assets: dict[str, tuple[AssetNode, ...]] = {}
        self._recency: OrderedDict[str, None] = OrderedDict()

        self._pending_nodes: dict[str, asyncio.Task] = {}
        self._pending_assets: dict[str, asyncio.Task] = {}

        self._pinned: tuple[str, ...] = (ROOT_PATH,)
        self._protected: Counter[str] = Counter()

        self._epoch = 0
        self._version = 0
        self._listeners: list[Callable[[], None]] = []

    @property
    def version(self) -> int:
        """Counter bumped on every mutation; used to memoize derived views."""
        return self._version

    @property
    def max_paths(self) -> int | None:
        return self._max_paths

    @property
    def cached_path_count(self) -> int:
        return len(self._recency)

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call ``listener`` after every mutation; returns an unsubscribe hook."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return unsubscribe

    # ── Reads ────────────────────────────────────────────────────────────

    def children(self, path: str | None) -> Sequence[DirectoryNode] | None:
        """Cached children of ``path``, or ``None`` if never loaded."""
        return self._nodes.get(normalize_path(path))

    def assets(self, path: str | None) -> Sequence[AssetNode] | None:
        """Cached assets of ``path``; the root always has none."""
        path = normalize_path(path)
        if not path:
            return ()
        return self._assets.get(path)

    def has_children_entry(self, path: str | None) -> bool:
        return normalize_path(path) in self._nodes

    def has_assets_entry(self, path: str | None) -> bool:
        path = normalize_path(path)
        return not path or path in self._assets

    def is_loading(self, path: str | None) -> bool:
        path = normalize_path(path)
        return path in self._pending_nodes or path in self._pending_assets

    # ── Ensure-on-miss ───────────────────────────────────────────────────

    async def ensure_children(self, path: str | None) -> None:
        """Load the children of ``path`` unless already cached.

        Concurrent calls for the same path share one fetch. Raises
        ``FetchError`` if the fetch fails; nothing is cached in that case.
        """
        path = normalize_path(path)
        while path not in self._nodes:
            await self._join(self._pending_nodes, path, self._load_children)
        self.touch(path)

    async def ensure_assets(self, path: str | None) -> None:
        """Load the assets of ``path`` unless cached; root is a no-op."""
        path = normalize_path(path)
        if not path:
            return
        while path not in self._assets:
            await self._join(self._pending_assets, path, self._load_assets)
        self.touch(path)

    async def ensure_path_and_ancestors(self, path: str | None) -> None:
        """Load root and every level of ``path``, ancestors first."""
        path = normalize_path(path)
        with self.protect(path):
            await self.ensure_children(ROOT_PATH)
            for level in split_levels(path):
                await self.ensure_children(level)

    async def _join(
        self,
        pending: dict[str, asyncio.Task],
        path: str,
        load: Callable[[str], Awaitable[None]],
    ) -> None:
        task = pending.get(path)
        if task is None:
            task = asyncio.ensure_future(load(path))
            pending[path] = task
            task.add_done_callback(_retrieve_exception)
            task.add_done_callback(lambda done, path=path: self._forget_pending(pending, path, done))
        else:
            log.debug(f"Joining in-flight fetch for {path or '<root>'}")
        await asyncio.shield(task)

    @staticmethod
    def _forget_pending(pending: dict[str, asyncio.Task], path: str, task: asyncio.Task) -> None:
        if pending.get(path) is task:
            del pending[path]

    async def _load_children(self, path: str) -> None:
        epoch = self._epoch
        if path:
            directories = await self._source.fetch_children(path)
        else:
            directories = await self._source.fetch_root()
        if epoch != self._epoch:
            log.debug(f"Dropping children of {path or '<root>'} fetched before reload")
            return
        self._nodes[path] = tuple(directories)
        log.debug(f"Cached {len(directories)} children for {path or '<root>'}")
        self._record(path)

    async def _load_assets(self, path: str) -> None:
        epoch = self._epoch
        assets = await self._source.fetch_assets(path)
        if epoch != self._epoch:
            log.debug(f"Dropping assets of {path} fetched before reload")
            return
        self._assets[path] = tuple(assets)
        log.debug(f"Cached {len(assets)} assets for {path}")
        self._record(path)

    # ── Recency and bounds ───────────────────────────────────────────────

    def touch(self, path: str | None) -> None:
        path = normalize_path(path)
        if path in self._recency:
            self._recency.move_to_end(path)

    def pin(self, *paths: str | None) -> None:
        """Keep ``paths`` and all their ancestors out of eviction."""
        self._pinned = tuple(normalize_path(path) for path in paths) or (ROOT_PATH,)

    @contextlib.contextmanager
    def protect(self, path: str | None) -> Iterator[None]:
        """Keep ``path`` and its ancestors out of eviction while the block runs."""
        path = normalize_path(path)
        self._protected[path] += 1
        try:
            yield
        finally:
            self._protected[path] -= 1
            if self._protected[path] <= 0:
                del self._protected[path]

    def _is_evictable(self, path: str) -> bool:
        if not path:
            return False
        for keep in (*self._pinned, *self._protected):
            if is_ancestor_or_self(path, keep):
                return False
        return True

    def _record(self, path: str) -> None:
        self._recency[path] = None
        self._recency.move_to_end(path)
        self._evict(keep=path)
        self._changed()

    def _evict(self, keep: str) -> None:
        if self._max_paths is None:
            return
        overflow = len(self._recency) - self._max_paths
        if overflow <= 0:
            return
        for path in list(self._recency):
            if overflow <= 0:
                break
            if path == keep or not self._is_evictable(path):
                continue
            del self._recency[path]
            self._nodes.pop(path, None)
            self._assets.pop(path, None)
            overflow -= 1
            log.debug(f"Evicted {path} from cache")

    # ── Bulk operations ──────────────────────────────────────────────────

    def reload(self) -> None:
        """Drop every entry; fetches already in flight will not be written."""
        self._epoch += 1
        self._nodes.clear()
        self._assets.clear()
        self._recency.clear()
        self._pending_nodes.clear()
        self._pending_assets.clear()
        log.info("Cache cleared for full reload")
        self._changed()

    def _changed(self) -> None:
        self._version += 1
        for listener in list(self._listeners):
            listener()


__all__ = ["NodeSource", "TreeCache"]
