"""In-memory backend and tree fixtures shared by the navigation tests."""

from __future__ import annotations

import asyncio

from lazynav.errors import FetchError
from lazynav.tree_model import AssetNode, DirectoryNode
from lazynav.tree_path import last_label


def directory(path: str, has_children: bool = True, display_name: str | None = None) -> DirectoryNode:
    return DirectoryNode(
        path=path,
        display_name=display_name if display_name is not None else last_label(path),
        has_children=has_children,
    )


def asset(path: str, filename: str) -> AssetNode:
    return AssetNode(
        file_path=f"{path}/{filename}",
        raw_path=f"content/{path.replace('.', '/')}/{filename}",
        raw_filename=filename,
    )


class FakeBackend:
    """``NodeSource`` over dicts; individual fetches can be gated or failed.

    ``children[""]`` is the root listing. Paths missing from ``children`` or
    ``assets`` return empty lists, like the real backend.
    """

    def __init__(
        self,
        children: dict[str, list[DirectoryNode]],
        assets: dict[str, list[AssetNode]] | None = None,
    ) -> None:
        self.children = children
        self.assets = assets if assets is not None else {}
        self.calls: list[tuple[str, str]] = []
        self._gates: dict[tuple[str, str], asyncio.Event] = {}
        self._failures: dict[tuple[str, str], str] = {}

    def gate(self, kind: str, path: str) -> asyncio.Event:
        """Hold fetches of ``(kind, path)`` until the returned event is set."""
        event = asyncio.Event()
        self._gates[(kind, path)] = event
        return event

    def fail(self, kind: str, path: str, message: str = "backend unavailable") -> None:
        self._failures[(kind, path)] = message

    def heal(self, kind: str, path: str) -> None:
        self._failures.pop((kind, path), None)

    def count(self, kind: str, path: str) -> int:
        return self.calls.count((kind, path))

    async def _serve(self, kind: str, path: str) -> None:
        self.calls.append((kind, path))
        gate = self._gates.get((kind, path))
        if gate is not None:
            await gate.wait()
        message = self._failures.get((kind, path))
        if message is not None:
            raise FetchError(message, path=path)

    async def fetch_root(self) -> list[DirectoryNode]:
        await self._serve("children", "")
        return list(self.children.get("", []))

    async def fetch_children(self, path: str) -> list[DirectoryNode]:
        await self._serve("children", path)
        return list(self.children.get(path, []))

    async def fetch_assets(self, path: str) -> list[AssetNode]:
        await self._serve("assets", path)
        return list(self.assets.get(path, []))


def art_tree() -> FakeBackend:
    """Root ``art``/``writing``; ``art`` holds ``sketch``/``zine`` plus a few assets."""
    return FakeBackend(
        children={
            "": [directory("art"), directory("writing")],
            "art": [directory("art.sketch"), directory("art.zine")],
            "art.sketch": [directory("art.sketch.pencil", has_children=False)],
            "art.zine": [],
            "writing": [directory("writing.poems", has_children=False)],
        },
        assets={
            "art.sketch": [asset("art.sketch", "sketches.md"), asset("art.sketch", "still.png")],
        },
    )


async def drain(rounds: int = 50) -> None:
    """Let ready callbacks and short task chains run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
