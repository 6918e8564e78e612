"""Projection of cached directories and assets into pane rows."""

from __future__ import annotations

from collections.abc import Iterable

from .types import AssetNode, DirectoryNode, NodeKind, UiNode

MARKDOWN_EXTENSIONS = frozenset({"md", "markdown"})
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "bmp", "svg", "webp", "ico"})


def classify_asset_kind(filename: str) -> NodeKind:
    """Classify an asset by filename extension (case-insensitive)."""
    _head, dot, ext = filename.rpartition(".")
    if not dot:
        return NodeKind.OTHER
    ext = ext.lower()
    if ext in MARKDOWN_EXTENSIONS:
        return NodeKind.MARKDOWN
    if ext in IMAGE_EXTENSIONS:
        return NodeKind.IMAGE
    return NodeKind.OTHER


def directory_row(directory: DirectoryNode) -> UiNode:
    return UiNode(
        id=directory.path,
        label=directory.display_name,
        kind=NodeKind.DIRECTORY,
        directory_path=directory.path,
        raw_path=directory.path,
        has_children=directory.has_children,
    )


def asset_row(asset: AssetNode) -> UiNode:
    return UiNode(
        id=asset.file_path,
        label=asset.raw_filename,
        kind=classify_asset_kind(asset.raw_filename),
        raw_path=asset.raw_path,
    )


def build_ui_nodes(
    directories: Iterable[DirectoryNode],
    assets: Iterable[AssetNode] = (),
) -> list[UiNode]:
    """Project directories and assets into one listing.

    Rows are merged and sorted case-insensitively by label; the sort is stable,
    so rows with equal keys keep directories first and backend order.
    """
    nodes = [directory_row(directory) for directory in directories]
    nodes.extend(asset_row(asset) for asset in assets)
    nodes.sort(key=lambda node: node.label.lower())
    return nodes


def first_directory_index(nodes: list[UiNode]) -> int | None:
    """Return the default selection for ``nodes``.

    The first directory row wins; listings without directories fall back to
    ``0``, and empty listings have no selection.
    """
    for idx, node in enumerate(nodes):
        if node.kind is NodeKind.DIRECTORY:
            return idx
    return 0 if nodes else None


def index_of_directory(nodes: list[UiNode], path: str) -> int | None:
    for idx, node in enumerate(nodes):
        if node.directory_path == path:
            return idx
    return None
