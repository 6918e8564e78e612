"""Node datatypes and their projection into pane rows.

Defines the backend's ``DirectoryNode``/``AssetNode`` records and the ``UiNode``
rows the panes render, plus listing order and default-selection rules.
"""

from __future__ import annotations

from .build import (
    asset_row,
    build_ui_nodes,
    classify_asset_kind,
    directory_row,
    first_directory_index,
    index_of_directory,
)
from .types import AssetNode, DirectoryNode, NodeKind, UiNode

__all__ = [
    "AssetNode",
    "DirectoryNode",
    "NodeKind",
    "UiNode",
    "asset_row",
    "build_ui_nodes",
    "classify_asset_kind",
    "directory_row",
    "first_directory_index",
    "index_of_directory",
]
