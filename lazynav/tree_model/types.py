"""Node datatypes shared by the cache, navigation store, and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..tree_path import last_label, normalize_path


class NodeKind(str, Enum):
    DIRECTORY = "directory"
    MARKDOWN = "markdown"
    IMAGE = "image"
    OTHER = "other"


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _as_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


@dataclass(frozen=True)
class DirectoryNode:
    """One directory returned by the backend; identity is ``path``.

    ``display_name`` comes from the backend (the original filename before label
    sanitization) and is what renderers show.
    """

    path: str
    display_name: str
    has_children: bool
    has_layout: bool = False
    has_visual_assets: bool = False
    text_count: int = 0
    image_count: int = 0

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> DirectoryNode:
        """Build a node from one ``directories[]`` item.

        Raises ``ValueError`` when ``path`` is missing or not a string.
        """
        raw_path = payload.get("path")
        if not isinstance(raw_path, str):
            raise ValueError(f"directory entry without a string path: {payload!r}")
        path = normalize_path(raw_path)
        display_name = payload.get("display_name", payload.get("raw_filename"))
        if not isinstance(display_name, str) or not display_name:
            display_name = last_label(path)
        has_children = payload.get("has_children", payload.get("has_subnodes", False))
        return cls(
            path=path,
            display_name=display_name,
            has_children=_as_bool(has_children),
            has_layout=_as_bool(payload.get("has_layout", False)),
            has_visual_assets=_as_bool(payload.get("has_visual_assets", False)),
            text_count=_as_int(payload.get("has_text", 0)),
            image_count=_as_int(payload.get("has_images", 0)),
        )


@dataclass(frozen=True)
class AssetNode:
    """One leaf file stored under a directory's asset sub-path."""

    file_path: str
    raw_path: str
    raw_filename: str

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> AssetNode:
        """Build an asset from one ``assets[]`` item.

        Raises ``ValueError`` when any of the three string fields is missing.
        """
        values = {}
        for field_name in ("file_path", "raw_path", "raw_filename"):
            value = payload.get(field_name)
            if not isinstance(value, str):
                raise ValueError(f"asset entry without {field_name!r}: {payload!r}")
            values[field_name] = value
        return cls(**values)


@dataclass(frozen=True)
class UiNode:
    """One row in a pane: a directory or an asset, already labelled for display."""

    id: str
    label: str
    kind: NodeKind
    directory_path: str | None = None
    raw_path: str | None = None
    has_children: bool = False

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY and self.directory_path is not None

    @property
    def is_enterable(self) -> bool:
        return self.is_directory and self.has_children
