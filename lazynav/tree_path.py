"""Dotted label-path helpers.

Paths are ltree-style label sequences such as ``art.sketch.2024``; the empty
string is the root. Labels are treated as opaque: nothing here tries to turn a
path back into a display name.
"""

from __future__ import annotations

import re
from urllib.parse import quote

ROOT_PATH = ""
SEPARATOR = "."

_INVALID_LABEL_CHARS_RE = re.compile(r"[^A-Za-z0-9_]")


def normalize_path(path: str | None) -> str:
    """Return ``path`` as a cache key, mapping ``None`` to the root."""
    if path is None:
        return ROOT_PATH
    return path.strip().strip(SEPARATOR)


def split_levels(path: str | None) -> list[str]:
    """Return every level of ``path`` in root-to-leaf order.

    ``"a.b.c"`` yields ``["a", "a.b", "a.b.c"]``; the root yields ``[]``.
    """
    path = normalize_path(path)
    if not path:
        return []
    labels = path.split(SEPARATOR)
    return [SEPARATOR.join(labels[: depth + 1]) for depth in range(len(labels))]


def parent_of(path: str | None) -> str | None:
    """Strip the last label; one-level paths map to root, root has no parent."""
    path = normalize_path(path)
    if not path:
        return None
    head, sep, _tail = path.rpartition(SEPARATOR)
    return head if sep else ROOT_PATH


def last_label(path: str | None) -> str:
    path = normalize_path(path)
    return path.rpartition(SEPARATOR)[2]


def path_depth(path: str | None) -> int:
    return len(split_levels(path))


def is_ancestor_or_self(candidate: str | None, path: str | None) -> bool:
    """Return whether ``candidate`` is ``path`` or one of its ancestors.

    The comparison is label-wise, so ``a.b`` is not an ancestor of ``a.bc``.
    """
    candidate = normalize_path(candidate)
    path = normalize_path(path)
    if not candidate:
        return True
    return path == candidate or path.startswith(candidate + SEPARATOR)


def sanitize_label(text: str) -> str:
    """Map every character outside ``[A-Za-z0-9_]`` to ``_``.

    This mirrors the lossy transform applied when content is ingested into the
    backend; it is one-way.
    """
    return _INVALID_LABEL_CHARS_RE.sub("_", text)


def sanitize_path(text: str) -> str:
    """Sanitize each label of a user-typed dotted path, dropping empty labels."""
    labels = [sanitize_label(label.strip()) for label in text.split(SEPARATOR)]
    return SEPARATOR.join(label for label in labels if label)


def encode_path(path: str) -> str:
    """Percent-encode a whole path as a single URL segment."""
    return quote(normalize_path(path), safe="")


__all__ = [
    "ROOT_PATH",
    "SEPARATOR",
    "encode_path",
    "is_ancestor_or_self",
    "last_label",
    "normalize_path",
    "parent_of",
    "path_depth",
    "sanitize_label",
    "sanitize_path",
    "split_levels",
]
