"""Navigation engine and interactive session.

The store (``navigation``), derived views, and request sequencing are the
engine; ``app``/``loop``/``terminal`` host it in a terminal.
"""

from __future__ import annotations


def run_navigator(*args, **kwargs):
    """Lazily import the interactive entrypoint to avoid package-import cycles."""
    from .app import run_navigator as _run_navigator

    return _run_navigator(*args, **kwargs)


__all__ = ["run_navigator"]
