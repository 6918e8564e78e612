from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NavigationState:
    """Where the user is: ``current_path`` is ``None`` at the root.

    ``selected_index`` indexes the current listing and is ``None`` only when
    that listing is empty. ``preview_target`` is set only while the selected
    row is a directory with children.
    """

    current_path: str | None = None
    selected_index: int | None = None
    preview_target: str | None = None


@dataclass(frozen=True)
class PaneStatus:
    """Loading/error flags for one pane."""

    loading: bool = False
    error: str | None = None


IDLE = PaneStatus()
LOADING = PaneStatus(loading=True)
