"""Exception types raised by the navigation engine."""

from __future__ import annotations


class NavigatorError(Exception):
    """Base class for lazynav failures."""


class FetchError(NavigatorError):
    """A backend round trip failed (network, timeout, status, or bad payload).

    ``path`` is the tree path the request was for (``""`` for the root
    listing) so panes can attribute the failure.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message
