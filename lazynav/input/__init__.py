"""Keyboard and mouse input."""

from .dispatcher import InputDispatcher
from .focus import FocusState
from .key_registry import KeyBinding, KeyRegistry
from .keys import KeyReader
from .mouse import MouseHandlers
from .viewport import DetailViewport, ListViewport

__all__ = [
    "DetailViewport",
    "FocusState",
    "InputDispatcher",
    "KeyBinding",
    "KeyReader",
    "KeyRegistry",
    "ListViewport",
    "MouseHandlers",
]
