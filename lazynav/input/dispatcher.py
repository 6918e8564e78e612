"""Keyboard dispatch for the navigator.

Synchronous operations (selection moves, detail scrolling) run inline. Async
operations are handed to ``spawn``, which the runtime turns into tasks, so a
key press never blocks on the network.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..runtime.navigation import NavigationController
from ..tree_path import normalize_path, sanitize_path
from .focus import FocusState
from .key_registry import KeyBinding, KeyRegistry
from .mouse import MouseHandlers
from .viewport import DetailViewport

log = logging.getLogger(__name__)

Spawn = Callable[[Awaitable[object]], None]


class InputDispatcher:
    def __init__(
        self,
        controller: NavigationController,
        *,
        spawn: Spawn,
        detail_viewport: DetailViewport | None = None,
        focus: FocusState | None = None,
        mouse: MouseHandlers | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self._controller = controller
        self._spawn = spawn
        self.detail_viewport = detail_viewport if detail_viewport is not None else DetailViewport()
        self.focus = focus if focus is not None else FocusState()
        self._mouse = mouse
        self._on_change = on_change
        self.quit_requested = False
        self._registry = KeyRegistry().bind(
            KeyBinding(("j", "DOWN"), lambda: controller.move_selection(1)),
            KeyBinding(("k", "UP"), lambda: controller.move_selection(-1)),
            KeyBinding(("l", "RIGHT", "ENTER"), lambda: self._run(controller.enter_selection())),
            KeyBinding(("h", "LEFT"), lambda: self._run(controller.go_back())),
            KeyBinding(("J",), lambda: self._scroll_detail(1)),
            KeyBinding(("K",), lambda: self._scroll_detail(-1)),
            KeyBinding((":",), self._open_prompt),
            KeyBinding(("R",), lambda: self._run(controller.reload())),
            KeyBinding(("CTRL_L",), self._redraw),
            KeyBinding(("q", "CTRL_C"), self._quit),
        )

    def handle_key(self, key: str) -> bool:
        """Handle one key token. Returns ``True`` when the key was consumed."""
        if not key:
            return False
        if self.focus.in_text_field:
            return self._handle_prompt_key(key)
        if key.startswith("MOUSE"):
            return self._mouse.handle(key) if self._mouse is not None else False
        handled = self._registry.dispatch(key)
        return handled is not None

    def _handle_prompt_key(self, key: str) -> bool:
        if key == "CTRL_C":
            return self._quit()
        if key == "ESC":
            self.focus.close_prompt()
        elif key == "ENTER":
            text = self.focus.close_prompt()
            target = sanitize_path(text)
            log.debug(f"Go-to prompt submitted {text!r} -> {target or '<root>'}")
            self._spawn(self._controller.navigate_to(target or None))
        elif key == "BACKSPACE":
            self.focus.backspace()
        elif len(key) == 1 and key.isprintable():
            self.focus.type_text(key)
        else:
            return True
        self._redraw()
        return True

    def _run(self, operation: Awaitable[object]) -> bool:
        self._spawn(operation)
        return True

    def _scroll_detail(self, direction: int) -> bool:
        if self.detail_viewport.scroll(direction):
            self._redraw()
        return True

    def _open_prompt(self) -> bool:
        self.focus.open_prompt(normalize_path(self._controller.state.current_path))
        self._redraw()
        return True

    def _redraw(self) -> bool:
        if self._on_change is not None:
            self._on_change()
        return True

    def _quit(self) -> bool:
        self.quit_requested = True
        return True


__all__ = ["InputDispatcher", "Spawn"]
