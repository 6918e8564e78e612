"""Key-token dispatch table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

KeyHandler = Callable[[], "bool | None"]


@dataclass(frozen=True)
class KeyBinding:
    """One action reachable from any of ``keys``."""

    keys: tuple[str, ...]
    handler: KeyHandler


class KeyRegistry:
    """Map key tokens to handlers; later registrations win."""

    def __init__(self) -> None:
        self._handlers: dict[str, KeyHandler] = {}

    def bind(self, *bindings: KeyBinding) -> KeyRegistry:
        for binding in bindings:
            for key in binding.keys:
                self._handlers[key] = binding.handler
        return self

    def dispatch(self, key: str) -> bool | None:
        """Run the handler for ``key``; ``None`` means the key is unbound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


__all__ = ["KeyBinding", "KeyRegistry"]
