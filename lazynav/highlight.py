"""Terminal highlighting for JSON snapshots."""

from __future__ import annotations

import logging

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

log = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, TerminalFormatter] = {}
_INVALID_STYLES: set[str] = set()


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style or style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        log.debug(f"Unknown pygments style {style!r}; using {DEFAULT_STYLE}")
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def highlight_json(text: str, style: str | None = DEFAULT_STYLE) -> str:
    return highlight(text, JsonLexer(), _formatter_for_style(normalize_style(style)))


__all__ = ["DEFAULT_STYLE", "highlight_json", "normalize_style"]
