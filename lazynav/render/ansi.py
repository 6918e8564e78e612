"""ANSI-aware width helpers for fixed-width pane cells.

Backend labels are untrusted text, so they pass through ``sanitize_label_text``
before they reach the terminal.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f-\x9f]")


def char_display_width(ch: str) -> int:
    """Terminal columns used by ``ch``: 0 for combining marks, 2 for wide glyphs."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def sanitize_label_text(text: str) -> str:
    """Replace control characters so server data cannot move the cursor."""
    return _CONTROL_RE.sub("?", text)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept and do not count toward the width.
    """
    if max_cols <= 0 or not text:
        return ""
    out: list[str] = []
    col = 0
    i = 0
    while i < len(text) and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        width = char_display_width(text[i])
        if col + width > max_cols:
            break
        out.append(text[i])
        col += width
        i += 1
    return "".join(out)


def fit_cell(text: str, width: int, reset: str = "") -> str:
    """Clip or right-pad ``text`` to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    padding = max(0, width - display_width(clipped))
    return f"{clipped}{reset}{' ' * padding}"


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_cell",
    "sanitize_label_text",
    "strip_ansi",
]
