"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into key tokens: printable
characters as themselves (``"j"``, ``"J"``, ``":"``), named keys in upper case
(``"ENTER"``, ``"UP"``), and SGR mouse reports as
``"MOUSE_<KIND>:<col>:<row>"``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_MOUSE_PAYLOAD = 64

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x0c": "CTRL_L",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_WHEEL_DIRECTIONS = ("UP", "DOWN", "LEFT", "RIGHT")


def parse_mouse_token(token: str) -> tuple[str, int, int] | None:
    """Split ``MOUSE_<KIND>:<col>:<row>`` into ``(kind, col, row)``."""
    if not token.startswith("MOUSE_"):
        return None
    parts = token.split(":")
    if len(parts) != 3:
        return None
    try:
        return parts[0][len("MOUSE_") :], int(parts[1]), int(parts[2])
    except ValueError:
        return None


def decode_sgr_mouse(payload: bytes, final: bytes) -> str | None:
    """Decode the body of ``ESC [ < btn ; col ; row (M|m)``."""
    try:
        btn_s, col_s, row_s = payload.decode("ascii").split(";")
        btn, col, row = int(btn_s), int(col_s), int(row_s)
    except ValueError:
        return None
    button = btn & 0b11
    if btn & 0b0100_0000:
        return f"MOUSE_WHEEL_{_WHEEL_DIRECTIONS[button]}:{col}:{row}"
    if btn & 0b0010_0000:
        # Motion while a button is held; navigation has no drag gestures.
        return "MOUSE"
    if button == 0:
        phase = "DOWN" if final == b"M" else "UP"
        return f"MOUSE_LEFT_{phase}:{col}:{row}"
    return "MOUSE"


class KeyReader:
    """Decode key tokens from a file descriptor, one token per ``read_key``."""

    def __init__(self, fd: int, esc_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self.fd = fd
        self.esc_timeout_ms = esc_timeout_ms
        self._pending: list[bytes] = []

    def _read_byte(self, timeout_ms: int | None) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        if timeout_ms is not None:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
        ch = os.read(self.fd, 1)
        return ch or None

    def _read_utf8_tail(self, lead: bytes) -> str:
        first = lead[0]
        if first < 0x80:
            return lead.decode("ascii")
        extra = 1 if first >> 5 == 0b110 else 2 if first >> 4 == 0b1110 else 3 if first >> 3 == 0b11110 else 0
        data = lead
        for _ in range(extra):
            nxt = self._read_byte(self.esc_timeout_ms)
            if nxt is None:
                break
            data += nxt
        return data.decode("utf-8", errors="replace")

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Return the next key token, or ``""`` on timeout/EOF."""
        ch = self._read_byte(timeout_ms)
        if ch is None:
            return ""
        named = _CONTROL_KEYS.get(ch)
        if named is not None:
            return named
        if ch != b"\x1b":
            return self._read_utf8_tail(ch)
        return self._read_escape()

    def _read_escape(self) -> str:
        seq = self._read_byte(self.esc_timeout_ms)
        if seq is None:
            return "ESC"
        if seq != b"[":
            self._pending.append(seq)
            return "ESC"
        seq = self._read_byte(self.esc_timeout_ms)
        if seq is None:
            return "ESC"
        named = _CSI_FINAL_KEYS.get(seq)
        if named is not None:
            return named
        if seq == b"<":
            return self._read_sgr_mouse()
        # Unknown CSI: swallow parameters up to the final byte.
        while seq is not None and not (0x40 <= seq[0] <= 0x7E):
            seq = self._read_byte(self.esc_timeout_ms)
        return "ESC"

    def _read_sgr_mouse(self) -> str:
        payload = b""
        while True:
            part = self._read_byte(self.esc_timeout_ms)
            if part is None or len(payload) > MAX_MOUSE_PAYLOAD:
                return "ESC"
            if part in (b"M", b"m"):
                break
            payload += part
        return decode_sgr_mouse(payload, part) or "ESC"


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyReader",
    "decode_sgr_mouse",
    "parse_mouse_token",
]
