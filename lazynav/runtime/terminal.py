"""Raw-mode and alternate-screen lifecycle for the interactive session."""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

_ENTER_TUI = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1002h\x1b[?1006h"
_EXIT_TUI = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Switch the tty into raw alternate-screen mode with SGR mouse reports."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enter(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, _ENTER_TUI)
        self._active = True

    def restore(self) -> None:
        """Disable mouse reporting, show the cursor, and leave the alternate screen."""
        if not self._active:
            return
        os.write(self.stdout_fd, _EXIT_TUI)
        self._active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Current ``(columns, rows)``; re-read every frame so resizes apply."""
        size = shutil.get_terminal_size((80, 24))
        return size.columns, size.lines

    def write(self, data: str) -> None:
        os.write(self.stdout_fd, data.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enter()
            yield self
        finally:
            self.restore()


__all__ = ["TerminalController"]
