"""Terminal control for the inline UI.

Owns the raw-mode lifecycle and cursor visibility. The UI draws below the
shell prompt, so the alternate screen is never used.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def size(self) -> os.terminal_size:
        return shutil.get_terminal_size()

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Hide cursor.
        os.write(self.stdout_fd, b"\x1b[?25l")
        self._active = True

    def disable_tui_mode(self) -> None:
        # Show cursor and restore cooked mode.
        os.write(self.stdout_fd, b"\x1b[?25h")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self._active = False

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

    @contextlib.contextmanager
    def suspended(self):
        """Temporarily hand the terminal back, e.g. to a child process."""
        if not self._active:
            yield
            return
        self.disable_tui_mode()
        try:
            yield
        finally:
            self.enable_tui_mode()


__all__ = ["TerminalController"]
