"""Redraw a block of lines in place below the shell prompt."""

from __future__ import annotations

from collections.abc import Callable, Sequence


class InlineAnimation:
    """Tracks the height of the last frame so the next one can replace it.

    Lines are joined with ``\\r\\n`` because the terminal is in raw mode.
    """

    def __init__(self, write: Callable[[str], None]) -> None:
        self._write = write
        self._height = 0

    @property
    def height(self) -> int:
        return self._height

    def _rewind(self) -> str:
        if self._height <= 1:
            return "\r\x1b[J"
        return f"\x1b[{self._height - 1}F\x1b[J"

    def draw(self, lines: Sequence[str]) -> None:
        self._write(self._rewind() + "\r\n".join(lines))
        self._height = len(lines)

    def clear(self) -> None:
        if self._height:
            self._write(self._rewind())
        self._height = 0

    def print_above(self, text: str) -> None:
        """Print ``text`` permanently; the next ``draw`` starts below it."""
        self.clear()
        self._write(text.replace("\r\n", "\n").replace("\n", "\r\n") + "\r\n")

    def finish(self, clear: bool) -> None:
        """Leave the last frame on screen (or remove it) and release the cursor."""
        if clear:
            self.clear()
        elif self._height:
            self._write("\r\n")
            self._height = 0


__all__ = ["InlineAnimation"]
