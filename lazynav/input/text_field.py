"""Single-line text editing used for the filter and command buffers."""

from __future__ import annotations

from .keys import KeyboardEvent


def _word_kind(ch: str) -> str:
    if ch.isalnum() or ch == "_":
        return "word"
    if ch.isspace():
        return "space"
    return ch


def delete_last_word(text: str) -> str:
    """Drop the trailing run of characters of the same kind as the last one."""
    if not text:
        return text
    kind = _word_kind(text[-1])
    end = len(text)
    while end > 0 and _word_kind(text[end - 1]) == kind:
        end -= 1
    return text[:end]


def update_text_field(text: str, event: KeyboardEvent) -> str | None:
    """Apply ``event`` to ``text``; ``None`` when the event is not a text edit.

    Ctrl+Alt combinations are treated as AltGr and insert their character.
    """
    if event.key == "Backspace" and not event.alt and not event.shift:
        return delete_last_word(text) if event.ctrl else text[:-1]
    if event.ctrl or event.alt:
        if not (event.ctrl and event.alt):
            return None
    if len(event.key) == 1:
        return text + event.key
    return None


__all__ = ["delete_last_word", "update_text_field"]
