"""Keyboard event value type plus parsing/formatting of key strings.

Config files name keys like ``"ctrl+x"``, ``"ArrowUp"`` or ``"shift+Tab"``.
Hints render them back in a compact human form.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

MODIFIER_KEYS = frozenset({"Control", "Shift", "Alt", "Meta"})

_KEY_NAMES = {
    "arrowup": "ArrowUp",
    "up": "ArrowUp",
    "arrowdown": "ArrowDown",
    "down": "ArrowDown",
    "arrowleft": "ArrowLeft",
    "left": "ArrowLeft",
    "arrowright": "ArrowRight",
    "right": "ArrowRight",
    "home": "Home",
    "end": "End",
    "pageup": "PageUp",
    "pgup": "PageUp",
    "pagedown": "PageDown",
    "pgdn": "PageDown",
    "enter": "Enter",
    "return": "Enter",
    "escape": "Escape",
    "esc": "Escape",
    "tab": "Tab",
    "backspace": "Backspace",
    "delete": "Delete",
    "del": "Delete",
    "insert": "Insert",
    "space": " ",
    "control": "Control",
    "shift": "Shift",
    "alt": "Alt",
    "meta": "Meta",
}

_MODIFIER_NAMES = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "alt": "alt",
    "option": "alt",
    "meta": "alt",
    "shift": "shift",
}

_DISPLAY_NAMES = {
    "ArrowUp": "↑",
    "ArrowDown": "↓",
    "ArrowLeft": "←",
    "ArrowRight": "→",
    "Enter": "enter",
    "Escape": "esc",
    "Tab": "tab",
    "Backspace": "backspace",
    "Delete": "del",
    "Insert": "ins",
    "Home": "home",
    "End": "end",
    "PageUp": "page up",
    "PageDown": "page down",
    " ": "space",
}


@dataclass(frozen=True)
class KeyboardEvent:
    """One key press with its modifier state."""

    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @property
    def is_modifier(self) -> bool:
        return self.key in MODIFIER_KEYS

    def without_ctrl(self) -> KeyboardEvent:
        return replace(self, ctrl=False) if self.ctrl else self

    def __str__(self) -> str:
        return format_key(self)


def parse_key(text: str) -> KeyboardEvent:
    """Parse a ``modifier+...+key`` string into a :class:`KeyboardEvent`.

    Raises ``ValueError`` for empty strings, unknown modifiers and unknown
    multi-character key names.
    """
    stripped = text.strip()
    if not stripped:
        raise ValueError("Key must not be empty")
    *modifiers, key = stripped.split("+")
    if key == "" and stripped.endswith("+"):
        key = "+"
        modifiers = [modifier for modifier in modifiers if modifier]

    flags = {"ctrl": False, "alt": False, "shift": False}
    for modifier in modifiers:
        name = _MODIFIER_NAMES.get(modifier.strip().lower())
        if name is None:
            raise ValueError(f"Unknown modifier {modifier!r} in key {text!r}")
        flags[name] = True

    if len(key) != 1:
        normalized = _KEY_NAMES.get(key.strip().lower())
        if normalized is None:
            raise ValueError(f"Unknown key {key!r}")
        key = normalized
    return KeyboardEvent(key, **flags)


def format_key(event: KeyboardEvent) -> str:
    parts = []
    if event.ctrl:
        parts.append("ctrl")
    if event.alt:
        parts.append("alt")
    if event.shift:
        parts.append("shift")
    parts.append(_DISPLAY_NAMES.get(event.key, event.key))
    return "+".join(parts)


__all__ = ["KeyboardEvent", "MODIFIER_KEYS", "format_key", "parse_key"]
