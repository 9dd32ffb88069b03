"""Key hint line for the active action table."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..input.key_registry import KeyAction
from ..input.keys import format_key
from ..ui_theme import UITheme

HINT_SEPARATOR = "  "


def build_hints(actions: Iterable[KeyAction[Any]], state: Any, theme: UITheme) -> str:
    """Render ``key label`` pairs for every shown, described action."""
    hints = []
    for action in actions:
        key = action.hint_key
        if key is None or not action.is_shown(state):
            continue
        description = action.description(state)
        if not description:
            continue
        label = theme.paint(action.style(state) or "key_label", description)
        hints.append(f"{theme.paint('key_hint', format_key(key))} {label}")
    return HINT_SEPARATOR.join(hints)


__all__ = ["HINT_SEPARATOR", "build_hints"]
