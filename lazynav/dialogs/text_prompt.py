"""Free-text prompt, optionally restricted to a regular expression."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from ..input.key_registry import KeyAction, KeyActionRegistry
from ..input.text_field import update_text_field
from ..runtime.config import Keys
from ..ui_theme import UITheme
from .base import CANCELLED, Dialog, DialogOutcome

CATEGORY = "text_prompt"


@dataclass(frozen=True)
class TextPromptState:
    text: str = ""
    pattern: re.Pattern[str] | None = None

    @property
    def is_valid(self) -> bool:
        return self.pattern is None or self.pattern.fullmatch(self.text) is not None


def _edit(state: TextPromptState, event):
    text = update_text_field(state.text, event)
    return replace(state, text=text) if text is not None else None


def text_prompt_actions(keys: Keys) -> tuple[KeyAction[TextPromptState], ...]:
    registry: KeyActionRegistry[TextPromptState] = KeyActionRegistry()
    registry.register_all(
        [
            KeyAction(
                (keys.submit,),
                lambda state: state.is_valid,
                lambda state, event: DialogOutcome(state.text),
                description=lambda state: "submit",
            ),
            KeyAction(
                (keys.cancel,),
                lambda state: True,
                lambda state, event: CANCELLED,
                description=lambda state: "cancel",
            ),
            KeyAction(None, lambda state: True, _edit, hidden=lambda state: True),
        ],
        CATEGORY,
    )
    return registry.actions(CATEGORY)


class TextPromptDialog(Dialog[TextPromptState]):
    def __init__(self, prompt: str, keys: Keys, default: str = "", pattern: re.Pattern[str] | None = None) -> None:
        super().__init__(TextPromptState(default, pattern), text_prompt_actions(keys))
        self.prompt = prompt

    def render(self, theme: UITheme, max_rows: int) -> list[str]:
        state = self.state
        lines = [f"{theme.paint('path', self.prompt)} {theme.paint('filter_marker', '❯')} {state.text}_"]
        if not state.is_valid:
            lines.append(theme.paint("warning", f"Input must match {state.pattern.pattern}"))
        lines.append(self.hint_line(theme))
        return lines


__all__ = ["TextPromptDialog", "TextPromptState", "text_prompt_actions"]
