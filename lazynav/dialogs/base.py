"""Shared dialog plumbing: an action table over a private dialog state."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ..input.key_registry import KeyAction, find_action
from ..input.keys import KeyboardEvent
from ..render.hints import build_hints
from ..ui_theme import UITheme

S = TypeVar("S")


@dataclass(frozen=True)
class DialogOutcome:
    """Final answer of a dialog; ``value`` is ``None`` when it was cancelled."""

    value: str | None = None

    @property
    def cancelled(self) -> bool:
        return self.value is None


CANCELLED = DialogOutcome()


class Dialog(Generic[S]):
    """Modal prompt driven one key event at a time by the controller."""

    def __init__(self, state: S, actions: Sequence[KeyAction[S]]) -> None:
        self.state = state
        self.actions = tuple(actions)

    def handle(self, event: KeyboardEvent) -> DialogOutcome | None:
        """Apply ``event``; return the outcome once the dialog is finished."""
        action = find_action(self.actions, self.state, event)
        if action is None:
            return None
        outcome = action.run(self.state, event)
        if isinstance(outcome, DialogOutcome):
            return outcome
        if outcome is not None:
            self.state = outcome
        return None

    def hint_line(self, theme: UITheme) -> str:
        return build_hints(self.actions, self.state, theme)

    def render(self, theme: UITheme, max_rows: int) -> list[str]:
        raise NotImplementedError


__all__ = ["CANCELLED", "Dialog", "DialogOutcome"]
