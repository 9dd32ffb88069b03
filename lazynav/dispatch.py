"""Per-event dispatch: map one key press to at most one action.

Ctrl+C always exits. A Ctrl-modified key switches to quick-macro mode and is
matched there with Ctrl stripped; anything quick mode does not handle
(except a bare modifier) drops back to normal mode and is re-interpreted by
the normal table, whose trailing catch-all actions edit the command or filter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .actions import MainActions
from .effects import Effect, Exit, Transition
from .input.key_registry import find_action
from .input.keys import KeyboardEvent
from .state import InputMode, State

log = logging.getLogger(__name__)

CANCEL_EVERYTHING = KeyboardEvent("c", ctrl=True)


@dataclass(frozen=True)
class DispatchResult:
    state: State
    effect: Effect | None = None


def apply_outcome(state: State, outcome: Any) -> DispatchResult:
    """Interpret an action's return value against ``state``."""
    if outcome is None:
        return DispatchResult(state)
    if isinstance(outcome, State):
        return DispatchResult(outcome)
    if isinstance(outcome, Transition):
        return DispatchResult(outcome.state, outcome.effect)
    return DispatchResult(state, outcome)


def process_input(state: State, event: KeyboardEvent, actions: MainActions) -> DispatchResult:
    state = state.with_last_received_event(event)
    if event == CANCEL_EVERYTHING:
        return DispatchResult(state, Exit(None))

    if event.ctrl and state.input_mode is not InputMode.QUICK_MACRO:
        log.debug("Entering quick macro mode")
        state = state.with_input_mode(InputMode.QUICK_MACRO)

    if state.input_mode is InputMode.QUICK_MACRO:
        stripped = event.without_ctrl()
        action = find_action(actions.quick_macro, state, stripped)
        if action is not None:
            result = apply_outcome(state, action.run(state, stripped))
            return DispatchResult(result.state.with_input_mode(InputMode.NORMAL), result.effect)
        # only a lone modifier keeps the mode; the byte reader never emits one
        if event.is_modifier:
            return DispatchResult(state)
        log.debug("Exiting quick macro mode")
        state = state.with_input_mode(InputMode.NORMAL)

    action = find_action(actions.normal, state, event)
    if action is None:
        return DispatchResult(state)
    return apply_outcome(state, action.run(state, event))


__all__ = ["CANCEL_EVERYTHING", "DispatchResult", "apply_outcome", "process_input"]
