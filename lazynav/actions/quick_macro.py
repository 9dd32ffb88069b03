"""Quick-macro-mode key action table.

Quick mode is entered by a Ctrl-modified key; bindings here are matched with
Ctrl stripped and displayed with it.
"""

from __future__ import annotations

from ..effects import RunEntryMacro, RunMacro
from ..input.key_registry import KeyAction, KeyActionRegistry
from ..macros.entry_macro import EntryMacro
from ..macros.macro import Macro
from ..state import InputMode, State
from .context import ActionContext, describe_entry_macro, entry_style, macro_condition

CATEGORY = "quick_macro"


def _quick_macro_action(context: ActionContext, macro: Macro) -> KeyAction[State]:
    return KeyAction(
        keys=(macro.quick_mode_key.without_ctrl(),),
        condition=macro_condition(context, macro),
        action=lambda state, event: RunMacro(macro),
        description=lambda state: macro.describe(context.macro_context(state)),
        style=lambda state: macro.style,
        hidden=lambda state: not macro.shows_quick_mode_key,
        display_key=macro.quick_mode_key,
    )


def _quick_entry_macro_action(context: ActionContext, macro: EntryMacro) -> KeyAction[State]:
    return KeyAction(
        keys=(macro.quick_macro_key.without_ctrl(),),
        condition=lambda state: macro.applies_to(state.current_item),
        action=lambda state, event: RunEntryMacro(macro),
        description=describe_entry_macro(context, macro),
        style=entry_style,
        display_key=macro.quick_macro_key,
    )


def build_quick_macro_actions(
    context: ActionContext,
    registry: KeyActionRegistry[State],
) -> tuple[KeyAction[State], ...]:
    """Register the quick-mode bindings: cancel, macros, then entry macros."""
    cancel = context.config.keys.cancel
    registry.register(
        KeyAction(
            keys=(cancel.without_ctrl(),),
            condition=lambda state: True,
            action=lambda state, event: state.with_input_mode(InputMode.NORMAL),
            description=lambda state: "cancel",
            display_key=cancel,
        ),
        CATEGORY,
    )
    for macro in context.config.macros:
        if macro.quick_mode_key is not None:
            registry.register(_quick_macro_action(context, macro), CATEGORY)
    for entry_macro in context.config.entry_macros:
        if entry_macro.quick_macro_key is not None:
            registry.register(_quick_entry_macro_action(context, entry_macro), CATEGORY)
    return registry.actions(CATEGORY)


__all__ = ["CATEGORY", "build_quick_macro_actions"]
