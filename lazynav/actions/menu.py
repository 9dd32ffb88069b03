"""Menu action table: configured macros and entry macros, then the built-in items."""

from __future__ import annotations

from ..effects import CreateEntry, DeleteEntry, RunEntryMacro, RunMacro
from ..entry import EntryType
from ..input.key_registry import MenuAction
from ..macros.defaults import RUN_COMMAND_MACRO, RUN_COMMAND_MACRO_ID
from ..macros.entry_macro import EntryMacro
from ..macros.macro import Macro
from ..state import State
from .context import ActionContext, describe_entry_macro, entry_style, macro_condition


def _macro_menu_action(context: ActionContext, macro: Macro) -> MenuAction[State]:
    return MenuAction(
        description=lambda state: macro.describe_for_menu(context.macro_context(state)),
        condition=macro_condition(context, macro),
        action=lambda state: RunMacro(macro),
        style=lambda state: macro.style,
        hidden=lambda state: macro.hidden,
    )


def _entry_macro_menu_action(context: ActionContext, macro: EntryMacro) -> MenuAction[State]:
    return MenuAction(
        description=describe_entry_macro(context, macro),
        condition=lambda state: macro.applies_to(state.current_item),
        action=lambda state: RunEntryMacro(macro),
        style=entry_style,
        hidden=lambda state: state.current_item is None,
    )


def _can_create(state: State) -> bool:
    return bool(state.filter) and not any(entry.name == state.filter for entry in state.unfiltered_items)


def _can_delete(state: State) -> bool:
    entry = state.current_item
    return entry is not None and entry.type is not EntryType.DIRECTORY


def build_menu_actions(context: ActionContext) -> tuple[MenuAction[State], ...]:
    """Menu rows in display order; the dispatcher filters them by condition."""
    config = context.config
    cancel_key = config.keys.cancel

    def command_line(state: State) -> str:
        if state.command:
            return f"❯ {state.command}_"
        if config.hide_hints:
            return "❯ "
        return f"❯ type command or press {cancel_key} to cancel"

    def submit_command(state: State):
        if not state.command or not state.command.strip():
            return state.with_command(None)
        return RunMacro(context.identified_macros.get(RUN_COMMAND_MACRO_ID, RUN_COMMAND_MACRO))

    macros = sorted(
        (macro for macro in config.macros if macro.menu_order is not None),
        key=lambda macro: macro.menu_order,
    )
    return (
        *(_macro_menu_action(context, macro) for macro in macros),
        *(_entry_macro_menu_action(context, macro) for macro in config.entry_macros),
        MenuAction(
            description=lambda state: f'New file: "{state.filter}"',
            condition=_can_create,
            action=lambda state: CreateEntry(state.directory / state.filter),
            style=lambda state: "file",
        ),
        MenuAction(
            description=lambda state: f'New directory: "{state.filter}"',
            condition=_can_create,
            action=lambda state: CreateEntry(state.directory / state.filter, directory=True),
            style=lambda state: "directory",
        ),
        MenuAction(
            description=lambda state: "Run command here",
            condition=lambda state: not state.is_typing_command,
            action=lambda state: state.with_command(""),
            style=lambda state: "path",
        ),
        MenuAction(
            description=command_line,
            condition=lambda state: state.is_typing_command,
            action=submit_command,
            style=lambda state: "path",
        ),
        MenuAction(
            description=lambda state: f"Delete: {state.current_item.name}",
            condition=_can_delete,
            action=lambda state: DeleteEntry(state.current_item.path),
            style=entry_style,
        ),
    )


__all__ = ["build_menu_actions"]
