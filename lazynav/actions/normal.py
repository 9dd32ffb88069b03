"""Normal-mode key action table.

Registration order is priority order: an action only fires when no earlier
action sharing one of its keys is available.
"""

from __future__ import annotations

from ..effects import Exit, OpenInEditor, RunMacro, Transition
from ..entry import EntryType
from ..input.key_registry import KeyAction, KeyActionRegistry
from ..input.keys import KeyboardEvent
from ..input.text_field import update_text_field
from ..list_model import autocomplete
from ..macros.macro import Macro
from ..state import State
from .context import ActionContext, macro_condition

CATEGORY = "normal"


def _has_items(state: State) -> bool:
    return bool(state.filtered_items)


def _current_type(state: State) -> EntryType | None:
    entry = state.current_item
    return entry.resolved_type if entry is not None else None


def _macro_action(context: ActionContext, macro: Macro) -> KeyAction[State]:
    return KeyAction(
        keys=(macro.key,),
        condition=macro_condition(context, macro),
        action=lambda state, event: RunMacro(macro),
        description=lambda state: macro.describe(context.macro_context(state)),
        style=lambda state: macro.style,
        hidden=lambda state: not macro.shows_key,
    )


def _submit_menu(state: State, event: KeyboardEvent):
    action = state.current_menu_action
    return action.run(state) if action is not None else None


def _autocompleter(context: ActionContext):
    settings = context.config.autocomplete

    def run(state: State, event: KeyboardEvent):
        result = autocomplete(
            state,
            lambda entry: entry.name,
            settings.style,
            settings.auto_navigation,
            invert_direction=event.shift,
        )
        if result is None:
            return None
        target = result.navigate_to
        if target is None:
            return result.state
        target_type = target.resolved_type
        if target_type is EntryType.DIRECTORY:
            return result.state.navigated_to(target.path)
        if target_type is EntryType.REGULAR_FILE:
            return Transition(result.state, OpenInEditor(target.path))
        return result.state

    return run


def _edit_command(state: State, event: KeyboardEvent):
    command = update_text_field(state.command or "", event)
    return state.with_command(command) if command is not None else None


def _edit_filter(state: State, event: KeyboardEvent):
    new_filter = update_text_field(state.filter, event)
    return state.with_filter(new_filter) if new_filter is not None else None


def build_normal_actions(context: ActionContext, registry: KeyActionRegistry[State]) -> tuple[KeyAction[State], ...]:
    """Register the normal-mode bindings; earlier bindings win shared keys."""
    keys = context.config.keys
    register = registry.register

    register(
        KeyAction(
            keys=(keys.submit,),
            condition=lambda state: state.is_menu_open,
            action=_submit_menu,
        ),
        CATEGORY,
    )
    for macro in context.config.macros:
        if macro.key is not None:
            register(_macro_action(context, macro), CATEGORY)

    register(
        KeyAction((keys.cursor.up,), _has_items, lambda state, event: state.with_cursor_shifted(-1)),
        CATEGORY,
    )
    register(
        KeyAction((keys.cursor.down,), _has_items, lambda state, event: state.with_cursor_shifted(1)),
        CATEGORY,
    )
    register(
        KeyAction((keys.cursor.home,), _has_items, lambda state, event: state.with_cursor_coerced(0)),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.cursor.end,),
            _has_items,
            lambda state, event: state.with_cursor_coerced(len(state.filtered_items) - 1),
        ),
        CATEGORY,
    )

    register(
        KeyAction((keys.nav.up,), lambda state: state.has_parent, lambda state, event: state.navigated_up()),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.nav.into,),
            lambda state: _current_type(state) is EntryType.DIRECTORY,
            lambda state, event: state.navigated_to(state.current_item.path),
        ),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.nav.open,),
            lambda state: _current_type(state) is EntryType.REGULAR_FILE,
            lambda state, event: OpenInEditor(state.current_item.path),
            description=lambda state: f"open in {context.editor_name}",
            style=lambda state: "file",
        ),
        CATEGORY,
    )

    register(
        KeyAction(
            (keys.cancel,),
            lambda state: state.is_typing_command,
            lambda state, event: state.with_command(None),
            description=lambda state: "discard command",
        ),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.filter.autocomplete, KeyboardEvent(keys.filter.autocomplete.key, shift=True)),
            lambda state: bool(state.unfiltered_items),
            _autocompleter(context),
            description=lambda state: "autocomplete",
        ),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.filter.clear,),
            lambda state: bool(state.filter),
            lambda state, event: state.with_filter(""),
            description=lambda state: "clear filter",
            style=lambda state: "filter",
        ),
        CATEGORY,
    )

    register(
        KeyAction(
            (keys.cancel,),
            lambda state: state.is_menu_open,
            lambda state, event: state.with_menu_cursor(-1),
            description=lambda state: "close menu",
        ),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.menu.up,),
            lambda state: state.is_menu_open and state.menu_cursor == 0,
            lambda state, event: state.with_menu_cursor(-1),
            description=lambda state: "close menu",
        ),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.menu.down,),
            lambda state: not state.is_menu_open and bool(state.shown_menu_actions),
            lambda state, event: state.with_menu_cursor(0),
            description=lambda state: "more",
        ),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.menu.down,),
            lambda state: state.is_menu_open and state.menu_cursor < len(state.shown_menu_actions) - 1,
            lambda state, event: state.with_menu_cursor(state.menu_cursor + 1),
        ),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.menu.up,),
            lambda state: state.is_menu_open and state.menu_cursor > 0,
            lambda state, event: state.with_menu_cursor(state.menu_cursor - 1),
        ),
        CATEGORY,
    )

    register(
        KeyAction(
            (keys.submit,),
            lambda state: True,
            lambda state, event: Exit(state.directory),
            description=lambda state: "exit here",
            style=lambda state: "path",
            hidden=lambda state: state.directory == context.working_directory,
        ),
        CATEGORY,
    )
    register(
        KeyAction(
            (keys.cancel,),
            lambda state: True,
            lambda state, event: Exit(None),
            description=lambda state: "exit",
        ),
        CATEGORY,
    )

    register(
        KeyAction(None, lambda state: state.is_typing_command, _edit_command, hidden=lambda state: True),
        CATEGORY,
    )
    register(
        KeyAction(None, lambda state: True, _edit_filter, hidden=lambda state: True),
        CATEGORY,
    )
    return registry.actions(CATEGORY)


__all__ = ["CATEGORY", "build_normal_actions"]
