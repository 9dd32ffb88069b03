"""Pick-list prompt with type-to-filter and autocomplete."""

from __future__ import annotations

from dataclasses import dataclass

from ..input.key_registry import KeyAction, KeyActionRegistry
from ..input.keys import KeyboardEvent
from ..input.text_field import update_text_field
from ..list_model import AutoNavigation, AutocompleteStyle, FilterableItemList, autocomplete
from ..runtime.config import Keys
from ..ui_theme import UITheme
from .base import CANCELLED, Dialog, DialogOutcome

CATEGORY = "choice_prompt"


@dataclass(frozen=True)
class ChoiceState(FilterableItemList[str]):
    unfiltered_items: tuple[str, ...] = ()
    filter: str = ""
    cursor: int = 0

    def filter_key(self, item: str) -> str:
        return item


def _edit_filter(state: ChoiceState, event: KeyboardEvent):
    new_filter = update_text_field(state.filter, event)
    return state.with_filter(new_filter) if new_filter is not None else None


def _autocomplete(state: ChoiceState, event: KeyboardEvent):
    result = autocomplete(
        state,
        lambda item: item,
        AutocompleteStyle.COMMON_PREFIX_CYCLE,
        AutoNavigation.NONE,
        invert_direction=event.shift,
    )
    return result.state if result is not None else None


def choice_prompt_actions(keys: Keys) -> tuple[KeyAction[ChoiceState], ...]:
    registry: KeyActionRegistry[ChoiceState] = KeyActionRegistry()

    def has_items(state: ChoiceState) -> bool:
        return bool(state.filtered_items)

    registry.register_all(
        [
            KeyAction((keys.cursor.up,), has_items, lambda state, event: state.with_cursor_shifted(-1)),
            KeyAction((keys.cursor.down,), has_items, lambda state, event: state.with_cursor_shifted(1)),
            KeyAction((keys.cursor.home,), has_items, lambda state, event: state.with_cursor_coerced(0)),
            KeyAction(
                (keys.cursor.end,),
                has_items,
                lambda state, event: state.with_cursor_coerced(len(state.filtered_items) - 1),
            ),
            KeyAction(
                (keys.filter.autocomplete, KeyboardEvent(keys.filter.autocomplete.key, shift=True)),
                lambda state: bool(state.unfiltered_items),
                _autocomplete,
                description=lambda state: "autocomplete",
            ),
            KeyAction(
                (keys.filter.clear,),
                lambda state: bool(state.filter),
                lambda state, event: state.with_filter(""),
                description=lambda state: "clear filter",
                style=lambda state: "filter",
            ),
            KeyAction(
                (keys.submit,),
                lambda state: state.current_item is not None,
                lambda state, event: DialogOutcome(state.current_item),
                description=lambda state: "select",
            ),
            KeyAction(
                (keys.cancel,),
                lambda state: True,
                lambda state, event: CANCELLED,
                description=lambda state: "cancel",
            ),
            KeyAction(None, lambda state: True, _edit_filter, hidden=lambda state: True),
        ],
        CATEGORY,
    )
    return registry.actions(CATEGORY)


class ChoicePromptDialog(Dialog[ChoiceState]):
    def __init__(self, prompt: str, choices: tuple[str, ...], keys: Keys, default: str | None = None) -> None:
        state = ChoiceState(tuple(choices))
        if default is not None:
            state = state.with_cursor_on_first(lambda choice: choice == default)
        super().__init__(state, choice_prompt_actions(keys))
        self.prompt = prompt

    def render(self, theme: UITheme, max_rows: int) -> list[str]:
        state = self.state
        lines = [f"{theme.paint('path', self.prompt)} {theme.paint('filter_marker', '❯')} {theme.paint('filter', state.filter)}_"]
        items = state.filtered_items
        rows = max(1, max_rows)
        start = max(0, min(state.cursor - rows // 2, len(items) - rows))
        for index in range(start, min(len(items), start + rows)):
            if index == state.cursor:
                lines.append(f"{theme.paint('filter_marker', '❯')} {theme.paint('reverse', items[index])}")
            else:
                lines.append(f"  {items[index]}")
        if not items:
            lines.append(theme.paint("dim", "  no matching choices"))
        lines.append(self.hint_line(theme))
        return lines


__all__ = ["ChoicePromptDialog", "ChoiceState", "choice_prompt_actions"]
