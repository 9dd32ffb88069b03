"""Immutable navigator state and its transitions.

One ``State`` value describes where the user is and what they are looking at.
Every transition returns a new value; nothing mutates in place.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from pathlib import Path
from typing import ClassVar

from .entry import Entry, list_entries
from .input.key_registry import MenuAction
from .input.keys import KeyboardEvent
from .list_model.filtering import FILTER_INPUT_FIELDS, FilterableItemList


class InputMode(Enum):
    NORMAL = "normal"
    QUICK_MACRO = "quick_macro"
    DIALOG = "dialog"


def nearest_child(path: Path, ancestor: Path) -> Path | None:
    """Return the child of ``ancestor`` on the way down to ``path``."""
    for candidate in (path, *path.parents):
        if candidate != ancestor and candidate.parent == ancestor:
            return candidate
    return None


@dataclass(frozen=True)
class State(FilterableItemList[Entry]):
    directory: Path
    unfiltered_items: tuple[Entry, ...] = ()
    filter: str = ""
    cursor: int = 0
    show_hidden: bool = True
    raw_menu_cursor: int = -1
    command: str | None = None
    input_mode: InputMode = InputMode.NORMAL
    last_received_event: KeyboardEvent | None = None
    menu_actions: tuple[MenuAction[State], ...] = field(default=(), compare=False, repr=False)

    filter_inputs: ClassVar[frozenset[str]] = FILTER_INPUT_FIELDS | {"show_hidden"}

    @classmethod
    def initial(
        cls,
        directory: Path,
        show_hidden: bool = True,
        menu_actions: tuple[MenuAction[State], ...] = (),
    ) -> State:
        directory = Path(os.path.abspath(directory))
        return cls(
            directory=directory,
            unfiltered_items=tuple(list_entries(directory)),
            show_hidden=show_hidden,
            menu_actions=tuple(menu_actions),
        )

    def filter_key(self, item: Entry) -> str:
        return item.name

    def is_hidden(self, item: Entry) -> bool:
        return not self.show_hidden and item.is_hidden

    def _with_directory(self, directory: Path) -> State:
        return self._copy(
            directory=directory,
            unfiltered_items=tuple(list_entries(directory)),
            filter=self.filter if directory == self.directory else "",
        )

    def navigated_to(self, path: Path | None) -> State:
        """Move into ``path``; a no-op unless it is another existing directory.

        Moving to an ancestor keeps the cursor on the entry we came from.
        """
        if path is None:
            return self
        path = Path(os.path.abspath(path))
        if path == self.directory or not path.is_dir():
            return self
        came_from = nearest_child(self.directory, path)
        moved = self._with_directory(path)._with_raw_cursor(0)
        if came_from is None:
            return moved
        return moved.with_cursor_on_first(lambda entry: entry.name == came_from.name)

    def navigated_up(self) -> State:
        return self.navigated_to(self.directory.parent)

    @property
    def has_parent(self) -> bool:
        return self.directory.parent != self.directory

    def updated_entries(self, preferred: Callable[[Entry], bool] | None = None) -> State:
        """Re-list the directory, re-selecting ``preferred`` (default: same name)."""
        if preferred is None:
            current = self.current_item
            current_name = current.name if current is not None else None

            def preferred(entry: Entry) -> bool:
                return entry.name == current_name

        refreshed = self._with_directory(self.directory)._with_raw_cursor(self.cursor)
        return refreshed.with_cursor_on_first(preferred)

    @cached_property
    def shown_menu_actions(self) -> tuple[MenuAction[State], ...]:
        return tuple(action for action in self.menu_actions if action.is_shown(self))

    @property
    def menu_cursor(self) -> int:
        return max(-1, min(self.raw_menu_cursor, len(self.shown_menu_actions) - 1))

    @property
    def is_menu_open(self) -> bool:
        return self.menu_cursor >= 0

    @property
    def current_menu_action(self) -> MenuAction[State] | None:
        cursor = self.menu_cursor
        return self.shown_menu_actions[cursor] if cursor >= 0 else None

    def with_menu_cursor(self, cursor: int) -> State:
        coerced = max(-1, min(cursor, len(self.shown_menu_actions) - 1))
        return self._copy(raw_menu_cursor=coerced)

    @property
    def is_typing_command(self) -> bool:
        return self.command is not None

    def with_command(self, command: str | None) -> State:
        return self._copy(command=command)

    def with_input_mode(self, input_mode: InputMode) -> State:
        return self._copy(input_mode=input_mode)

    def with_last_received_event(self, event: KeyboardEvent | None) -> State:
        return self._copy(last_received_event=event)


__all__ = ["InputMode", "State", "nearest_child"]
