"""Built-in macro symbols delegated to live application state.

Reading a property queries the host directly; writing a mutable one turns
into the matching state transition.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .host import MacroHost

EXIT_CODE = "exitCode"

WORKING_DIRECTORY = "workingDirectory"
STARTING_DIRECTORY = "startingDirectory"
DEBUG_MODE = "debugMode"
SHELL = "shell"
DIRECTORY = "directory"
ENTRY_PATH = "entryPath"
ENTRY_NAME = "entryName"
ENTRY_TYPE = "entryType"
FILTER = "filter"
FILTERED_ENTRIES_COUNT = "filteredEntriesCount"
COMMAND = "command"
ENTRY_CURSOR_POSITION = "entryCursorPosition"
MENU_CURSOR_POSITION = "menuCursorPosition"

ENTRY_SYMBOLS = frozenset({ENTRY_PATH, ENTRY_NAME, ENTRY_TYPE})


@dataclass(frozen=True)
class MacroProperty:
    name: str
    getter: Callable[[MacroHost], str | None]
    setter: Callable[[MacroHost, str], None] | None = None

    @property
    def mutable(self) -> bool:
        return self.setter is not None


def _entry_type(host: MacroHost) -> str | None:
    entry = host.state.current_item
    if entry is None:
        return None
    return entry.type.value


def _set_directory(host: MacroHost, value: str) -> None:
    if not value:
        return
    target = Path(os.path.expanduser(value))
    if not target.is_absolute():
        target = host.state.directory / target
    target = Path(os.path.normpath(target))
    if target.is_dir():
        host.update_state(lambda state: state.navigated_to(target))


def _set_int(transition: Callable[..., object]) -> Callable[[MacroHost, str], None]:
    def setter(host: MacroHost, value: str) -> None:
        try:
            number = int(value.strip())
        except ValueError:
            return
        host.update_state(lambda state: transition(state, number))

    return setter


def _current_entry_attribute(attribute: str) -> Callable[[MacroHost], str | None]:
    def getter(host: MacroHost) -> str | None:
        entry = host.state.current_item
        return str(getattr(entry, attribute)) if entry is not None else None

    return getter


BUILTIN_PROPERTIES: dict[str, MacroProperty] = {
    prop.name: prop
    for prop in (
        MacroProperty(WORKING_DIRECTORY, lambda host: str(host.working_directory)),
        MacroProperty(STARTING_DIRECTORY, lambda host: str(host.starting_directory)),
        MacroProperty(DEBUG_MODE, lambda host: "true" if host.debug_mode else "false"),
        MacroProperty(SHELL, lambda host: host.shell_name),
        MacroProperty(DIRECTORY, lambda host: str(host.state.directory), _set_directory),
        MacroProperty(ENTRY_PATH, _current_entry_attribute("path")),
        MacroProperty(ENTRY_NAME, _current_entry_attribute("name")),
        MacroProperty(ENTRY_TYPE, _entry_type),
        MacroProperty(
            FILTER,
            lambda host: host.state.filter,
            lambda host, value: host.update_state(lambda state: state.with_filter(value)),
        ),
        MacroProperty(FILTERED_ENTRIES_COUNT, lambda host: str(len(host.state.filtered_items))),
        MacroProperty(
            COMMAND,
            lambda host: host.state.command,
            lambda host, value: host.update_state(lambda state: state.with_command(value or None)),
        ),
        MacroProperty(
            ENTRY_CURSOR_POSITION,
            lambda host: str(host.state.cursor),
            _set_int(lambda state, number: state.with_cursor_coerced(number)),
        ),
        MacroProperty(
            MENU_CURSOR_POSITION,
            lambda host: str(host.state.menu_cursor),
            _set_int(lambda state, number: state.with_menu_cursor(number)),
        ),
    )
}


__all__ = [
    "BUILTIN_PROPERTIES",
    "COMMAND",
    "DEBUG_MODE",
    "DIRECTORY",
    "ENTRY_CURSOR_POSITION",
    "ENTRY_NAME",
    "ENTRY_PATH",
    "ENTRY_SYMBOLS",
    "ENTRY_TYPE",
    "EXIT_CODE",
    "FILTER",
    "FILTERED_ENTRIES_COUNT",
    "MENU_CURSOR_POSITION",
    "MacroProperty",
    "SHELL",
    "STARTING_DIRECTORY",
    "WORKING_DIRECTORY",
]
