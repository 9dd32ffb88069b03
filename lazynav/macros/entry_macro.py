"""Entry macros: a shell command bound to the selected entry.

Unlike full macros they have no action tree. The description and command
take the single-brace placeholders ``{initialDir}``, ``{dir}``,
``{entryPath}``, ``{entryName}`` and ``{filter}``, and the outcome of the
command decides whether the navigator exits afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..entry import Entry, EntryType
from ..input.keys import KeyboardEvent


class AfterCommand(Enum):
    """What happens once an entry macro's command has finished."""
    DO_NOTHING = "do_nothing"
    EXIT_AT_CURRENT_DIRECTORY = "exit_at_current_directory"
    EXIT_AT_INITIAL_DIRECTORY = "exit_at_initial_directory"


@dataclass(frozen=True)
class EntryMacro:
    description: str
    command: str
    on_file: bool = False
    on_directory: bool = False
    on_symbolic_link: bool = False
    after_successful_command: AfterCommand = AfterCommand.DO_NOTHING
    after_failed_command: AfterCommand = AfterCommand.DO_NOTHING
    quick_macro_key: KeyboardEvent | None = None

    def applies_to(self, entry: Entry | None) -> bool:
        """Whether the macro is offered for ``entry``, judged by its own type."""
        if entry is None:
            return False
        entry_type = entry.type
        if entry_type is EntryType.REGULAR_FILE:
            return self.on_file
        if entry_type is EntryType.DIRECTORY:
            return self.on_directory
        if entry_type is EntryType.SYMBOLIC_LINK:
            return self.on_symbolic_link
        return False

    def describe(self, entry: Entry, directory: Path, filter: str, initial_directory: Path) -> str:
        return _expand(self.description, entry, directory, filter, initial_directory)

    def command_for(self, entry: Entry, directory: Path, filter: str, initial_directory: Path) -> str:
        """Shell command with the entry placeholders filled in."""
        return _expand(self.command, entry, directory, filter, initial_directory)

    def after(self, succeeded: bool) -> AfterCommand:
        return self.after_successful_command if succeeded else self.after_failed_command


def _expand(text: str, entry: Entry, directory: Path, filter: str, initial_directory: Path) -> str:
    return (
        text.replace("{initialDir}", str(initial_directory))
        .replace("{dir}", str(directory))
        .replace("{entryPath}", str(entry.path))
        .replace("{entryName}", entry.name)
        .replace("{filter}", filter)
    )


__all__ = ["AfterCommand", "EntryMacro"]
