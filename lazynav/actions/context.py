"""Dependencies shared by the action tables."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from ..entry import EntryType
from ..macros.entry_macro import EntryMacro
from ..macros.macro import Macro
from ..macros.runtime import MacroRuntimeContext
from ..runtime.config import Config
from ..state import State

ENTRY_TYPE_STYLES = {
    EntryType.DIRECTORY: "directory",
    EntryType.REGULAR_FILE: "file",
    EntryType.SYMBOLIC_LINK: "link",
    EntryType.UNKNOWN: "unknown",
}


@dataclass(frozen=True)
class ActionContext:
    """Configuration and bound operations required to build action tables.

    ``macro_context`` returns a fresh macro frame reading from the given
    state, used to evaluate macro conditions and descriptions.
    """

    config: Config
    working_directory: Path
    editor_name: str
    macro_context: Callable[[State], MacroRuntimeContext]
    identified_macros: Mapping[str, Macro]


def macro_condition(context: ActionContext, macro: Macro) -> Callable[[State], bool]:
    """Condition callback evaluating ``macro`` against the state being shown."""
    return lambda state: macro.is_available(context.macro_context(state))


def entry_style(state: State) -> str | None:
    """Theme role of the selected entry's type."""
    entry = state.current_item
    return ENTRY_TYPE_STYLES[entry.type] if entry is not None else None


def describe_entry_macro(context: ActionContext, macro: EntryMacro) -> Callable[[State], str]:
    """Description callback expanding ``macro`` for the selected entry."""
    def describe(state: State) -> str:
        entry = state.current_item
        if entry is None:
            return ""
        return macro.describe(entry, state.directory, state.filter, context.working_directory)

    return describe


__all__ = ["ActionContext", "ENTRY_TYPE_STYLES", "describe_entry_macro", "entry_style", "macro_condition"]
