"""Controller-level effects requested by key and menu actions.

Actions stay pure: they return either a new ``State`` or one of these values,
and the controller performs the side effect.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .macros.entry_macro import EntryMacro
    from .macros.macro import Macro
    from .state import State


@dataclass(frozen=True)
class OpenInEditor:
    path: Path


@dataclass(frozen=True)
class RunMacro:
    macro: Macro


@dataclass(frozen=True)
class RunEntryMacro:
    """Run ``entry_macro`` against the selected entry."""

    entry_macro: EntryMacro


@dataclass(frozen=True)
class CreateEntry:
    """Create ``path`` as an empty file or a directory, then select it."""

    path: Path
    directory: bool = False


@dataclass(frozen=True)
class DeleteEntry:
    path: Path


@dataclass(frozen=True)
class Exit:
    """Leave the application, handing ``directory`` to the parent shell if set."""

    directory: Path | None = None


Effect = Union[OpenInEditor, RunMacro, RunEntryMacro, CreateEntry, DeleteEntry, Exit]


@dataclass(frozen=True)
class Transition:
    """Apply ``state`` first, then perform ``effect``."""

    state: State
    effect: Effect


__all__ = [
    "CreateEntry",
    "DeleteEntry",
    "Effect",
    "Exit",
    "OpenInEditor",
    "RunEntryMacro",
    "RunMacro",
    "Transition",
]
