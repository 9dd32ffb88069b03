"""Macros that are always present, whatever the configuration defines."""

from __future__ import annotations

from .actions import If, MacroActions, Print, RunCommand, Set
from .conditions import NotEqual
from .host import PrintStyle
from .macro import Macro
from .placeholders import StringWithPlaceholders, placeholder
from .properties import COMMAND, EXIT_CODE

RUN_COMMAND_MACRO_ID = "navRunCommand"

RUN_COMMAND_MACRO = Macro(
    id=RUN_COMMAND_MACRO_ID,
    hidden=True,
    actions=MacroActions(
        (
            RunCommand(placeholder(COMMAND)),
            If(
                NotEqual((placeholder(EXIT_CODE), StringWithPlaceholders("0"))),
                then=MacroActions(
                    (Print(StringWithPlaceholders("Received exit code {{exitCode}}"), style=PrintStyle.ERROR),)
                ),
            ),
            Set({COMMAND: StringWithPlaceholders("")}),
        )
    ),
)

DEFAULT_MACROS: tuple[Macro, ...] = (RUN_COMMAND_MACRO,)


__all__ = ["DEFAULT_MACROS", "RUN_COMMAND_MACRO", "RUN_COMMAND_MACRO_ID"]
