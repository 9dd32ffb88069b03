"""Capabilities the macro interpreter needs from the running application.

The main controller implements this protocol; tests pass lightweight fakes.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..process import ProcessResult
    from ..state import State
    from .macro import Macro


class PrintStyle(Enum):
    """Theme role a printed message is painted with."""
    PLAIN = "plain"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class MacroHost(Protocol):
    working_directory: Path
    starting_directory: Path
    debug_mode: bool
    shell_name: str | None
    identified_macros: Mapping[str, Macro]

    @property
    def state(self) -> State: ...

    def update_state(self, transform: Callable[[State], State]) -> None: ...

    def run_command(
        self,
        command: str,
        collect_output: bool = False,
        collect_error: bool = False,
    ) -> ProcessResult | None: ...

    def open_file(self, path: Path) -> int | None: ...

    def prompt_text(self, prompt: str, default: str = "", pattern: re.Pattern[str] | None = None) -> str | None: ...

    def prompt_choice(self, prompt: str, choices: Sequence[str], default: str | None = None) -> str | None: ...

    def print_message(self, message: str, style: PrintStyle = PrintStyle.PLAIN) -> None: ...

    def exit(self, directory: Path | None) -> None: ...


__all__ = ["MacroHost", "PrintStyle"]
