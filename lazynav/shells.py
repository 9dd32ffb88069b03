"""Known shells and how to hand them a command string."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Shell:
    name: str
    command_flags: tuple[str, ...]

    def command_args(self, command: str) -> list[str]:
        return [*self.command_flags, command]


_POSIX_FLAGS = ("-c",)
_POWERSHELL_FLAGS = ("-NoProfile", "-Command")

SHELLS: dict[str, Shell] = {
    shell.name: shell
    for shell in (
        Shell("bash", _POSIX_FLAGS),
        Shell("zsh", _POSIX_FLAGS),
        Shell("fish", _POSIX_FLAGS),
        Shell("sh", _POSIX_FLAGS),
        Shell("powershell", _POWERSHELL_FLAGS),
        Shell("pwsh", _POWERSHELL_FLAGS),
    )
}


def _shell_name(value: str) -> str:
    name = os.path.basename(value.strip()).lower()
    return name[:-4] if name.endswith(".exe") else name


def detect_shell(name: str | None = None) -> Shell | None:
    """Return ``name`` when given, else the shell named by ``$SHELL``.

    Unknown shells yield ``None``.
    """
    raw = name if name else os.environ.get("SHELL", "")
    if not raw.strip():
        return None
    return SHELLS.get(_shell_name(raw))


__all__ = ["SHELLS", "Shell", "detect_shell"]
