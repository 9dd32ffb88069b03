"""Editor discovery and launch.

The editor comes from the command line, the config, ``$EDITOR`` or
``$VISUAL``, or the first well-known editor on ``PATH``.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
from pathlib import Path

from .process import run_process
from .shells import Shell

log = logging.getLogger(__name__)

FALLBACK_EDITORS = ("nano", "nvim", "vim", "vi", "code", "notepad")


def find_editor_command(cli_editor: str | None = None, config_editor: str | None = None) -> str | None:
    for candidate in (cli_editor, config_editor, os.environ.get("EDITOR"), os.environ.get("VISUAL")):
        if candidate and candidate.strip():
            return candidate.strip()
    for name in FALLBACK_EDITORS:
        if shutil.which(name):
            return name
    return None


def editor_display_name(editor: str | None) -> str:
    if not editor:
        return "editor"
    try:
        parts = shlex.split(editor)
    except ValueError:
        return editor
    return os.path.basename(parts[0]) if parts else editor


def _runs_directly(editor: str) -> bool:
    """Whether ``editor`` names a single program (a bare word or one quoted path)."""
    stripped = editor.strip()
    if len(stripped) >= 2 and stripped[0] == stripped[-1] and stripped[0] in "\"'":
        return stripped[0] not in stripped[1:-1]
    return not any(ch.isspace() for ch in stripped)


def open_in_editor(editor: str, target: Path, shell: Shell | None, cwd: Path) -> int:
    """Open ``target`` in ``editor`` and return its exit code.

    Editors with arguments run through ``shell`` so its quoting and aliases
    apply; without a known shell they are split like a POSIX command line.
    """
    if _runs_directly(editor):
        program = shlex.split(editor)[0]
        return run_process(program, [str(target)], cwd).exit_code
    if shell is not None:
        command = f"{editor} {shlex.quote(str(target))}"
        return run_process(shell.name, shell.command_args(command), cwd).exit_code
    program, *args = shlex.split(editor)
    return run_process(program, [*args, str(target)], cwd).exit_code


__all__ = ["FALLBACK_EDITORS", "editor_display_name", "find_editor_command", "open_in_editor"]
