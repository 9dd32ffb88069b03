"""Blocking child-process execution with optional output capture."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""


def run_process(
    executable: str,
    args: Sequence[str],
    cwd: Path,
    collect_output: bool = False,
    collect_error: bool = False,
) -> ProcessResult:
    """Run ``executable`` with ``args`` in ``cwd`` and wait for it.

    Streams that are not collected stay attached to the terminal.
    """
    log.debug("Running %s %s in %s", executable, list(args), cwd)
    completed = subprocess.run(
        [executable, *args],
        cwd=cwd,
        check=False,
        text=True,
        stdout=subprocess.PIPE if collect_output else None,
        stderr=subprocess.PIPE if collect_error else None,
    )
    log.debug("%s exited with %d", executable, completed.returncode)
    return ProcessResult(completed.returncode, completed.stdout or "", completed.stderr or "")


__all__ = ["ProcessResult", "run_process"]
