"""Main interactive event loop.

Renders, reads one key with the configured idle timeout, and hands it to the
controller. I/O failures from effects are reported and the loop continues;
an exit request or closed input ends it; anything else propagates to the CLI
fatal handler.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..input.keys import KeyboardEvent
from ..terminal import TerminalController
from .controller import ExitRequested

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    render: Callable[[], None]
    read_event: Callable[[], KeyboardEvent | None]
    handle_event: Callable[[KeyboardEvent], None]
    show_error: Callable[[OSError], None]
    finish: Callable[[], None]


def run_main_loop(callbacks: RuntimeLoopCallbacks, terminal: TerminalController | None = None) -> Path | None:
    """Run until an exit is requested; return the directory to hand off, if any."""
    raw_mode = terminal.raw_mode() if terminal is not None else contextlib.nullcontext()
    with raw_mode:
        try:
            while True:
                callbacks.render()
                try:
                    event = callbacks.read_event()
                except EOFError:
                    log.info("Input closed, exiting")
                    return None
                if event is None:
                    continue
                try:
                    callbacks.handle_event(event)
                except ExitRequested as request:
                    log.debug("Exit requested with target %s", request.directory)
                    return request.directory
                except OSError as exc:
                    callbacks.show_error(exc)
        finally:
            callbacks.finish()


def controller_callbacks(controller) -> RuntimeLoopCallbacks:
    return RuntimeLoopCallbacks(
        render=controller.render,
        read_event=controller.read_event,
        handle_event=controller.handle_event,
        show_error=controller.show_error,
        finish=controller.finish,
    )


__all__ = ["RuntimeLoopCallbacks", "controller_callbacks", "run_main_loop"]
