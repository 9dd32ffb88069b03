"""Runtime orchestration: config loading, the main controller and the loop.

Entry points are imported lazily to keep ``lazynav.runtime.config`` cheap to
import from lower layers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .controller import ExitRequested, MainController
    from .loop import RuntimeLoopCallbacks


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"ExitRequested", "MainController"}:
        from . import controller as _controller

        return getattr(_controller, name)
    if name == "RuntimeLoopCallbacks":
        from . import loop as _loop

        return getattr(_loop, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ExitRequested",
    "MainController",
    "RuntimeLoopCallbacks",
    "run_main_loop",
]
