"""Action tables for the main navigator view.

Built once at startup from the config; the dispatcher scans them in order.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..input.key_registry import KeyAction, KeyActionRegistry, MenuAction
from ..state import State
from .context import ActionContext
from .menu import build_menu_actions
from .normal import build_normal_actions
from .quick_macro import build_quick_macro_actions


@dataclass(frozen=True)
class MainActions:
    normal: tuple[KeyAction[State], ...]
    quick_macro: tuple[KeyAction[State], ...]
    menu: tuple[MenuAction[State], ...]


def build_main_actions(context: ActionContext) -> MainActions:
    """Build the normal, quick-macro and menu tables sharing one registry."""
    registry: KeyActionRegistry[State] = KeyActionRegistry()
    return MainActions(
        normal=build_normal_actions(context, registry),
        quick_macro=build_quick_macro_actions(context, registry),
        menu=build_menu_actions(context),
    )


__all__ = ["ActionContext", "MainActions", "build_main_actions"]
