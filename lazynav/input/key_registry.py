"""Key and menu action descriptors plus the priority-aware registry.

Actions register into ordered per-category lists. Registration rewrites each
action's availability so an earlier available action sharing a key wins.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from .keys import KeyboardEvent

S = TypeVar("S")

DEFAULT_CATEGORY = "default"


def _no_description(state: Any) -> str:
    return ""


def _no_style(state: Any) -> str | None:
    return None


def _never(state: Any) -> bool:
    return False


@dataclass(frozen=True)
class KeyAction(Generic[S]):
    """Mapping from trigger keys to an effect, gated by a state condition.

    ``keys=None`` matches any key. ``action`` returns a new state, a
    controller effect, or ``None``. ``style`` names a theme role.
    """

    keys: tuple[KeyboardEvent, ...] | None
    condition: Callable[[S], bool]
    action: Callable[[S, KeyboardEvent], Any]
    description: Callable[[S], str] = _no_description
    style: Callable[[S], str | None] = _no_style
    hidden: Callable[[S], bool] = _never
    display_key: KeyboardEvent | None = None

    @property
    def hint_key(self) -> KeyboardEvent | None:
        if self.display_key is not None:
            return self.display_key
        return self.keys[0] if self.keys else None

    def is_available(self, state: S) -> bool:
        return self.condition(state)

    def is_shown(self, state: S) -> bool:
        return not self.hidden(state) and self.is_available(state)

    def matches(self, state: S, event: KeyboardEvent) -> bool:
        if self.keys is not None and event not in self.keys:
            return False
        return self.is_available(state)

    def run(self, state: S, event: KeyboardEvent) -> Any:
        return self.action(state, event)


@dataclass(frozen=True)
class MenuAction(Generic[S]):
    """Menu entry; triggered by menu navigation instead of a key."""

    description: Callable[[S], str]
    condition: Callable[[S], bool]
    action: Callable[[S], Any]
    style: Callable[[S], str | None] = _no_style
    hidden: Callable[[S], bool] = _never

    def is_available(self, state: S) -> bool:
        return self.condition(state)

    def is_shown(self, state: S) -> bool:
        return not self.hidden(state) and self.is_available(state)

    def run(self, state: S) -> Any:
        return self.action(state)


def shares_key(action: KeyAction, earlier: KeyAction) -> bool:
    """Whether ``earlier`` takes priority over ``action`` for some key."""
    if earlier.keys is None:
        return True
    if action.keys is None:
        return False
    return any(key in earlier.keys for key in action.keys)


class KeyActionRegistry(Generic[S]):
    """Ordered key-action tables with first-registered-wins conflict handling."""

    def __init__(self) -> None:
        self._categories: dict[str, list[KeyAction[S]]] = {}

    def register(self, action: KeyAction[S], category: str = DEFAULT_CATEGORY) -> KeyAction[S]:
        """Append ``action`` and return its conflict-aware registered copy."""
        registered = self._categories.setdefault(category, [])
        prioritized = tuple(earlier for earlier in registered if shares_key(action, earlier))
        base_condition = action.condition

        def condition(state: S) -> bool:
            return base_condition(state) and not any(earlier.is_available(state) for earlier in prioritized)

        wrapped = replace(action, condition=condition) if prioritized else action
        registered.append(wrapped)
        return wrapped

    def register_all(self, actions: Sequence[KeyAction[S]], category: str = DEFAULT_CATEGORY) -> list[KeyAction[S]]:
        return [self.register(action, category) for action in actions]

    def actions(self, category: str = DEFAULT_CATEGORY) -> tuple[KeyAction[S], ...]:
        return tuple(self._categories.get(category, ()))


def find_action(actions: Sequence[KeyAction[S]], state: S, event: KeyboardEvent) -> KeyAction[S] | None:
    """Return the first action in ``actions`` that ``event`` triggers."""
    for action in actions:
        if action.matches(state, event):
            return action
    return None


__all__ = [
    "DEFAULT_CATEGORY",
    "KeyAction",
    "KeyActionRegistry",
    "MenuAction",
    "find_action",
    "shares_key",
]
