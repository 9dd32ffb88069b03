"""Common-prefix autocomplete over filterable item lists.

Completion extends the filter to the longest prefix shared by all candidates
and can ask the caller to navigate into a single remaining match.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from .filtering import FilterableItemList

T = TypeVar("T")
L = TypeVar("L", bound=FilterableItemList)


class AutocompleteStyle(Enum):
    """What a completion does once the common prefix is already typed."""
    COMMON_PREFIX_STOP = "common_prefix_stop"
    COMMON_PREFIX_CYCLE = "common_prefix_cycle"


class AutoNavigation(Enum):
    """When a completion that leaves one match also navigates into it."""
    NONE = "none"
    ON_SINGLE = "on_single"
    ON_SINGLE_AFTER_COMPLETION = "on_single_after_completion"


@dataclass(frozen=True)
class AutocompleteResult(Generic[L]):
    """Completed list state plus an optional item to navigate into."""

    state: L
    navigate_to: Any = None


def common_prefix(values: Iterable[str]) -> str:
    """Longest prefix shared by all ``values``, compared case-sensitively."""
    return os.path.commonprefix(list(values))


def autocomplete(
    items: L,
    autocomplete_on: Callable[[Any], str],
    style: AutocompleteStyle,
    auto_navigation: AutoNavigation,
    invert_direction: bool = False,
) -> AutocompleteResult[L] | None:
    """Complete ``items.filter`` to the common prefix of matching keys.

    Returns ``None`` when no unfiltered item starts with the current filter.
    With ``COMMON_PREFIX_CYCLE`` a call that cannot extend the prefix any
    further cycles the cursor through the matches instead. ``navigate_to`` is
    set when exactly one match remains and ``auto_navigation`` asks for it;
    ``ON_SINGLE_AFTER_COMPLETION`` only does so once the filter stopped changing.
    """
    lowered_filter = items.filter.lower()
    candidates = [
        key
        for key in (autocomplete_on(item).lower() for item in items.unfiltered_items)
        if key.startswith(lowered_filter)
    ]
    if not candidates:
        return None

    prefix = common_prefix(candidates)
    filtered = items.with_filter(prefix)
    filter_changed = filtered.filter.lower() != lowered_filter

    def matches(item) -> bool:
        return autocomplete_on(item).lower().startswith(prefix)

    if style is AutocompleteStyle.COMMON_PREFIX_STOP or filter_changed:
        completed = filtered.with_cursor_on_first(matches)
    elif invert_direction:
        completed = filtered.with_cursor_on_next_reverse(matches)
    else:
        completed = filtered.with_cursor_on_next(matches)

    if auto_navigation is AutoNavigation.NONE:
        return AutocompleteResult(completed)

    remaining = [item for item in completed.filtered_items if matches(item)]
    if len(remaining) == 1:
        if auto_navigation is AutoNavigation.ON_SINGLE or not filter_changed:
            return AutocompleteResult(completed, remaining[0])
    return AutocompleteResult(completed)


__all__ = [
    "AutoNavigation",
    "AutocompleteResult",
    "AutocompleteStyle",
    "autocomplete",
    "common_prefix",
]
