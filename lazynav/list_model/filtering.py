"""Filtering and cursor semantics shared by every navigable item list.

Implementations are frozen dataclasses with ``unfiltered_items``, ``filter``
and ``cursor`` fields; each transition returns a new value (or ``self``).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from functools import cached_property
from typing import ClassVar, Generic, TypeVar

T = TypeVar("T")

FILTER_INPUT_FIELDS: frozenset[str] = frozenset({"unfiltered_items", "filter"})


def filter_score(key: str, query: str) -> int:
    """Rank ``key`` against a non-empty ``query``.

    Returns ``0`` when the key does not contain the query (case-insensitive),
    ``1`` for plain containment, ``2`` for a case-insensitive prefix and ``3``
    for an exact-case prefix.
    """
    if not key.lower().startswith(query.lower()):
        return 1 if query.lower() in key.lower() else 0
    return 3 if key.startswith(query) else 2


def filter_items(
    items: Iterable[T],
    query: str,
    key: Callable[[T], str],
    hidden_on: Callable[[T], bool] | None = None,
) -> list[T]:
    """Return ``items`` visible under ``query`` in display order.

    An empty query keeps everything except items ``hidden_on`` suppresses.
    Otherwise matches are stably sorted by descending :func:`filter_score`,
    with hidden matches placed after visible ones of equal score.
    """
    if not query:
        if hidden_on is None:
            return list(items)
        return [item for item in items if not hidden_on(item)]

    scored = [(filter_score(key(item), query), item) for item in items]
    matches = [(score, item) for score, item in scored if score > 0]
    if hidden_on is not None:
        matches.sort(key=lambda pair: hidden_on(pair[1]))
    matches.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in matches]


class FilterableItemList(Generic[T]):
    """Mixin providing filter and cursor transitions for frozen dataclasses."""

    unfiltered_items: tuple[T, ...]
    filter: str
    cursor: int

    # Fields whose change invalidates the cached filtered view.
    filter_inputs: ClassVar[frozenset[str]] = FILTER_INPUT_FIELDS

    def filter_key(self, item: T) -> str:
        """Text of ``item`` the filter is matched against."""
        raise NotImplementedError

    def is_hidden(self, item: T) -> bool:
        """Hook suppressing ``item`` while the filter is empty."""
        return False

    @cached_property
    def filtered_items(self) -> tuple[T, ...]:
        return tuple(filter_items(self.unfiltered_items, self.filter, self.filter_key, self.is_hidden))

    @property
    def current_item(self) -> T | None:
        items = self.filtered_items
        if 0 <= self.cursor < len(items):
            return items[self.cursor]
        return None

    def _copy(self, **changes):
        """``dataclasses.replace`` that keeps the filtered view when still valid."""
        copy = dataclasses.replace(self, **changes)
        cached = self.__dict__.get("filtered_items")
        if cached is not None and not self.filter_inputs.intersection(changes):
            copy.__dict__["filtered_items"] = cached
        return copy

    def _coerce_cursor(self, cursor: int) -> int:
        size = len(self.filtered_items)
        if size == 0:
            return 0
        return max(0, min(cursor, size - 1))

    def with_cursor_coerced(self, cursor: int):
        """Move to ``cursor`` clamped into the filtered range."""
        coerced = self._coerce_cursor(cursor)
        if coerced == self.cursor:
            return self
        return self._copy(cursor=coerced)

    def with_cursor_shifted(self, offset: int):
        """Move by ``offset``, wrapping around both ends."""
        size = len(self.filtered_items)
        if size == 0:
            return self.with_cursor_coerced(0)
        return self.with_cursor_coerced((self.cursor + offset) % size)

    def with_cursor_on_first(self, predicate: Callable[[T], bool], default: int | None = None):
        """Move to the first item matching ``predicate``, else to ``default``.

        ``default`` falls back to the current cursor when omitted.
        """
        for index, item in enumerate(self.filtered_items):
            if predicate(item):
                return self.with_cursor_coerced(index)
        return self.with_cursor_coerced(self.cursor if default is None else default)

    def with_cursor_on_next(self, predicate: Callable[[T], bool]):
        """Move to the next matching item after the cursor, wrapping."""
        return self._with_cursor_on_offset(predicate, step=1)

    def with_cursor_on_next_reverse(self, predicate: Callable[[T], bool]):
        return self._with_cursor_on_offset(predicate, step=-1)

    def _with_cursor_on_offset(self, predicate: Callable[[T], bool], step: int):
        items = self.filtered_items
        size = len(items)
        for offset in range(1, size):
            index = (self.cursor + step * offset) % size
            if predicate(items[index]):
                return self.with_cursor_coerced(index)
        return self

    def with_filter(self, new_filter: str):
        """Apply ``new_filter`` and place the cursor.

        When the filtered list shrinks the cursor jumps to the best match at
        index 0; otherwise it stays on the item with the same filter key.
        """
        if new_filter == self.filter:
            return self
        previous = self.current_item
        updated = self._copy(filter=new_filter)
        if len(self.filtered_items) > len(updated.filtered_items):
            return updated._with_raw_cursor(0)
        if previous is None:
            return updated._with_raw_cursor(updated.cursor)
        previous_key = self.filter_key(previous)
        return updated._with_raw_cursor(updated.cursor).with_cursor_on_first(
            lambda item: self.filter_key(item) == previous_key
        )

    def _with_raw_cursor(self, cursor: int):
        """Coerce after an items change, where the stored cursor may be stale."""
        return self._copy(cursor=self._coerce_cursor(cursor))


__all__ = [
    "FILTER_INPUT_FIELDS",
    "FilterableItemList",
    "filter_items",
    "filter_score",
]
