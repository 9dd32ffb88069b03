"""Boolean condition trees gating macro availability and ``if`` actions.

Every condition exposes ``used_symbols`` so callers can tell statically which
variables a macro's visibility depends on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import MacroDefinitionError
from .placeholders import MacroSymbol, StringWithPlaceholders
from .runtime import MacroRuntimeContext


class MacroCondition:
    """Base for macro conditions evaluated against a runtime context."""
    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        return frozenset()

    def evaluate(self, context: MacroRuntimeContext) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class AnyOf(MacroCondition):
    conditions: tuple[MacroCondition, ...]

    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        return frozenset().union(*(condition.used_symbols for condition in self.conditions))

    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return any(condition.evaluate(context) for condition in self.conditions)


@dataclass(frozen=True)
class AllOf(MacroCondition):
    conditions: tuple[MacroCondition, ...]

    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        return frozenset().union(*(condition.used_symbols for condition in self.conditions))

    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return all(condition.evaluate(context) for condition in self.conditions)


@dataclass(frozen=True)
class Not(MacroCondition):
    condition: MacroCondition

    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        return self.condition.used_symbols

    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return not self.condition.evaluate(context)


@dataclass(frozen=True)
class Equal(MacroCondition):
    values: tuple[StringWithPlaceholders, ...]
    ignore_case: bool = False

    def __post_init__(self) -> None:
        if len(self.values) < 2:
            raise MacroDefinitionError("equal must have at least two elements to compare")

    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        return frozenset(symbol for value in self.values for symbol in value.symbols)

    def evaluate(self, context: MacroRuntimeContext) -> bool:
        evaluated = [context.evaluate(value) for value in self.values]
        if self.ignore_case:
            evaluated = [value.casefold() for value in evaluated]
        return all(value == evaluated[0] for value in evaluated)


@dataclass(frozen=True)
class NotEqual(Equal):
    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return not super().evaluate(context)


@dataclass(frozen=True)
class Matches(MacroCondition):
    """Whether the evaluated ``value`` matches ``pattern`` in full."""

    pattern: re.Pattern[str]
    value: StringWithPlaceholders

    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        return frozenset(self.value.symbols)

    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return self.pattern.fullmatch(context.evaluate(self.value)) is not None


@dataclass(frozen=True)
class NotMatches(Matches):
    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return not super().evaluate(context)


@dataclass(frozen=True)
class Empty(MacroCondition):
    value: StringWithPlaceholders

    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        return frozenset(self.value.symbols)

    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return context.evaluate(self.value) == ""


@dataclass(frozen=True)
class NotEmpty(Empty):
    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return not super().evaluate(context)


@dataclass(frozen=True)
class Blank(MacroCondition):
    value: StringWithPlaceholders

    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        return frozenset(self.value.symbols)

    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return context.evaluate(self.value).strip() == ""


@dataclass(frozen=True)
class NotBlank(Blank):
    def evaluate(self, context: MacroRuntimeContext) -> bool:
        return not super().evaluate(context)


__all__ = [
    "AllOf",
    "AnyOf",
    "Blank",
    "Empty",
    "Equal",
    "MacroCondition",
    "Matches",
    "Not",
    "NotBlank",
    "NotEmpty",
    "NotEqual",
    "NotMatches",
]
