"""User-defined macro: bindings, visibility, condition and action body."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..input.keys import KeyboardEvent
from .actions import MacroActions
from .conditions import MacroCondition
from .errors import MacroDefinitionError
from .placeholders import MacroSymbol, StringWithPlaceholders
from .properties import ENTRY_SYMBOLS, FILTER
from .runtime import MacroResult, MacroRuntimeContext


@dataclass(frozen=True)
class Macro:
    id: str | None = None
    description: StringWithPlaceholders = StringWithPlaceholders()
    hidden: bool = False
    key: KeyboardEvent | None = None
    hide_key: bool = False
    quick_mode_key: KeyboardEvent | None = None
    hide_quick_mode_key: bool = False
    menu_order: int | None = None
    condition: MacroCondition | None = None
    actions: MacroActions = field(default_factory=MacroActions)

    def __post_init__(self) -> None:
        if self.description.raw:
            return
        if self.menu_order is not None:
            raise MacroDefinitionError(f"Macro {self._label} has a menu order but no description")
        if self.key is not None and not (self.hidden or self.hide_key):
            raise MacroDefinitionError(f"Macro {self._label} has a visible key but no description")
        if self.quick_mode_key is not None and not (self.hidden or self.hide_quick_mode_key):
            raise MacroDefinitionError(f"Macro {self._label} has a visible quick mode key but no description")

    @property
    def _label(self) -> str:
        return f"'{self.id}'" if self.id else "without id"

    @property
    def used_symbols(self) -> frozenset[MacroSymbol]:
        symbols = set(self.description.symbols)
        if self.condition is not None:
            symbols |= self.condition.used_symbols
        return frozenset(symbols)

    @property
    def depends_on_entry(self) -> bool:
        return any(not symbol.is_environment and symbol.name in ENTRY_SYMBOLS for symbol in self.used_symbols)

    @property
    def depends_on_filter(self) -> bool:
        return any(not symbol.is_environment and symbol.name == FILTER for symbol in self.used_symbols)

    @property
    def style(self) -> str:
        """Theme role used for this macro in hints and the menu."""
        if self.depends_on_entry:
            return "entry"
        if self.depends_on_filter:
            return "filter"
        return "macro"

    @property
    def shows_key(self) -> bool:
        return self.key is not None and not (self.hidden or self.hide_key)

    @property
    def shows_quick_mode_key(self) -> bool:
        return self.quick_mode_key is not None and not (self.hidden or self.hide_quick_mode_key)

    def is_available(self, context: MacroRuntimeContext) -> bool:
        return self.condition is None or self.condition.evaluate(context)

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        return self.actions.run(context)

    def describe(self, context: MacroRuntimeContext) -> str:
        return context.evaluate(self.description)

    def describe_for_menu(self, context: MacroRuntimeContext) -> str:
        text = self.describe(context)
        return text[:1].upper() + text[1:]


__all__ = ["Macro"]
