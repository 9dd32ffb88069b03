"""Macro execution context: symbol table, call frames, and result signalling.

Symbols resolve through three lookups tried in order: environment variables,
built-in properties bound to the live application, then local variables.
Macro ``Return`` is reported as ``MacroResult.RETURNED`` and absorbed at call
boundaries rather than raised.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from enum import Enum
from typing import TYPE_CHECKING

from .errors import MacroError
from .host import MacroHost, PrintStyle
from .placeholders import MacroSymbol, StringWithPlaceholders
from .properties import BUILTIN_PROPERTIES

if TYPE_CHECKING:
    from .macro import Macro

log = logging.getLogger(__name__)

_UNRESOLVED = object()


class MacroResult(Enum):
    RAN = "ran"
    RETURNED = "returned"


class MacroRuntimeContext:
    """Local variable frame layered over environment and built-in symbols."""

    def __init__(self, host: MacroHost, variables: Mapping[str, str] | None = None) -> None:
        self.host = host
        self.variables: dict[str, str] = dict(variables or {})

    def _environment_value(self, symbol: MacroSymbol) -> object:
        if not symbol.is_environment:
            return _UNRESOLVED
        return os.environ.get(symbol.name, "")

    def _property_value(self, symbol: MacroSymbol) -> object:
        prop = BUILTIN_PROPERTIES.get(symbol.name)
        if prop is None:
            return _UNRESOLVED
        return prop.getter(self.host) or ""

    def _local_value(self, symbol: MacroSymbol) -> object:
        return self.variables.get(symbol.name, "")

    def get(self, name: str | MacroSymbol) -> str:
        symbol = name if isinstance(name, MacroSymbol) else MacroSymbol.parse(name)
        for lookup in (self._environment_value, self._property_value, self._local_value):
            value = lookup(symbol)
            if value is not _UNRESOLVED:
                return str(value)
        return ""

    def evaluate(self, text: StringWithPlaceholders) -> str:
        return text.evaluate(self.get)

    def _assign_environment(self, symbol: MacroSymbol, value: str) -> bool:
        if not symbol.is_environment:
            return False
        os.environ[symbol.name] = value
        return True

    def _assign_property(self, symbol: MacroSymbol, value: str) -> bool:
        prop = BUILTIN_PROPERTIES.get(symbol.name)
        if prop is None:
            return False
        if prop.setter is None:
            self.host.print_message(f"Cannot modify {{{{{symbol.name}}}}} as it is not mutable.", PrintStyle.WARNING)
        else:
            prop.setter(self.host, value)
        return True

    def _assign_local(self, symbol: MacroSymbol, value: str) -> bool:
        self.variables[symbol.name] = value
        return True

    def set(self, name: str | MacroSymbol, value: str) -> None:
        symbol = name if isinstance(name, MacroSymbol) else MacroSymbol.parse(name)
        for assign in (self._assign_environment, self._assign_property, self._assign_local):
            if assign(symbol, value):
                return

    def nested(self, variables: Mapping[str, str]) -> MacroRuntimeContext:
        """Fresh frame for a parameterised call, seeded with ``variables`` only."""
        return MacroRuntimeContext(self.host, variables)

    def print_debug(self, message: str | Callable[[], str]) -> None:
        if not self.host.debug_mode:
            return
        text = message() if callable(message) else message
        log.debug(text)
        self.host.print_message(text, PrintStyle.PLAIN)

    def resolve_macro(self, macro_id: str) -> Macro:
        """Look up an identified macro; unknown ids raise ``MacroError``."""
        macro = self.host.identified_macros.get(macro_id)
        if macro is None:
            raise MacroError(f"No macro with id '{macro_id}' found")
        return macro


def run_macro(host: MacroHost, macro: Macro) -> MacroResult:
    """Run ``macro`` at top level in a fresh frame, absorbing its return."""
    log.debug("Running macro %s", macro.id or macro.description.raw)
    macro.run(MacroRuntimeContext(host))
    return MacroResult.RAN


__all__ = ["MacroResult", "MacroRuntimeContext", "run_macro"]
