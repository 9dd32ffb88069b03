"""Macro interpreter exceptions."""

from __future__ import annotations


class MacroError(Exception):
    """A macro could not be run, e.g. it references an unknown macro id."""


class MacroDefinitionError(MacroError, ValueError):
    """A macro definition is invalid and was rejected while loading."""


__all__ = ["MacroDefinitionError", "MacroError"]
