"""Strings with ``{{name}}`` placeholders and macro symbol names."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

PLACEHOLDER_RE = re.compile(r"\{\{(.+?)\}\}")
ENVIRONMENT_PREFIX = "env:"


@dataclass(frozen=True)
class MacroSymbol:
    """A variable name, or a reference to an environment variable (``env:NAME``)."""

    name: str
    is_environment: bool = False

    @classmethod
    def parse(cls, text: str) -> MacroSymbol:
        if text.startswith(ENVIRONMENT_PREFIX):
            return cls(text[len(ENVIRONMENT_PREFIX):], is_environment=True)
        return cls(text)

    def __str__(self) -> str:
        return f"{ENVIRONMENT_PREFIX}{self.name}" if self.is_environment else self.name


@dataclass(frozen=True)
class StringWithPlaceholders:
    raw: str = ""

    @property
    def placeholders(self) -> tuple[str, ...]:
        return tuple(match.group(1) for match in PLACEHOLDER_RE.finditer(self.raw))

    @property
    def symbols(self) -> tuple[MacroSymbol, ...]:
        return tuple(MacroSymbol.parse(name) for name in self.placeholders)

    def evaluate(self, lookup: Callable[[MacroSymbol], str]) -> str:
        return PLACEHOLDER_RE.sub(lambda match: lookup(MacroSymbol.parse(match.group(1))), self.raw)

    def __str__(self) -> str:
        return self.raw


def placeholder(name: str) -> StringWithPlaceholders:
    """Text consisting of the single placeholder ``{{name}}``."""
    return StringWithPlaceholders("{{" + name + "}}")


__all__ = ["ENVIRONMENT_PREFIX", "MacroSymbol", "PLACEHOLDER_RE", "StringWithPlaceholders", "placeholder"]
