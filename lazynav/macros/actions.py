"""Macro action nodes.

Each node runs against a ``MacroRuntimeContext`` and reports whether the
enclosing macro should keep going (``RAN``) or unwind (``RETURNED``).
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from .conditions import MacroCondition
from .errors import MacroDefinitionError
from .host import PrintStyle
from .placeholders import StringWithPlaceholders
from .properties import EXIT_CODE
from .runtime import MacroResult, MacroRuntimeContext


class MacroAction:
    """Base for macro actions; ``run`` reports whether the sequence continues."""
    def run(self, context: MacroRuntimeContext) -> MacroResult:
        raise NotImplementedError


@dataclass(frozen=True)
class MacroActions:
    """Ordered action sequence; stops at the first ``RETURNED``."""

    actions: tuple[MacroAction, ...] = ()

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        for action in self.actions:
            if action.run(context) is MacroResult.RETURNED:
                return MacroResult.RETURNED
        return MacroResult.RAN

    def __iter__(self):
        return iter(self.actions)


def trim_trailing_newline(text: str) -> str:
    """Drop one trailing ``\\r\\n``, ``\\r`` or ``\\n``."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith(("\r", "\n")):
        return text[:-1]
    return text


def _resolve_path(context: MacroRuntimeContext, raw: str) -> Path:
    path = Path(os.path.expanduser(raw))
    if not path.is_absolute():
        path = context.host.state.directory / path
    return Path(os.path.normpath(path))


@dataclass(frozen=True)
class RunCommand(MacroAction):
    command: StringWithPlaceholders
    exit_code_to: str = EXIT_CODE
    output_to: str | None = None
    error_to: str | None = None
    trim_trailing_newline: bool = True

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        result = context.host.run_command(
            context.evaluate(self.command),
            collect_output=self.output_to is not None,
            collect_error=self.error_to is not None,
        )
        context.set(self.exit_code_to, str(result.exit_code) if result is not None else "")
        if self.output_to is not None:
            output = result.stdout if result is not None else ""
            context.set(self.output_to, trim_trailing_newline(output) if self.trim_trailing_newline else output)
        if self.error_to is not None:
            context.set(self.error_to, result.stderr if result is not None else "")
        return MacroResult.RAN


@dataclass(frozen=True)
class OpenFile(MacroAction):
    open: StringWithPlaceholders
    exit_code_to: str = EXIT_CODE

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        exit_code = context.host.open_file(_resolve_path(context, context.evaluate(self.open)))
        context.set(self.exit_code_to, str(exit_code) if exit_code is not None else "")
        return MacroResult.RAN


@dataclass(frozen=True)
class Prompt(MacroAction):
    """Ask the user for text or one of ``choices``; cancelling returns."""

    prompt: StringWithPlaceholders
    format: re.Pattern[str] | None = None
    default: StringWithPlaceholders | None = None
    choices: tuple[StringWithPlaceholders, ...] = ()
    result_to: str = "result"

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        prompt = context.evaluate(self.prompt)
        default = context.evaluate(self.default) if self.default is not None else None
        if self.choices:
            choices = [context.evaluate(choice) for choice in self.choices]
            result = context.host.prompt_choice(prompt, choices, default)
        else:
            result = context.host.prompt_text(prompt, default or "", self.format)
        if result is None:
            return MacroResult.RETURNED
        context.set(self.result_to, result)
        return MacroResult.RAN


@dataclass(frozen=True)
class Match(MacroAction):
    """Match ``value`` in full against ``pattern``; group ``n`` goes to ``groups_to[n - 1]``."""

    pattern: re.Pattern[str]
    value: StringWithPlaceholders
    groups_to: tuple[str, ...] = ()

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        match = self.pattern.fullmatch(context.evaluate(self.value))
        if match is not None:
            for name, group in zip(self.groups_to, match.groups()):
                context.set(name, group or "")
        return MacroResult.RAN


@dataclass(frozen=True)
class Set(MacroAction):
    assignments: dict[str, StringWithPlaceholders] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for variable, value in self.assignments.items():
            for name in value.placeholders:
                if name != variable and name in self.assignments:
                    raise MacroDefinitionError(
                        f"Circular dependency: Variable '{variable}' depends on '{name}' "
                        "which is also being set in the same action."
                    )

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        for variable, value in self.assignments.items():
            context.set(variable, context.evaluate(value))
        return MacroResult.RAN


@dataclass(frozen=True)
class If(MacroAction):
    condition: MacroCondition
    then: MacroActions = MacroActions()
    otherwise: MacroActions = MacroActions()

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        branch = self.then if self.condition.evaluate(context) else self.otherwise
        return branch.run(context)


@dataclass(frozen=True)
class Print(MacroAction):
    message: StringWithPlaceholders
    style: PrintStyle = PrintStyle.PLAIN
    debug: bool = False

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        if self.debug and not context.host.debug_mode:
            return MacroResult.RAN
        context.host.print_message(context.evaluate(self.message), self.style)
        return MacroResult.RAN


@dataclass(frozen=True)
class Return(MacroAction):
    enabled: bool = True

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        return MacroResult.RETURNED if self.enabled else MacroResult.RAN


@dataclass(frozen=True)
class Exit(MacroAction):
    """Exit the application, at ``at`` when it names an existing directory."""

    enabled: bool = True
    at: StringWithPlaceholders | None = None

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        if not self.enabled:
            return MacroResult.RAN
        target = None
        if self.at is not None:
            raw = context.evaluate(self.at)
            if raw:
                candidate = _resolve_path(context, raw)
                target = candidate if candidate.is_dir() else None
        context.host.exit(target)
        return MacroResult.RAN


@dataclass(frozen=True)
class RunMacro(MacroAction):
    """Call another macro in a nested frame.

    Without ``parameters`` the callee sees a copy of all caller variables and
    everything it ends up with is copied back. With ``parameters`` only those
    values (evaluated in the caller) go in, and only ``capture`` entries
    (evaluated in the callee) come back. A ``Return`` inside the callee stops
    at this call unless ``continue_on_return`` is false.
    """

    macro: StringWithPlaceholders
    parameters: dict[str, StringWithPlaceholders] | None = None
    capture: dict[str, StringWithPlaceholders] | None = None
    continue_on_return: bool = True
    ignore_condition: bool = False

    def run(self, context: MacroRuntimeContext) -> MacroResult:
        macro_id = context.evaluate(self.macro)
        target = context.resolve_macro(macro_id)

        if self.parameters is None:
            callee = context.nested(context.variables)
        else:
            callee = context.nested({name: context.evaluate(value) for name, value in self.parameters.items()})

        if not self.ignore_condition and not target.is_available(callee):
            context.print_debug(lambda: f"Skipping macro '{macro_id}' because its condition was not met.")
            return MacroResult.RAN

        result = target.run(callee)

        if self.capture is not None:
            for name, value in self.capture.items():
                context.set(name, callee.evaluate(value))
        elif self.parameters is None:
            context.variables.update(callee.variables)

        if result is MacroResult.RETURNED and not self.continue_on_return:
            return MacroResult.RETURNED
        return MacroResult.RAN


__all__ = [
    "Exit",
    "If",
    "MacroAction",
    "MacroActions",
    "Match",
    "OpenFile",
    "Print",
    "Prompt",
    "Return",
    "RunCommand",
    "RunMacro",
    "Set",
    "trim_trailing_newline",
]
