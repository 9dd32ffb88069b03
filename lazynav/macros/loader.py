"""Build macros from decoded JSON config data.

Every node is a JSON object; actions and conditions are recognised by the
first known key they carry (``{"command": "..."}``, ``{"not_empty": "..."}``).
Problems raise ``MacroDefinitionError`` naming the offending location.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping

from ..input.keys import KeyboardEvent, parse_key
from . import actions as act
from . import conditions as cond
from .entry_macro import AfterCommand, EntryMacro
from .errors import MacroDefinitionError
from .host import PrintStyle
from .macro import Macro
from .placeholders import PLACEHOLDER_RE, StringWithPlaceholders
from .properties import EXIT_CODE


def _fail(where: str, message: str) -> MacroDefinitionError:
    return MacroDefinitionError(f"{where}: {message}")


def _mapping(value: object, where: str) -> Mapping[str, object]:
    if not isinstance(value, dict):
        raise _fail(where, "expected an object")
    return value


def _list(value: object, where: str) -> list[object]:
    if not isinstance(value, list):
        raise _fail(where, "expected a list")
    return value


def _string(value: object, where: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise _fail(where, "expected a string")
    return str(value)


def _text(value: object, where: str) -> StringWithPlaceholders:
    return StringWithPlaceholders(_string(value, where))


def _optional_text(data: Mapping[str, object], key: str, where: str) -> StringWithPlaceholders | None:
    value = data.get(key)
    return None if value is None else _text(value, f"{where}.{key}")


def _bool(data: Mapping[str, object], key: str, default: bool, where: str) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise _fail(f"{where}.{key}", "expected true or false")
    return value


def _name(data: Mapping[str, object], key: str, default: str | None, where: str) -> str | None:
    value = data.get(key, default)
    return None if value is None else _string(value, f"{where}.{key}")


def _regex(value: object, where: str) -> re.Pattern[str]:
    try:
        return re.compile(_string(value, where))
    except re.error as exc:
        raise _fail(where, f"invalid regular expression: {exc}") from exc


def _text_map(value: object, where: str) -> dict[str, StringWithPlaceholders]:
    return {
        _string(name, where): _text(text, f"{where}.{name}")
        for name, text in _mapping(value, where).items()
    }


def _key(value: object, where: str) -> KeyboardEvent | None:
    if value is None:
        return None
    try:
        return parse_key(_string(value, where))
    except ValueError as exc:
        raise _fail(where, str(exc)) from exc


def _texts(value: object, where: str) -> tuple[StringWithPlaceholders, ...]:
    return tuple(_text(item, f"{where}[{index}]") for index, item in enumerate(_list(value, where)))


def _conditions(value: object, where: str) -> tuple[cond.MacroCondition, ...]:
    return tuple(parse_condition(item, f"{where}[{index}]") for index, item in enumerate(_list(value, where)))


_CONDITION_PARSERS: dict[str, Callable[[Mapping[str, object], str], cond.MacroCondition]] = {
    "any": lambda data, where: cond.AnyOf(_conditions(data["any"], f"{where}.any")),
    "all": lambda data, where: cond.AllOf(_conditions(data["all"], f"{where}.all")),
    "not": lambda data, where: cond.Not(parse_condition(data["not"], f"{where}.not")),
    "equal": lambda data, where: cond.Equal(
        _texts(data["equal"], f"{where}.equal"), _bool(data, "ignore_case", False, where)
    ),
    "not_equal": lambda data, where: cond.NotEqual(
        _texts(data["not_equal"], f"{where}.not_equal"), _bool(data, "ignore_case", False, where)
    ),
    "match": lambda data, where: cond.Matches(
        _regex(data["match"], f"{where}.match"), _text(data.get("in"), f"{where}.in")
    ),
    "not_match": lambda data, where: cond.NotMatches(
        _regex(data["not_match"], f"{where}.not_match"), _text(data.get("in"), f"{where}.in")
    ),
    "empty": lambda data, where: cond.Empty(_text(data["empty"], f"{where}.empty")),
    "not_empty": lambda data, where: cond.NotEmpty(_text(data["not_empty"], f"{where}.not_empty")),
    "blank": lambda data, where: cond.Blank(_text(data["blank"], f"{where}.blank")),
    "not_blank": lambda data, where: cond.NotBlank(_text(data["not_blank"], f"{where}.not_blank")),
}


def parse_condition(value: object, where: str = "condition") -> cond.MacroCondition:
    """Build a condition from its JSON object, recursing into combinators."""
    data = _mapping(value, where)
    for kind, parser in _CONDITION_PARSERS.items():
        if kind in data:
            return parser(data, where)
    raise _fail(where, f"could not determine type of condition (must be one of: {', '.join(_CONDITION_PARSERS)})")


def _prompt(data: Mapping[str, object], where: str) -> act.MacroAction:
    return act.Prompt(
        prompt=_text(data["prompt"], f"{where}.prompt"),
        format=_regex(data["format"], f"{where}.format") if data.get("format") is not None else None,
        default=_optional_text(data, "default", where),
        choices=_texts(data.get("choices", []), f"{where}.choices"),
        result_to=_name(data, "result_to", "result", where),
    )


def _run_macro(data: Mapping[str, object], where: str) -> act.MacroAction:
    parameters = data.get("parameters")
    capture = data.get("capture")
    return act.RunMacro(
        macro=_text(data["macro"], f"{where}.macro"),
        parameters=None if parameters is None else _text_map(parameters, f"{where}.parameters"),
        capture=None if capture is None else _text_map(capture, f"{where}.capture"),
        continue_on_return=_bool(data, "continue_on_return", True, where),
        ignore_condition=_bool(data, "ignore_condition", False, where),
    )


def _run_command(data: Mapping[str, object], where: str) -> act.MacroAction:
    return act.RunCommand(
        command=_text(data["command"], f"{where}.command"),
        exit_code_to=_name(data, "exit_code_to", EXIT_CODE, where),
        output_to=_name(data, "output_to", None, where),
        error_to=_name(data, "error_to", None, where),
        trim_trailing_newline=_bool(data, "trim_trailing_newline", True, where),
    )


def _match(data: Mapping[str, object], where: str) -> act.MacroAction:
    groups_to = _list(data.get("groups_to", []), f"{where}.groups_to")
    return act.Match(
        pattern=_regex(data["match"], f"{where}.match"),
        value=_text(data.get("in"), f"{where}.in"),
        groups_to=tuple(_string(name, f"{where}.groups_to[{index}]") for index, name in enumerate(groups_to)),
    )


def _print_style(data: Mapping[str, object], where: str) -> PrintStyle:
    value = data.get("style")
    if value is None:
        return PrintStyle.PLAIN
    try:
        return PrintStyle(value)
    except ValueError as exc:
        choices = ", ".join(style.value for style in PrintStyle)
        raise _fail(f"{where}.style", f"must be one of: {choices}") from exc


_ACTION_PARSERS: dict[str, Callable[[Mapping[str, object], str], act.MacroAction]] = {
    "prompt": _prompt,
    "macro": _run_macro,
    "command": _run_command,
    "match": _match,
    "open": lambda data, where: act.OpenFile(
        _text(data["open"], f"{where}.open"), _name(data, "exit_code_to", EXIT_CODE, where)
    ),
    "set": lambda data, where: act.Set(_text_map(data["set"], f"{where}.set")),
    "if": lambda data, where: act.If(
        parse_condition(data["if"], f"{where}.if"),
        then=parse_actions(data.get("then", []), f"{where}.then"),
        otherwise=parse_actions(data.get("else", []), f"{where}.else"),
    ),
    "print": lambda data, where: act.Print(
        _text(data["print"], f"{where}.print"), _print_style(data, where), _bool(data, "debug", False, where)
    ),
    "return": lambda data, where: act.Return(_bool(data, "return", True, where)),
    "exit": lambda data, where: act.Exit(_bool(data, "exit", True, where), _optional_text(data, "at", where)),
}


def parse_action(value: object, where: str = "action") -> act.MacroAction:
    """Build one action, chosen by the first known key it carries."""
    data = _mapping(value, where)
    for kind, parser in _ACTION_PARSERS.items():
        if kind in data:
            return parser(data, where)
    raise _fail(where, f"could not determine type of action (must be one of: {', '.join(_ACTION_PARSERS)})")


def parse_actions(value: object, where: str = "run") -> act.MacroActions:
    return act.MacroActions(
        tuple(parse_action(item, f"{where}[{index}]") for index, item in enumerate(_list(value, where)))
    )


def parse_macro(value: object, where: str = "macro") -> Macro:
    """Build a ``Macro`` from one entry of the ``macros`` list."""
    data = _mapping(value, where)
    menu_order = data.get("menu_order")
    if menu_order is not None and (isinstance(menu_order, bool) or not isinstance(menu_order, int)):
        raise _fail(f"{where}.menu_order", "expected an integer")
    condition = data.get("condition")
    try:
        return Macro(
            id=_name(data, "id", None, where),
            description=_text(data.get("description", ""), f"{where}.description"),
            hidden=_bool(data, "hidden", False, where),
            key=_key(data.get("key"), f"{where}.key"),
            hide_key=_bool(data, "hide_key", False, where),
            quick_mode_key=_key(data.get("quick_mode_key"), f"{where}.quick_mode_key"),
            hide_quick_mode_key=_bool(data, "hide_quick_mode_key", False, where),
            menu_order=menu_order,
            condition=None if condition is None else parse_condition(condition, f"{where}.condition"),
            actions=parse_actions(data.get("run", []), f"{where}.run"),
        )
    except MacroDefinitionError as exc:
        if str(exc).startswith(where):
            raise
        raise _fail(where, str(exc)) from exc


def _after_command(data: Mapping[str, object], key: str, default: AfterCommand, where: str) -> AfterCommand:
    value = data.get(key)
    if value is None:
        return default
    try:
        return AfterCommand(value)
    except ValueError as exc:
        choices = ", ".join(option.value for option in AfterCommand)
        raise _fail(f"{where}.{key}", f"must be one of: {choices}") from exc


def parse_entry_macro(value: object, where: str = "entry_macro") -> EntryMacro:
    """Build an ``EntryMacro``; ``after_command`` is the default for both outcomes."""
    data = _mapping(value, where)
    for required in ("description", "command"):
        if required not in data:
            raise _fail(where, f"missing '{required}'")
    after = _after_command(data, "after_command", AfterCommand.DO_NOTHING, where)
    return EntryMacro(
        description=_string(data["description"], f"{where}.description"),
        command=_string(data["command"], f"{where}.command"),
        on_file=_bool(data, "on_file", False, where),
        on_directory=_bool(data, "on_directory", False, where),
        on_symbolic_link=_bool(data, "on_symbolic_link", False, where),
        after_successful_command=_after_command(data, "after_successful_command", after, where),
        after_failed_command=_after_command(data, "after_failed_command", after, where),
        quick_macro_key=_key(data.get("quick_macro_key"), f"{where}.quick_macro_key"),
    )


def load_entry_macros(value: object, where: str = "entry_macros") -> tuple[EntryMacro, ...]:
    """Parse the ``entry_macros`` list."""
    return tuple(parse_entry_macro(item, f"{where}[{index}]") for index, item in enumerate(_list(value, where)))


def _called_macro_ids(actions: Iterable[act.MacroAction]) -> Iterable[str]:
    for action in actions:
        if isinstance(action, act.RunMacro) and not PLACEHOLDER_RE.search(action.macro.raw):
            yield action.macro.raw
        elif isinstance(action, act.If):
            yield from _called_macro_ids(action.then)
            yield from _called_macro_ids(action.otherwise)


def identified_macros(macros: Iterable[Macro]) -> dict[str, Macro]:
    """Index macros by id; ids must be unique."""
    by_id: dict[str, Macro] = {}
    for macro in macros:
        if macro.id is None:
            continue
        if macro.id in by_id:
            raise MacroDefinitionError(f"Duplicate macro id '{macro.id}'")
        by_id[macro.id] = macro
    return by_id


def load_macros(value: object, builtins: Iterable[Macro] = (), where: str = "macros") -> tuple[Macro, ...]:
    """Parse the configured macro list and check that literal macro calls resolve.

    ``builtins`` are always available to calls but are not part of the result;
    a configured macro with the same id replaces the built-in one.
    """
    macros = tuple(parse_macro(item, f"{where}[{index}]") for index, item in enumerate(_list(value, where)))
    known = {**{macro.id: macro for macro in builtins if macro.id}, **identified_macros(macros)}
    for index, macro in enumerate(macros):
        for macro_id in _called_macro_ids(macro.actions):
            if macro_id not in known:
                raise _fail(f"{where}[{index}]", f"No macro with id '{macro_id}' found")
    return macros


__all__ = [
    "identified_macros",
    "load_entry_macros",
    "load_macros",
    "parse_action",
    "parse_actions",
    "parse_condition",
    "parse_entry_macro",
    "parse_macro",
]
