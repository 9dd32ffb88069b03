"""JSON configuration: behaviour toggles, key bindings, columns and macros.

A missing file means defaults. Anything present is validated strictly and
reported as ``ConfigError`` so the CLI can warn and fall back to defaults.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from ..input.keys import KeyboardEvent, parse_key
from ..list_model import AutoNavigation, AutocompleteStyle
from ..macros.defaults import DEFAULT_MACROS
from ..macros.errors import MacroDefinitionError
from ..macros.entry_macro import EntryMacro
from ..macros.loader import load_entry_macros, load_macros
from ..macros.macro import Macro
from ..ui_theme import COLOR_ROLES, parse_color

log = logging.getLogger(__name__)

APP_NAME = "lazynav"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "LAZYNAV_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

COLUMN_NAMES = ("permissions", "hard_link_count", "user_name", "group_name", "size", "last_modified")
DEFAULT_COLUMNS = ("permissions", "size", "last_modified")


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class CursorKeys:
    up: KeyboardEvent = KeyboardEvent("ArrowUp")
    down: KeyboardEvent = KeyboardEvent("ArrowDown")
    home: KeyboardEvent = KeyboardEvent("Home")
    end: KeyboardEvent = KeyboardEvent("End")


@dataclass(frozen=True)
class MenuKeys:
    up: KeyboardEvent = KeyboardEvent("PageUp")
    down: KeyboardEvent = KeyboardEvent("PageDown")


@dataclass(frozen=True)
class NavKeys:
    up: KeyboardEvent = KeyboardEvent("ArrowLeft")
    into: KeyboardEvent = KeyboardEvent("ArrowRight")
    open: KeyboardEvent = KeyboardEvent("ArrowRight")


@dataclass(frozen=True)
class FilterKeys:
    autocomplete: KeyboardEvent = KeyboardEvent("Tab")
    clear: KeyboardEvent = KeyboardEvent("Escape")


@dataclass(frozen=True)
class Keys:
    cursor: CursorKeys = CursorKeys()
    menu: MenuKeys = MenuKeys()
    nav: NavKeys = NavKeys()
    filter: FilterKeys = FilterKeys()
    submit: KeyboardEvent = KeyboardEvent("Enter")
    cancel: KeyboardEvent = KeyboardEvent("Escape")


@dataclass(frozen=True)
class AutocompleteConfig:
    style: AutocompleteStyle = AutocompleteStyle.COMMON_PREFIX_CYCLE
    auto_navigation: AutoNavigation = AutoNavigation.ON_SINGLE_AFTER_COMPLETION


@dataclass(frozen=True)
class Config:
    editor: str | None = None
    hide_hints: bool = False
    clear_on_exit: bool = True
    limit_to_terminal_height: bool = True
    max_visible_entries: int = 40
    max_visible_path_elements: int = 6
    show_hidden_entries: bool = True
    input_timeout_millis: int = 250
    theme: str = "default"
    colors: Mapping[str, str] = field(default_factory=dict)
    columns: tuple[str, ...] = DEFAULT_COLUMNS
    keys: Keys = Keys()
    autocomplete: AutocompleteConfig = AutocompleteConfig()
    entry_macros: tuple[EntryMacro, ...] = ()
    macros: tuple[Macro, ...] = ()
    builtin_macros: tuple[Macro, ...] = field(default=DEFAULT_MACROS, repr=False)


def resolve_config_path(cli_path: str | os.PathLike[str] | None = None) -> Path:
    """Return ``--config``, else ``$LAZYNAV_CONFIG``, else the platform default."""
    if cli_path:
        return Path(cli_path).expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def _bool(value: object, where: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{where}: expected true or false")
    return value


def _positive_int(value: object, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{where}: expected a positive integer")
    return value


def _optional_str(value: object, where: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{where}: expected a string")
    stripped = value.strip()
    return stripped if stripped else None


def _theme_name(value: object, where: str) -> str:
    return _optional_str(value, where) or "default"


def _colors(value: object, where: str) -> dict[str, str]:
    """Role to ``#rrggbb`` overrides, layered onto the theme at startup."""
    if not isinstance(value, dict):
        raise ConfigError(f"{where}: expected an object")
    colors = {}
    for role, color in value.items():
        if role not in COLOR_ROLES:
            raise ConfigError(f"{where}: unknown color role {role!r} (must be one of: {', '.join(COLOR_ROLES)})")
        if not isinstance(color, str):
            raise ConfigError(f"{where}.{role}: expected a color string")
        try:
            parse_color(color)
        except ValueError as exc:
            raise ConfigError(f"{where}.{role}: {exc}") from exc
        colors[role] = color.strip()
    return colors


def _columns(value: object, where: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigError(f"{where}: expected a list")
    columns = []
    for index, name in enumerate(value):
        if name not in COLUMN_NAMES:
            raise ConfigError(f"{where}[{index}]: unknown column {name!r} (must be one of: {', '.join(COLUMN_NAMES)})")
        columns.append(name)
    return tuple(columns)


def _key(value: object, where: str) -> KeyboardEvent:
    if not isinstance(value, str):
        raise ConfigError(f"{where}: expected a key string")
    try:
        return parse_key(value)
    except ValueError as exc:
        raise ConfigError(f"{where}: {exc}") from exc


def _enum(enum_type: type) -> Callable[[object, str], Any]:
    def parse(value: object, where: str) -> Any:
        try:
            return enum_type(value)
        except ValueError as exc:
            choices = ", ".join(member.value for member in enum_type)
            raise ConfigError(f"{where}: must be one of: {choices}") from exc

    return parse


def _group(group_type: type, parsers: Mapping[str, Callable[[object, str], Any]]) -> Callable[[object, str], Any]:
    """Parser for a nested object whose keys are the fields of ``group_type``."""
    names = {item.name for item in fields(group_type)}

    def parse(value: object, where: str) -> Any:
        if not isinstance(value, dict):
            raise ConfigError(f"{where}: expected an object")
        unknown = sorted(set(value) - names)
        if unknown:
            raise ConfigError(f"{where}: unknown key {unknown[0]!r}")
        return group_type(
            **{name: parsers.get(name, _key)(item, f"{where}.{name}") for name, item in value.items()}
        )

    return parse


_KEYS_PARSER = _group(
    Keys,
    {
        "cursor": _group(CursorKeys, {}),
        "menu": _group(MenuKeys, {}),
        "nav": _group(NavKeys, {}),
        "filter": _group(FilterKeys, {}),
    },
)

_FIELD_PARSERS: dict[str, Callable[[object, str], Any]] = {
    "editor": _optional_str,
    "hide_hints": _bool,
    "clear_on_exit": _bool,
    "limit_to_terminal_height": _bool,
    "max_visible_entries": _positive_int,
    "max_visible_path_elements": _positive_int,
    "show_hidden_entries": _bool,
    "input_timeout_millis": _positive_int,
    "theme": _theme_name,
    "colors": _colors,
    "columns": _columns,
    "keys": _KEYS_PARSER,
    "autocomplete": _group(
        AutocompleteConfig,
        {"style": _enum(AutocompleteStyle), "auto_navigation": _enum(AutoNavigation)},
    ),
}


_MACRO_LOADERS: dict[str, Callable[[object], tuple]] = {
    "macros": lambda value: load_macros(value, builtins=DEFAULT_MACROS),
    "entry_macros": load_entry_macros,
}


def parse_config(data: object) -> Config:
    """Build a ``Config`` from a decoded JSON object."""
    if not isinstance(data, dict):
        raise ConfigError("config: expected a top-level JSON object")
    values: dict[str, Any] = {}
    for name, value in data.items():
        loader = _MACRO_LOADERS.get(name)
        if loader is not None:
            try:
                values[name] = loader(value)
            except MacroDefinitionError as exc:
                raise ConfigError(str(exc)) from exc
            continue
        parser = _FIELD_PARSERS.get(name)
        if parser is None:
            raise ConfigError(f"config: unknown key {name!r}")
        values[name] = parser(value, name)
    return Config(**values)


def load_config(path: Path) -> Config:
    """Load ``path``, returning defaults when the file does not exist."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("No config file at %s, using defaults", path)
        return Config()
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed config file {path}: {exc}") from exc
    config = parse_config(data)
    log.debug("Loaded config from %s with %d macros", path, len(config.macros))
    return config


__all__ = [
    "APP_NAME",
    "AutocompleteConfig",
    "COLUMN_NAMES",
    "CONFIG_ENV_VAR",
    "Config",
    "ConfigError",
    "CursorKeys",
    "DEFAULT_CONFIG_PATH",
    "FilterKeys",
    "Keys",
    "MenuKeys",
    "NavKeys",
    "load_config",
    "parse_config",
    "resolve_config_path",
]
