"""UI theme definitions and selection helpers.

Themes map semantic roles (path, directory, key hint, ...) to ANSI SGR
prefixes. Key and menu actions refer to roles by name.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    dim: str
    path: str
    filter: str
    filter_marker: str
    directory: str
    file: str
    link: str
    unknown: str
    entry: str
    macro: str
    key_hint: str
    key_label: str
    permission_read: str
    permission_write: str
    permission_execute: str
    link_count: str
    user: str
    group: str
    size: str
    modified: str
    info: str
    success: str
    warning: str
    danger: str

    def role(self, name: str | None) -> str:
        """ANSI prefix for role ``name``; empty for unknown or missing roles."""
        if not name or name == "name" or name not in _ROLE_NAMES:
            return ""
        return getattr(self, name)

    def paint(self, role: str | None, text: str) -> str:
        prefix = self.role(role)
        if not prefix or not text:
            return text
        return f"{prefix}{text}{self.reset}"


_ROLE_NAMES = frozenset(item.name for item in fields(UITheme))

DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    dim="\033[2m",
    path="\033[1;38;5;81m",
    filter="\033[38;5;229m",
    filter_marker="\033[38;5;44m",
    directory="\033[1;34m",
    file="\033[38;5;252m",
    link="\033[38;5;44m",
    unknown="\033[35m",
    entry="\033[38;5;110m",
    macro="\033[38;5;183m",
    key_hint="\033[38;5;229m",
    key_label="\033[2;38;5;250m",
    permission_read="\033[38;5;114m",
    permission_write="\033[38;5;214m",
    permission_execute="\033[38;5;203m",
    link_count="\033[38;5;109m",
    user="\033[38;5;180m",
    group="\033[38;5;144m",
    size="\033[38;5;109m",
    modified="\033[38;5;146m",
    info="\033[38;5;81m",
    success="\033[38;5;42m",
    warning="\033[38;5;214m",
    danger="\033[1;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    dim="\033[2;38;5;110m",
    path="\033[1;38;5;45m",
    filter="\033[38;5;153m",
    filter_marker="\033[38;5;39m",
    directory="\033[1;38;5;45m",
    file="\033[38;5;252m",
    link="\033[38;5;117m",
    unknown="\033[38;5;176m",
    entry="\033[38;5;117m",
    macro="\033[38;5;153m",
    key_hint="\033[38;5;153m",
    key_label="\033[2;38;5;110m",
    permission_read="\033[38;5;84m",
    permission_write="\033[38;5;215m",
    permission_execute="\033[38;5;209m",
    link_count="\033[38;5;73m",
    user="\033[38;5;110m",
    group="\033[38;5;73m",
    size="\033[38;5;73m",
    modified="\033[38;5;110m",
    info="\033[38;5;39m",
    success="\033[38;5;84m",
    warning="\033[38;5;215m",
    danger="\033[1;38;5;209m",
)

PLAIN_THEME = UITheme(name="plain", **{name: "" for name in _ROLE_NAMES if name != "name"})

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


_HEX_COLOR_RE = re.compile(r"#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

COLOR_ROLES: tuple[str, ...] = tuple(
    item.name for item in fields(UITheme) if item.name not in {"name", "reset", "reverse"}
)


def parse_color(value: str) -> str:
    """Turn ``#rgb`` or ``#rrggbb`` into a 24-bit foreground SGR prefix.

    Raises ``ValueError`` for anything else.
    """
    match = _HEX_COLOR_RE.fullmatch(value.strip())
    if match is None:
        raise ValueError(f"Invalid color {value!r}, expected #rgb or #rrggbb")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    red, green, blue = (int(digits[index:index + 2], 16) for index in (0, 2, 4))
    return f"\033[38;2;{red};{green};{blue}m"


def with_colors(theme: UITheme, colors: Mapping[str, str]) -> UITheme:
    """Layer per-role colour overrides onto ``theme``; the plain theme stays plain."""
    if not colors or theme.name == PLAIN_THEME.name:
        return theme
    return replace(theme, **{role: parse_color(value) for role, value in colors.items()})


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "COLOR_ROLES",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "UITheme",
    "available_theme_names",
    "normalize_theme_name",
    "parse_color",
    "resolve_theme",
    "with_colors",
]
