"""Entry metadata columns: permissions, link count, owner, size, age."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from ..entry import Entry, PermissionSet
from ..ui_theme import UITheme

SIZE_UNITS = ("k", "M", "G", "T", "P")


def format_size(size: int | None) -> str:
    """Human readable size in steps of 1000 (``999``, ``1.2k``, ``34M``)."""
    if size is None:
        return ""
    if size < 1000:
        return str(size)
    value = float(size)
    for unit in SIZE_UNITS:
        value /= 1000
        if value < 1000 or unit == SIZE_UNITS[-1]:
            return f"{value:.1f}{unit}" if value < 10 else f"{value:.0f}{unit}"
    raise AssertionError("unreachable")


def format_relative_time(moment: datetime | None, now: datetime | None = None) -> str:
    if moment is None:
        return ""
    now = now or datetime.now()
    seconds = int((now - moment).total_seconds())
    if seconds < 0:
        return moment.strftime("%Y-%m-%d")
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    if seconds < 30 * 86400:
        return f"{seconds // 86400}d ago"
    return moment.strftime("%Y-%m-%d")


def _permission_set(permissions: PermissionSet, theme: UITheme) -> str:
    return (
        theme.paint("permission_read", "r" if permissions.read else "-")
        + theme.paint("permission_write", "w" if permissions.write else "-")
        + theme.paint("permission_execute", "x" if permissions.execute else "-")
    )


def _permissions(entry: Entry, theme: UITheme) -> str:
    permissions = entry.permissions
    if permissions is None:
        return ""
    return "".join(_permission_set(part, theme) for part in (permissions.user, permissions.group, permissions.others))


def _plain(role: str, value: Callable[[Entry], object]) -> Callable[[Entry, UITheme], str]:
    def render(entry: Entry, theme: UITheme) -> str:
        raw = value(entry)
        return theme.paint(role, "" if raw is None else str(raw))

    return render


# name -> (renderer, right aligned)
COLUMN_RENDERERS: dict[str, tuple[Callable[[Entry, UITheme], str], bool]] = {
    "permissions": (_permissions, False),
    "hard_link_count": (_plain("link_count", lambda entry: entry.hard_link_count), True),
    "user_name": (_plain("user", lambda entry: entry.user_name), False),
    "group_name": (_plain("group", lambda entry: entry.group_name), False),
    "size": (_plain("size", lambda entry: format_size(entry.size)), True),
    "last_modified": (_plain("modified", lambda entry: format_relative_time(entry.last_modified)), True),
}


def render_cell(column: str, entry: Entry, theme: UITheme) -> str:
    renderer, _ = COLUMN_RENDERERS[column]
    return renderer(entry, theme)


def is_right_aligned(column: str) -> bool:
    return COLUMN_RENDERERS[column][1]


__all__ = [
    "COLUMN_RENDERERS",
    "SIZE_UNITS",
    "format_relative_time",
    "format_size",
    "is_right_aligned",
    "render_cell",
]
