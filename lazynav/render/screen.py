"""Compose the navigator frame: title, entries, filter, menu and hints.

The output is a list of styled lines, each clipped to the terminal width so
the inline animation can track the frame height exactly.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..actions import MainActions
from ..ansi import clip_ansi_line, display_width, pad_ansi
from ..entry import Entry, EntryType
from ..runtime.config import Config
from ..state import InputMode, State
from ..ui_theme import UITheme
from .columns import is_right_aligned, render_cell
from .hints import build_hints

SELECTION_MARKER = "❯"

_TYPE_ROLES = {
    EntryType.DIRECTORY: "directory",
    EntryType.REGULAR_FILE: "file",
    EntryType.SYMBOLIC_LINK: "link",
    EntryType.UNKNOWN: "unknown",
}


@dataclass(frozen=True)
class FrameSize:
    width: int
    height: int


def format_directory(directory: Path, max_elements: int, home: Path | None = None) -> str:
    """Show ``directory`` with ``~`` for home, keeping the trailing elements."""
    home = home if home is not None else Path.home()
    parts: list[str]
    if directory == home or home in directory.parents:
        parts = ["~", *directory.relative_to(home).parts]
    else:
        parts = list(directory.parts)
    if len(parts) > max_elements:
        return "…/" + "/".join(parts[len(parts) - max_elements:])
    if parts and parts[0] == directory.anchor:
        return parts[0] + "/".join(parts[1:])
    return "/".join(parts)


def _styled(theme: UITheme, role: str | None, text: str, selected: bool) -> str:
    if not selected:
        return theme.paint(role, text)
    prefix = theme.role("reverse") + theme.role(role)
    return f"{prefix}{text}{theme.reset}" if prefix else text


def render_name(entry: Entry, theme: UITheme, selected: bool = False) -> str:
    entry_type = entry.type
    role = _TYPE_ROLES[entry_type]
    if entry_type is EntryType.DIRECTORY:
        return _styled(theme, role, f"{entry.name}/", selected)
    name = _styled(theme, role, entry.name, selected)
    if entry_type is EntryType.SYMBOLIC_LINK and entry.link_target is not None:
        target_role = _TYPE_ROLES[entry.resolved_type]
        return f"{name} {theme.paint('dim', '->')} {theme.paint(target_role, str(entry.link_target.path))}"
    return name


def _visible_window(size: int, cursor: int, rows: int) -> range:
    if size <= rows:
        return range(size)
    start = max(0, min(cursor - rows // 2, size - rows))
    return range(start, start + rows)


def _entry_rows(state: State, config: Config, theme: UITheme, rows: int) -> list[str]:
    items = state.filtered_items
    if not items:
        message = "no matching entries" if state.filter else "empty directory"
        return [theme.paint("dim", f"  {message}")]

    window = _visible_window(len(items), state.cursor, rows)
    shown = [items[index] for index in window]
    cells = {
        column: [render_cell(column, entry, theme) if entry.error is None else "" for entry in shown]
        for column in config.columns
    }
    widths = {column: max((display_width(cell) for cell in values), default=0) for column, values in cells.items()}

    lines = []
    if window.start > 0:
        lines.append(theme.paint("dim", f"  … {window.start} more"))
    for offset, entry in enumerate(shown):
        index = window.start + offset
        selected = index == state.cursor
        marker = theme.paint("filter_marker", SELECTION_MARKER) if selected else " "
        if entry.error is not None:
            columns = theme.paint("danger", entry.error)
        else:
            columns = " ".join(
                pad_ansi(cells[column][offset], widths[column], is_right_aligned(column))
                for column in config.columns
                if widths[column]
            )
        parts = [marker]
        if columns:
            parts.append(columns)
        parts.append(render_name(entry, theme, selected))
        lines.append(" ".join(parts))
    remaining = len(items) - window.stop
    if remaining > 0:
        lines.append(theme.paint("dim", f"  … {remaining} more"))
    return lines


def _menu_rows(state: State, theme: UITheme) -> list[str]:
    lines = []
    for index, action in enumerate(state.shown_menu_actions):
        selected = index == state.menu_cursor
        marker = theme.paint("filter_marker", SELECTION_MARKER) if selected else " "
        lines.append(f"{marker} {_styled(theme, action.style(state), action.description(state), selected)}")
    return lines


def _hint_line(state: State, actions: MainActions, config: Config, theme: UITheme) -> str | None:
    if config.hide_hints or state.input_mode is InputMode.DIALOG:
        return None
    if state.input_mode is InputMode.QUICK_MACRO:
        if len(actions.quick_macro) <= 1:
            return theme.paint("key_label", "No macros defined")
        return build_hints(actions.quick_macro, state, theme)
    return build_hints(actions.normal, state, theme)


def build_frame(
    state: State,
    actions: MainActions,
    config: Config,
    theme: UITheme,
    size: FrameSize,
    dialog_lines: Sequence[str] = (),
) -> list[str]:
    title = theme.paint("path", format_directory(state.directory, config.max_visible_path_elements))
    filter_line = f"{theme.paint('filter_marker', SELECTION_MARKER)} {theme.paint('filter', state.filter)}"

    footer: list[str] = []
    if state.is_menu_open:
        footer.extend(_menu_rows(state, theme))
    elif state.is_typing_command:
        footer.append(f"{theme.paint('path', SELECTION_MARKER)} {state.command}_")
    footer.extend(dialog_lines)
    hints = _hint_line(state, actions, config, theme)
    if hints:
        footer.append(hints)

    rows = config.max_visible_entries
    if config.limit_to_terminal_height:
        # title, filter line and two "more" markers
        rows = min(rows, size.height - len(footer) - 4)
    rows = max(1, rows)

    lines = [title, *_entry_rows(state, config, theme, rows), filter_line, *footer]
    return [clip_ansi_line(line, size.width) + theme.reset for line in lines]


__all__ = ["FrameSize", "SELECTION_MARKER", "build_frame", "format_directory", "render_name"]
