"""Command-line front door for lazynav.

Parses options, loads the config, and runs the interactive navigator. When
the user exits into a directory, its path is written to the handoff file for
the wrapping shell function.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import traceback
from dataclasses import replace
from pathlib import Path

from .cdfile import broadcast_change_directory
from .editor import find_editor_command, open_in_editor
from .log import setup_logs
from .runtime.config import Config, ConfigError, load_config, resolve_config_path
from .shells import detect_shell
from .ui_theme import available_theme_names, resolve_theme, with_colors

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazynav",
        description="Browse directories interactively and exit into the one you picked.",
    )
    parser.add_argument("directory", nargs="?", default=None, help="Directory to start in. Defaults to the current one.")
    hidden = parser.add_mutually_exclusive_group()
    hidden.add_argument("-a", "--all", action="store_true", help="Show hidden entries.")
    hidden.add_argument("-H", "--no-hidden", action="store_true", help="Do not show hidden entries.")
    parser.add_argument("--config", metavar="PATH", help="Config file to use instead of the default one.")
    parser.add_argument("--editor", metavar="CMD", help="Editor command used to open files.")
    parser.add_argument("--shell", metavar="NAME", help="Shell used to run commands (bash, zsh, fish, sh, pwsh, ...).")
    parser.add_argument("--theme", choices=available_theme_names(), help="UI color theme.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--debug", action="store_true", help="Write a debug log and show debug messages.")
    parser.add_argument("--edit-config", action="store_true", help="Open the config file in the editor and exit.")
    return parser


def _error(message: str) -> None:
    print(f"lazynav: {message}", file=sys.stderr)


def _edit_config(args: argparse.Namespace, config_path: Path) -> int:
    editor = find_editor_command(args.editor)
    if editor is None:
        _error("no editor found, set $EDITOR or pass --editor")
        return 1
    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text("{}\n", encoding="utf-8")
    return open_in_editor(editor, config_path, detect_shell(args.shell), Path.cwd())


def _load_config(config_path: Path) -> Config:
    try:
        return load_config(config_path)
    except ConfigError as exc:
        _error(str(exc))
        _error("falling back to the default configuration")
        return Config()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    log_file = setup_logs(args.debug)
    if log_file is not None:
        log.debug("Debug log at %s", log_file)

    config_path = resolve_config_path(args.config)
    if args.edit_config:
        return _edit_config(args, config_path)

    config = _load_config(config_path)
    if args.all:
        config = replace(config, show_hidden_entries=True)
    elif args.no_hidden:
        config = replace(config, show_hidden_entries=False)

    if not sys.stdin.isatty():
        _error("standard input must be a terminal")
        return 1

    working_directory = Path.cwd()
    directory = Path(os.path.abspath(Path(args.directory).expanduser())) if args.directory else working_directory
    if not directory.is_dir():
        _error(f"not a directory: {directory}")
        return 1

    from .runtime.controller import MainController
    from .runtime.loop import controller_callbacks, run_main_loop
    from .terminal import TerminalController

    no_color = args.no_color or bool(os.environ.get("NO_COLOR"))
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    try:
        controller = MainController(
            config=config,
            theme=with_colors(resolve_theme(args.theme or config.theme, no_color=no_color), config.colors),
            working_directory=working_directory,
            starting_directory=directory,
            editor=find_editor_command(args.editor, config.editor),
            shell=detect_shell(args.shell),
            debug_mode=args.debug,
            terminal=terminal,
        )
        target = run_main_loop(controller_callbacks(controller), terminal)
    except Exception as exc:
        log.exception("Fatal error")
        if args.debug:
            traceback.print_exc()
        else:
            _error(f"{type(exc).__name__}: {exc}")
        return 1

    if target is not None:
        broadcast_change_directory(target)
    return 0


__all__ = ["build_parser", "main"]
