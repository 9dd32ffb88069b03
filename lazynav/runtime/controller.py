"""Main controller: owns the live state and performs side effects.

Implements ``MacroHost`` for the macro interpreter, runs child processes with
the UI suspended and drives nested input loops for prompts.
"""

from __future__ import annotations

import contextlib
import logging
import re
from collections.abc import Callable, Sequence
from pathlib import Path

from ..actions import ActionContext, MainActions, build_main_actions
from ..dialogs import ChoicePromptDialog, Dialog, TextPromptDialog
from ..dispatch import CANCEL_EVERYTHING, process_input
from ..editor import editor_display_name, open_in_editor
from ..effects import CreateEntry, DeleteEntry, Effect, Exit, OpenInEditor, RunEntryMacro, RunMacro
from ..input.keys import KeyboardEvent
from ..input.reader import read_key
from ..macros.entry_macro import AfterCommand, EntryMacro
from ..macros.host import PrintStyle
from ..macros.macro import Macro
from ..macros.runtime import MacroRuntimeContext, run_macro
from ..process import ProcessResult, run_process
from ..render import FrameSize, InlineAnimation, build_frame
from ..shells import Shell
from ..state import InputMode, State
from ..terminal import TerminalController
from ..ui_theme import UITheme
from .config import Config

log = logging.getLogger(__name__)

ELEVATED_PERMISSIONS_HINT = "Try running lazynav with elevated permissions"

_PRINT_ROLES = {
    PrintStyle.PLAIN: None,
    PrintStyle.INFO: "info",
    PrintStyle.SUCCESS: "success",
    PrintStyle.WARNING: "warning",
    PrintStyle.ERROR: "danger",
}


class ExitRequested(Exception):
    """Stop the main loop, optionally handing ``directory`` to the parent shell."""

    def __init__(self, directory: Path | None = None) -> None:
        super().__init__(directory)
        self.directory = directory


class _StateSnapshotHost:
    """Controller view whose ``state`` is pinned to one value.

    Used to evaluate macro conditions and descriptions against the state an
    action table is looking at rather than the live one.
    """

    def __init__(self, host: MainController, state: State) -> None:
        self._host = host
        self._state = state

    @property
    def state(self) -> State:
        return self._state

    def __getattr__(self, name: str):
        return getattr(self._host, name)


class MainController:
    def __init__(
        self,
        config: Config,
        theme: UITheme,
        working_directory: Path,
        starting_directory: Path,
        editor: str | None = None,
        shell: Shell | None = None,
        debug_mode: bool = False,
        terminal: TerminalController | None = None,
        write: Callable[[str], None] | None = None,
    ) -> None:
        self.config = config
        self.theme = theme
        self.working_directory = working_directory
        self.starting_directory = starting_directory
        self.editor = editor
        self.shell = shell
        self.debug_mode = debug_mode
        self.terminal = terminal
        self.identified_macros: dict[str, Macro] = {
            macro.id: macro for macro in (*config.builtin_macros, *config.macros) if macro.id
        }
        self.actions: MainActions = build_main_actions(
            ActionContext(
                config=config,
                working_directory=working_directory,
                editor_name=editor_display_name(editor),
                macro_context=self.macro_context,
                identified_macros=self.identified_macros,
            )
        )
        if write is None:
            write = terminal.write if terminal is not None else (lambda text: None)
        self.animation = InlineAnimation(write)
        self._state = State.initial(starting_directory, config.show_hidden_entries, self.actions.menu)
        self._dialog: Dialog | None = None

    @property
    def shell_name(self) -> str | None:
        return self.shell.name if self.shell is not None else None

    @property
    def state(self) -> State:
        return self._state

    def update_state(self, transform: Callable[[State], State]) -> None:
        self._state = transform(self._state)

    def macro_context(self, state: State) -> MacroRuntimeContext:
        return MacroRuntimeContext(_StateSnapshotHost(self, state))

    def render(self) -> None:
        size = self.terminal.size() if self.terminal is not None else None
        frame_size = FrameSize(size.columns, size.lines) if size is not None else FrameSize(80, 24)
        dialog_lines: Sequence[str] = ()
        if self._dialog is not None:
            dialog_lines = self._dialog.render(self.theme, max(1, min(10, frame_size.height // 3)))
        self.animation.draw(build_frame(self._state, self.actions, self.config, self.theme, frame_size, dialog_lines))

    def read_event(self) -> KeyboardEvent | None:
        if self.terminal is None:
            return None
        return read_key(self.terminal.stdin_fd, timeout_ms=self.config.input_timeout_millis)

    def handle_event(self, event: KeyboardEvent) -> None:
        result = process_input(self._state, event, self.actions)
        self._state = result.state
        if result.effect is not None:
            self.perform(result.effect)

    def perform(self, effect: Effect) -> None:
        log.debug("Performing %s", effect)
        if isinstance(effect, Exit):
            self.exit(effect.directory)
        elif isinstance(effect, OpenInEditor):
            self.open_file(effect.path)
        elif isinstance(effect, RunMacro):
            run_macro(self, effect.macro)
        elif isinstance(effect, RunEntryMacro):
            self._run_entry_macro(effect.entry_macro)
        elif isinstance(effect, CreateEntry):
            self._create_entry(effect)
        elif isinstance(effect, DeleteEntry):
            effect.path.unlink()
            self.update_state(lambda state: state.updated_entries())
        else:
            raise TypeError(f"Unknown effect {effect!r}")

    def _run_entry_macro(self, entry_macro: EntryMacro) -> None:
        state = self._state
        entry = state.current_item
        if entry is None:
            return
        command = entry_macro.command_for(entry, state.directory, state.filter, self.working_directory)
        result = self.run_command(command)
        if result is None:
            return
        succeeded = result.exit_code == 0
        after = entry_macro.after(succeeded)
        if after is AfterCommand.EXIT_AT_CURRENT_DIRECTORY:
            self.exit(self._state.directory)
        elif after is AfterCommand.EXIT_AT_INITIAL_DIRECTORY:
            self.exit(None)
        elif not succeeded:
            self.print_message(f"Received exit code {result.exit_code}", PrintStyle.ERROR)

    def _create_entry(self, effect: CreateEntry) -> None:
        if effect.directory:
            effect.path.mkdir(parents=True, exist_ok=True)
        else:
            effect.path.touch()
        name = effect.path.name
        self.update_state(lambda state: state.with_filter("").updated_entries(lambda entry: entry.name == name))

    def show_error(self, error: OSError) -> None:
        """Report an I/O failure from an effect without leaving the UI."""
        log.warning("Action failed: %s", error)
        detail = error.strerror or str(error)
        target = error.filename
        self.print_message(f"Error: {detail}" + (f": {target}" if target else ""), PrintStyle.ERROR)
        if isinstance(error, PermissionError):
            self.print_message(ELEVATED_PERMISSIONS_HINT, PrintStyle.INFO)

    def finish(self) -> None:
        self.animation.finish(clear=self.config.clear_on_exit)

    @contextlib.contextmanager
    def _suspended(self):
        self.animation.clear()
        if self.terminal is None:
            yield
            return
        with self.terminal.suspended():
            yield

    def run_command(
        self,
        command: str,
        collect_output: bool = False,
        collect_error: bool = False,
    ) -> ProcessResult | None:
        if self.shell is None:
            self.print_message("No supported shell found, set $SHELL or pass --shell", PrintStyle.ERROR)
            return None
        with self._suspended():
            result = run_process(
                self.shell.name,
                self.shell.command_args(command),
                self._state.directory,
                collect_output=collect_output,
                collect_error=collect_error,
            )
        self.update_state(lambda state: state.updated_entries())
        return result

    def open_file(self, path: Path) -> int | None:
        if self.editor is None:
            self.print_message("No editor found, set $EDITOR or the editor config option", PrintStyle.ERROR)
            return None
        with self._suspended():
            exit_code = open_in_editor(self.editor, path, self.shell, self._state.directory)
        self.update_state(lambda state: state.updated_entries())
        return exit_code

    def prompt_text(self, prompt: str, default: str = "", pattern: re.Pattern[str] | None = None) -> str | None:
        return self._run_dialog(TextPromptDialog(prompt, self.config.keys, default, pattern))

    def prompt_choice(self, prompt: str, choices: Sequence[str], default: str | None = None) -> str | None:
        return self._run_dialog(ChoicePromptDialog(prompt, tuple(choices), self.config.keys, default))

    def _run_dialog(self, dialog: Dialog) -> str | None:
        previous_mode = self._state.input_mode
        self._dialog = dialog
        self._state = self._state.with_input_mode(InputMode.DIALOG)
        try:
            while True:
                self.render()
                try:
                    event = self.read_event()
                except EOFError:
                    self.exit(None)
                if event is None:
                    continue
                if event == CANCEL_EVERYTHING:
                    self.exit(None)
                outcome = dialog.handle(event)
                if outcome is not None:
                    return outcome.value
        finally:
            self._dialog = None
            self._state = self._state.with_input_mode(previous_mode)

    def print_message(self, message: str, style: PrintStyle = PrintStyle.PLAIN) -> None:
        log.info("%s: %s", style.value, message)
        self.animation.print_above(self.theme.paint(_PRINT_ROLES[style], message))

    def exit(self, directory: Path | None) -> None:
        raise ExitRequested(directory)


__all__ = ["ELEVATED_PERMISSIONS_HINT", "ExitRequested", "MainController"]
