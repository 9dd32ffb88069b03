"""Tests for the main controller: effects, macro hosting, prompts and errors."""

from __future__ import annotations

import os
import re
import tempfile
import unittest
from pathlib import Path

from lazynav.effects import CreateEntry, DeleteEntry, Exit, RunEntryMacro, RunMacro
from lazynav.input.keys import KeyboardEvent
from lazynav.macros import Macro, MacroActions, StringWithPlaceholders
from lazynav.macros import actions as act
from lazynav.macros.defaults import RUN_COMMAND_MACRO
from lazynav.macros.entry_macro import AfterCommand, EntryMacro
from lazynav.macros.errors import MacroError
from lazynav.runtime.config import Config
from lazynav.runtime.controller import ELEVATED_PERMISSIONS_HINT, ExitRequested, MainController
from lazynav.shells import detect_shell
from lazynav.state import InputMode
from lazynav.ui_theme import PLAIN_THEME


def keys(*names: str) -> list[KeyboardEvent]:
    return [KeyboardEvent(name) for name in names]


class _ControllerCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        (self.root / "alpha").mkdir()
        (self.root / "notes.txt").write_text("n", encoding="utf-8")
        self.output: list[str] = []
        self.controller = self.make_controller()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def make_controller(self, **kwargs) -> MainController:
        kwargs.setdefault("config", Config())
        return MainController(
            theme=PLAIN_THEME,
            working_directory=self.root,
            starting_directory=self.root,
            write=self.output.append,
            **kwargs,
        )

    def feed(self, events) -> None:
        self.controller.read_event = iter(events).__next__

    @property
    def written(self) -> str:
        return "".join(self.output)


class MainControllerTests(_ControllerCase):
    def test_render_draws_listing(self) -> None:
        self.controller.render()
        self.assertIn("alpha/", self.written)
        self.assertIn("notes.txt", self.written)
        self.assertEqual(self.controller.animation.height, 5)

    def test_read_event_without_terminal(self) -> None:
        self.assertIsNone(self.controller.read_event())

    def test_exit_effect_raises_exit_request(self) -> None:
        with self.assertRaises(ExitRequested) as caught:
            self.controller.handle_event(KeyboardEvent("Enter"))
        self.assertEqual(caught.exception.directory, self.root)
        with self.assertRaises(ExitRequested) as caught:
            self.controller.perform(Exit(None))
        self.assertIsNone(caught.exception.directory)

    def test_create_entry_selects_new_item(self) -> None:
        self.controller.update_state(lambda state: state.with_filter("new.txt"))
        self.controller.perform(CreateEntry(self.root / "new.txt"))
        self.assertTrue((self.root / "new.txt").is_file())
        self.assertEqual(self.controller.state.filter, "")
        self.assertEqual(self.controller.state.current_item.name, "new.txt")

        self.controller.perform(CreateEntry(self.root / "newdir", directory=True))
        self.assertTrue((self.root / "newdir").is_dir())
        self.assertEqual(self.controller.state.current_item.name, "newdir")

    def test_delete_entry(self) -> None:
        self.controller.perform(DeleteEntry(self.root / "notes.txt"))
        self.assertFalse((self.root / "notes.txt").exists())
        self.assertEqual([entry.name for entry in self.controller.state.filtered_items], ["alpha"])

    def test_delete_missing_entry_raises_os_error(self) -> None:
        with self.assertRaises(OSError):
            self.controller.perform(DeleteEntry(self.root / "missing"))

    def test_show_error_prints_message_and_permission_hint(self) -> None:
        self.controller.show_error(PermissionError(13, "Permission denied", "/secret"))
        self.assertIn("Error: Permission denied: /secret", self.written)
        self.assertIn(ELEVATED_PERMISSIONS_HINT, self.written)

    def test_show_error_without_filename(self) -> None:
        self.controller.show_error(OSError("disk on fire"))
        self.assertIn("Error: disk on fire", self.written)
        self.assertNotIn(ELEVATED_PERMISSIONS_HINT, self.written)

    def test_macro_errors_propagate(self) -> None:
        broken = Macro(actions=MacroActions((act.RunMacro(StringWithPlaceholders("{{missing}}x")),)))
        with self.assertRaisesRegex(MacroError, "No macro with id 'x' found"):
            self.controller.perform(RunMacro(broken))

    def test_configured_macro_overrides_builtin(self) -> None:
        custom = Macro(id="navRunCommand", hidden=True)
        controller = self.make_controller(config=Config(macros=(custom,)))
        self.assertIs(controller.identified_macros["navRunCommand"], custom)

    def test_run_command_without_shell(self) -> None:
        self.assertIsNone(self.controller.run_command("ls"))
        self.assertIn("No supported shell found", self.written)

    def test_open_file_without_editor(self) -> None:
        self.assertIsNone(self.controller.open_file(self.root / "notes.txt"))
        self.assertIn("No editor found", self.written)

    @unittest.skipIf(os.name == "nt", "needs a POSIX shell")
    def test_builtin_run_command_macro(self) -> None:
        controller = self.make_controller(shell=detect_shell("sh"))
        controller.update_state(lambda state: state.with_command("touch made.txt"))
        controller.perform(RunMacro(RUN_COMMAND_MACRO))
        self.assertTrue((self.root / "made.txt").exists())
        self.assertIsNone(controller.state.command)
        self.assertIn("made.txt", [entry.name for entry in controller.state.filtered_items])

        controller.update_state(lambda state: state.with_command("exit 3"))
        controller.perform(RunMacro(RUN_COMMAND_MACRO))
        self.assertIn("Received exit code 3", self.written)

    def test_macro_state_reads_are_live(self) -> None:
        macro = Macro(
            actions=MacroActions(
                (
                    act.Set({"filter": StringWithPlaceholders("note")}),
                    act.Print(StringWithPlaceholders("first={{entryName}}")),
                )
            )
        )
        self.controller.perform(RunMacro(macro))
        self.assertIn("first=notes.txt", self.written)
        self.assertEqual(self.controller.state.filter, "note")


@unittest.skipIf(os.name == "nt", "needs a POSIX shell")
class EntryMacroTests(_ControllerCase):
    def setUp(self) -> None:
        super().setUp()
        self.controller = self.make_controller(shell=detect_shell("sh"))
        self.controller.update_state(lambda state: state.with_cursor_coerced(1))

    def test_command_expands_entry_placeholders(self) -> None:
        macro = EntryMacro("copy", "cp {entryName} \"{dir}/copy-{entryName}\"", on_file=True)
        self.controller.perform(RunEntryMacro(macro))
        self.assertEqual((self.root / "copy-notes.txt").read_text(encoding="utf-8"), "n")
        self.assertIn("copy-notes.txt", [entry.name for entry in self.controller.state.filtered_items])

    def test_success_exits_at_current_directory(self) -> None:
        macro = EntryMacro("ok", "true", after_successful_command=AfterCommand.EXIT_AT_CURRENT_DIRECTORY)
        with self.assertRaises(ExitRequested) as caught:
            self.controller.perform(RunEntryMacro(macro))
        self.assertEqual(caught.exception.directory, self.root)

    def test_failure_exits_at_initial_directory_without_target(self) -> None:
        macro = EntryMacro("fail", "exit 1", after_failed_command=AfterCommand.EXIT_AT_INITIAL_DIRECTORY)
        with self.assertRaises(ExitRequested) as caught:
            self.controller.perform(RunEntryMacro(macro))
        self.assertIsNone(caught.exception.directory)

    def test_failure_without_exit_reports_code(self) -> None:
        macro = EntryMacro("fail", "exit 4", after_successful_command=AfterCommand.EXIT_AT_CURRENT_DIRECTORY)
        self.controller.perform(RunEntryMacro(macro))
        self.assertIn("Received exit code 4", self.written)


class PromptTests(_ControllerCase):
    def test_text_prompt_returns_typed_text(self) -> None:
        self.feed([None, *keys("h", "i", "Enter")])
        self.assertEqual(self.controller.prompt_text("Name"), "hi")
        self.assertIs(self.controller.state.input_mode, InputMode.NORMAL)
        self.assertIn("Name ❯ hi_", self.written)

    def test_text_prompt_default_and_cancel(self) -> None:
        self.feed(keys("x", "Escape"))
        self.assertIsNone(self.controller.prompt_text("Name", default="abc"))
        self.feed(keys("Enter"))
        self.assertEqual(self.controller.prompt_text("Name", default="abc"), "abc")

    def test_text_prompt_enforces_format(self) -> None:
        self.feed(keys("a", "Enter", "Backspace", "1", "Enter"))
        self.assertEqual(self.controller.prompt_text("Number", pattern=re.compile(r"\d+")), "1")
        self.assertIn("Input must match \\d+", self.written)

    def test_choice_prompt_filters_and_selects(self) -> None:
        self.feed(keys("b", "Enter"))
        self.assertEqual(self.controller.prompt_choice("Pick", ["apple", "banana"]), "banana")
        self.feed(keys("Enter"))
        self.assertEqual(self.controller.prompt_choice("Pick", ["apple", "banana"], default="banana"), "banana")
        self.feed(keys("ArrowDown", "Enter"))
        self.assertEqual(self.controller.prompt_choice("Pick", ["apple", "banana"]), "banana")

    def test_choice_prompt_cannot_submit_without_matches(self) -> None:
        self.feed(keys("z", "Enter", "Escape", "Escape"))
        self.assertIsNone(self.controller.prompt_choice("Pick", ["apple"]))
        self.assertIn("no matching choices", self.written)

    def test_ctrl_c_in_prompt_exits(self) -> None:
        self.feed([KeyboardEvent("c", ctrl=True)])
        with self.assertRaises(ExitRequested):
            self.controller.prompt_text("Name")
        self.assertIs(self.controller.state.input_mode, InputMode.NORMAL)

    def test_closed_input_in_prompt_exits_without_target(self) -> None:
        def closed() -> KeyboardEvent:
            raise EOFError("end of input")

        self.controller.read_event = closed
        with self.assertRaises(ExitRequested) as raised:
            self.controller.prompt_choice("Pick", ["apple"])
        self.assertIsNone(raised.exception.directory)
        self.assertIs(self.controller.state.input_mode, InputMode.NORMAL)

    def test_prompt_macro_action_through_controller(self) -> None:
        macro = Macro(
            actions=MacroActions(
                (
                    act.Prompt(StringWithPlaceholders("Filter")),
                    act.Set({"filter": StringWithPlaceholders("{{result}}")}),
                )
            )
        )
        self.feed(keys("a", "l", "Enter"))
        self.controller.perform(RunMacro(macro))
        self.assertEqual(self.controller.state.filter, "al")


if __name__ == "__main__":
    unittest.main()
