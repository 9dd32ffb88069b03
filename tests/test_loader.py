"""Tests for building macros from decoded JSON."""

from __future__ import annotations

import unittest

from lazynav.input.keys import KeyboardEvent
from lazynav.macros import MacroDefinitionError, PrintStyle
from lazynav.macros import actions as act
from lazynav.macros import conditions as cond
from lazynav.macros.defaults import RUN_COMMAND_MACRO
from lazynav.macros.entry_macro import AfterCommand
from lazynav.macros.loader import (
    load_entry_macros,
    load_macros,
    parse_action,
    parse_condition,
    parse_entry_macro,
    parse_macro,
)


class ParseConditionTests(unittest.TestCase):
    def test_leaf_conditions(self) -> None:
        self.assertIsInstance(parse_condition({"not_empty": "{{entryName}}"}), cond.NotEmpty)
        self.assertIsInstance(parse_condition({"blank": "{{filter}}"}), cond.Blank)
        equal = parse_condition({"equal": ["{{entryType}}", "file"], "ignore_case": True})
        self.assertIsInstance(equal, cond.Equal)
        self.assertTrue(equal.ignore_case)
        match = parse_condition({"match": r".*\.py", "in": "{{entryName}}"})
        self.assertIsInstance(match, cond.Matches)
        self.assertEqual(match.pattern.pattern, r".*\.py")

    def test_nested_conditions(self) -> None:
        condition = parse_condition({"all": [{"not": {"empty": "{{a}}"}}, {"any": [{"not_blank": "{{b}}"}]}]})
        self.assertIsInstance(condition, cond.AllOf)
        self.assertIsInstance(condition.conditions[0], cond.Not)
        self.assertIsInstance(condition.conditions[1], cond.AnyOf)

    def test_unknown_condition(self) -> None:
        with self.assertRaises(MacroDefinitionError) as caught:
            parse_condition({"bogus": 1}, "macros[0].condition")
        self.assertIn("macros[0].condition", str(caught.exception))

    def test_invalid_regex(self) -> None:
        with self.assertRaises(MacroDefinitionError) as caught:
            parse_condition({"match": "(", "in": "x"})
        self.assertIn("invalid regular expression", str(caught.exception))


class ParseActionTests(unittest.TestCase):
    def test_command_with_options(self) -> None:
        action = parse_action({"command": "git status", "output_to": "out", "trim_trailing_newline": False})
        self.assertIsInstance(action, act.RunCommand)
        self.assertEqual(action.command.raw, "git status")
        self.assertEqual(action.exit_code_to, "exitCode")
        self.assertEqual(action.output_to, "out")
        self.assertFalse(action.trim_trailing_newline)

    def test_macro_call(self) -> None:
        action = parse_action(
            {"macro": "other", "parameters": {"x": "{{y}}"}, "capture": {"z": "{{x}}"}, "continue_on_return": False}
        )
        self.assertIsInstance(action, act.RunMacro)
        self.assertEqual(action.parameters["x"].raw, "{{y}}")
        self.assertEqual(action.capture["z"].raw, "{{x}}")
        self.assertFalse(action.continue_on_return)

    def test_prompt(self) -> None:
        action = parse_action({"prompt": "Name", "format": "[a-z]+", "result_to": "name"})
        self.assertIsInstance(action, act.Prompt)
        self.assertEqual(action.format.pattern, "[a-z]+")
        self.assertEqual(action.result_to, "name")
        choice = parse_action({"prompt": "Pick", "choices": ["a", "b"]})
        self.assertEqual([item.raw for item in choice.choices], ["a", "b"])

    def test_if_with_branches(self) -> None:
        action = parse_action(
            {"if": {"empty": "{{x}}"}, "then": [{"print": "empty", "style": "warning"}], "else": [{"return": True}]}
        )
        self.assertIsInstance(action, act.If)
        printed = action.then.actions[0]
        self.assertIsInstance(printed, act.Print)
        self.assertIs(printed.style, PrintStyle.WARNING)
        self.assertIsInstance(action.otherwise.actions[0], act.Return)

    def test_other_actions(self) -> None:
        self.assertIsInstance(parse_action({"open": "{{entryPath}}"}), act.OpenFile)
        self.assertIsInstance(parse_action({"set": {"a": "1"}}), act.Set)
        self.assertIsInstance(parse_action({"match": "(.*)", "in": "x", "groups_to": ["g"]}), act.Match)
        exit_action = parse_action({"exit": True, "at": "{{directory}}"})
        self.assertIsInstance(exit_action, act.Exit)
        self.assertEqual(exit_action.at.raw, "{{directory}}")

    def test_unknown_action(self) -> None:
        with self.assertRaises(MacroDefinitionError) as caught:
            parse_action({"launch": "rockets"})
        self.assertIn("could not determine type of action", str(caught.exception))

    def test_bad_print_style(self) -> None:
        with self.assertRaises(MacroDefinitionError):
            parse_action({"print": "x", "style": "loud"})

    def test_bad_option_types(self) -> None:
        with self.assertRaises(MacroDefinitionError):
            parse_action({"command": "ls", "trim_trailing_newline": "yes"})
        with self.assertRaises(MacroDefinitionError):
            parse_action({"set": ["a"]})


class ParseMacroTests(unittest.TestCase):
    def test_full_macro(self) -> None:
        macro = parse_macro(
            {
                "id": "greet",
                "description": "greet {{entryName}}",
                "key": "ctrl+g",
                "quick_mode_key": "ctrl+h",
                "menu_order": 2,
                "condition": {"not_empty": "{{entryName}}"},
                "run": [{"print": "hello", "style": "success"}],
            }
        )
        self.assertEqual(macro.id, "greet")
        self.assertEqual(macro.key, KeyboardEvent("g", ctrl=True))
        self.assertEqual(macro.quick_mode_key, KeyboardEvent("h", ctrl=True))
        self.assertEqual(macro.menu_order, 2)
        self.assertIsInstance(macro.condition, cond.NotEmpty)
        self.assertEqual(len(macro.actions.actions), 1)

    def test_errors_name_their_location(self) -> None:
        with self.assertRaises(MacroDefinitionError) as caught:
            parse_macro({"description": "x", "run": [{"set": {"a": "{{b}}", "b": "1"}}]}, "macros[3]")
        message = str(caught.exception)
        self.assertTrue(message.startswith("macros[3]"))
        self.assertIn("Circular dependency", message)

    def test_bad_key(self) -> None:
        with self.assertRaises(MacroDefinitionError):
            parse_macro({"description": "x", "key": "hyper+q"})

    def test_menu_order_must_be_integer(self) -> None:
        with self.assertRaises(MacroDefinitionError):
            parse_macro({"description": "x", "menu_order": "1"})

    def test_visible_menu_item_needs_description(self) -> None:
        with self.assertRaises(MacroDefinitionError):
            parse_macro({"menu_order": 1})


class LoadMacrosTests(unittest.TestCase):
    def test_duplicate_ids_are_rejected(self) -> None:
        with self.assertRaises(MacroDefinitionError) as caught:
            load_macros([{"id": "a"}, {"id": "a"}])
        self.assertIn("Duplicate macro id 'a'", str(caught.exception))

    def test_unknown_macro_reference(self) -> None:
        with self.assertRaises(MacroDefinitionError) as caught:
            load_macros([{"id": "a", "run": [{"if": {"empty": ""}, "then": [{"macro": "nope"}]}]}])
        self.assertIn("No macro with id 'nope' found", str(caught.exception))

    def test_references_may_target_builtins_and_placeholders(self) -> None:
        macros = load_macros(
            [{"id": "a", "run": [{"macro": "navRunCommand"}, {"macro": "{{dynamic}}"}]}],
            builtins=(RUN_COMMAND_MACRO,),
        )
        self.assertEqual([macro.id for macro in macros], ["a"])

    def test_configured_macro_may_replace_builtin(self) -> None:
        macros = load_macros([{"id": "navRunCommand", "run": []}], builtins=(RUN_COMMAND_MACRO,))
        self.assertEqual(macros[0].id, "navRunCommand")

    def test_macros_must_be_a_list(self) -> None:
        with self.assertRaises(MacroDefinitionError):
            load_macros({"id": "a"})


class ParseEntryMacroTests(unittest.TestCase):
    def test_defaults(self) -> None:
        macro = parse_entry_macro({"description": "view {entryName}", "command": "less {entryPath}"})
        self.assertEqual(macro.command, "less {entryPath}")
        self.assertFalse(macro.on_file or macro.on_directory or macro.on_symbolic_link)
        self.assertIs(macro.after_successful_command, AfterCommand.DO_NOTHING)
        self.assertIs(macro.after_failed_command, AfterCommand.DO_NOTHING)
        self.assertIsNone(macro.quick_macro_key)

    def test_after_command_is_the_fallback_for_both_outcomes(self) -> None:
        macro = parse_entry_macro(
            {
                "description": "d",
                "command": "c",
                "on_file": True,
                "after_command": "exit_at_current_directory",
                "after_failed_command": "do_nothing",
                "quick_macro_key": "ctrl+v",
            }
        )
        self.assertTrue(macro.on_file)
        self.assertIs(macro.after_successful_command, AfterCommand.EXIT_AT_CURRENT_DIRECTORY)
        self.assertIs(macro.after_failed_command, AfterCommand.DO_NOTHING)
        self.assertEqual(macro.quick_macro_key, KeyboardEvent("v", ctrl=True))

    def test_missing_command(self) -> None:
        with self.assertRaises(MacroDefinitionError) as caught:
            load_entry_macros([{"description": "d"}])
        self.assertEqual(str(caught.exception), "entry_macros[0]: missing 'command'")

    def test_bad_after_command(self) -> None:
        with self.assertRaises(MacroDefinitionError) as caught:
            parse_entry_macro({"description": "d", "command": "c", "after_command": "explode"})
        self.assertIn("entry_macro.after_command: must be one of", str(caught.exception))


if __name__ == "__main__":
    unittest.main()
