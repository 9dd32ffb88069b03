"""Tests for config path resolution, parsing and loading."""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazynav.input.keys import KeyboardEvent
from lazynav.list_model import AutocompleteStyle, AutoNavigation
from lazynav.macros.defaults import RUN_COMMAND_MACRO
from lazynav.runtime.config import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    Config,
    ConfigError,
    load_config,
    parse_config,
    resolve_config_path,
)


class ResolveConfigPathTests(unittest.TestCase):
    def test_cli_path_wins(self) -> None:
        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: "/from/env.json"}):
            self.assertEqual(resolve_config_path("/from/cli.json"), Path("/from/cli.json"))

    def test_environment_variable(self) -> None:
        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: "/from/env.json"}):
            self.assertEqual(resolve_config_path(), Path("/from/env.json"))

    def test_platform_default(self) -> None:
        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: ""}):
            self.assertEqual(resolve_config_path(), DEFAULT_CONFIG_PATH)


class ParseConfigTests(unittest.TestCase):
    def test_empty_object_gives_defaults(self) -> None:
        config = parse_config({})
        self.assertEqual(config, Config())
        self.assertEqual(config.input_timeout_millis, 250)
        self.assertEqual(config.keys.submit, KeyboardEvent("Enter"))
        self.assertEqual(config.builtin_macros, (RUN_COMMAND_MACRO,))
        self.assertEqual(config.macros, ())
        self.assertEqual(config.entry_macros, ())
        self.assertEqual(config.colors, {})

    def test_values_and_nested_keys(self) -> None:
        config = parse_config(
            {
                "editor": " vim ",
                "show_hidden_entries": False,
                "max_visible_entries": 10,
                "columns": ["size", "user_name"],
                "keys": {"cursor": {"up": "k"}, "submit": "ctrl+j"},
                "autocomplete": {"style": "common_prefix_stop", "auto_navigation": "none"},
            }
        )
        self.assertEqual(config.editor, "vim")
        self.assertFalse(config.show_hidden_entries)
        self.assertEqual(config.max_visible_entries, 10)
        self.assertEqual(config.columns, ("size", "user_name"))
        self.assertEqual(config.keys.cursor.up, KeyboardEvent("k"))
        self.assertEqual(config.keys.cursor.down, KeyboardEvent("ArrowDown"))
        self.assertEqual(config.keys.submit, KeyboardEvent("j", ctrl=True))
        self.assertIs(config.autocomplete.style, AutocompleteStyle.COMMON_PREFIX_STOP)
        self.assertIs(config.autocomplete.auto_navigation, AutoNavigation.NONE)

    def test_macros(self) -> None:
        config = parse_config({"macros": [{"id": "m", "description": "d", "menu_order": 1}]})
        self.assertEqual([macro.id for macro in config.macros], ["m"])
        self.assertEqual([macro.id for macro in config.builtin_macros], ["navRunCommand"])

    def test_entry_macros(self) -> None:
        config = parse_config(
            {"entry_macros": [{"description": "view", "command": "less {entryPath}", "on_file": True}]}
        )
        self.assertEqual([macro.command for macro in config.entry_macros], ["less {entryPath}"])
        self.assertTrue(config.entry_macros[0].on_file)

    def test_colors(self) -> None:
        config = parse_config({"colors": {"directory": " #00f ", "size": "#a0b1c2"}})
        self.assertEqual(config.colors, {"directory": "#00f", "size": "#a0b1c2"})

    def test_invalid_values(self) -> None:
        cases = [
            [],
            {"unknown": 1},
            {"hide_hints": "yes"},
            {"max_visible_entries": 0},
            {"columns": ["name"]},
            {"keys": {"cursor": {"sideways": "x"}}},
            {"keys": {"submit": "hyper+x"}},
            {"autocomplete": {"style": "fuzzy"}},
            {"macros": [{"run": [{"launch": 1}]}]},
            {"entry_macros": [{"description": "no command"}]},
            {"entry_macros": {"description": "d", "command": "c"}},
            {"colors": ["#fff"]},
            {"colors": {"reset": "#fff"}},
            {"colors": {"directory": "blue"}},
            {"colors": {"directory": 255}},
        ]
        for data in cases:
            with self.subTest(data=data):
                with self.assertRaises(ConfigError):
                    parse_config(data)


class LoadConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "config.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(load_config(self.path), Config())

    def test_reads_json(self) -> None:
        self.path.write_text(json.dumps({"hide_hints": True}), encoding="utf-8")
        self.assertTrue(load_config(self.path).hide_hints)

    def test_malformed_json(self) -> None:
        self.path.write_text("{", encoding="utf-8")
        with self.assertRaises(ConfigError) as caught:
            load_config(self.path)
        self.assertIn("Malformed config file", str(caught.exception))

    def test_unreadable_path(self) -> None:
        with self.assertRaises(ConfigError):
            load_config(Path(self._tmp.name))


if __name__ == "__main__":
    unittest.main()
