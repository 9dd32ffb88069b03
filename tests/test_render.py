"""Tests for frame composition, columns, hints and inline redraw."""

from __future__ import annotations

import os
import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path

from lazynav.ansi import display_width
from lazynav.entry import Entry
from lazynav.input import KeyAction, KeyboardEvent
from lazynav.render import FrameSize, InlineAnimation, build_frame, build_hints
from lazynav.render.columns import format_relative_time, format_size
from lazynav.render.screen import format_directory, render_name
from lazynav.runtime.config import Config
from lazynav.runtime.controller import MainController
from lazynav.state import InputMode
from lazynav.ui_theme import DEFAULT_THEME, PLAIN_THEME


class FormatDirectoryTests(unittest.TestCase):
    def test_home_is_abbreviated(self) -> None:
        home = Path("/home/user")
        self.assertEqual(format_directory(Path("/home/user"), 6, home), "~")
        self.assertEqual(format_directory(Path("/home/user/a/b"), 6, home), "~/a/b")

    def test_absolute_path(self) -> None:
        self.assertEqual(format_directory(Path("/a/b"), 6, Path("/x")), "/a/b")

    def test_long_paths_keep_trailing_elements(self) -> None:
        self.assertEqual(format_directory(Path("/a/b/c/d"), 2, Path("/x")), "…/c/d")


class ColumnFormatTests(unittest.TestCase):
    def test_format_size(self) -> None:
        self.assertEqual(format_size(None), "")
        self.assertEqual(format_size(999), "999")
        self.assertEqual(format_size(1200), "1.2k")
        self.assertEqual(format_size(34_000_000), "34M")

    def test_format_relative_time(self) -> None:
        now = datetime(2024, 1, 10, 12, 0, 0)
        self.assertEqual(format_relative_time(None, now), "")
        self.assertEqual(format_relative_time(now - timedelta(seconds=30), now), "30s ago")
        self.assertEqual(format_relative_time(now - timedelta(minutes=5), now), "5m ago")
        self.assertEqual(format_relative_time(now - timedelta(hours=2), now), "2h ago")
        self.assertEqual(format_relative_time(now - timedelta(days=3), now), "3d ago")
        self.assertEqual(format_relative_time(now - timedelta(days=40), now), "2023-12-01")
        self.assertEqual(format_relative_time(now + timedelta(days=1), now), "2024-01-11")


class InlineAnimationTests(unittest.TestCase):
    def test_redraw_replaces_previous_frame(self) -> None:
        out: list[str] = []
        animation = InlineAnimation(out.append)
        animation.draw(["a", "b", "c"])
        animation.draw(["x"])
        self.assertEqual(out, ["\r\x1b[Ja\r\nb\r\nc", "\x1b[2F\x1b[Jx"])
        self.assertEqual(animation.height, 1)

    def test_print_above_clears_frame(self) -> None:
        out: list[str] = []
        animation = InlineAnimation(out.append)
        animation.draw(["frame"])
        animation.print_above("one\ntwo")
        self.assertEqual(out[-2:], ["\r\x1b[J", "one\r\ntwo\r\n"])
        self.assertEqual(animation.height, 0)

    def test_finish_keeps_or_clears_last_frame(self) -> None:
        out: list[str] = []
        animation = InlineAnimation(out.append)
        animation.draw(["frame"])
        animation.finish(clear=False)
        self.assertEqual(out[-1], "\r\n")
        animation.finish(clear=True)
        self.assertEqual(len(out), 2)


class HintTests(unittest.TestCase):
    def test_hints_skip_hidden_and_undescribed_actions(self) -> None:
        actions = [
            KeyAction((KeyboardEvent("Enter"),), lambda state: True, lambda state, event: None, lambda state: "submit"),
            KeyAction((KeyboardEvent("Tab"),), lambda state: False, lambda state, event: None, lambda state: "never"),
            KeyAction((KeyboardEvent("x"),), lambda state: True, lambda state, event: None),
            KeyAction(
                (KeyboardEvent("g"),),
                lambda state: True,
                lambda state, event: None,
                lambda state: "greet",
                display_key=KeyboardEvent("g", ctrl=True),
            ),
        ]
        self.assertEqual(build_hints(actions, None, PLAIN_THEME), "enter submit  ctrl+g greet")


class BuildFrameTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def frame(self, config: Config | None = None, size: FrameSize = FrameSize(80, 24), transform=None) -> list[str]:
        controller = MainController(
            config=config or Config(),
            theme=PLAIN_THEME,
            working_directory=self.root,
            starting_directory=self.root,
            write=lambda text: None,
        )
        state = controller.state if transform is None else transform(controller.state)
        return build_frame(state, controller.actions, controller.config, PLAIN_THEME, size)

    def test_listing_with_selection_marker_and_hints(self) -> None:
        (self.root / "docs").mkdir()
        (self.root / "a.txt").write_text("x" * 1200, encoding="utf-8")
        lines = self.frame()
        self.assertTrue(lines[1].startswith("❯ "))
        self.assertTrue(lines[1].endswith("docs/"))
        self.assertIn("1.2k", lines[2])
        self.assertIn("rw", lines[2])
        self.assertTrue(lines[2].endswith("a.txt"))
        self.assertEqual(lines[3], "❯ ")
        self.assertIn("esc exit", lines[-1])
        self.assertIn("page down more", lines[-1])

    def test_empty_directory_and_no_matches(self) -> None:
        self.assertIn("empty directory", self.frame()[1])
        (self.root / "a.txt").write_text("", encoding="utf-8")
        self.assertIn("no matching entries", self.frame(transform=lambda state: state.with_filter("zzz"))[1])

    def test_entries_are_limited_to_terminal_height(self) -> None:
        for index in range(30):
            (self.root / f"file{index:02}.txt").write_text("", encoding="utf-8")
        lines = self.frame(size=FrameSize(80, 10))
        self.assertLessEqual(len(lines), 10)
        self.assertIn("  … 25 more", lines)

    def test_lines_are_clipped_to_width(self) -> None:
        (self.root / ("long-name-" * 10)).write_text("", encoding="utf-8")
        for line in self.frame(size=FrameSize(20, 24)):
            self.assertLessEqual(display_width(line), 20)

    def test_menu_and_command_line(self) -> None:
        lines = self.frame(transform=lambda state: state.with_menu_cursor(0))
        self.assertIn("❯ Run command here", lines)
        lines = self.frame(transform=lambda state: state.with_command("ls"))
        self.assertIn("❯ ls_", lines)

    def test_quick_mode_without_macros(self) -> None:
        lines = self.frame(transform=lambda state: state.with_input_mode(InputMode.QUICK_MACRO))
        self.assertEqual(lines[-1], "No macros defined")

    def test_hidden_hints(self) -> None:
        lines = self.frame(config=Config(hide_hints=True))
        self.assertEqual(lines[-1], "❯ ")

    def test_colored_frame_resets_every_line(self) -> None:
        controller = MainController(
            config=Config(),
            theme=DEFAULT_THEME,
            working_directory=self.root,
            starting_directory=self.root,
            write=lambda text: None,
        )
        lines = build_frame(controller.state, controller.actions, controller.config, DEFAULT_THEME, FrameSize(80, 24))
        for line in lines:
            self.assertTrue(line.endswith(DEFAULT_THEME.reset))


@unittest.skipIf(os.name == "nt", "symlinks need privileges on Windows")
class RenderNameTests(unittest.TestCase):
    def test_link_shows_target(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("", encoding="utf-8")
            os.symlink("a.txt", root / "link")
            self.assertEqual(render_name(Entry(root / "link"), PLAIN_THEME), "link -> a.txt")
            self.assertEqual(render_name(Entry(root / "a.txt"), PLAIN_THEME), "a.txt")


if __name__ == "__main__":
    unittest.main()
