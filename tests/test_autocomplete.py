"""Tests for common-prefix autocomplete and auto-navigation."""

from __future__ import annotations

import unittest

from lazynav.dialogs import ChoiceState
from lazynav.list_model import AutocompleteStyle, AutoNavigation, autocomplete, common_prefix


def _complete(state, style=AutocompleteStyle.COMMON_PREFIX_CYCLE, navigation=AutoNavigation.NONE, invert=False):
    return autocomplete(state, lambda item: item, style, navigation, invert_direction=invert)


class AutocompleteTests(unittest.TestCase):
    def test_common_prefix(self) -> None:
        self.assertEqual(common_prefix(["foobar", "foobaz"]), "fooba")
        self.assertEqual(common_prefix(["x"]), "x")

    def test_extends_filter_to_common_prefix(self) -> None:
        result = _complete(ChoiceState(("foobar", "foobaz", "qux"), filter="f"))
        self.assertIsNotNone(result)
        self.assertEqual(result.state.filter, "fooba")
        self.assertEqual(result.state.current_item, "foobar")
        self.assertIsNone(result.navigate_to)

    def test_no_candidates_returns_none(self) -> None:
        self.assertIsNone(_complete(ChoiceState(("foobar", "qux"), filter="z")))

    def test_completion_is_case_insensitive(self) -> None:
        result = _complete(ChoiceState(("Readme.md", "readthis"), filter="rea"))
        self.assertEqual(result.state.filter, "read")
        self.assertEqual(result.state.filtered_items, ("readthis", "Readme.md"))

    def test_cycle_style_moves_between_matches_once_prefix_is_complete(self) -> None:
        state = ChoiceState(("foobar", "foobaz", "qux"), filter="fooba")
        first = _complete(state)
        self.assertEqual(first.state.current_item, "foobaz")
        second = _complete(first.state)
        self.assertEqual(second.state.current_item, "foobar")

    def test_cycle_style_can_run_backwards(self) -> None:
        state = ChoiceState(("ab1", "ab2", "ab3"), filter="ab")
        result = _complete(state, invert=True)
        self.assertEqual(result.state.current_item, "ab3")

    def test_stop_style_keeps_cursor_on_first_match(self) -> None:
        state = ChoiceState(("foobar", "foobaz"), filter="fooba")
        result = _complete(state, style=AutocompleteStyle.COMMON_PREFIX_STOP)
        self.assertEqual(result.state.current_item, "foobar")

    def test_navigation_on_single_match(self) -> None:
        state = ChoiceState(("alpha", "beta"), filter="a")
        result = _complete(state, navigation=AutoNavigation.ON_SINGLE)
        self.assertEqual(result.state.filter, "alpha")
        self.assertEqual(result.navigate_to, "alpha")

    def test_navigation_after_completion_needs_a_second_request(self) -> None:
        state = ChoiceState(("alpha", "beta"), filter="a")
        first = _complete(state, navigation=AutoNavigation.ON_SINGLE_AFTER_COMPLETION)
        self.assertEqual(first.state.filter, "alpha")
        self.assertIsNone(first.navigate_to)
        second = _complete(first.state, navigation=AutoNavigation.ON_SINGLE_AFTER_COMPLETION)
        self.assertEqual(second.navigate_to, "alpha")

    def test_no_navigation_when_disabled(self) -> None:
        state = ChoiceState(("alpha", "beta"), filter="alpha")
        self.assertIsNone(_complete(state).navigate_to)

    def test_stop_style_is_idempotent(self) -> None:
        items = ("foobar", "foobaz", "Fooqux", "bar")
        for query in ("", "f", "FOO", "fooba", "b"):
            with self.subTest(query=query):
                first = _complete(ChoiceState(items, filter=query), style=AutocompleteStyle.COMMON_PREFIX_STOP)
                second = _complete(first.state, style=AutocompleteStyle.COMMON_PREFIX_STOP)
                self.assertEqual(second.state.filter, first.state.filter)
                self.assertEqual(second.state.cursor, first.state.cursor)
                self.assertEqual(second.state.filtered_items, first.state.filtered_items)


if __name__ == "__main__":
    unittest.main()
