"""Tests for conflict-aware key action registration."""

from __future__ import annotations

import unittest

from lazynav.input import KeyAction, KeyActionRegistry, KeyboardEvent, find_action

ENTER = KeyboardEvent("Enter")
ESC = KeyboardEvent("Escape")


def _action(keys, condition=lambda state: True, result="", hidden=lambda state: False, display_key=None):
    return KeyAction(
        keys=keys,
        condition=condition,
        action=lambda state, event: result,
        description=lambda state: result,
        hidden=hidden,
        display_key=display_key,
    )


class KeyActionRegistryTests(unittest.TestCase):
    def test_earlier_available_action_wins_shared_key(self) -> None:
        registry = KeyActionRegistry()
        first = registry.register(_action((ENTER,), lambda state: state["menu"], "submit menu"))
        second = registry.register(_action((ENTER, ESC), result="exit"))

        self.assertTrue(first.is_available({"menu": True}))
        self.assertFalse(second.is_available({"menu": True}))
        self.assertTrue(second.is_available({"menu": False}))

    def test_unrelated_keys_do_not_conflict(self) -> None:
        registry = KeyActionRegistry()
        registry.register(_action((ENTER,)))
        other = registry.register(_action((ESC,)))
        self.assertTrue(other.is_available({}))

    def test_catch_all_blocks_later_actions(self) -> None:
        registry = KeyActionRegistry()
        registry.register(_action(None, lambda state: state["typing"]))
        later = registry.register(_action((ENTER,)))
        self.assertFalse(later.is_available({"typing": True}))
        self.assertTrue(later.is_available({"typing": False}))

    def test_catch_all_registered_last_is_not_blocked(self) -> None:
        registry = KeyActionRegistry()
        registry.register(_action((ENTER,)))
        catch_all = registry.register(_action(None))
        self.assertTrue(catch_all.is_available({}))

    def test_categories_are_independent(self) -> None:
        registry = KeyActionRegistry()
        registry.register(_action((ENTER,), result="normal"), "normal")
        dialog = registry.register(_action((ENTER,), result="dialog"), "dialog")
        self.assertTrue(dialog.is_available({}))
        self.assertEqual(len(registry.actions("normal")), 1)
        self.assertEqual(len(registry.actions("dialog")), 1)
        self.assertEqual(registry.actions("missing"), ())

    def test_find_action_returns_first_match(self) -> None:
        registry = KeyActionRegistry()
        registry.register_all(
            [
                _action((ENTER,), lambda state: False, "never"),
                _action((ENTER,), result="submit"),
                _action(None, result="typed"),
            ]
        )
        actions = registry.actions()
        self.assertEqual(find_action(actions, {}, ENTER).run({}, ENTER), "submit")
        self.assertEqual(find_action(actions, {}, KeyboardEvent("a")).run({}, ENTER), "typed")
        self.assertIsNone(find_action(actions[:2], {}, ESC))

    def test_hint_key_and_visibility(self) -> None:
        shown = _action((KeyboardEvent("g"),), display_key=KeyboardEvent("g", ctrl=True))
        self.assertEqual(shown.hint_key, KeyboardEvent("g", ctrl=True))
        hidden = _action((ENTER,), hidden=lambda state: True)
        self.assertTrue(hidden.is_available({}))
        self.assertFalse(hidden.is_shown({}))
        self.assertIsNone(_action(None).hint_key)


if __name__ == "__main__":
    unittest.main()
