"""Input-layer public API for key decoding, text editing, and key actions.

Low-level terminal decoding lives in ``reader``; the priority-aware action
tables used by the dispatcher live in ``key_registry``.
"""

from .key_registry import KeyAction, KeyActionRegistry, MenuAction, find_action
from .keys import KeyboardEvent, format_key, parse_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key
from .text_field import update_text_field

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyAction",
    "KeyActionRegistry",
    "KeyboardEvent",
    "MenuAction",
    "_PENDING_BYTES",
    "find_action",
    "format_key",
    "parse_key",
    "read_key",
    "update_text_field",
]
