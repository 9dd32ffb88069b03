"""Modal prompts that run nested input loops on top of the main view."""

from .base import CANCELLED, Dialog, DialogOutcome
from .choice_prompt import ChoicePromptDialog, ChoiceState
from .text_prompt import TextPromptDialog, TextPromptState

__all__ = [
    "CANCELLED",
    "ChoicePromptDialog",
    "ChoiceState",
    "Dialog",
    "DialogOutcome",
    "TextPromptDialog",
    "TextPromptState",
]
