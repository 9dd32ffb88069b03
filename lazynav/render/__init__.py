"""Frame composition and in-place terminal drawing."""

from .animation import InlineAnimation
from .hints import build_hints
from .screen import FrameSize, build_frame

__all__ = ["FrameSize", "InlineAnimation", "build_frame", "build_hints"]
