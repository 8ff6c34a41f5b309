from __future__ import annotations

from enum import StrEnum


class ContextKind(StrEnum):
    """Syntactic context of a cursor position."""

    NONE = "none"
    FENCED_CODE = "fenced_code"
    INLINE_MATH = "inline_math"
    DISPLAY_MATH = "display_math"


class MathEnvironment(StrEnum):
    NONE = ""  # outside any math span
    INLINE = "inline"
    DISPLAY = "display"
