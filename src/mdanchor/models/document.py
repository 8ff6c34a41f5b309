from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based (line, character) location inside a document.

    ``character`` counts code points, not bytes.
    """

    line: int
    character: int = 0
