"""In-memory text document implementing DocumentProtocol.

Line breaks may be ``\\n``, ``\\r\\n`` or a lone ``\\r``; the original text is
kept verbatim so ranges and offsets always index into what the caller passed.
Out-of-range positions are clamped instead of rejected.
"""

from __future__ import annotations

import re

from mdanchor.models.document import Position

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class TextDocument:
    """Immutable snapshot of a document's text."""

    def __init__(self, text: str) -> None:
        self._text = text

        # (start offset, end offset excluding the line break) per line
        self._lines: list[tuple[int, int]] = []
        start = 0
        for match in _LINE_BREAK_RE.finditer(text):
            self._lines.append((start, match.start()))
            start = match.end()
        self._lines.append((start, len(text)))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def validate_position(self, pos: Position) -> Position:
        """Clamp *pos* into the document bounds."""
        line = min(max(pos.line, 0), self.line_count - 1)
        start, end = self._lines[line]
        character = min(max(pos.character, 0), end - start)
        return Position(line, character)

    def offset_of(self, pos: Position) -> int:
        pos = self.validate_position(pos)
        return self._lines[pos.line][0] + pos.character

    def line_text(self, line: int) -> str:
        line = min(max(line, 0), self.line_count - 1)
        start, end = self._lines[line]
        return self._text[start:end]

    def text_between(self, start: Position, end: Position) -> str:
        return self._text[self.offset_of(start) : self.offset_of(end)]

    def full_text(self) -> str:
        return self._text
