"""Cursor context classification.

Answers two narrow questions about a position in a Markdown document without
building a document tree:

- is the line inside a fenced code block?
- is the cursor inside inline (``$...$``) or display (``$$...$$``) math?

Both checks are regex scans over the text before (and after) the cursor.
They are approximations: nested or malformed fences and unusual dollar-sign
usage can be misclassified, and no input ever raises. Fences are exactly
three backticks; longer backtick fences and tilde fences are not recognised.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from mdanchor.models.context import ContextKind, MathEnvironment
from mdanchor.models.document import Position

if TYPE_CHECKING:
    from mdanchor.protocols import DocumentProtocol

# A complete backtick fence: opening line (0–3 spaces or a tab, ``` and an
# info string without backticks) up to the nearest closing ``` line with the
# same indentation pattern.
FENCED_CODE_BLOCK_RE = re.compile(
    r"^( {0,3}|\t)```[^`\r\n]*$[\s\S]+?^( {0,3}|\t)``` *$",
    re.MULTILINE,
)
_HTML_COMMENT_RE = re.compile(r"<!--[\s\S]+?-->")
# Only reachable once every complete block has been removed.
_OPEN_FENCE_RE = re.compile(r"^( {0,3}|\t)```[^`\r\n]*$[\s\S]*$", re.MULTILINE)

# Unescaped `$`, then either nothing or a non-space, non-`$` character and
# anything, ending in a partial `\command` right at the cursor.
_INLINE_MATH_BEFORE_RE = re.compile(r"(^|[^$])\$(|[^ $].*)\\\w*$", re.ASCII)

_DISPLAY_DELIMITER = "$$"


def _normalise_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def is_in_fenced_code_block(doc: DocumentProtocol, line: int) -> bool:
    """Return True if *line* lies inside a fenced code block.

    Takes the text before the line, drops every complete fenced block and
    every HTML comment, and reports whether an opening fence is left over.
    """
    text_before = doc.text_between(Position(0, 0), Position(line, 0))
    text_before = _normalise_newlines(text_before)
    text_before = FENCED_CODE_BLOCK_RE.sub("", text_before)
    text_before = _HTML_COMMENT_RE.sub("", text_before)
    return _OPEN_FENCE_RE.search(text_before) is not None


def math_environment(doc: DocumentProtocol, pos: Position) -> MathEnvironment:
    """Classify the math environment around *pos*.

    Inline math is checked first and only looks at the cursor's line: the
    cursor must sit right after a (possibly empty) ``\\command`` inside an open
    ``$`` span that closes later on the same line.

    Display math counts ``$$`` tokens before the cursor; an odd count with a
    ``$$`` somewhere after the cursor means an unclosed display block.
    """
    line = doc.line_text(pos.line)
    line_before = line[: pos.character]
    line_after = line[pos.character :]

    if _INLINE_MATH_BEFORE_RE.search(line_before) and "$" in line_after:
        return MathEnvironment.INLINE

    text_before = doc.text_between(Position(0, 0), pos)
    text_after = doc.full_text()[doc.offset_of(pos) :]
    if text_before.count(_DISPLAY_DELIMITER) % 2 != 0 and _DISPLAY_DELIMITER in text_after:
        return MathEnvironment.DISPLAY

    return MathEnvironment.NONE


def context_kind(in_fenced_code: bool, env: MathEnvironment) -> ContextKind:
    """Combine both check results. Fenced code takes precedence over math."""
    if in_fenced_code:
        return ContextKind.FENCED_CODE
    if env is MathEnvironment.INLINE:
        return ContextKind.INLINE_MATH
    if env is MathEnvironment.DISPLAY:
        return ContextKind.DISPLAY_MATH
    return ContextKind.NONE


def classify_position(doc: DocumentProtocol, pos: Position) -> ContextKind:
    if is_in_fenced_code_block(doc, pos.line):
        return ContextKind.FENCED_CODE
    return context_kind(False, math_environment(doc, pos))
