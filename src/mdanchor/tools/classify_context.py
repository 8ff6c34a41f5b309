"""Tool handler for classify_context.

Wraps the submitted text in a TextDocument snapshot and runs both context
checks against the given position.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mdanchor.context import context_kind, is_in_fenced_code_block, math_environment
from mdanchor.document import TextDocument
from mdanchor.errors import ErrorCode, MdAnchorError
from mdanchor.models.document import Position
from mdanchor.models.tools import ClassifyContextInput, ClassifyContextOutput

if TYPE_CHECKING:
    from mdanchor.state import AppState


async def handle(text: str, line: int, character: int, state: AppState) -> dict:
    """Handle a classify_context tool call."""
    log = structlog.get_logger().bind(tool="classify_context", line=line, character=character)
    log.info("handler_called")

    try:
        validated = ClassifyContextInput(text=text, line=line, character=character)
    except ValueError as exc:
        raise MdAnchorError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide the document text and a zero-based line and character >= 0.",
            recoverable=False,
        ) from exc

    doc = TextDocument(validated.text)
    if validated.line >= doc.line_count:
        raise MdAnchorError(
            code=ErrorCode.INVALID_POSITION,
            message=f"Line {validated.line} is past the end of the document ({doc.line_count} lines)",
            suggestion="Use a zero-based line number smaller than the document's line count.",
            recoverable=True,
        )

    pos = doc.validate_position(Position(validated.line, validated.character))
    in_fenced_code = is_in_fenced_code_block(doc, pos.line)
    env = math_environment(doc, pos)
    output = ClassifyContextOutput(
        context=context_kind(in_fenced_code, env),
        in_fenced_code=in_fenced_code,
        math=env,
    )
    log.info("classify_complete", context=output.context)
    return output.model_dump(mode="json")
