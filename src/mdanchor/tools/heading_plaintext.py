"""Tool handler for heading_plaintext."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mdanchor.errors import ErrorCode, MdAnchorError
from mdanchor.models.tools import HeadingPlaintextInput, HeadingPlaintextOutput
from mdanchor.plaintext import heading_to_plaintext

if TYPE_CHECKING:
    from mdanchor.state import AppState


async def handle(heading: str, state: AppState) -> dict:
    """Handle a heading_plaintext tool call."""
    log = structlog.get_logger().bind(tool="heading_plaintext")
    log.info("handler_called")

    try:
        validated = HeadingPlaintextInput(heading=heading)
    except ValueError as exc:
        raise MdAnchorError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a single-line heading of at most 10,000 characters.",
            recoverable=False,
        ) from exc

    text = heading_to_plaintext(
        validated.heading,
        state.settings.toc.plaintext_mode,
        renderer=state.renderer,
    )

    output = HeadingPlaintextOutput(text=text)
    return output.model_dump(mode="json")
