"""Tool handler for slugify_heading.

Receives AppState, delegates to the slugify module, and returns a
structured dict. No MCP or FastMCP imports; server.py handles the
MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from mdanchor.errors import ErrorCode, MdAnchorError
from mdanchor.models.tools import SlugifyHeadingInput, SlugifyHeadingOutput
from mdanchor.slugify import resolve_slug_mode, slugify

if TYPE_CHECKING:
    from mdanchor.state import AppState


async def handle(
    heading: str,
    state: AppState,
    mode: str | None = None,
    downcase: bool | None = None,
) -> dict:
    """Handle a slugify_heading tool call."""
    log = structlog.get_logger().bind(tool="slugify_heading")
    log.info("handler_called")

    try:
        validated = SlugifyHeadingInput(heading=heading, mode=mode, downcase=downcase)
    except ValueError as exc:
        raise MdAnchorError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a single-line heading of at most 10,000 characters.",
            recoverable=False,
        ) from exc

    # Explicit arguments win over the server's toc settings
    toc = state.settings.toc
    resolved_mode = resolve_slug_mode(validated.mode if validated.mode is not None else toc.slugify_mode)
    resolved_downcase = validated.downcase if validated.downcase is not None else toc.downcase_link

    slug = slugify(validated.heading, resolved_mode, resolved_downcase, renderer=state.renderer)
    log.info("slugify_complete", mode=resolved_mode, slug_length=len(slug))

    output = SlugifyHeadingOutput(slug=slug, mode=resolved_mode, downcase=resolved_downcase)
    return output.model_dump(mode="json")
