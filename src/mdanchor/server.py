"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Create AppState via the FastMCP lifespan context manager
- Register tools
- Run the stdio transport
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.types import CallToolResult, TextContent

import mdanchor.tools.classify_context as t_classify
import mdanchor.tools.heading_plaintext as t_plaintext
import mdanchor.tools.slugify_heading as t_slugify
from mdanchor import __version__
from mdanchor.config import Settings, get_settings
from mdanchor.errors import MdAnchorError
from mdanchor.plaintext import default_renderer
from mdanchor.state import AppState

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
    settings = get_settings()
    _setup_logging(settings)

    log.info(
        "server_starting",
        version=__version__,
        slugify_mode=settings.toc.slugify_mode,
        downcase_link=settings.toc.downcase_link,
    )

    state = AppState(settings=settings, renderer=default_renderer())
    try:
        yield state
    finally:
        log.info("server_stopping")


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP("mdanchor", lifespan=lifespan)
# FastMCP has no version kwarg. Set it on the underlying Server so the MCP
# initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]


def _serialise_tool_error(error: MdAnchorError) -> CallToolResult:
    """Convert an MdAnchorError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


def _log_tool_error(tool: str, exc: MdAnchorError) -> None:
    log.warning(
        "tool_error",
        tool=tool,
        code=exc.code,
        message=exc.message,
        recoverable=exc.recoverable,
    )


@mcp.tool()
async def slugify_heading(
    heading: str,
    ctx: Context,
    mode: str | None = None,
    downcase: bool | None = None,
) -> object:
    """Convert a Markdown heading into an anchor slug.

    mode is one of github, gitlab, gitea or vscode (unknown values use github).
    mode and downcase default to the server's toc settings.
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_slugify.handle(heading, state, mode=mode, downcase=downcase)
    except MdAnchorError as exc:
        _log_tool_error("slugify_heading", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="slugify_heading", exc_info=True)
        raise


@mcp.tool()
async def heading_plaintext(heading: str, ctx: Context) -> object:
    """Strip Markdown and inline HTML from a heading, returning plain text."""
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_plaintext.handle(heading, state)
    except MdAnchorError as exc:
        _log_tool_error("heading_plaintext", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="heading_plaintext", exc_info=True)
        raise


@mcp.tool()
async def classify_context(text: str, line: int, character: int, ctx: Context) -> object:
    """Classify a cursor position in a Markdown document.

    Reports whether the zero-based (line, character) position is inside a
    fenced code block, inline math ($...$) or display math ($$...$$).
    """
    state: AppState = ctx.request_context.lifespan_context
    try:
        return await t_classify.handle(text, line, character, state)
    except MdAnchorError as exc:
        _log_tool_error("classify_context", exc)
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool="classify_context", exc_info=True)
        raise


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
