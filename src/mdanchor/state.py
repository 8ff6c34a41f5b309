"""Application state container.

AppState is created once at server startup (inside the FastMCP lifespan context
manager) and injected into every tool handler via the MCP Context object.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mdanchor.config import Settings
    from mdanchor.protocols import InlineRenderer


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    # None disables HTML rendering for heading_plaintext and github slugs
    renderer: InlineRenderer | None = None
