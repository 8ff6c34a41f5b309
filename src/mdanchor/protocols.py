"""Protocol interfaces for the collaborators the core reads from.

The classifier and the heading normaliser reference these protocols, not the
concrete implementations. This allows:
- Editor integrations to pass their own live document objects
- Tests to use lightweight fakes (e.g. a renderer that records its input)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mdanchor.models.document import Position


class DocumentProtocol(Protocol):
    """Read-only view of a text document."""

    def text_between(self, start: Position, end: Position) -> str: ...

    def line_text(self, line: int) -> str: ...

    def full_text(self) -> str: ...

    def offset_of(self, pos: Position) -> int: ...


class InlineRenderer(Protocol):
    """Renders a single line of Markdown to inline HTML."""

    def render_inline(self, text: str) -> str: ...
