"""Heading-to-plaintext conversion.

Strips Markdown and inline HTML from a heading before it is slugified, so
that ``_italic_``, ``<code>`` or ``&amp;`` do not leak into anchors.

The ``legacy`` mode:
  1. Escape syntax that would change meaning once rendered (``1.``, ``1)``, ``$``)
  2. Render the heading as inline HTML
  3. Reduce the HTML to text (comments, allow-listed tags, entities)
  4. Unescape
"""

from __future__ import annotations

import html
import re
from collections.abc import Callable
from functools import lru_cache
from typing import TYPE_CHECKING, Final

import structlog

from mdanchor.config import get_settings
from mdanchor.models.slug import PlaintextMode
from mdanchor.renderer import MarkdownItRenderer

if TYPE_CHECKING:
    from mdanchor.protocols import InlineRenderer

log = structlog.get_logger()

# Placeholders that the renderer passes through untouched.
_DOT_TOKEN = "%dot%"
_PAR_TOKEN = "%par%"
_DOLLAR_TOKEN = "%dollar%"

_REFERENCE_LINK_RE = re.compile(r"\[([^\]]*)\]\[[^\]]*\]")
_LEADING_DOT_RE = re.compile(r"^([0-9]+)\.")
_LEADING_PAR_RE = re.compile(r"^([0-9]+)\)")
_TRAILING_NEWLINE_RE = re.compile(r"\r?\n\Z")

_HTML_COMMENT_RE = re.compile(r"<!--[^>]*?-->")
_INLINE_TAG_RE = re.compile(r"<(span|em|strong|a|p|code|kbd)[^>]*>(.*?)</\1>")
_SPACES_RE = re.compile(r" +")


class _UseDefault:
    def __repr__(self) -> str:
        return "DEFAULT_RENDERER"


DEFAULT_RENDERER: Final = _UseDefault()


@lru_cache(maxsize=1)
def default_renderer() -> MarkdownItRenderer:
    """Shared markdown-it renderer, sized from settings on first use."""
    return MarkdownItRenderer(cache_size=get_settings().renderer.cache_size)


def html_to_text(html_text: str) -> str:
    """Reduce rendered inline HTML to plain text.

    Tags outside the allow-list are left in place. Nested allow-listed tags
    are peeled one layer per pass; every pass removes at least one tag pair,
    so the loop always reaches a pass with no match.
    """
    text = _HTML_COMMENT_RE.sub("", html_text)

    while _INLINE_TAG_RE.search(text):
        text = _INLINE_TAG_RE.sub(r"\2", text)

    text = html.unescape(text)
    return _SPACES_RE.sub(" ", text)


def _legacy(text: str, renderer: InlineRenderer | None) -> str:
    # [text][ref] → text
    text = _REFERENCE_LINK_RE.sub(r"\1", text, count=1)
    # A leading "1." or "1)" would render as an ordered list
    text = _LEADING_DOT_RE.sub(rf"\g<1>{_DOT_TOKEN}", text)
    text = _LEADING_PAR_RE.sub(rf"\g<1>{_PAR_TOKEN}", text)
    text = text.replace("$", _DOLLAR_TOKEN)

    if renderer is None:
        log.debug("plaintext_renderer_unavailable")
        return text

    rendered = _TRAILING_NEWLINE_RE.sub("", renderer.render_inline(text))
    text = html_to_text(rendered)

    text = text.replace(_DOT_TOKEN, ".", 1)
    text = text.replace(_PAR_TOKEN, ")", 1)
    return text.replace(_DOLLAR_TOKEN, "$")


def _commonmark(text: str, renderer: InlineRenderer | None) -> str:
    # TODO: strip CommonMark inline syntax directly from the token stream
    # instead of round-tripping through HTML.
    return text


_PLAINTEXT_METHODS: dict[PlaintextMode, Callable[[str, InlineRenderer | None], str]] = {
    PlaintextMode.LEGACY: _legacy,
    PlaintextMode.COMMONMARK: _commonmark,
}


def heading_to_plaintext(
    text: str,
    mode: PlaintextMode | str = PlaintextMode.LEGACY,
    *,
    renderer: InlineRenderer | None | _UseDefault = DEFAULT_RENDERER,
) -> str:
    """Convert a Markdown heading to the plain text used as slug input.

    Passing ``renderer=None`` skips rendering: the escaped heading is returned
    as-is. Unknown modes use ``legacy``.
    """
    if isinstance(renderer, _UseDefault):
        renderer = default_renderer()
    method = _PLAINTEXT_METHODS.get(mode, _legacy)
    return method(text, renderer)
