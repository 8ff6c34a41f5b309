"""Default inline Markdown renderer backed by markdown-it-py.

Uses the CommonMark preset, which passes raw inline HTML through unchanged
so that tags like ``<kbd>`` in a heading survive until tag stripping.
"""

from __future__ import annotations

from functools import lru_cache

from markdown_it import MarkdownIt


class MarkdownItRenderer:
    """InlineRenderer implementation with an optional bounded memo cache.

    Rendering is deterministic for a given input, so a cache hit returns
    exactly what a miss would have produced.
    """

    def __init__(self, md: MarkdownIt | None = None, *, cache_size: int = 256) -> None:
        self._md = md if md is not None else MarkdownIt("commonmark")
        if cache_size > 0:
            self._render = lru_cache(maxsize=cache_size)(self._md.renderInline)
        else:
            self._render = self._md.renderInline

    def render_inline(self, text: str) -> str:
        return self._render(text)

    def cache_info(self) -> tuple[int, int] | None:
        """Return (hits, misses), or None when memoisation is disabled."""
        info = getattr(self._render, "cache_info", None)
        if info is None:
            return None
        stats = info()
        return stats.hits, stats.misses
