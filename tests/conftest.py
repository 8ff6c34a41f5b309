"""Shared test fixtures for the mdanchor test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from mdanchor.config import get_settings
from mdanchor.plaintext import default_renderer
from mdanchor.renderer import MarkdownItRenderer


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop process-wide caches so env overrides in one test do not leak."""
    get_settings.cache_clear()
    default_renderer.cache_clear()
    yield
    get_settings.cache_clear()
    default_renderer.cache_clear()


@pytest.fixture()
def renderer() -> MarkdownItRenderer:
    return MarkdownItRenderer(cache_size=0)


class RecordingRenderer:
    """Fake InlineRenderer that wraps input in <p> and remembers what it saw."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def render_inline(self, text: str) -> str:
        self.calls.append(text)
        return f"<p>{text}</p>\n"


@pytest.fixture()
def recording_renderer() -> RecordingRenderer:
    return RecordingRenderer()
