"""Integration test fixtures.

Provides an AppState wired the way the server lifespan builds it, and an
isolated environment for subprocess-based MCP wire tests.
"""

from __future__ import annotations

import os

import pytest

from mdanchor.config import Settings
from mdanchor.renderer import MarkdownItRenderer
from mdanchor.state import AppState


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Overrides any local mdanchor.yaml by pinning the toc settings, and keeps
    logs on stderr in text form.
    """
    env = os.environ.copy()
    env["MDANCHOR__TOC__SLUGIFY_MODE"] = "github"
    env["MDANCHOR__TOC__DOWNCASE_LINK"] = "true"
    env["MDANCHOR__LOGGING__FORMAT"] = "text"
    return env


@pytest.fixture()
def app_state() -> AppState:
    """AppState with default settings and a real markdown-it renderer."""
    return AppState(settings=Settings(), renderer=MarkdownItRenderer())


@pytest.fixture()
def settings_only_state() -> AppState:
    """AppState with no renderer: heading_plaintext returns the escaped text."""
    return AppState(settings=Settings(), renderer=None)


@pytest.fixture()
def gitlab_state() -> AppState:
    """AppState whose toc settings select gitlab without downcasing."""
    settings = Settings(toc={"slugify_mode": "gitlab", "downcase_link": False})
    return AppState(settings=settings, renderer=MarkdownItRenderer())
