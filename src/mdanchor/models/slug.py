from __future__ import annotations

from enum import StrEnum


class SlugMode(StrEnum):
    """Anchor algorithms of the platforms whose links we reproduce."""

    GITHUB = "github"
    GITLAB = "gitlab"
    GITEA = "gitea"
    VSCODE = "vscode"


class PlaintextMode(StrEnum):
    LEGACY = "legacy"
    COMMONMARK = "commonMark"
