"""Heading anchor slugs.

Four independent algorithms, one per platform whose anchors we must match
exactly. They differ in small ways (removing vs. replacing punctuation,
collapsing separators, percent-encoding) and are not interchangeable.

References:
  github  https://github.com/jch/html-pipeline/blob/master/lib/html/pipeline/toc_filter.rb
  gitlab  https://gitlab.com/gitlab-org/gitlab/blob/master/lib/banzai/filter/table_of_contents_filter.rb
  gitea   https://godoc.org/github.com/russross/blackfriday#hdr-Sanitized_Anchor_Names
  vscode  https://github.com/microsoft/vscode/blob/main/extensions/markdown-language-features/src/slugify.ts
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable
from typing import TYPE_CHECKING
from urllib.parse import quote

import structlog

from mdanchor.config import get_settings
from mdanchor.models.slug import PlaintextMode, SlugMode
from mdanchor.plaintext import DEFAULT_RENDERER, heading_to_plaintext

if TYPE_CHECKING:
    from mdanchor.plaintext import _UseDefault
    from mdanchor.protocols import InlineRenderer

log = structlog.get_logger()

# Ruby's \p{Word}: Letter, Mark, Number and Connector_Punctuation
_WORD_CATEGORY_PREFIXES = ("L", "M", "N")
_CONNECTOR_PUNCTUATION = "Pc"

_NUMERIC_RE = re.compile(r"[0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")
_VSCODE_PUNCTUATION_RE = re.compile(
    r"[\]\[!'#$%&()*+,./:;<=>?@\\^_{|}~`"
    r"。，、；：？！…—·ˉ¨‘’“”々～‖∶＂＇｀｜〃〔〕〈〉《》「」『』．〖〗【】（）［］｛｝]"
)


def is_punctuation(char: str) -> bool:
    """GitHub/GitLab definition: anything that is not a word char, ``-`` or space."""
    if char in "- ":
        return False
    category = unicodedata.category(char)
    return not (category.startswith(_WORD_CATEGORY_PREFIXES) or category == _CONNECTOR_PUNCTUATION)


def _remove_punctuation(text: str) -> str:
    return "".join(c for c in text if not is_punctuation(c))


def _collapse_separators(text: str) -> str:
    """Drop empty segments between ``-`` (duplicate, leading and trailing)."""
    return "-".join(part for part in text.split("-") if part)


def slugify_github(slug: str, *, renderer: InlineRenderer | None | _UseDefault = DEFAULT_RENDERER) -> str:
    slug = heading_to_plaintext(slug, PlaintextMode.LEGACY, renderer=renderer)
    return _remove_punctuation(slug).replace(" ", "-")


def slugify_gitlab(slug: str) -> str:
    slug = _remove_punctuation(slug).replace(" ", "-")
    slug = _collapse_separators(slug)
    # Digits-only anchors would collide with issue references
    if _NUMERIC_RE.fullmatch(slug):
        slug = f"anchor-{slug}"
    return slug


def slugify_gitea(slug: str) -> str:
    slug = "".join("-" if is_punctuation(c) else c for c in slug)
    slug = slug.replace(" ", "-").replace("_", "-")
    return _collapse_separators(slug)


def slugify_vscode(slug: str) -> str:
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _VSCODE_PUNCTUATION_RE.sub("", slug)
    slug = slug.strip("-")
    return quote(slug, safe="")


_SLUGIFY_METHODS: dict[SlugMode, Callable[[str], str]] = {
    SlugMode.GITHUB: slugify_github,
    SlugMode.GITLAB: slugify_gitlab,
    SlugMode.GITEA: slugify_gitea,
    SlugMode.VSCODE: slugify_vscode,
}


def resolve_slug_mode(mode: str | None) -> SlugMode:
    """Map a configured mode name to a SlugMode, falling back to github."""
    if mode is None:
        mode = get_settings().toc.slugify_mode
    try:
        return SlugMode(mode)
    except ValueError:
        log.debug("slug_mode_fallback", mode=mode, fallback=SlugMode.GITHUB)
        return SlugMode.GITHUB


def slugify(
    heading: str,
    mode: str | None = None,
    downcase: bool | None = None,
    *,
    renderer: InlineRenderer | None | _UseDefault = DEFAULT_RENDERER,
) -> str:
    """Convert a heading into an anchor slug.

    ``mode`` and ``downcase`` default to the ``toc`` settings when omitted.
    Lower-casing happens before the mode-specific transform (vscode
    percent-encodes its output). ``renderer`` only affects github, the one
    mode that renders the heading first.
    """
    if downcase is None:
        downcase = get_settings().toc.downcase_link

    slug = heading.strip()
    if downcase:
        slug = slug.lower()

    resolved = resolve_slug_mode(mode)
    if resolved is SlugMode.GITHUB:
        return slugify_github(slug, renderer=renderer)
    return _SLUGIFY_METHODS[resolved](slug)
