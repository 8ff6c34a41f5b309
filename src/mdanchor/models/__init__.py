from __future__ import annotations

from mdanchor.models.context import ContextKind, MathEnvironment
from mdanchor.models.document import Position
from mdanchor.models.slug import PlaintextMode, SlugMode
from mdanchor.models.tools import (
    ClassifyContextInput,
    ClassifyContextOutput,
    HeadingPlaintextInput,
    HeadingPlaintextOutput,
    SlugifyHeadingInput,
    SlugifyHeadingOutput,
)

__all__ = [
    # document
    "Position",
    # context
    "ContextKind",
    "MathEnvironment",
    # slug
    "SlugMode",
    "PlaintextMode",
    # tools
    "SlugifyHeadingInput",
    "SlugifyHeadingOutput",
    "HeadingPlaintextInput",
    "HeadingPlaintextOutput",
    "ClassifyContextInput",
    "ClassifyContextOutput",
]
