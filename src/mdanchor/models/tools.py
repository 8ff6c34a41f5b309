from __future__ import annotations

from pydantic import BaseModel, Field

from mdanchor.models.context import ContextKind, MathEnvironment

_MAX_HEADING_CHARS = 10_000


class SlugifyHeadingInput(BaseModel):
    heading: str = Field(max_length=_MAX_HEADING_CHARS)
    mode: str | None = None
    downcase: bool | None = None


class SlugifyHeadingOutput(BaseModel):
    slug: str
    mode: str  # algorithm actually applied, after fallback
    downcase: bool


class HeadingPlaintextInput(BaseModel):
    heading: str = Field(max_length=_MAX_HEADING_CHARS)


class HeadingPlaintextOutput(BaseModel):
    text: str


class ClassifyContextInput(BaseModel):
    text: str
    line: int = Field(ge=0)
    character: int = Field(ge=0)


class ClassifyContextOutput(BaseModel):
    context: ContextKind
    in_fenced_code: bool
    math: MathEnvironment
