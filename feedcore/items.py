"""Pydantic models for parsed feeds and their entries."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from feedcore.errors import FeedError

# ---------------------------------------------------------------------------
# Feed type
# ---------------------------------------------------------------------------

class FeedType(IntEnum):
    """Syndication dialect detected for a document."""

    UNKNOWN = -1
    RDF = 0
    RSS = 1
    ATOM = 2


# ---------------------------------------------------------------------------
# Entry models
# ---------------------------------------------------------------------------

class Enclosure(BaseModel):
    url: str
    type: str = ""
    length: int | None = None
    title: str = ""


class FeedItem(BaseModel):
    """A single entry built from an ``<item>`` or ``<entry>`` element."""

    id: str = ""
    link: str = ""
    title: str = ""
    content: str = ""
    excerpt: str = ""
    author: str | None = None
    published_at: str | None = None
    updated_at: str | None = None
    categories: list[str] = Field(default_factory=list)
    enclosures: list[Enclosure] = Field(default_factory=list)
    comments_url: str | None = None
    comments_count: int | None = None
    language: str | None = None

    @field_validator("id", "link", "title", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v or ""


# ---------------------------------------------------------------------------
# Parse result
# ---------------------------------------------------------------------------

class ParsedFeed(BaseModel):
    """Immutable snapshot of a finished parse."""

    model_config = {"frozen": True}

    type: FeedType = FeedType.UNKNOWN
    title: str | None = None
    link: str | None = None
    # Whatever the registered builders produce; FeedItem by default
    items: list[Any] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
    error: str | None = None
    raw_errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise :class:`~feedcore.errors.FeedError` if the parse failed."""
        if self.error is not None:
            raise FeedError(self.error, raw_errors=list(self.raw_errors))
