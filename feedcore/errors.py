"""Diagnostics and error messages produced while loading a feed."""

from __future__ import annotations

from typing import NamedTuple

from lxml import etree

EMPTY_FEED_MESSAGE = "Empty feed data provided"
UNKNOWN_FEED_MESSAGE = "Unknown/unsupported feed type"


class ParseDiagnostic(NamedTuple):
    """One entry drained from the XML engine's error log."""

    level: int
    message: str
    line: int | None = None
    column: int | None = None
    code: int = 0

    @property
    def is_fatal(self) -> bool:
        return self.level == etree.ErrorLevels.FATAL

    @classmethod
    def from_log_entry(cls, entry: etree._LogEntry) -> ParseDiagnostic:
        return cls(
            level=entry.level,
            message=(entry.message or "").strip(),
            line=entry.line,
            column=entry.column,
            code=entry.type,
        )


def format_diagnostic(diag: ParseDiagnostic) -> str:
    """Render *diag* as ``LibXML error <code> at line <n> (column <n>): <msg>``."""
    return (
        f"LibXML error {diag.code} at line {diag.line or 0} "
        f"(column {diag.column or 0}): {diag.message}"
    )


class FeedError(RuntimeError):
    """Raised by :meth:`ParsedFeed.raise_for_error` when a parse failed.

    Attributes:
        raw_errors -- every fatal diagnostic, formatted
    """

    def __init__(self, message: str, raw_errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.raw_errors = raw_errors or []
