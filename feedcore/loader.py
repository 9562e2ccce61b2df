"""Document loading with fatal-diagnostic capture.

The loader never raises for bad input.  Empty input and fatal XML errors are
reported through :class:`LoadResult` so callers can decide what to do.

lxml keeps a thread-global error log next to each parser's own log.  Every
parse runs inside :func:`error_channel`, which clears the global log before
parsing and again after the parser's log has been drained, so diagnostics
from one document never show up while loading another.
"""

from __future__ import annotations

import contextlib
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from lxml import etree

from feedcore.errors import (
    EMPTY_FEED_MESSAGE,
    ParseDiagnostic,
    format_diagnostic,
)
from feedcore.settings import DEFAULT_SETTINGS, ParserSettings

logger = logging.getLogger(__name__)

_RE_XML_DECL_ENCODING = re.compile(
    r'(<\?xml[^>]*encoding=["\'])([^"\']+)(["\'][^>]*\?>)', re.IGNORECASE,
)
_RE_POSITION_SUFFIX = re.compile(r",\s*line \d+,\s*column \d+\s*$")


@dataclass
class LoadResult:
    """Outcome of :func:`load_document`."""

    tree: etree._ElementTree | None = None
    error: str | None = None
    raw_errors: list[str] = field(default_factory=list)
    diagnostics: list[ParseDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and self.tree is not None


@contextlib.contextmanager
def error_channel() -> Iterator[None]:
    """Scope lxml's global error log to a single parse."""
    etree.clear_error_log()
    try:
        yield
    finally:
        etree.clear_error_log()


def _to_bytes(data: str | bytes) -> bytes:
    """Encode *data* for lxml.

    lxml rejects ``str`` input that carries an XML encoding declaration, so
    text is encoded as UTF-8 and the declaration rewritten to match.
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    data = _RE_XML_DECL_ENCODING.sub(r"\1utf-8\3", data, count=1)
    return data.encode("utf-8")


def _make_parser(settings: ParserSettings) -> etree.XMLParser:
    # Failure is decided from FATAL log entries, not from lxml raising.
    return etree.XMLParser(
        recover=True,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=settings.huge_tree,
        remove_blank_text=settings.remove_blank_text,
    )


def _synthesize(exc: etree.XMLSyntaxError) -> ParseDiagnostic:
    line, column = getattr(exc, "position", (None, None))
    message = _RE_POSITION_SUFFIX.sub("", exc.msg or str(exc))
    return ParseDiagnostic(
        level=etree.ErrorLevels.FATAL,
        message=message,
        line=line,
        column=column,
        code=getattr(exc, "code", 0) or 0,
    )


def load_document(
    data: str | bytes | None,
    settings: ParserSettings | None = None,
) -> LoadResult:
    """Parse *data* into an lxml tree, keeping only FATAL diagnostics.

    Args:
        data:     Complete feed document.
        settings: Parser options; defaults to :data:`DEFAULT_SETTINGS`.

    Returns:
        :class:`LoadResult`.  On failure ``tree`` is None, ``error`` holds the
        first fatal diagnostic and ``raw_errors`` all of them, formatted.
    """
    if not data:
        return LoadResult(error=EMPTY_FEED_MESSAGE)

    settings = settings or DEFAULT_SETTINGS
    parser = _make_parser(settings)
    payload = _to_bytes(data)

    root: etree._Element | None = None
    failure: etree.XMLSyntaxError | None = None

    with error_channel():
        try:
            root = etree.fromstring(payload, parser)
        except etree.XMLSyntaxError as exc:
            failure = exc
        fatal = [
            diag for diag in map(ParseDiagnostic.from_log_entry, parser.error_log)
            if diag.is_fatal
        ]

    if root is None and not fatal and failure is not None:
        fatal.append(_synthesize(failure))

    if fatal or root is None:
        raw = [format_diagnostic(d) for d in fatal]
        error = raw[0] if raw else EMPTY_FEED_MESSAGE
        logger.warning("Feed XML parse failed (%d fatal errors): %s", len(raw), error)
        return LoadResult(error=error, raw_errors=raw, diagnostics=fatal)

    logger.debug("Loaded document with root <%s>", root.tag)
    return LoadResult(tree=root.getroottree())
