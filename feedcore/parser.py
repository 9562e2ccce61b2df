"""feedcore.parser — High-level FeedParser class.

Bundles loading, dialect detection and extraction behind one stateful object.
No exception crosses its public methods: failures show up as ``init()``
returning False plus a queryable error string.

Usage::

    from feedcore import FeedParser, FeedType

    parser = FeedParser(xml_bytes)
    if parser.init():
        print(parser.type() is FeedType.ATOM, parser.title(), parser.link())
        for item in parser.items():
            print(item.title, item.link)
        print(parser.links("self"))
    else:
        print(parser.error())
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from feedcore.detect import detect_type
from feedcore.errors import UNKNOWN_FEED_MESSAGE
from feedcore.extractors.links import extract_links
from feedcore.extractors.metadata import extract_metadata
from feedcore.items import FeedType, ParsedFeed
from feedcore.loader import load_document
from feedcore.namespaces import NamespaceRegistry
from feedcore.query import QueryContext
from feedcore.sanitize import clean, transcode
from feedcore.settings import DEFAULT_SETTINGS, ParserSettings

logger = logging.getLogger(__name__)


class FeedParser:
    """Parse one RSS 1.0/RDF, RSS 2.0 or Atom 0.3/1.0 document.

    The document is loaded on construction; :meth:`init` detects the feed
    type and extracts metadata and items exactly once.

    Args:
        data:      Complete feed document as ``bytes`` or ``str``.
        settings:  Parser options (see :class:`~feedcore.settings.ParserSettings`).
        sanitizer: Callable applied to ``title()``, ``link()`` and ``links()``
                   output.  Defaults to :func:`~feedcore.sanitize.clean`;
                   ignored when ``settings.sanitize`` is False.
    """

    def __init__(
        self,
        data: str | bytes | None,
        *,
        settings: ParserSettings | None = None,
        sanitizer: Callable[[str], str] | None = None,
    ) -> None:
        self._settings = settings or DEFAULT_SETTINGS
        self._sanitizer = sanitizer or clean

        self._type = FeedType.UNKNOWN
        self._detected = False
        self._initialized: bool | None = None
        self._title: str | None = None
        self._link: str | None = None
        self._items: list[Any] = []
        self._context: QueryContext | None = None

        loaded = load_document(data, self._settings)
        self._error: str | None = loaded.error
        self._raw_errors: list[str] = list(loaded.raw_errors)

        if loaded.ok:
            self._context = QueryContext(loaded.tree, NamespaceRegistry())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> bool:
        """Detect the feed type and extract everything.

        Returns:
            False if the document failed to load or its type is not
            recognized, otherwise True.  Later calls return the first result.
        """
        if self._initialized is not None:
            return self._initialized

        if self._error:
            self._initialized = False
            return False

        feed_type = self.type()
        if feed_type is FeedType.UNKNOWN:
            self._initialized = False
            return False

        meta = extract_metadata(self._context, feed_type)
        self._title = meta.title
        self._link = meta.link
        self._items = meta.items

        logger.debug(
            "Parsed %s feed %r with %d items", feed_type.name, self._title, len(self._items),
        )
        self._initialized = True
        return True

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def error(self) -> str:
        """Primary diagnostic, transcoded to valid UTF-8; empty if none."""
        return transcode(self._error)

    def errors(self) -> list[str]:
        """Every fatal parse diagnostic, formatted.

        Warning: the text is passed through from libxml2 untouched and may
        contain sequences that are not valid UTF-8.
        """
        return list(self._raw_errors)

    def type(self) -> FeedType:
        """Detected feed type; probes the document only on the first call."""
        if self._detected or self._error or self._context is None:
            return self._type

        self._type = detect_type(self._context)
        self._detected = True

        if self._type is FeedType.UNKNOWN:
            logger.warning("Unknown/unsupported feed type")
            self._error = self._error or UNKNOWN_FEED_MESSAGE

        return self._type

    def title(self) -> str:
        return self._present(self._title or "")

    def link(self) -> str:
        return self._present(self._link or "")

    def items(self) -> list[Any]:
        return list(self._items)

    def links(self, rel: str = "") -> list[str]:
        """``href`` of each feed-level link with ``rel`` equal to *rel* (empty: all)."""
        sanitizer = self._sanitizer if self._settings.sanitize else None
        return extract_links(self._context, self._type, rel, sanitizer)

    def result(self) -> ParsedFeed:
        """Return an immutable :class:`~feedcore.items.ParsedFeed` snapshot."""
        ok = self.init()
        return ParsedFeed(
            type=self._type,
            title=self.title() or None,
            link=self.link() or None,
            items=self.items() if ok else [],
            links=self.links() if ok else [],
            error=self.error() or None,
            raw_errors=self.errors(),
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _present(self, value: str) -> str:
        if not value or not self._settings.sanitize:
            return value
        return self._sanitizer(value)


def parse_feed(
    data: str | bytes | None,
    *,
    settings: ParserSettings | None = None,
) -> ParsedFeed:
    """Parse *data* and return a :class:`~feedcore.items.ParsedFeed`.

    Never raises for bad input; call
    :meth:`~feedcore.items.ParsedFeed.raise_for_error` to opt into
    :class:`~feedcore.errors.FeedError`.

    Example::

        from feedcore import parse_feed

        feed = parse_feed(open("feed.xml", "rb").read())
        feed.raise_for_error()
        print(feed.type.name, feed.title, len(feed.items))
    """
    return FeedParser(data, settings=settings).result()
