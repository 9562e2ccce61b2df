"""Feed dialect detection.

A single union query finds the first feed-defining element in document order;
its qualified name (as written in the document, lowercased) decides the type.
"""

from __future__ import annotations

import logging

from lxml import etree

from feedcore.items import FeedType
from feedcore.query import QueryContext

logger = logging.getLogger(__name__)

DETECT_QUERY = "(//atom03:feed|//atom:feed|//channel|//rdf:rdf|//rdf:RDF)"

_TYPE_BY_NAME: dict[str, FeedType] = {
    "rdf:rdf": FeedType.RDF,
    "channel": FeedType.RSS,
    "feed": FeedType.ATOM,
    "atom:feed": FeedType.ATOM,
}


def qualified_name(element: etree._Element) -> str:
    """Return ``prefix:localname`` as written in the source, or just the local name."""
    local = etree.QName(element).localname
    return f"{element.prefix}:{local}" if element.prefix else local


def detect_type(context: QueryContext) -> FeedType:
    """Classify the document held by *context*."""
    root = context.first(DETECT_QUERY)
    if root is None:
        logger.debug("No feed root element found")
        return FeedType.UNKNOWN

    name = qualified_name(root).lower()
    feed_type = _TYPE_BY_NAME.get(name, FeedType.UNKNOWN)
    logger.debug("Matched <%s> -> %s", name, feed_type.name)
    return feed_type
