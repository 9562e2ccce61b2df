"""Feed-level ``<link>`` lookup filtered by ``rel``.

RSS has no native multi-link construct, so RSS and RDF feeds are searched for
embedded ``atom:link`` elements (``rel="self"``, ``rel="next"`` …) anywhere in
the document.
"""

from __future__ import annotations

from collections.abc import Callable

from feedcore.items import FeedType
from feedcore.query import QueryContext

_LINK_QUERIES: dict[FeedType, str] = {
    FeedType.ATOM: "//atom:feed/atom:link",
    FeedType.RSS: "//atom:link",
    FeedType.RDF: "//atom:link",
}


def extract_links(
    context: QueryContext | None,
    feed_type: FeedType,
    rel: str = "",
    sanitizer: Callable[[str], str] | None = None,
) -> list[str]:
    """Return ``href`` values of feed-level links whose ``rel`` equals *rel*.

    An empty *rel* matches every link.  Links without a ``rel`` attribute only
    match the empty relation.
    """
    expr = _LINK_QUERIES.get(feed_type)
    if context is None or expr is None:
        return []

    hrefs = []
    for link in context.query(expr):
        if rel and link.get("rel") != rel:
            continue
        href = (link.get("href") or "").strip()
        hrefs.append(sanitizer(href) if sanitizer else href)
    return hrefs
