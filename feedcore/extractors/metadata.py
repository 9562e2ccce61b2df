"""Feed-level metadata and entry extraction.

Title and link come from ordered fallback chains: each candidate query is
tried in turn and the first element found wins, even if it turns out to be
empty.

    Atom   title  atom:feed/atom:title → atom03:feed/atom03:title
           link   atom link without @rel → atom @rel='alternate'
                  → atom03 without @rel → atom03 @rel='alternate'  (href)
           items  //atom:entry, else //atom03:entry
    RSS    title  channel/title
           link   channel/link (@href if present, else text)
           items  channel/item
    RDF    title  rssfake:channel/rssfake:title
           link   rssfake:channel/rssfake:link (text)
           items  //rssfake:item
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from lxml import etree

from feedcore import plugins
from feedcore.items import FeedType
from feedcore.query import QueryContext, text_content

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Fallback tables
# ---------------------------------------------------------------------------

ATOM_TITLE_QUERIES = (
    "//atom:feed/atom:title",
    "//atom03:feed/atom03:title",
)

ATOM_LINK_QUERIES = (
    "//atom:feed/atom:link[not(@rel)]",
    "//atom:feed/atom:link[@rel='alternate']",
    "//atom03:feed/atom03:link[not(@rel)]",
    "//atom03:feed/atom03:link[@rel='alternate']",
)

ATOM_ENTRY_QUERIES = (
    "//atom:entry",
    "//atom03:entry",
)

RSS_TITLE_QUERIES = ("//channel/title",)
RSS_LINK_QUERIES = ("//channel/link",)
RSS_ENTRY_QUERY = "//channel/item"

RDF_TITLE_QUERIES = ("//rssfake:channel/rssfake:title",)
RDF_LINK_QUERIES = ("//rssfake:channel/rssfake:link",)
RDF_ENTRY_QUERY = "//rssfake:item"


@dataclass
class FeedMetadata:
    """Trimmed but unsanitized extraction output."""

    title: str | None = None
    link: str | None = None
    items: list[Any] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-dialect extraction
# ---------------------------------------------------------------------------

def _first_entries(context: QueryContext, queries: tuple[str, ...]) -> list[etree._Element]:
    for expr in queries:
        found = context.query(expr)
        if found:
            return found
    return []


def _extract_atom(context: QueryContext) -> tuple[str | None, str | None, list]:
    title_el = context.first_of(ATOM_TITLE_QUERIES)
    title = text_content(title_el) if title_el is not None else None

    link = None
    link_el = context.first_of(ATOM_LINK_QUERIES)
    if link_el is not None:
        link = link_el.get("href") or None

    return title, link, _first_entries(context, ATOM_ENTRY_QUERIES)


def _extract_rss(context: QueryContext) -> tuple[str | None, str | None, list]:
    title_el = context.first_of(RSS_TITLE_QUERIES)
    title = text_content(title_el) if title_el is not None else None

    link = None
    link_el = context.first_of(RSS_LINK_QUERIES)
    if link_el is not None:
        link = link_el.get("href") or text_content(link_el) or None

    return title, link, context.query(RSS_ENTRY_QUERY)


def _extract_rdf(context: QueryContext) -> tuple[str | None, str | None, list]:
    context.registry.register_rdf()

    title_el = context.first_of(RDF_TITLE_QUERIES)
    title = text_content(title_el) if title_el is not None else None

    link = None
    link_el = context.first_of(RDF_LINK_QUERIES)
    if link_el is not None:
        link = text_content(link_el) or None

    return title, link, context.query(RDF_ENTRY_QUERY)


_EXTRACTORS = {
    FeedType.ATOM: _extract_atom,
    FeedType.RSS: _extract_rss,
    FeedType.RDF: _extract_rdf,
}


def extract_metadata(context: QueryContext, feed_type: FeedType) -> FeedMetadata:
    """Pull title, link and built items for an already-detected *feed_type*.

    Missing title, link or entries are not errors; the fields stay unset.
    """
    extractor = _EXTRACTORS.get(feed_type)
    if extractor is None:
        return FeedMetadata()

    title, link, entries = extractor(context)

    builder = plugins.get_item_builder(feed_type)
    items = []
    if builder is not None:
        items = [builder(entry, context.tree, context) for entry in entries]
    logger.debug("Extracted %d %s entries", len(items), feed_type.name)

    return FeedMetadata(
        title=title.strip() if title else None,
        link=link.strip() if link else None,
        items=items,
    )
