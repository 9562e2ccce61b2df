"""Default item builders: one ``<entry>``/``<item>`` element → :class:`FeedItem`.

Every builder has the same signature ``(entry, tree, context) -> FeedItem``
and is looked up by feed type through :mod:`feedcore.plugins`.

Child elements are resolved in the entry's own namespace, so the Atom builder
serves both Atom 1.0 and Atom 0.3, and the RSS builder serves both RSS 2.0
(no namespace) and RSS 1.0 / RDF items.
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urljoin

import dateparser
from lxml import etree

from feedcore.items import Enclosure, FeedItem
from feedcore.namespaces import ATOM03_NS, ATOM_NS, DC_NS, RDF_NS
from feedcore.query import QueryContext, text_content

logger = logging.getLogger(__name__)

_XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"
_DC_CREATOR = f"{{{DC_NS}}}creator"
_DC_DATE = f"{{{DC_NS}}}date"
_DC_SUBJECT = f"{{{DC_NS}}}subject"
_DC_LANGUAGE = f"{{{DC_NS}}}language"
_RDF_ABOUT = f"{{{RDF_NS}}}about"

_WS_RE = re.compile(r"\s+")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _tag(ns: str | None, name: str) -> str:
    return f"{{{ns}}}{name}" if ns else name


def _child_text(entry: etree._Element, tag: str) -> str:
    return text_content(entry.find(tag)).strip()


def _inner_xml(el: etree._Element) -> str:
    """Serialize the children of *el* (used for ``type="xhtml"`` content)."""
    parts = [el.text or ""]
    parts.extend(etree.tostring(child, encoding="unicode") for child in el)
    return "".join(parts).strip()


def _resolve(el: etree._Element, href: str) -> str:
    base = el.base
    return urljoin(base, href) if base else href


def _to_int(raw: Any) -> int | None:
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def parse_date(raw: str | None) -> str | None:
    """Parse a feed date (RFC 822, ISO 8601, W3CDTF …) to ISO 8601, or None."""
    if not raw:
        return None
    raw = _WS_RE.sub(" ", raw.strip())
    try:
        parsed = dateparser.parse(
            raw,
            settings={
                "RETURN_AS_TIMEZONE_AWARE": True,
                "PREFER_DAY_OF_MONTH": "first",
            },
        )
    except Exception as exc:
        logger.debug("Date parse failed for %r: %s", raw, exc)
        return None
    return parsed.isoformat() if parsed else None


def _categories(values: list[str]) -> list[str]:
    return list(dict.fromkeys(v.strip() for v in values if v and v.strip()))


def _media_enclosures(entry: etree._Element, context: QueryContext) -> list[Enclosure]:
    found = []
    for el in context.query(".//media:content", entry):
        url = (el.get("url") or "").strip()
        if url:
            found.append(
                Enclosure(
                    url=url,
                    type=el.get("type") or el.get("medium") or "",
                    length=_to_int(el.get("fileSize")),
                    title=_child_text(el, "{http://search.yahoo.com/mrss/}title"),
                ),
            )
    return found


def _comment_count(entry: etree._Element, context: QueryContext) -> int | None:
    node = context.first("thread:total|slash:comments", entry)
    return _to_int(text_content(node)) if node is not None else None


# ---------------------------------------------------------------------------
# Atom 1.0 / 0.3
# ---------------------------------------------------------------------------

def build_atom_item(
    entry: etree._Element,
    tree: etree._ElementTree,
    context: QueryContext,
) -> FeedItem:
    """Build a :class:`FeedItem` from an Atom ``<entry>``."""
    ns = etree.QName(entry).namespace or ATOM_NS
    is_03 = ns == ATOM03_NS

    link = ""
    comments_url: str | None = None
    enclosures: list[Enclosure] = []
    for el in entry.findall(_tag(ns, "link")):
        href = (el.get("href") or "").strip()
        if not href:
            continue
        rel = el.get("rel", "alternate")
        if rel == "alternate" and not link:
            link = _resolve(el, href)
        elif rel == "enclosure":
            enclosures.append(
                Enclosure(
                    url=_resolve(el, href),
                    type=el.get("type", ""),
                    length=_to_int(el.get("length")),
                    title=el.get("title", ""),
                ),
            )
        elif rel == "replies" and (comments_url is None or el.get("type") == "text/html"):
            comments_url = _resolve(el, href)
    enclosures.extend(_media_enclosures(entry, context))

    excerpt = _child_text(entry, _tag(ns, "summary"))
    content_el = entry.find(_tag(ns, "content"))
    if content_el is None:
        content = excerpt
    elif content_el.get("type") == "xhtml":
        content = _inner_xml(content_el)
    else:
        content = text_content(content_el).strip() or excerpt

    author = (
        _child_text(entry, f"{_tag(ns, 'author')}/{_tag(ns, 'name')}")
        or _child_text(entry, _DC_CREATOR)
        or None
    )

    updated_at = parse_date(_child_text(entry, _tag(ns, "modified" if is_03 else "updated")))
    published_at = parse_date(
        _child_text(entry, _tag(ns, "issued" if is_03 else "published")),
    ) or updated_at

    categories = _categories(
        [el.get("term", "") for el in entry.findall(_tag(ns, "category"))]
        + [text_content(el) for el in entry.findall(_DC_SUBJECT)],
    )

    return FeedItem(
        id=_child_text(entry, _tag(ns, "id")) or link,
        link=link,
        title=_child_text(entry, _tag(ns, "title")),
        content=content,
        excerpt=excerpt,
        author=author,
        published_at=published_at,
        updated_at=updated_at,
        categories=categories,
        enclosures=enclosures,
        comments_url=comments_url,
        comments_count=_comment_count(entry, context),
        language=entry.get(_XML_LANG),
    )


# ---------------------------------------------------------------------------
# RSS 2.0 / RSS 1.0 (RDF)
# ---------------------------------------------------------------------------

def build_rss_item(
    entry: etree._Element,
    tree: etree._ElementTree,
    context: QueryContext,
) -> FeedItem:
    """Build a :class:`FeedItem` from an RSS ``<item>`` (plain or RDF)."""
    ns = etree.QName(entry).namespace

    link = _child_text(entry, _tag(ns, "link"))
    guid_el = entry.find(_tag(ns, "guid"))
    guid = text_content(guid_el).strip()
    if not link and guid and guid_el.get("isPermaLink", "true").lower() != "false":
        link = guid

    excerpt = _child_text(entry, _tag(ns, "description"))
    content = (
        _child_text(entry, "{http://purl.org/rss/1.0/modules/content/}encoded")
        or excerpt
    )

    enclosures = [
        Enclosure(
            url=el.get("url", "").strip(),
            type=el.get("type", ""),
            length=_to_int(el.get("length")),
        )
        for el in entry.findall(_tag(ns, "enclosure"))
        if el.get("url", "").strip()
    ]
    enclosures.extend(_media_enclosures(entry, context))

    categories = _categories(
        [text_content(el) for el in entry.findall(_tag(ns, "category"))]
        + [text_content(el) for el in entry.findall(_DC_SUBJECT)],
    )

    published_at = parse_date(
        _child_text(entry, _tag(ns, "pubDate")) or _child_text(entry, _DC_DATE),
    )

    return FeedItem(
        id=guid or entry.get(_RDF_ABOUT, "") or link,
        link=link,
        title=_child_text(entry, _tag(ns, "title")),
        content=content,
        excerpt=excerpt,
        author=_child_text(entry, _DC_CREATOR) or _child_text(entry, _tag(ns, "author")) or None,
        published_at=published_at,
        categories=categories,
        enclosures=enclosures,
        comments_url=_child_text(entry, _tag(ns, "comments")) or None,
        comments_count=_comment_count(entry, context),
        language=_child_text(entry, _DC_LANGUAGE) or None,
    )
