"""Prefix → namespace URI bindings shared by every XPath query on a document."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
ATOM03_NS = "http://purl.org/atom/ns#"
MEDIA_NS = "http://search.yahoo.com/mrss/"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
SLASH_NS = "http://purl.org/rss/1.0/modules/slash/"
DC_NS = "http://purl.org/dc/elements/1.1/"
CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
THREAD_NS = "http://purl.org/syndication/thread/1.0"
RSS10_NS = "http://purl.org/rss/1.0/"

DEFAULT_BINDINGS: dict[str, str] = {
    "atom": ATOM_NS,
    "atom03": ATOM03_NS,
    "media": MEDIA_NS,
    "rdf": RDF_NS,
    "slash": SLASH_NS,
    "dc": DC_NS,
    "content": CONTENT_NS,
    "thread": THREAD_NS,
}

# Bound only after a document is confirmed to be RSS 1.0 / RDF
RSSFAKE_PREFIX = "rssfake"


class NamespaceRegistry:
    """Per-document prefix bindings.

    Starts with :data:`DEFAULT_BINDINGS`.  Further prefixes may be added with
    :meth:`register`, but an existing prefix is never rebound.
    """

    def __init__(self) -> None:
        self._bindings: dict[str, str] = dict(DEFAULT_BINDINGS)

    def register(self, prefix: str, uri: str) -> None:
        current = self._bindings.get(prefix)
        if current == uri:
            return
        if current is not None:
            raise ValueError(f"Prefix {prefix!r} is already bound to {current!r}")
        logger.debug("Registering namespace prefix %s -> %s", prefix, uri)
        self._bindings[prefix] = uri

    def register_rdf(self) -> None:
        """Bind ``rssfake`` to the RSS 1.0 namespace used by RDF channels/items."""
        self.register(RSSFAKE_PREFIX, RSS10_NS)

    def uri(self, prefix: str) -> str | None:
        return self._bindings.get(prefix)

    def as_dict(self) -> dict[str, str]:
        return dict(self._bindings)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)
