"""Namespace-aware XPath evaluation over a loaded feed document."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from lxml import etree

from feedcore.namespaces import NamespaceRegistry

logger = logging.getLogger(__name__)


def text_content(node: Any) -> str:
    """Return the full text content of *node* (all descendant text joined)."""
    if node is None:
        return ""
    if isinstance(node, etree._Element):
        return str(node.xpath("string()"))
    return str(node)


class QueryContext:
    """Binds a parsed tree to its :class:`NamespaceRegistry`.

    Every query goes through :meth:`query`, so prefixes registered later
    (``rssfake`` for RDF documents) apply to all subsequent lookups.
    """

    def __init__(self, tree: etree._ElementTree, registry: NamespaceRegistry) -> None:
        self._tree = tree
        self._registry = registry

    @property
    def tree(self) -> etree._ElementTree:
        return self._tree

    @property
    def registry(self) -> NamespaceRegistry:
        return self._registry

    def register_namespace(self, prefix: str, uri: str) -> None:
        self._registry.register(prefix, uri)

    def query(self, expr: str, node: Any = None) -> list[Any]:
        """Evaluate *expr* against *node* (default: the whole document)."""
        target = self._tree if node is None else node
        result = target.xpath(expr, namespaces=self._registry.as_dict())
        if isinstance(result, list):
            return result
        return [result]

    def first(self, expr: str, node: Any = None) -> Any:
        """Return the first result of *expr*, or None."""
        results = self.query(expr, node)
        return results[0] if results else None

    def first_of(self, candidates: Iterable[str], node: Any = None) -> Any:
        """Return the first result of the first candidate query that matches."""
        for expr in candidates:
            found = self.first(expr, node)
            if found is not None:
                logger.debug("Fallback chain matched %s", expr)
                return found
        return None
