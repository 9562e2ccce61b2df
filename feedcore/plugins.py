"""feedcore.plugins — Item builder registry.

Each feed type maps to one builder that turns an entry element into a
:class:`~feedcore.items.FeedItem` (or any object the caller prefers)::

    from feedcore import FeedType, register_item_builder

    def titles_only(entry, tree, context):
        return context.first("string(atom:title)", entry)

    register_item_builder(FeedType.ATOM, titles_only)

Builders are plain callables checked against the ``runtime_checkable``
:class:`ItemBuilder` protocol.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from feedcore.extractors.entries import build_atom_item, build_rss_item
from feedcore.items import FeedType

if TYPE_CHECKING:
    from lxml import etree

    from feedcore.query import QueryContext

# ---------------------------------------------------------------------------
# Protocol definition
# ---------------------------------------------------------------------------

@runtime_checkable
class ItemBuilder(Protocol):
    """Builds one feed item from an entry element."""

    def __call__(
        self,
        entry: etree._Element,
        tree: etree._ElementTree,
        context: QueryContext,
    ) -> Any:
        ...


# ---------------------------------------------------------------------------
# Module-level registry
# ---------------------------------------------------------------------------

_DEFAULT_BUILDERS: dict[FeedType, ItemBuilder] = {
    FeedType.ATOM: build_atom_item,
    FeedType.RSS: build_rss_item,
    FeedType.RDF: build_rss_item,
}

_registry: dict[FeedType, ItemBuilder] = dict(_DEFAULT_BUILDERS)


def register_item_builder(feed_type: FeedType, builder: ItemBuilder) -> None:
    """Use *builder* for every entry of *feed_type* parsed from now on."""
    if feed_type is FeedType.UNKNOWN:
        raise ValueError("Cannot register an item builder for FeedType.UNKNOWN")
    if not isinstance(builder, ItemBuilder):
        raise TypeError(f"Item builder must be callable, got {type(builder).__name__}")
    _registry[feed_type] = builder


def get_item_builder(feed_type: FeedType) -> ItemBuilder | None:
    """Return the builder registered for *feed_type*, or None."""
    return _registry.get(feed_type)


def reset_item_builders() -> None:
    """Restore the built-in builders. Primarily for use in tests."""
    _registry.clear()
    _registry.update(_DEFAULT_BUILDERS)
