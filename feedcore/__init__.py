"""feedcore - dialect-agnostic RSS 1.0/RDF, RSS 2.0 and Atom feed parsing.

Quick usage::

    from feedcore import FeedParser

    parser = FeedParser(xml_bytes)
    if parser.init():
        print(parser.type().name, parser.title(), parser.link())
        print(len(parser.items()), parser.links("self"))
    else:
        print(parser.error())

Snapshot usage::

    from feedcore import parse_feed

    feed = parse_feed(xml_bytes)
    feed.raise_for_error()
    for item in feed.items:
        print(item.published_at, item.title)

Custom entry builders::

    from feedcore import FeedType, register_item_builder

    register_item_builder(FeedType.RSS, my_builder)
"""

from feedcore.errors import FeedError
from feedcore.items import Enclosure, FeedItem, FeedType, ParsedFeed
from feedcore.parser import FeedParser, parse_feed
from feedcore.plugins import (
    get_item_builder,
    register_item_builder,
    reset_item_builders,
)
from feedcore.settings import ParserSettings, load_settings

__version__ = "0.1.0"
__all__ = [
    "Enclosure",
    "FeedError",
    "FeedItem",
    "FeedParser",
    "FeedType",
    "ParsedFeed",
    "ParserSettings",
    "get_item_builder",
    "load_settings",
    "parse_feed",
    "register_item_builder",
    "reset_item_builders",
]
