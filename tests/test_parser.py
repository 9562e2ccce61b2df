"""Tests for feedcore.parser — FeedParser high-level class and parse_feed()."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from feedcore.detect import detect_type
from feedcore.errors import EMPTY_FEED_MESSAGE, UNKNOWN_FEED_MESSAGE, FeedError
from feedcore.extractors.metadata import extract_metadata
from feedcore.items import FeedItem, FeedType, ParsedFeed
from feedcore.namespaces import RSSFAKE_PREFIX
from feedcore.parser import FeedParser, parse_feed
from feedcore.settings import ParserSettings

# ---------------------------------------------------------------------------
# Load and classification failures
# ---------------------------------------------------------------------------

class TestFailures:
    def test_empty_input(self):
        parser = FeedParser(b"")
        assert parser.init() is False
        assert parser.error() == EMPTY_FEED_MESSAGE
        assert parser.errors() == []
        assert parser.items() == []
        assert parser.type() is FeedType.UNKNOWN

    def test_malformed_xml(self, malformed_xml):
        parser = FeedParser(malformed_xml)
        assert parser.init() is False
        assert parser.error() != ""
        assert len(parser.errors()) >= 1
        assert parser.error() == parser.errors()[0]
        assert parser.items() == []

    def test_malformed_never_probes_type(self, malformed_xml):
        parser = FeedParser(malformed_xml)
        with patch("feedcore.parser.detect_type") as detect:
            assert parser.type() is FeedType.UNKNOWN
            parser.init()
        detect.assert_not_called()

    def test_unknown_feed_type(self, not_a_feed_xml):
        parser = FeedParser(not_a_feed_xml)
        assert parser.init() is False
        assert parser.error() == UNKNOWN_FEED_MESSAGE
        assert parser.errors() == []
        assert parser.items() == []

    def test_unknown_type_sets_error_before_init(self, not_a_feed_xml):
        parser = FeedParser(not_a_feed_xml)
        assert parser.type() is FeedType.UNKNOWN
        assert parser.error() == UNKNOWN_FEED_MESSAGE

    def test_failed_accessors_return_empty_values(self, not_a_feed_xml):
        parser = FeedParser(not_a_feed_xml)
        parser.init()
        assert parser.title() == ""
        assert parser.link() == ""
        assert parser.links() == []

    def test_error_is_transcoded(self):
        parser = FeedParser(b"")
        parser._error = "bad \udcff byte"
        assert parser.error() == "bad  byte"


# ---------------------------------------------------------------------------
# Atom
# ---------------------------------------------------------------------------

class TestAtom:
    def test_metadata(self, atom_xml):
        parser = FeedParser(atom_xml)
        assert parser.init() is True
        assert parser.type() is FeedType.ATOM
        assert parser.title() == "Example Atom Feed"
        assert parser.link() == "https://example.com/"
        assert parser.error() == ""
        assert parser.errors() == []

    def test_items(self, atom_xml):
        parser = FeedParser(atom_xml)
        parser.init()
        items = parser.items()
        assert len(items) == 2
        assert all(isinstance(i, FeedItem) for i in items)
        assert [i.title for i in items] == [
            "How to Extract Structured Content",
            "Second <i>post</i>",
        ]

    def test_alternate_link_fallback(self):
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom">
          <title>t</title>
          <link rel="self" href="https://example.com/self"/>
          <link rel="alternate" href="https://example.com/alt"/>
        </feed>"""
        parser = FeedParser(data)
        assert parser.init()
        assert parser.link() == "https://example.com/alt"

    def test_first_candidate_wins_even_without_href(self):
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom">
          <title>t</title>
          <link/>
          <link rel="alternate" href="https://example.com/alt"/>
        </feed>"""
        parser = FeedParser(data)
        assert parser.init()
        assert parser.link() == ""

    def test_atom03(self, atom03_xml):
        parser = FeedParser(atom03_xml)
        assert parser.init()
        assert parser.type() is FeedType.ATOM
        assert parser.title() == "Legacy Atom"
        assert parser.link() == "https://legacy.example.org/"
        assert len(parser.items()) == 1

    def test_no_title_or_entries_is_not_an_error(self):
        parser = FeedParser(b'<feed xmlns="http://www.w3.org/2005/Atom"/>')
        assert parser.init() is True
        assert parser.title() == ""
        assert parser.link() == ""
        assert parser.items() == []


# ---------------------------------------------------------------------------
# RSS 2.0
# ---------------------------------------------------------------------------

class TestRss:
    def test_metadata(self, rss_xml):
        parser = FeedParser(rss_xml)
        assert parser.init() is True
        assert parser.type() is FeedType.RSS
        assert parser.title() == "Tech Blog"
        assert parser.link() == "https://blog.example.com/"
        assert len(parser.items()) == 1

    def test_href_attribute_preferred(self):
        data = (
            b"<rss><channel><title>t</title>"
            b'<link href="https://attr.example.com/">https://text.example.com/</link>'
            b"</channel></rss>"
        )
        parser = FeedParser(data)
        assert parser.init()
        assert parser.link() == "https://attr.example.com/"

    def test_minimal_str_input(self):
        parser = FeedParser(
            "<rss><channel><title>t</title><link>https://x.example/</link>"
            "<item><title>i</title></item></channel></rss>",
        )
        assert parser.init()
        assert parser.link() == "https://x.example/"
        assert len(parser.items()) == 1

    def test_rssfake_not_registered(self, rss_xml):
        parser = FeedParser(rss_xml)
        parser.init()
        assert RSSFAKE_PREFIX not in parser._context.registry


# ---------------------------------------------------------------------------
# RDF / RSS 1.0
# ---------------------------------------------------------------------------

class TestRdf:
    def test_metadata(self, rdf_xml):
        parser = FeedParser(rdf_xml)
        assert parser.init() is True
        assert parser.type() is FeedType.RDF
        assert parser.title() == "Example News"
        assert parser.link() == "https://news.example.net/"
        assert [i.title for i in parser.items()] == ["First story", "Second story"]

    def test_rssfake_registered_only_after_detection(self, rdf_xml):
        parser = FeedParser(rdf_xml)
        assert RSSFAKE_PREFIX not in parser._context.registry
        assert parser.type() is FeedType.RDF
        assert RSSFAKE_PREFIX not in parser._context.registry
        parser.init()
        assert RSSFAKE_PREFIX in parser._context.registry


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

class TestLifecycle:
    def test_type_is_idempotent(self, rss_xml):
        parser = FeedParser(rss_xml)
        with patch("feedcore.parser.detect_type", wraps=detect_type) as detect:
            first = parser.type()
            second = parser.type()
        assert first is second is FeedType.RSS
        detect.assert_called_once()

    def test_type_does_not_requery_after_init(self, atom_xml):
        parser = FeedParser(atom_xml)
        parser.init()
        with patch.object(parser._context, "query", wraps=parser._context.query) as query:
            assert parser.type() is FeedType.ATOM
        query.assert_not_called()

    def test_init_runs_extraction_once(self, atom_xml):
        parser = FeedParser(atom_xml)
        with patch("feedcore.parser.extract_metadata", wraps=extract_metadata) as extract:
            assert parser.init() is True
            assert parser.init() is True
        extract.assert_called_once()

    def test_items_returns_copy(self, atom_xml):
        parser = FeedParser(atom_xml)
        parser.init()
        parser.items().clear()
        assert len(parser.items()) == 2


# ---------------------------------------------------------------------------
# Sanitization of accessors
# ---------------------------------------------------------------------------

_MARKUP_TITLE = (
    b"<rss><channel><title>Hello &lt;b&gt;World&lt;/b&gt;</title>"
    b"<link>https://example.com/?a=1&amp;b=2</link></channel></rss>"
)


class TestSanitization:
    def test_title_sanitized(self):
        parser = FeedParser(_MARKUP_TITLE)
        parser.init()
        assert parser.title() == "Hello World"
        assert parser.link() == "https://example.com/?a=1&b=2"

    def test_sanitize_disabled(self):
        parser = FeedParser(_MARKUP_TITLE, settings=ParserSettings(sanitize=False))
        parser.init()
        assert parser.title() == "Hello <b>World</b>"

    def test_custom_sanitizer(self):
        parser = FeedParser(_MARKUP_TITLE, sanitizer=str.upper)
        parser.init()
        assert parser.title() == "HELLO <B>WORLD</B>"


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

class TestLinks:
    def test_atom_all_links(self, atom_xml):
        parser = FeedParser(atom_xml)
        parser.init()
        assert parser.links("") == [
            "https://example.com/",
            "https://example.com/feed.atom",
            "https://example.com/feed.atom?page=2",
        ]

    def test_atom_self(self, atom_xml):
        parser = FeedParser(atom_xml)
        parser.init()
        assert parser.links("self") == ["https://example.com/feed.atom"]

    def test_rss_embedded_atom_links(self, rss_xml):
        parser = FeedParser(rss_xml)
        parser.init()
        assert parser.links() == [
            "https://blog.example.com/feed.xml",
            "https://pubsubhubbub.example.com/",
        ]
        assert parser.links("hub") == ["https://pubsubhubbub.example.com/"]

    def test_rdf_embedded_atom_links(self, rdf_xml):
        parser = FeedParser(rdf_xml)
        parser.init()
        assert parser.links("self") == ["https://news.example.net/index.rdf"]

    def test_unknown_relation(self, atom_xml):
        parser = FeedParser(atom_xml)
        parser.init()
        assert parser.links("payment") == []


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------

class TestParseFeed:
    def test_success_snapshot(self, atom_xml):
        feed = parse_feed(atom_xml)
        assert isinstance(feed, ParsedFeed)
        assert feed.ok
        assert feed.type is FeedType.ATOM
        assert feed.title == "Example Atom Feed"
        assert feed.link == "https://example.com/"
        assert len(feed.items) == 2
        assert len(feed.links) == 3
        assert feed.error is None
        assert feed.raw_errors == []

    def test_failure_snapshot(self, malformed_xml):
        feed = parse_feed(malformed_xml)
        assert not feed.ok
        assert feed.type is FeedType.UNKNOWN
        assert feed.items == []
        assert feed.error
        assert feed.raw_errors

    def test_raise_for_error(self, malformed_xml):
        feed = parse_feed(malformed_xml)
        with pytest.raises(FeedError) as exc_info:
            feed.raise_for_error()
        assert exc_info.value.raw_errors == feed.raw_errors

    def test_raise_for_error_noop_on_success(self, rss_xml):
        parse_feed(rss_xml).raise_for_error()

    def test_snapshot_is_frozen(self, rss_xml):
        feed = parse_feed(rss_xml)
        with pytest.raises(ValidationError):
            feed.title = "changed"

    def test_json_round_trip_fields(self, rss_xml):
        data = parse_feed(rss_xml).model_dump(mode="json")
        assert data["type"] == FeedType.RSS.value
        assert data["items"][0]["title"] == "Parsing feeds with lxml"
