"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from feedcore.plugins import reset_item_builders

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> bytes:
    return (FIXTURES_DIR / name).read_bytes()


@pytest.fixture(autouse=True)
def _default_item_builders():
    yield
    reset_item_builders()


@pytest.fixture
def atom_xml() -> bytes:
    return _read_fixture("atom.xml")


@pytest.fixture
def atom03_xml() -> bytes:
    return _read_fixture("atom03.xml")


@pytest.fixture
def rss_xml() -> bytes:
    return _read_fixture("rss2.xml")


@pytest.fixture
def rdf_xml() -> bytes:
    return _read_fixture("rdf.xml")


@pytest.fixture
def not_a_feed_xml() -> bytes:
    return _read_fixture("not_a_feed.xml")


@pytest.fixture
def malformed_xml() -> bytes:
    return _read_fixture("malformed.xml")
