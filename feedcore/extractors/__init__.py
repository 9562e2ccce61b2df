"""Extraction sub-package: per-dialect metadata, entries and link lookup."""

from .entries import build_atom_item, build_rss_item, parse_date
from .links import extract_links
from .metadata import FeedMetadata, extract_metadata

__all__ = [
    "build_atom_item",
    "build_rss_item",
    "extract_links",
    "extract_metadata",
    "parse_date",
    "FeedMetadata",
]
