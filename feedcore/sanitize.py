"""Display-safe string helpers."""

from __future__ import annotations

from bs4 import BeautifulSoup


def clean(value: str | None) -> str:
    """Strip markup from *value*, returning plain text.

    Entity references are never decoded, with or without markup, so URLs and
    entity-like query strings survive untouched.
    """
    if not value:
        return ""
    if "<" not in value:
        return value
    # html.parser decodes references in text; escape "&" so they round-trip.
    soup = BeautifulSoup(value.replace("&", "&amp;"), "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text()


def transcode(value: str | None) -> str:
    """Return *value* with anything not encodable as UTF-8 dropped.

    libxml2 diagnostics may quote broken input verbatim; this never raises.
    """
    if not value:
        return ""
    return value.encode("utf-8", errors="ignore").decode("utf-8", errors="ignore")
