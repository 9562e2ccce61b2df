"""Parser settings and YAML settings loading.

Defaults live on :class:`ParserSettings`; a YAML file may override any of
them::

    # feedcore.yaml
    huge_tree: true
    sanitize: false
    log_level: DEBUG
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Settings model
# ---------------------------------------------------------------------------

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ParserSettings(BaseModel):
    """Options controlling how a feed document is loaded and presented."""

    # Lift libxml2's depth/size safety limits (very large feeds only)
    huge_tree: bool = False
    remove_blank_text: bool = False
    # Strip markup from title/link/links() output
    sanitize: bool = True
    # Used by the CLI only; the library never configures logging
    log_level: str = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in _LOG_LEVELS:
                raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return v


DEFAULT_SETTINGS = ParserSettings()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_settings(path: str | Path) -> ParserSettings:
    """Load YAML settings from *path*, merged over the defaults.

    Unknown keys are ignored.  A document that is empty or not a mapping
    yields the defaults.
    """
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a mapping; using defaults", path)
        return ParserSettings()

    known = {k: v for k, v in data.items() if k in ParserSettings.model_fields}
    ignored = sorted(str(k) for k in data if k not in known)
    if ignored:
        logger.debug("Ignoring unknown settings keys: %s", ", ".join(ignored))

    merged: dict[str, Any] = DEFAULT_SETTINGS.model_dump()
    merged.update(known)
    return ParserSettings(**merged)
