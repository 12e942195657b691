# limnos/shared/sanitize.py

"""Input sanitization for identifiers that end up in rendered narrative text."""

import logging
import re

logger = logging.getLogger(__name__)

MAX_LAKE_NAME_LENGTH = 100
MAX_LAKE_ID_LENGTH = 64

# Alphanumerics (incl. accented letters), spaces, hyphens, dots and apostrophes
LAKE_NAME_PATTERN = re.compile(r"^[\w\s\-\.']+$", re.UNICODE)

MARKUP_PATTERN = re.compile(r"<\s*/?\s*[a-z][^>]*>", re.IGNORECASE)


def sanitize_lake_name(name: str) -> str:
    """Validate and sanitize a lake name."""
    if not name:
        raise ValueError("Lake name cannot be empty")
    name = name.strip()
    if not name:
        raise ValueError("Lake name cannot be empty")
    if len(name) > MAX_LAKE_NAME_LENGTH:
        raise ValueError(f"Lake name too long (max {MAX_LAKE_NAME_LENGTH})")
    if MARKUP_PATTERN.search(name):
        logger.warning("Blocked markup in lake name")
        raise ValueError("Lake name contains markup")
    if not LAKE_NAME_PATTERN.match(name):
        raise ValueError("Lake name contains invalid characters")
    return name


def sanitize_lake_id(lake_id: str) -> str:
    """Validate a caller-supplied lake identifier (any non-empty label)."""
    lake_id = (lake_id or "").strip()
    if not lake_id:
        raise ValueError("Lake id cannot be empty")
    if len(lake_id) > MAX_LAKE_ID_LENGTH:
        raise ValueError(f"Lake id too long (max {MAX_LAKE_ID_LENGTH})")
    return lake_id


def clean_narrative(text: str) -> str:
    """Strip markdown emphasis characters from externally generated narrative text."""
    return re.sub(r"[#*]", "", text or "").strip()
