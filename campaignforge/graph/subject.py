"""
subject.py
----------
Resolve the campaign subject (brand name + category) from whatever analysis
record is available, and derive the conversation cache key.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..models import Subject
from .schema import get_path

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Your Brand"
DEFAULT_CATEGORY = "Consumer Goods"
PLACEHOLDER_NAMES = {"Unknown Brand"}

NAME_PATHS = (
    "brandName",
    "brand_name",
    "structuredAnalysis.brandName",
    "structuredAnalysis.brand_name",
    "executiveSnapshot.brandName",
    "executiveSnapshot.brand_name",
)
CATEGORY_PATHS = (
    "category",
    "structuredAnalysis.category",
    "executiveSnapshot.category",
)


def usable_name(name: Optional[str]) -> bool:
    return bool(name and name.strip() and name.strip() not in PLACEHOLDER_NAMES)


def _first_string(record: Dict[str, Any], paths) -> Optional[str]:
    for path in paths:
        value = get_path(record, path)
        if isinstance(value, str) and value.strip():
            logger.debug("Resolved %s from record", path)
            return value.strip()
    return None


def _clean_name(name: str) -> str:
    name = name.replace('"', "").replace("'", "").strip()
    return name[:1].upper() + name[1:]


def resolve_subject(record: Optional[Dict[str, Any]], requested_name: Optional[str] = None) -> Subject:
    """
    Record values win; the requested name is used when the record has none.
    Names other than the default are capitalized and stripped of quotes.
    """
    name = category = None
    if isinstance(record, dict):
        name = _first_string(record, NAME_PATHS)
        category = _first_string(record, CATEGORY_PATHS)

    if not name and usable_name(requested_name):
        name = requested_name.strip()

    return Subject(
        name=_clean_name(name) if name else DEFAULT_NAME,
        category=category or DEFAULT_CATEGORY,
    )


def conversation_key(name: str, category: str) -> str:
    # Stable subject attributes only; message content never feeds the key.
    return f"{name}_{category}"
