"""Slugs: canonical lookup keys derived from display names"""

from __future__ import annotations

import re
from typing import Optional

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_HYPHEN_RUN = re.compile(r"-+")

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def slug(name: Optional[str]) -> str:
    """
    Project a display name onto its URL/lookup key.

    "Unit 42 - Loader" -> "unit-42-loader". Accented letters are not folded,
    they count as separators like any other non-ASCII-alphanumeric character.
    Distinct names can share a slug.
    """
    if not name:
        return ""
    value = _NON_ALNUM.sub("-", name.strip())
    value = _HYPHEN_RUN.sub("-", value)
    return value.strip("-").lower()


def slug_matches(name: Optional[str], identifier: Optional[str]) -> bool:
    """True when both slug to the same non-empty key."""
    target = slug(identifier)
    return bool(target) and slug(name) == target


def looks_like_id(identifier: Optional[str]) -> bool:
    """Does the identifier have the shape of a storage-assigned id (UUID)?"""
    if not identifier:
        return False
    return UUID_PATTERN.match(identifier.strip()) is not None
