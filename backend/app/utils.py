"""
Shared utility functions for the feed analysis application.
"""
from __future__ import annotations

import unicodedata
from datetime import datetime, timezone
from hashlib import sha256
from typing import Optional

from dateutil import parser as dateparser

OPERATOR_MARKER = "mbras"


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo:
        return value.astimezone(timezone.utc)
    return value.replace(tzinfo=timezone.utc)


def parse_utc_timestamp(value: object) -> Optional[datetime]:
    """
    Parse an RFC3339 timestamp string into a UTC datetime.

    Args:
        value: Raw timestamp, normally a string such as "2025-09-10T10:00:00Z"

    Returns:
        UTC datetime, or None when the value cannot be parsed
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = dateparser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    return ensure_utc(parsed)


def elapsed_ms(start: datetime, end: datetime) -> float:
    """Milliseconds from ``start`` to ``end`` (negative if ``end`` is earlier)."""
    return (end - start).total_seconds() * 1000.0


def fold_text(text: str) -> str:
    """
    Fold text for lexicon matching.

    Decomposes with NFKD, drops every combining mark and lowercases, so
    "Técnico" and "tecnico" compare equal.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.category(ch).startswith("M"))
    return stripped.lower()


def has_operator_marker(text: str) -> bool:
    """Case-insensitive check for the operator marker substring."""
    return OPERATOR_MARKER in text.lower()


def digest_to_int(text: str) -> int:
    """
    Interpret the SHA-256 digest of ``text`` as a big unsigned integer.

    Args:
        text: Input string, hashed as UTF-8

    Returns:
        Non-negative integer below 2**256
    """
    return int(sha256(text.encode("utf-8")).hexdigest(), 16)
