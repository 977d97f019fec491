"""
Shared helpers for track predicates, formatting and LLM response parsing.
"""

import json
import re
from typing import Any, Dict, Iterable, Optional

_YEAR_PATTERN = re.compile(r"^\s*(\d{4})")

def format_duration(seconds: float) -> str:
    """Format a duration in seconds as M:SS (150 -> "2:30")."""
    total_seconds = int(seconds)
    minutes = total_seconds // 60
    remainder = total_seconds % 60
    return f"{minutes}:{remainder:02d}"

def release_year(release_date: Optional[str]) -> Optional[int]:
    """
    Extract the year from a catalog release date.

    Catalogs report dates with year, month or day precision
    ("1999", "1999-04", "1999-04-12"), so only the leading four digits are used.
    """
    if not release_date:
        return None

    match = _YEAR_PATTERN.match(str(release_date))
    if not match:
        return None
    return int(match.group(1))

def value_or_default(value: Optional[float], default: float) -> float:
    """Return value unless it is missing. Zero is a real measurement."""
    return default if value is None else value

def contains_any(text: Optional[str], needles: Iterable[str]) -> bool:
    """Case-insensitive substring test of text against any needle."""
    if not text:
        return False

    haystack = text.lower()
    return any(needle.lower() in haystack for needle in needles if needle)

def is_mostly_english(text: str, threshold: float = 0.8) -> bool:
    """True when at least `threshold` of the characters are ASCII."""
    if not text:
        return True

    ascii_count = sum(1 for char in text if ord(char) < 128)
    return ascii_count / len(text) >= threshold

def extract_first_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Return the first JSON object embedded in a completion response.

    Models sometimes wrap JSON in prose or code fences; every opening brace is
    tried in turn until one decodes to an object.
    """
    if not text:
        return None

    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)

    return None
