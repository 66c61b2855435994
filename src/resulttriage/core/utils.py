"""Shared parsing helpers for free-form clinical values and timestamps.

Everything here is lenient: unparseable input returns None rather than
raising, because result values are typed in by many different staff.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timezone

_LEADING_NUMBER = re.compile(r"^[<>=≤≥~]*\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))")
_TITER = re.compile(r"1\s*:\s*(\d+)")
_DIGIT_GRADE = re.compile(r"^\s*([1-4])\s*\+")
_WHITESPACE = re.compile(r"\s+")

_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
)


def try_parse_numeric(value) -> float | None:
    """Parse the leading number of a lab value string.

    Handles leading operators like '<', '>', '<=', '>=' and trailing units:
    "5.5 g/dL" -> 5.5, "<0.5" -> 0.5, "10-15" -> 10.0.
    Returns None if the value does not start with a number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    m = _LEADING_NUMBER.match(str(value).strip())
    if not m:
        return None
    try:
        return float(m.group(1))
    except ValueError:
        return None


def parse_titer(value) -> float | None:
    """Extract the dilution denominator from an agglutination titer.

    "1:160" -> 160.0, "<1:20" -> 20.0, "Negative" -> None.
    """
    if not value:
        return None
    m = _TITER.search(str(value))
    return float(m.group(1)) if m else None


def parse_plus_grade(value) -> int:
    """Count semi-quantitative '+' markers ("++" -> 2, "3+" -> 3).

    Returns 0 for values without markers (Negative, Nil, Trace, '-').
    """
    if not value:
        return 0
    s = str(value)
    m = _DIGIT_GRADE.match(s)
    if m:
        return int(m.group(1))
    return s.count("+")


def normalize_text(text) -> str:
    """Lowercase, collapse whitespace and drop trailing punctuation."""
    if not text:
        return ""
    s = _WHITESPACE.sub(" ", str(text)).strip().lower()
    return s.rstrip(" .;:!")


def coerce_datetime(value) -> datetime | None:
    """Convert a timestamp-ish value to a timezone-aware datetime.

    Accepts datetime, date, epoch seconds, or strings in ISO 8601
    ("2025-06-30", "2025-06-30T13:25:00Z", "2025-06-30T13:25:00+03:00"),
    "YYYY-MM-DD HH:MM[:SS]" and "MM/DD/YYYY". Naive values are taken as UTC.

    Returns None for empty/unparseable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        dt = _parse_datetime_text(value.strip())
        if dt is None:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_datetime_text(s: str) -> datetime | None:
    if not s:
        return None
    iso = s[:-1] + "+00:00" if s.endswith(("Z", "z")) else s
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None
