from __future__ import annotations

import re
from datetime import date, datetime, timezone, tzinfo
from typing import NamedTuple

# ASCII digits only; fullmatch rejects a trailing newline
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_MONTH_RE = re.compile(r"([0-9]{4})-([0-9]{2})")


class YearMonth(NamedTuple):
    year: int
    month: int


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    if not _DATE_RE.fullmatch(value or ""):
        raise ValueError(f"Invalid date: {value!r}")
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_year_month(value: str) -> YearMonth:
    """Parse YYYY-MM string; month must be 01-12."""
    match = _MONTH_RE.fullmatch(value or "")
    if not match:
        raise ValueError(f"Invalid month: {value!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {value!r}")
    return YearMonth(year, month)


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant and normalize to UTC.

    Naive values are treated as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Empty timestamp")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_instant(value: datetime) -> str:
    """Render a UTC instant as ISO-8601 with a ``Z`` suffix."""
    return to_utc(value).isoformat().replace("+00:00", "Z")


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        raise ValueError("Datetime must be timezone-aware")
    return value.astimezone(timezone.utc)


def local_date(value: datetime, tz: tzinfo) -> date:
    """Calendar date of an instant as seen in ``tz``."""
    return value.astimezone(tz).date()


def local_year_month(value: datetime, tz: tzinfo) -> YearMonth:
    d = local_date(value, tz)
    return YearMonth(d.year, d.month)


def whole_seconds_between(start: datetime, end: datetime) -> int:
    """Elapsed whole seconds; the sub-second remainder is dropped, negatives clamp to 0."""
    return max(0, int((end - start).total_seconds()))
