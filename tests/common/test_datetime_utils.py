from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.wage_tracker.wage_tracker.common.datetime_utils import (
    YearMonth,
    format_instant,
    parse_instant,
    parse_iso_date,
    parse_year_month,
    whole_seconds_between,
)


def test_parse_iso_date():
    assert parse_iso_date("2025-01-31") == date(2025, 1, 31)


@pytest.mark.parametrize("value", ["2025-1-31", "2025-02-30", "31-01-2025", "", "2025-01", "2025-01-31\n", "\uff12\uff10\uff12\uff15-01-31"])
def test_parse_iso_date_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_iso_date(value)


def test_parse_year_month():
    ym = parse_year_month("2025-01")
    assert ym == YearMonth(2025, 1)


@pytest.mark.parametrize("value", ["2025-13", "2025-00", "2025-1", "2025/01", "2025-01-01", "2025-01\n", "\uff12\uff10\uff12\uff15-01"])
def test_parse_year_month_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_year_month(value)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-01-10T09:00:00Z", datetime(2025, 1, 10, 9, 0, tzinfo=timezone.utc)),
        ("2025-01-10T18:00:00+09:00", datetime(2025, 1, 10, 9, 0, tzinfo=timezone.utc)),
        ("2025-01-10T09:00:00", datetime(2025, 1, 10, 9, 0, tzinfo=timezone.utc)),
        ("2025-01-10T09:00:00.250Z", datetime(2025, 1, 10, 9, 0, 0, 250000, tzinfo=timezone.utc)),
    ],
)
def test_parse_instant_normalizes_to_utc(value, expected):
    assert parse_instant(value) == expected


@pytest.mark.parametrize("value", ["", "   ", "not a time", "2025-13-01T00:00:00Z"])
def test_parse_instant_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_instant(value)


def test_format_instant_uses_z_suffix():
    tokyo = timezone(timedelta(hours=9))
    assert format_instant(datetime(2025, 1, 10, 18, 0, tzinfo=tokyo)) == "2025-01-10T09:00:00Z"


def test_whole_seconds_between_truncates_and_clamps():
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert whole_seconds_between(start, start + timedelta(seconds=59, microseconds=900000)) == 59
    assert whole_seconds_between(start, start - timedelta(seconds=10)) == 0
