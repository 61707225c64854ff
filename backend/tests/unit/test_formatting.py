"""Unit tests for dashboard template filters"""

from datetime import datetime, timedelta, timezone

from dashboard.formatting import format_timestamp


def test_afternoon():
    assert format_timestamp(datetime(2026, 10, 9, 15, 4, tzinfo=timezone.utc)) == "Oct 9, 2026, 3:04 PM"


def test_midnight_hour_is_twelve_am():
    assert format_timestamp(datetime(2026, 1, 1, 0, 30, tzinfo=timezone.utc)) == "Jan 1, 2026, 12:30 AM"


def test_noon_is_twelve_pm():
    assert format_timestamp(datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)) == "Jun 15, 2026, 12:00 PM"


def test_naive_treated_as_utc():
    assert format_timestamp(datetime(2026, 10, 9, 15, 4)) == "Oct 9, 2026, 3:04 PM"


def test_converted_to_utc():
    berlin_summer = timezone(timedelta(hours=2))
    value = datetime(2026, 7, 1, 10, 0, tzinfo=berlin_summer)
    assert format_timestamp(value) == "Jul 1, 2026, 8:00 AM"
