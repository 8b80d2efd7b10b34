"""Tests for date parsing and range presets."""

from datetime import date, datetime, timedelta

import pytest

from khata.utils.date_parser import (
    EPOCH,
    format_timestamp,
    get_range_bounds,
    parse_date,
    utcnow,
)

NOW = datetime(2024, 3, 15, 10, 30)


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)

    def test_long_form(self):
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    def test_today_and_yesterday(self):
        today = utcnow().date()
        assert parse_date("today") == today
        assert parse_date(" Yesterday ") == today - timedelta(days=1)

    def test_this_month(self):
        assert parse_date("this month") == utcnow().date().replace(day=1)

    def test_invalid(self):
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date("garbage")


class TestRangeBounds:
    def test_last_seven_days(self):
        start, end = get_range_bounds("7d", now=NOW)
        assert start == NOW - timedelta(days=7)
        assert end == datetime(2024, 3, 15, 23, 59, 59, 999999)

    def test_thirty_and_ninety_days(self):
        assert get_range_bounds("30d", now=NOW)[0] == NOW - timedelta(days=30)
        assert get_range_bounds("90d", now=NOW)[0] == NOW - timedelta(days=90)

    def test_this_month(self):
        start, end = get_range_bounds("this-month", now=NOW)
        assert start == datetime(2024, 3, 1)
        assert end.date() == date(2024, 3, 15)

    def test_all_time(self):
        assert get_range_bounds("all", now=NOW) == (EPOCH, NOW)

    def test_custom_covers_whole_days(self):
        start, end = get_range_bounds("custom", date(2024, 2, 1), date(2024, 2, 10))
        assert start == datetime(2024, 2, 1, 0, 0, 0)
        assert end == datetime(2024, 2, 10, 23, 59, 59, 999999)

    def test_custom_reversed_days_are_swapped(self):
        start, end = get_range_bounds("custom", date(2024, 2, 10), date(2024, 2, 1))
        assert start.date() == date(2024, 2, 1)
        assert end.date() == date(2024, 2, 10)

    def test_custom_requires_both_days(self):
        with pytest.raises(ValueError, match="start and an end"):
            get_range_bounds("custom", date(2024, 2, 1), None)

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown range"):
            get_range_bounds("last-decade")


def test_format_timestamp():
    assert format_timestamp(datetime(2024, 3, 5, 14, 7)) == "2024-03-05 14:07"
    assert format_timestamp(datetime(2024, 3, 5, 14, 7), short=True) == "Mar 05, 2024"
    assert format_timestamp(None) == "—"
