from datetime import date, datetime, time, timedelta, timezone

import pytest

from campus_signage.clock import (
    FIXED_TZ,
    combine,
    end_of_day,
    fixed_today,
    format_12h_time,
    parse_12h_time,
    parse_form_time,
    to_24h,
)


@pytest.mark.parametrize("hours,am_pm,expected", [
    (12, "AM", 0),
    (12, "PM", 12),
    (1, "PM", 13),
    (11, "am", 11),
])
def test_to_24h(hours, am_pm, expected):
    assert to_24h(hours, am_pm) == expected


def test_parse_12h_time_accepts_recorded_formats():
    assert parse_12h_time("2:00 PM") == time(14, 0)
    assert parse_12h_time("02:30pm") == time(14, 30)
    assert parse_12h_time("12:05 am") == time(0, 5)


def test_parse_12h_time_rejects_garbage():
    assert parse_12h_time(None) is None
    assert parse_12h_time("") is None
    assert parse_12h_time("afternoon") is None
    assert parse_12h_time("13:00 PM") is None
    assert parse_12h_time("9:75 AM") is None


def test_parse_form_time():
    assert parse_form_time("9:30", "PM") == time(21, 30)
    assert parse_form_time(" 12:00 ", "AM") == time(0, 0)
    assert parse_form_time("9.30", "PM") is None
    assert parse_form_time("0:30", "AM") is None
    assert parse_form_time("9:30", "XX") is None


def test_format_12h_time():
    assert format_12h_time(" 2:00", "pm") == "2:00 PM"


def test_fixed_today_crosses_midnight_before_utc():
    # 2025-08-31 17:30 UTC is already Sep 1 in UTC+8
    utc_instant = datetime(2025, 8, 31, 17, 30, tzinfo=timezone.utc)
    assert fixed_today(utc_instant) == date(2025, 9, 1)


def test_combine_and_end_of_day_are_in_fixed_zone():
    moment = combine(date(2025, 9, 1), time(14, 0))
    assert moment.utcoffset() == timedelta(hours=8)
    last = end_of_day(date(2025, 9, 1))
    assert last.tzinfo is FIXED_TZ
    assert (last.hour, last.minute, last.second) == (23, 59, 59)
