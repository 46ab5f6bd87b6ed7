from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from habitboard.utils.dt import TimeProvider
from habitboard.utils.week import (
    CUSTOM_WEEK_DAYS,
    date_key,
    day_of_week,
    is_current_week,
    is_today,
    next_week,
    previous_week,
    range_label,
    rolling_window,
    week_dates,
    week_end,
    week_start,
)

ALL_DAYS_2024 = [date(2024, 1, 1) + timedelta(days=i) for i in range(366)]


def test_week_start_is_always_a_saturday_and_idempotent():
    for d in ALL_DAYS_2024:
        start = week_start(d)
        assert start.weekday() == 5  # Saturday
        assert start <= d < start + timedelta(days=7)
        assert week_start(start) == start


@pytest.mark.parametrize(
    "reference, expected",
    [
        (date(2024, 1, 6), date(2024, 1, 6)),  # Saturday itself
        (date(2024, 1, 7), date(2024, 1, 6)),  # Sunday
        (date(2024, 1, 8), date(2024, 1, 6)),  # Monday
        (date(2024, 1, 12), date(2024, 1, 6)),  # Friday
        (date(2024, 1, 13), date(2024, 1, 13)),  # next Saturday
    ],
)
def test_week_start_examples(reference, expected):
    assert week_start(reference) == expected


def test_week_start_normalizes_datetimes_to_the_calendar_day():
    assert week_start(datetime(2024, 1, 9, 18, 30)) == date(2024, 1, 6)


def test_day_of_week_uses_sunday_zero_numbering():
    assert day_of_week(date(2024, 1, 7)) == 0  # Sunday
    assert day_of_week(date(2024, 1, 6)) == 6  # Saturday


def test_week_end_is_last_instant_of_friday():
    end = week_end(date(2024, 1, 8))
    assert end == datetime.combine(date(2024, 1, 12), time.max)


def test_week_dates_are_seven_consecutive_days_from_week_start():
    for d in ALL_DAYS_2024[::11]:
        dates = week_dates(d)
        start = week_start(d)
        assert dates == [start + timedelta(days=i) for i in range(7)]


def test_custom_week_day_names_follow_saturday_start():
    dates = week_dates(date(2024, 1, 10))
    assert [day.short for day in CUSTOM_WEEK_DAYS] == ["Sat", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri"]
    assert [day_of_week(d) for d in dates] == [day.index for day in CUSTOM_WEEK_DAYS]


def test_date_key_is_iso_calendar_date():
    assert date_key(date(2024, 1, 6)) == "2024-01-06"
    assert date_key(datetime(2024, 1, 6, 23, 59)) == "2024-01-06"


def test_previous_and_next_week_shift_without_normalizing():
    wednesday = date(2024, 1, 10)
    assert next_week(wednesday) == date(2024, 1, 17)
    assert previous_week(wednesday) == date(2024, 1, 3)
    assert next_week(wednesday).weekday() == wednesday.weekday()


def test_is_current_week():
    today = date(2024, 1, 10)
    assert is_current_week(today, today)
    assert is_current_week(date(2024, 1, 6), today)
    assert not is_current_week(date(2024, 1, 5), today)
    assert not is_current_week(today - timedelta(days=14), today)


def test_is_current_week_follows_the_zone_that_produced_today():
    instant = datetime(2024, 1, 12, 20, tzinfo=timezone.utc)  # Friday evening in UTC
    utc_today = instant.date()
    kiritimati_today = instant.astimezone(ZoneInfo("Pacific/Kiritimati")).date()

    assert kiritimati_today == date(2024, 1, 13)
    assert is_current_week(date(2024, 1, 6), utc_today)
    assert not is_current_week(date(2024, 1, 6), kiritimati_today)


def test_time_provider_uses_configured_zone():
    now = TimeProvider("Pacific/Kiritimati").now()
    assert now.utcoffset() == timedelta(hours=14)


def test_is_today():
    assert is_today(datetime(2024, 1, 10, 8), date(2024, 1, 10))
    assert not is_today(date(2024, 1, 9), date(2024, 1, 10))


def test_rolling_window_is_flat_28_days_before_today():
    today = date(2024, 1, 10)
    window = rolling_window(today)
    assert len(window) == 28
    assert window[0] == today - timedelta(days=28)
    assert window[-1] == today - timedelta(days=1)
    assert all(b - a == timedelta(days=1) for a, b in zip(window, window[1:]))


@pytest.mark.parametrize(
    "reference, label",
    [
        (date(2024, 1, 2), "Dec 30 - Jan 5"),
        (date(2024, 1, 10), "Jan 6 - 12"),
        (date(2024, 3, 1), "Feb 24 - Mar 1"),
    ],
)
def test_range_label(reference, label):
    assert range_label(reference) == label
