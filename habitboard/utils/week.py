# habitboard/utils/week.py
"""
Custom week helpers.

A custom week runs Saturday → Friday. All comparisons are done on calendar
dates (YYYY-MM-DD keys), never on instants.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

ALL_TIME_DAYS = 28

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True, slots=True)
class WeekDay:
    short: str
    full: str
    index: int  # Sunday = 0 ... Saturday = 6


CUSTOM_WEEK_DAYS: tuple[WeekDay, ...] = (
    WeekDay("Sat", "Saturday", 6),
    WeekDay("Sun", "Sunday", 0),
    WeekDay("Mon", "Monday", 1),
    WeekDay("Tue", "Tuesday", 2),
    WeekDay("Wed", "Wednesday", 3),
    WeekDay("Thu", "Thursday", 4),
    WeekDay("Fri", "Friday", 5),
)


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def day_of_week(value: date | datetime) -> int:
    # Sunday = 0 ... Saturday = 6
    return (_as_date(value).weekday() + 1) % 7


def date_key(value: date | datetime) -> str:
    return _as_date(value).isoformat()


def week_start(reference: date | datetime) -> date:
    d = _as_date(reference)
    dow = day_of_week(d)
    days_to_subtract = 0 if dow == 6 else dow + 1
    return d - timedelta(days=days_to_subtract)


def week_end(reference: date | datetime) -> datetime:
    end_day = week_start(reference) + timedelta(days=6)
    return datetime.combine(end_day, time.max)


def week_dates(reference: date | datetime) -> list[date]:
    start = week_start(reference)
    return [start + timedelta(days=i) for i in range(7)]


def previous_week(value: date | datetime) -> date | datetime:
    return value - timedelta(days=7)


def next_week(value: date | datetime) -> date | datetime:
    return value + timedelta(days=7)


def is_today(value: date | datetime, today: date) -> bool:
    return date_key(value) == date_key(today)


def is_current_week(value: date | datetime, today: date) -> bool:
    """`today` comes from TimeProvider so the configured TIMEZONE decides the week."""
    return date_key(week_start(value)) == date_key(week_start(today))


def rolling_window(today: date | datetime, days: int = ALL_TIME_DAYS) -> list[date]:
    """
    Flat window of `days` consecutive dates starting `days` days before today.
    Not aligned to week boundaries; the last date is the day before `today`.
    """
    first = _as_date(today) - timedelta(days=days)
    return [first + timedelta(days=i) for i in range(days)]


def range_label(reference: date | datetime) -> str:
    """
    "Dec 30 - Jan 5", or "Jan 6 - 12" when both ends are in the same month.
    """
    start = week_start(reference)
    end = week_end(reference).date()

    # %b is locale dependent, English names are what the UI shows
    start_month = _MONTHS[start.month - 1]
    end_month = _MONTHS[end.month - 1]

    if start_month == end_month:
        return f"{start_month} {start.day} - {end.day}"
    return f"{start_month} {start.day} - {end_month} {end.day}"

