"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def _start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _start_of_month(day: date) -> date:
    return day.replace(day=1)


def _start_of_year(day: date) -> date:
    return day.replace(month=1, day=1)


_RELATIVE_STARTS: dict[str, Callable[[date], date]] = {
    "last week": lambda today: _start_of_week(today) - timedelta(days=7),
    "this week": _start_of_week,
    "next week": lambda today: _start_of_week(today) + timedelta(days=7),
    "last month": lambda today: _start_of_month(today - relativedelta(months=1)),
    "this month": _start_of_month,
    "next month": lambda today: _start_of_month(today + relativedelta(months=1)),
    "last year": lambda today: _start_of_year(today) - relativedelta(years=1),
    "this year": _start_of_year,
    "next year": lambda today: _start_of_year(today) + relativedelta(years=1),
}


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", "tomorrow", "last monday", and
    "last/this/next week|month|year", which resolve to the first day of that
    period.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative forms (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)
    if text == "tomorrow":
        return today + timedelta(days=1)
    if text in _RELATIVE_STARTS:
        return _RELATIVE_STARTS[text](today)
    if text.startswith("last ") and text[5:] in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(text[5:])) % 7 or 7
        return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named reporting period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month or year.

    Args:
        period: One of PERIODS
        today: Reference date (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    key = period.strip().lower()
    today = today or date.today()

    if key == "this-week":
        return _start_of_week(today), today
    if key == "this-month":
        return _start_of_month(today), today
    if key == "this-year":
        return _start_of_year(today), today
    if key == "last-week":
        start = _start_of_week(today) - timedelta(days=7)
        return start, start + timedelta(days=6)
    if key == "last-month":
        end = _start_of_month(today) - timedelta(days=1)
        return _start_of_month(end), end
    if key == "last-year":
        end = _start_of_year(today) - timedelta(days=1)
        return _start_of_year(end), end

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
