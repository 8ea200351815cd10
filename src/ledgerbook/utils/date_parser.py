"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-month", "last-month", "this-year", "last-year", "this-week", "last-week")


def _relative_date(text: str, today: date) -> Optional[date]:
    """Resolve relative words like 'yesterday' or 'last month'."""
    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in simple:
        return simple[text]

    if text.startswith(("last ", "this ")):
        which, period = text.split(" ", 1)
        if period == "month":
            start = today.replace(day=1)
            return start - relativedelta(months=1) if which == "last" else start
        if period == "year":
            start = today.replace(month=1, day=1)
            return start - relativedelta(years=1) if which == "last" else start
        if period == "week":
            # Weeks start on Monday
            start = today - timedelta(days=today.weekday())
            return start - timedelta(days=7) if which == "last" else start

    return None


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones ("today", "yesterday", "last month", "this year", ...).

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    relative = _relative_date(text, date.today())
    if relative is not None:
        return relative

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Parse a transaction timestamp, truncated to whole minutes.

    None or an empty string means "now". Relative day words keep the current
    time of day, so "yesterday" records yesterday at this time.

    Raises:
        ValueError: If the string cannot be parsed
    """
    now = (now or datetime.now()).replace(second=0, microsecond=0)
    if value is None or not value.strip():
        return now

    text = value.strip().lower()
    relative = _relative_date(text, now.date())
    if relative is not None:
        return datetime.combine(relative, now.time())

    try:
        parsed = date_parser.parse(text, default=now.replace(hour=0, minute=0))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")
    return parsed.replace(second=0, microsecond=0, tzinfo=None)


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of this-month, last-month, this-year, last-year,
            this-week, last-week

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    if period not in PERIODS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    today = date.today()
    which, unit = period.split("-")
    start = _relative_date(f"{which} {unit}", today)

    if which == "this":
        return (start, today)

    # Last period ends the day before the current one starts
    current_start = _relative_date(f"this {unit}", today)
    return (start, current_start - timedelta(days=1))
