"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_DAYS_AGO = re.compile(r"^(\d+)\s+days?\s+ago$")

PERIODS = ("this-week", "last-week", "this-month", "last-month", "this-year", "last-year")


def parse_date(date_str: str, today: Optional[date] = None, dayfirst: bool = True) -> date:
    """Parse a date string into a date object.

    Supports:
    - ISO dates: "2024-01-15"
    - Free-form dates: "15/01/2024", "15 Jan 2024" (day first by default)
    - Relative dates: "today", "yesterday", "3 days ago"

    Args:
        date_str: Date string
        today: Reference date for relative dates (defaults to today)
        dayfirst: Read ambiguous numeric dates as day/month/year

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

    match = _DAYS_AGO.match(text)
    if match:
        return today - timedelta(days=int(match.group(1)))

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return date_parser.parse(text, dayfirst=dayfirst).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Periods that include today end today; past periods end on their last day.

    Args:
        period: One of this-week, last-week, this-month, last-month,
            this-year, last-year
        today: Reference date (defaults to today)

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    week_start = today - timedelta(days=today.weekday())
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)

    if period == "this-week":
        return week_start, today
    if period == "last-week":
        start = week_start - timedelta(days=7)
        return start, start + timedelta(days=6)
    if period == "this-month":
        return month_start, today
    if period == "last-month":
        return month_start - relativedelta(months=1), month_start - timedelta(days=1)
    if period == "this-year":
        return year_start, today
    if period == "last-year":
        return year_start - relativedelta(years=1), year_start - timedelta(days=1)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
