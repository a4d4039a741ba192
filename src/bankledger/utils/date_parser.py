"""Date parsing utilities for history filters."""

from datetime import date, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: date | None = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", "this week", "this month", "this year",
    "last week", "last month", "last year". Relative periods resolve to
    their first day.

    Args:
        date_str: Date string
        today: Reference date for relative forms, defaults to date.today()

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    week_start = today - timedelta(days=today.weekday())
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)
    periods = {
        "this week": week_start,
        "this month": month_start,
        "this year": year_start,
        "last week": week_start - timedelta(days=7),
        "last month": month_start - relativedelta(months=1),
        "last year": year_start - relativedelta(years=1),
    }
    if text in periods:
        return periods[text]

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
