"""
Date utilities for month keys, periods and date ranges.
"""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Tuple


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


def format_month_key(year: int, month: int) -> str:
    """
    Format a month key for storage.

    Raises:
        ValueError: If month is not in valid range (1-12)
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return f"{year:04d}-{month:02d}"


def parse_month_key(month_key: str) -> Tuple[int, int]:
    """
    Parse a YYYY-MM month key into (year, month).

    Raises:
        ValueError: If the key is malformed or out of range
    """
    if not is_valid_month_key(month_key):
        raise ValueError(f"Invalid month key: {month_key}")
    year_str, month_str = month_key.split("-")
    return int(year_str), int(month_str)


def is_valid_month_key(month_key: str) -> bool:
    """Check the YYYY-MM format with a year between 2020 and 2100."""
    parts = month_key.split("-")
    if len(parts) != 2 or len(parts[0]) != 4 or len(parts[1]) != 2:
        return False
    if not (parts[0].isdigit() and parts[1].isdigit()):
        return False
    year, month = int(parts[0]), int(parts[1])
    return 2020 <= year <= 2100 and 1 <= month <= 12


def get_month_name(year: int, month: int) -> str:
    """Human-readable month name, e.g. "January 2026"."""
    return f"{calendar.month_name[month]} {year}"


def current_month_key() -> str:
    today = datetime.now()
    return format_month_key(today.year, today.month)


def month_difference(from_key: str, to_key: str) -> int:
    """Number of months from one key to another (negative if earlier)."""
    from_year, from_month = parse_month_key(from_key)
    to_year, to_month = parse_month_key(to_key)
    return (to_year - from_year) * 12 + (to_month - from_month)


def parse_period(period: str) -> Tuple[str, str]:
    """
    Parse a period string into (start_date, end_date).

    Supported periods:
    - "this_month", "last_month"
    - "this_year", "last_year"
    - "week", "month", "quarter", "year" (rolling windows ending today)
    - "ytd" (year to date)

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        ValueError: If period is not recognized
    """
    today = datetime.now()
    end = today.strftime("%Y-%m-%d")

    if period == "this_month":
        return get_month_range(today.year, today.month)

    elif period == "last_month":
        first_day_this_month = today.replace(day=1)
        last_day_last_month = first_day_this_month - timedelta(days=1)
        return get_month_range(last_day_last_month.year, last_day_last_month.month)

    elif period == "this_year":
        return f"{today.year}-01-01", f"{today.year}-12-31"

    elif period == "last_year":
        year = today.year - 1
        return f"{year}-01-01", f"{year}-12-31"

    elif period == "week":
        start = today - timedelta(days=7)
        return start.strftime("%Y-%m-%d"), end

    elif period == "month":
        return _months_back(today, 1), end

    elif period == "quarter":
        return _months_back(today, 3), end

    elif period == "year":
        return _months_back(today, 12), end

    elif period == "ytd":
        return f"{today.year}-01-01", end

    else:
        raise ValueError(f"Unknown period: {period}")


def _months_back(today: datetime, months: int) -> str:
    """Same day N months earlier, clamped to the end of shorter months."""
    index = today.year * 12 + today.month - 1 - months
    year, month = divmod(index, 12)
    month += 1
    _, last_day = calendar.monthrange(year, month)
    return f"{year:04d}-{month:02d}-{min(today.day, last_day):02d}"


def get_month_range(year: int, month: int) -> Tuple[str, str]:
    """
    Get the date range for a specific month.

    Args:
        year: Year (e.g., 2026)
        month: Month (1-12)

    Returns:
        Tuple of (start_date, end_date) as "YYYY-MM-DD" strings

    Raises:
        ValueError: If month is not in valid range (1-12)
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")

    _, last_day = calendar.monthrange(year, month)

    start = f"{year:04d}-{month:02d}-01"
    end = f"{year:04d}-{month:02d}-{last_day:02d}"

    return start, end
