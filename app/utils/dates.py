"""
Lunchbox API - Date Utilities.

Helpers for the YYYY-MM-DD / YYYY-MM formats used across the API.
"""

import calendar
from datetime import date
from typing import Any, Optional, Tuple

from app.utils.errors import ValidationError


def validate_range(start: date, end: date) -> None:
    """
    Ensure a ``from``/``to`` pair is ordered.

    Raises:
        ValidationError: If ``start`` is after ``end``.
    """
    if start > end:
        raise ValidationError("from must be on or before to")


def parse_month(value: str) -> Tuple[date, date]:
    """
    Parse a ``YYYY-MM`` month into its first and last day.

    Args:
        value: Month string.

    Returns:
        Tuple[date, date]: (first day, last day) of the month.

    Raises:
        ValidationError: If the value is not a valid month.

    Example:
        >>> parse_month("2024-02")
        (datetime.date(2024, 2, 1), datetime.date(2024, 2, 29))
    """
    try:
        year_str, month_str = value.split("-")
        year, month = int(year_str), int(month_str)
        first = date(year, month, 1)
    except (AttributeError, ValueError):
        raise ValidationError("month must be formatted YYYY-MM")

    last_day = calendar.monthrange(year, month)[1]
    return first, date(year, month, last_day)


def try_parse_date(value: Any) -> Optional[date]:
    """Parse a YYYY-MM-DD string, returning None instead of raising."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None
