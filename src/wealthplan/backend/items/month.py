"""Month arithmetic on integer months counted from January 1900.

January 1900 is ``0`` and January 2024 is ``1488``. Whole months are all the
projection code needs, so plain integers replace ``date`` objects.
"""

from __future__ import annotations

import calendar
import re
from datetime import date
from typing import Any, Literal

Month = int

_BASE_YEAR = 1900
_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})(?:-\d{2})?$")


def date_to_month(value: date) -> Month:
    return (value.year - _BASE_YEAR) * 12 + value.month - 1


def month_to_date(month: Month) -> date:
    """Return the first day of ``month``."""

    return date(year_of(month), month_index(month) + 1, 1)


def current_month(today: date | None = None) -> Month:
    return date_to_month(today or date.today())


def add_months(month: Month, months: int) -> Month:
    return month + months


def month_diff(later: Month, earlier: Month) -> int:
    return later - earlier


def year_of(month: Month) -> int:
    return month // 12 + _BASE_YEAR


def month_index(month: Month) -> int:
    """Zero-based calendar month (0 is January)."""

    return month % 12


def from_year_month(year: int, index: int) -> Month:
    return (year - _BASE_YEAR) * 12 + index


def format_month(
    month: Month | None, style: Literal["YYYY-MM", "YYYY-MM-DD", "full", "short"] = "YYYY-MM"
) -> str:
    if month is None:
        return ""
    year = year_of(month)
    index = month_index(month)
    if style == "YYYY-MM-DD":
        return month_to_date(month).isoformat()
    if style == "full":
        return f"{calendar.month_name[index + 1]} {year}"
    if style == "short":
        return f"{calendar.month_abbr[index + 1]} {year}"
    return f"{year}-{index + 1:02d}"


def parse_month(value: str | None) -> Month | None:
    """Parse ``YYYY-MM`` or ``YYYY-MM-DD`` strings; ``None`` when invalid."""

    if not value:
        return None
    match = _MONTH_PATTERN.match(value.strip())
    if match is None:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    return from_year_month(year, month - 1)


def is_valid_month(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


__all__ = [
    "Month",
    "add_months",
    "current_month",
    "date_to_month",
    "format_month",
    "from_year_month",
    "is_valid_month",
    "month_diff",
    "month_index",
    "month_to_date",
    "parse_month",
    "year_of",
]
