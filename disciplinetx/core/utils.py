"""
Utility functions for DisciplineTX.

Date keys, calendar helpers, numeric parsing and rounding.
"""

import calendar
import re
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, Optional, Tuple, Union

DATE_FORMAT = "%Y-%m-%d"

DateLike = Union[str, date]

Number = Union[int, float, Decimal]

NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
# Commas only as thousands separators: 1,250 or -12,500.75
THOUSANDS_RE = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def parse_date(value: DateLike) -> date:
    """
    Parse a YYYY-MM-DD key (or pass a date through).

    Raises ValueError for malformed strings and non-date values.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid date: {value!r}")
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_date(value: date) -> str:
    """Format a date as its canonical YYYY-MM-DD key."""
    return value.strftime(DATE_FORMAT)


def normalize_date(value: DateLike) -> str:
    """
    Canonical date key for storage and comparison.

    Examples:
        "2024-3-1" -> "2024-03-01"
        date(2024, 3, 1) -> "2024-03-01"
    """
    return format_date(parse_date(value))


def iter_dates(start: DateLike, end: DateLike) -> Iterator[str]:
    """
    Yield every date key from start to end, inclusive, ascending.

    Yields nothing when start is after end.
    """
    current = parse_date(start)
    last = parse_date(end)
    while current <= last:
        yield format_date(current)
        current += timedelta(days=1)


def days_in_month(year: int, month: int) -> int:
    """Number of days in a 1-based month."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> Tuple[str, str]:
    """First and last date keys of a 1-based month."""
    last_day = days_in_month(year, month)
    return (
        format_date(date(year, month, 1)),
        format_date(date(year, month, last_day)),
    )


def to_decimal(value: Number) -> Decimal:
    """Exact Decimal for an int, Decimal or float (via its shortest repr)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def parse_decimal(value: Optional[Union[str, Number]]) -> Optional[Decimal]:
    """
    Parse a decimal string into a Decimal.

    Accepts plain numbers and thousands separators ("1,250.50").
    Returns None for empty, non-numeric, NaN or infinite values and
    for any other comma ("1,5") so callers can skip the record
    instead of failing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = to_decimal(value)
        return number if number.is_finite() else None

    text = str(value).strip()
    if THOUSANDS_RE.match(text):
        text = text.replace(",", "")
    if not NUMBER_RE.match(text):
        return None
    return Decimal(text)


def round_half_up(value: Number, digits: int = 0) -> float:
    """
    Round half away from zero.

    Python's round() uses banker's rounding (round(12.5) == 12);
    rates and money here round 12.5 -> 13 and 0.125 -> 0.13.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def percent(numerator: Number, denominator: Number) -> int:
    """Whole-number percentage, 0 when the denominator is 0."""
    if denominator <= 0:
        return 0
    return int(round_half_up(to_decimal(numerator) * 100 / to_decimal(denominator)))
