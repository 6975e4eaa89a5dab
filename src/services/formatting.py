"""Human-readable formatting of sizes, counts and months."""

import calendar

from ..models import YearMonth

BYTE_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")
UNKNOWN_COUNT = "?"
UNKNOWN_MONTH = "Unknown"


def format_count(n: int) -> str:
    """Group thousands with commas: 1234567 -> '1,234,567'."""
    return f"{int(n):,}"


def format_bytes(size: int) -> str:
    """Format a byte count with decimal units and three significant digits.

    >>> format_bytes(3000)
    '3 kB'
    >>> format_bytes(1234567)
    '1.23 MB'
    """
    if size < 1:
        return f"{size} B"

    exponent = min((len(str(int(size))) - 1) // 3, len(BYTE_UNITS) - 1)
    value = float(f"{size / 1000 ** exponent:.3g}")
    # No digit grouping: 999500 -> "1000 kB".
    text = str(int(value)) if value.is_integer() else str(value)
    return f"{text} {BYTE_UNITS[exponent]}"


def format_game_count(n: int) -> str:
    # Zero means the count file had nothing usable for this archive.
    if n <= 0:
        return UNKNOWN_COUNT
    return format_count(n)


def format_month(date: YearMonth | None) -> str:
    """Label a month as 'YYYY - Month', e.g. '2023 - February'."""
    if date is None:
        return UNKNOWN_MONTH
    return f"{date.year:04d} - {calendar.month_name[date.month]}"
