"""Calendar-month period utilities ("YYYY-MM" keys)"""

import re
from datetime import date
from typing import List

_PERIOD_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


def parse_period(period: str) -> tuple[int, int]:
    """Split a "YYYY-MM" key into (year, month); raises ValueError if malformed"""
    match = _PERIOD_RE.match(period)
    if not match:
        raise ValueError(f"Invalid period {period!r}, expected YYYY-MM")
    return int(match.group(1)), int(match.group(2))


def period_of(day: date) -> str:
    """Calendar month key for a date"""
    return f"{day.year:04d}-{day.month:02d}"


def month_index(period: str) -> int:
    """Months since year 0; consecutive periods differ by exactly 1"""
    year, month = parse_period(period)
    return year * 12 + (month - 1)


def next_period(period: str) -> str:
    year, month = parse_period(period)
    if month == 12:
        return f"{year + 1:04d}-01"
    return f"{year:04d}-{month + 1:02d}"


def generate_period_range(start: str, end: str) -> List[str]:
    """Generate list of month keys from start to end (inclusive)"""
    if month_index(end) < month_index(start):
        return []
    periods = [start]
    while periods[-1] != end:
        periods.append(next_period(periods[-1]))
    return periods
