"""
calgrid.core.dates
------------------
Calendar-agnostic day arithmetic on :class:`Date`.

All differences go through the Julian Day Number, so day counts are exact across
month and year boundaries and never depend on wall-clock time or DST.
Weekdays are Sunday-based: 0=Sun .. 6=Sat.
"""

from __future__ import annotations

from typing import Tuple

from .errors import ConfigurationError
from .types import Date, DisplayMode, WeekStart

SUNDAY = 0
SATURDAY = 6

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def to_jdn(d: Date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    a = (14 - d.month) // 12
    y2 = d.year + 4800 - a
    m2 = d.month + 12 * a - 3
    return d.day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> Date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return Date(year, month, day)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ConfigurationError(f"month must be 1..12, got {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


def weekday_of(d: Date) -> int:
    # JDN 0 fell on a Monday
    return (to_jdn(d) + 1) % 7


def is_weekend(d: Date) -> bool:
    return weekday_of(d) in (SUNDAY, SATURDAY)


def day_diff(a: Date, b: Date) -> int:
    """Signed day count ``a - b``."""
    return to_jdn(a) - to_jdn(b)


def compare(a: Date, b: Date) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def add_days(d: Date, n: int) -> Date:
    return from_jdn(to_jdn(d) + n)


def prev_day(d: Date) -> Date:
    return add_days(d, -1)


def next_day(d: Date) -> Date:
    return add_days(d, 1)


def prev_month(year: int, month: int) -> Tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> Tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


# ============================================================
# Week-start relative offsets
# ============================================================

def week_start_offset(d: Date, week_start: WeekStart) -> int:
    """Number of cells between column 0 of d's week row and d itself."""
    w = weekday_of(d)
    if week_start is WeekStart.SUNDAY:
        return w
    if week_start is WeekStart.MONDAY:
        return 6 if w == SUNDAY else w - 1
    if week_start is WeekStart.SATURDAY:
        if w == SATURDAY:
            return 0
        return 1 if w == SUNDAY else w + 1
    raise ConfigurationError(f"Unknown week start {week_start!r}")


def week_end_offset(d: Date, week_start: WeekStart) -> int:
    """Number of cells after d up to the last column of its week row."""
    w = weekday_of(d)
    if week_start is WeekStart.SUNDAY:
        return 6 - w
    if week_start is WeekStart.MONDAY:
        return 0 if w == SUNDAY else 7 - w
    if week_start is WeekStart.SATURDAY:
        return 6 if w == SATURDAY else 5 - w
    raise ConfigurationError(f"Unknown week start {week_start!r}")


def start_offset(year: int, month: int, week_start: WeekStart) -> int:
    """Leading previous-month cells before day 1 of (year, month)."""
    return week_start_offset(Date(year, month, 1), week_start)


def end_offset(year: int, month: int, week_start: WeekStart) -> int:
    """Trailing next-month cells after the last day of (year, month)."""
    return week_end_offset(Date(year, month, days_in_month(year, month)), week_start)


def week_of_month(d: Date, week_start: WeekStart) -> int:
    """1-based row of d inside its own month grid."""
    return (d.day + start_offset(d.year, d.month, week_start) - 1) // 7 + 1


def line_count(year: int, month: int, week_start: WeekStart, mode: DisplayMode) -> int:
    if mode is DisplayMode.ALL_SIX_ROWS:
        return 6
    pre = start_offset(year, month, week_start)
    post = end_offset(year, month, week_start)
    return (pre + days_in_month(year, month) + post) // 7
