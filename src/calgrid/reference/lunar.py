# reference/lunar.py

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

from calgrid.core.dates import day_diff
from calgrid.core.types import Date, LunarDate

FIRST_YEAR = 1900
LAST_YEAR = 2100

# Lunar 1900/1/1 fell on Gregorian 1900-01-31.
EPOCH = Date(1900, 1, 31)

# One packed word per lunar year, 1900..2100.
#   bits 0-3   leap month (0 = none)
#   bits 4-15  months 12..1, set = 30 days, clear = 29 days
#   bit 16     leap month has 30 days
LUNAR_INFO = (
    0x04bd8, 0x04ae0, 0x0a570, 0x054d5, 0x0d260, 0x0d950, 0x16554, 0x056a0, 0x09ad0, 0x055d2,
    0x04ae0, 0x0a5b6, 0x0a4d0, 0x0d250, 0x1d255, 0x0b540, 0x0d6a0, 0x0ada2, 0x095b0, 0x14977,
    0x04970, 0x0a4b0, 0x0b4b5, 0x06a50, 0x06d40, 0x1ab54, 0x02b60, 0x09570, 0x052f2, 0x04970,
    0x06566, 0x0d4a0, 0x0ea50, 0x06e95, 0x05ad0, 0x02b60, 0x186e3, 0x092e0, 0x1c8d7, 0x0c950,
    0x0d4a0, 0x1d8a6, 0x0b550, 0x056a0, 0x1a5b4, 0x025d0, 0x092d0, 0x0d2b2, 0x0a950, 0x0b557,
    0x06ca0, 0x0b550, 0x15355, 0x04da0, 0x0a5b0, 0x14573, 0x052b0, 0x0a9a8, 0x0e950, 0x06aa0,
    0x0aea6, 0x0ab50, 0x04b60, 0x0aae4, 0x0a570, 0x05260, 0x0f263, 0x0d950, 0x05b57, 0x056a0,
    0x096d0, 0x04dd5, 0x04ad0, 0x0a4d0, 0x0d4d4, 0x0d250, 0x0d558, 0x0b540, 0x0b6a0, 0x195a6,
    0x095b0, 0x049b0, 0x0a974, 0x0a4b0, 0x0b27a, 0x06a50, 0x06d40, 0x0af46, 0x0ab60, 0x09570,
    0x04af5, 0x04970, 0x064b0, 0x074a3, 0x0ea50, 0x06b58, 0x055c0, 0x0ab60, 0x096d5, 0x092e0,
    0x0c960, 0x0d954, 0x0d4a0, 0x0da50, 0x07552, 0x056a0, 0x0abb7, 0x025d0, 0x092d0, 0x0cab5,
    0x0a950, 0x0b4a0, 0x0baa4, 0x0ad50, 0x055d9, 0x04ba0, 0x0a5b0, 0x15176, 0x052b0, 0x0a930,
    0x07954, 0x06aa0, 0x0ad50, 0x05b52, 0x04b60, 0x0a6e6, 0x0a4e0, 0x0d260, 0x0ea65, 0x0d530,
    0x05aa0, 0x076a3, 0x096d0, 0x04afb, 0x04ad0, 0x0a4d0, 0x1d0b6, 0x0d250, 0x0d520, 0x0dd45,
    0x0b5a0, 0x056d0, 0x055b2, 0x049b0, 0x0a577, 0x0a4b0, 0x0aa50, 0x1b255, 0x06d20, 0x0ada0,
    0x14b63, 0x09370, 0x049f8, 0x04970, 0x064b0, 0x168a6, 0x0ea50, 0x06b20, 0x1a6c4, 0x0aae0,
    0x0a2e0, 0x0d2e3, 0x0c960, 0x0d557, 0x0d4a0, 0x0da50, 0x05d55, 0x056a0, 0x0a6d0, 0x055d4,
    0x052d0, 0x0a9b8, 0x0a950, 0x0b4a0, 0x0b6a6, 0x0ad50, 0x055a0, 0x0aba4, 0x0a5b0, 0x052b0,
    0x0b273, 0x06930, 0x07337, 0x06aa0, 0x0ad50, 0x14b55, 0x04b60, 0x0a570, 0x054e4, 0x0d160,
    0x0e968, 0x0d520, 0x0daa0, 0x16aa6, 0x056d0, 0x04ae0, 0x0a9d4, 0x0a2d0, 0x0d150, 0x0f252,
    0x0d520,
)


def _info(year: int) -> int:
    if not FIRST_YEAR <= year <= LAST_YEAR:
        raise ValueError(f"lunar year {year} outside table {FIRST_YEAR}..{LAST_YEAR}")
    return LUNAR_INFO[year - FIRST_YEAR]


def leap_month(year: int) -> int:
    """Leap month of a lunar year, 0 if the year has none."""
    return _info(year) & 0xF


def leap_days(year: int) -> int:
    if leap_month(year) == 0:
        return 0
    return 30 if _info(year) & 0x10000 else 29


def month_days(year: int, month: int) -> int:
    """Length of regular month 1..12 of a lunar year."""
    if not 1 <= month <= 12:
        raise ValueError(f"lunar month must be 1..12, got {month}")
    return 30 if _info(year) & (0x10000 >> month) else 29


@lru_cache(maxsize=None)
def months_of(year: int) -> Tuple[Tuple[int, bool, int], ...]:
    """(month, is_leap, length) in calendar order, leap month right after its base month."""
    out: List[Tuple[int, bool, int]] = []
    leap = leap_month(year)
    for m in range(1, 13):
        out.append((m, False, month_days(year, m)))
        if m == leap:
            out.append((m, True, leap_days(year)))
    return tuple(out)


@lru_cache(maxsize=None)
def year_days(year: int) -> int:
    return sum(n for _, _, n in months_of(year))


@dataclass(frozen=True)
class TableLunarConverter:
    """
    Table-driven Gregorian -> Chinese lunisolar conversion.

    Covers 1900-01-01 .. 2100 lunar year end; the 30 Gregorian days before the
    epoch belong to the twelfth month of lunar 1899 (a 30-day month).
    """

    def to_lunar(self, d: Date) -> LunarDate:
        offset = day_diff(d, EPOCH)
        if offset < 0:
            if offset < -30:
                raise ValueError(f"{d} precedes the lunar table")
            return LunarDate(FIRST_YEAR - 1, 12, offset + 31)

        year = FIRST_YEAR
        while offset >= year_days(year):
            offset -= year_days(year)
            year += 1
            if year > LAST_YEAR:
                raise ValueError(f"{d} is past the lunar table")

        for month, is_leap, length in months_of(year):
            if offset < length:
                return LunarDate(year, month, offset + 1, is_leap)
            offset -= length
        raise AssertionError("unreachable: offset exceeds lunar year length")
