"""
calgrid.attributes.festival
---------------------------
Priority-ordered overlay text for one day.

Sources are consulted in a fixed order and the first non-empty one wins:

    traditional lunar festival
    date-rule festival (n-th weekday of a solar month)
    solar term
    Gregorian festival
    lunar day numeral (or month name on day 1)

Later sources are never evaluated once an earlier one matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from calgrid.core.dates import days_in_month, next_day, weekday_of
from calgrid.core.types import Date, LunarDate
from calgrid.engines.interfaces import LunarDateConverter, NameTableProvider, SolarTermProvider

SOURCE_TRADITIONAL = "traditional"
SOURCE_SPECIAL = "special"
SOURCE_SOLAR_TERM = "solar_term"
SOURCE_GREGORIAN = "gregorian"
SOURCE_LUNAR = "lunar"

# (month, weekday 0=Sun, n) for special_festivals[0..2]
SPECIAL_RULES: Tuple[Tuple[int, int, int], ...] = (
    (5, 0, 2),   # second Sunday of May
    (6, 0, 3),   # third Sunday of June
    (11, 4, 4),  # fourth Thursday of November
)


@dataclass(frozen=True)
class Resolution:
    text: str
    source: str


def nth_weekday(year: int, month: int, weekday: int, n: int) -> Optional[Date]:
    """Date of the n-th ``weekday`` (0=Sun) of a month, or None if the month has fewer."""
    first = weekday_of(Date(year, month, 1))
    day = 1 + (weekday - first) % 7 + 7 * (n - 1)
    if day > days_in_month(year, month):
        return None
    return Date(year, month, day)


def _lookup_mmdd(table: Sequence[str], month: int, day: int) -> str:
    prefix = f"{month:02d}{day:02d}"
    for entry in table:
        if entry.startswith(prefix):
            return entry[4:]
    return ""


class FestivalResolver:
    def __init__(
        self,
        names: NameTableProvider,
        lunar: LunarDateConverter,
        solar_terms: Optional[SolarTermProvider] = None,
    ):
        self.names = names
        self.lunar = lunar
        self.solar_terms = solar_terms

    # -- individual sources --------------------------------------------------

    def traditional(self, d: Date, lunar: LunarDate) -> str:
        if lunar.is_leap_month:
            return ""
        if lunar.month == 12:
            tomorrow = self.lunar.to_lunar(next_day(d))
            if tomorrow.month == 1 and tomorrow.day == 1 and not tomorrow.is_leap_month:
                return self.names.traditional_festivals[0]
        return _lookup_mmdd(self.names.traditional_festivals[1:], lunar.month, lunar.day)

    def special(self, d: Date) -> str:
        for name, (month, weekday, n) in zip(self.names.special_festivals, SPECIAL_RULES):
            if d.month == month and nth_weekday(d.year, month, weekday, n) == d:
                return name
        return ""

    def solar_term(self, d: Date) -> str:
        if self.solar_terms is None:
            return ""
        return self.solar_terms.terms(d.year).get(d, "")

    def gregorian(self, d: Date) -> str:
        return _lookup_mmdd(self.names.gregorian_festivals, d.month, d.day)

    def numeral(self, lunar: LunarDate) -> str:
        if lunar.day == 1:
            prefix = self.names.leap_prefix if lunar.is_leap_month else ""
            return prefix + self.names.lunar_months[lunar.month - 1]
        return self.names.lunar_days[lunar.day - 1]

    # -- combined ------------------------------------------------------------

    def resolve(self, d: Date, lunar: Optional[LunarDate] = None) -> Resolution:
        if lunar is None:
            lunar = self.lunar.to_lunar(d)
        sources: Tuple[Tuple[str, Callable[[], str]], ...] = (
            (SOURCE_TRADITIONAL, lambda: self.traditional(d, lunar)),
            (SOURCE_SPECIAL, lambda: self.special(d)),
            (SOURCE_SOLAR_TERM, lambda: self.solar_term(d)),
            (SOURCE_GREGORIAN, lambda: self.gregorian(d)),
        )
        for source, fn in sources:
            text = fn()
            if text:
                return Resolution(text, source)
        return Resolution(self.numeral(lunar), SOURCE_LUNAR)
