from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigurationError

MIN_YEAR = 1900
MAX_YEAR = 2099


@dataclass(frozen=True, order=True)
class Date:
    """Plain Gregorian calendar day; ordering is (year, month, day) lexicographic."""
    year: int
    month: int
    day: int

    def key(self) -> str:
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"

    def is_valid(self) -> bool:
        from .dates import days_in_month
        if not (MIN_YEAR <= self.year <= MAX_YEAR) or not (1 <= self.month <= 12):
            return False
        return 1 <= self.day <= days_in_month(self.year, self.month)

    def is_same_month(self, other: "Date") -> bool:
        return self.year == other.year and self.month == other.month

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, d: date) -> "Date":
        return cls(d.year, d.month, d.day)

    @classmethod
    def today(cls) -> "Date":
        return cls.from_date(date.today())

    @classmethod
    def parse(cls, s: str) -> "Date":
        """Accepts ``YYYY-MM-DD`` or the ``YYYYMMDD`` key form."""
        s = s.strip()
        try:
            if "-" in s:
                y, m, d = (int(p) for p in s.split("-"))
            elif len(s) == 8 and s.isdigit():
                y, m, d = int(s[:4]), int(s[4:6]), int(s[6:])
            else:
                raise ValueError(s)
        except ValueError:
            raise ConfigurationError(f"Cannot parse date {s!r}; expected YYYY-MM-DD or YYYYMMDD") from None
        from .dates import days_in_month
        if not 1 <= m <= 12 or not 1 <= d <= days_in_month(y, m):
            raise ConfigurationError(f"{s!r} is not a calendar date")
        return cls(y, m, d)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_leap_month: bool = False


@dataclass(frozen=True)
class SchemeTag:
    """One entry of a multi-tag marker."""
    type: int = 0
    color: int = 0
    text: str = ""
    note: str = ""


@dataclass(frozen=True)
class Marker:
    text: str = ""
    color: int = 0
    tags: Tuple[SchemeTag, ...] = ()


@dataclass(frozen=True)
class Cell:
    date: Date
    is_current_month: bool
    is_today: bool
    weekday: int  # 0=Sun..6=Sat
    is_weekend: bool
    is_leap_year: bool
    lunar: Optional[LunarDate] = None
    lunar_text: str = ""
    festival_source: str = ""
    marker: Optional[Marker] = None
    attributes: Optional[Dict[str, Any]] = field(default=None, compare=False)

    @property
    def key(self) -> str:
        return self.date.key()

    @property
    def has_marker(self) -> bool:
        return self.marker is not None

    @property
    def is_leap_month(self) -> bool:
        return self.lunar is not None and self.lunar.is_leap_month


@dataclass(frozen=True)
class DateRange:
    """Inclusive [min_date, max_date] fence."""
    min_date: Date
    max_date: Date

    def __post_init__(self) -> None:
        if self.min_date > self.max_date:
            raise ConfigurationError(f"DateRange min {self.min_date} is after max {self.max_date}")

    @property
    def min_year(self) -> int:
        return self.min_date.year

    @property
    def max_year(self) -> int:
        return self.max_date.year

    def contains(self, d: Date) -> bool:
        return self.min_date <= d <= self.max_date

    def contains_month(self, year: int, month: int) -> bool:
        return (self.min_date.year, self.min_date.month) <= (year, month) <= (self.max_date.year, self.max_date.month)

    def clamp(self, d: Date) -> Date:
        if d < self.min_date:
            return self.min_date
        if d > self.max_date:
            return self.max_date
        return d


class WeekStart(Enum):
    """Weekday shown in column 0; the value is its Sunday-based weekday index."""
    SUNDAY = 0
    MONDAY = 1
    SATURDAY = 6


class DisplayMode(Enum):
    ALL_SIX_ROWS = "all"
    CURRENT_MONTH_ONLY = "only"
    FIT_EXACT_ROWS = "fit"


class SelectMode(Enum):
    DEFAULT = "default"
    SINGLE = "single"
    RANGE = "range"
    MULTI = "multi"


class DayPolicy(Enum):
    """Which day a month page lands on when it is paged to."""
    FIRST_DAY = "first"
    FOLLOW_SELECTED = "follow"
    FOLLOW_SELECTED_IGNORE_TODAY = "follow_ignore_today"


class Surface(Enum):
    MONTH = "month"
    WEEK = "week"
    YEAR = "year"


class Outcome(Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"
    INTERCEPTED = "intercepted"
    OUT_OF_RANGE = "out_of_range"
    RANGE_TOO_SHORT = "range_too_short"
    RANGE_TOO_LONG = "range_too_long"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    INVALID_RANGE = "invalid_range"
    UNCHANGED = "unchanged"

    @property
    def accepted(self) -> bool:
        return self in (Outcome.SELECTED, Outcome.DESELECTED, Outcome.UNCHANGED)

    @property
    def is_out_of_range(self) -> bool:
        return self in (Outcome.OUT_OF_RANGE, Outcome.RANGE_TOO_SHORT, Outcome.RANGE_TOO_LONG)


# ------------------------------------------------------------
# Selection snapshots (one per select mode)
# ------------------------------------------------------------

@dataclass(frozen=True)
class DefaultSelection:
    selected: Date
    marker: Optional[Marker] = None


@dataclass(frozen=True)
class SingleSelection:
    selected: Optional[Date] = None
    marker: Optional[Marker] = None


@dataclass(frozen=True)
class RangeSelection:
    start: Optional[Date] = None
    end: Optional[Date] = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class MultiSelection:
    selected: Tuple[Date, ...] = ()
    cap: Optional[int] = None
