from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from .attributes.festival import FestivalResolver, Resolution
from .attributes.scheme import DateKey
from .attributes.sexagenary import SexagenaryYear
from .core.engine import NameTableRegistry
from .core.types import (
    Cell,
    Date,
    DateRange,
    DisplayMode,
    LunarDate,
    Marker,
    WeekStart,
)
from .engines.calendar import CalendarEngine, EngineConfig, PagePositions
from .engines.interfaces import InterceptionHook, NameTableProvider
from .engines.month_grid import MonthGrid
from .engines.week_grid import WeekGrid
from .reference.lunar import TableLunarConverter
from .reference.solar_terms import SolarTermTable

DateLike = Union[Date, date]

_registry: Optional[NameTableRegistry] = None
_LUNAR = TableLunarConverter()

def set_registry(reg: NameTableRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> NameTableRegistry:
    if _registry is None:
        raise RuntimeError("Name table registry not initialized")
    return _registry

def _as_date(d: DateLike) -> Date:
    return d if isinstance(d, Date) else Date.from_date(d)

def list_locales() -> List[str]:
    return _reg().list()

def names(locale: str = "zh_CN") -> NameTableProvider:
    return _reg().get(locale)

def register_names(locale: str, tables: NameTableProvider, *, overwrite: bool = False) -> None:
    _reg().register(locale, tables, overwrite=overwrite)

def make_engine(
    config: Optional[EngineConfig] = None,
    *,
    intercept: Optional[InterceptionHook] = None,
    today: Optional[DateLike] = None,
    markers: Optional[Mapping[DateKey, Marker]] = None,
) -> CalendarEngine:
    """Engine wired with the built-in lunar table, solar terms and the locale's name tables."""
    config = config or EngineConfig()
    tables = names(config.locale)
    return CalendarEngine(
        config,
        names=tables,
        lunar=_LUNAR,
        solar_terms=SolarTermTable(tuple(tables.solar_terms)),
        intercept=intercept,
        today=_as_date(today) if today is not None else None,
        markers=markers,
    )

def _engine(week_start: WeekStart, display_mode: DisplayMode, locale: str, today: Optional[DateLike]) -> CalendarEngine:
    return make_engine(
        EngineConfig(week_start=week_start, display_mode=display_mode, locale=locale),
        today=today,
    )

def day_info(
    d: DateLike,
    *,
    locale: str = "zh_CN",
    attributes: Sequence[str] = (),
    today: Optional[DateLike] = None,
) -> Cell:
    eng = _engine(WeekStart.SUNDAY, DisplayMode.ALL_SIX_ROWS, locale, today)
    return eng.cell(_as_date(d), attributes)

def month_grid(
    year: int,
    month: int,
    *,
    week_start: WeekStart = WeekStart.SUNDAY,
    display_mode: DisplayMode = DisplayMode.ALL_SIX_ROWS,
    locale: str = "zh_CN",
    today: Optional[DateLike] = None,
) -> MonthGrid:
    return _engine(week_start, display_mode, locale, today).month_grid(year, month)

def week_grid(
    d: DateLike,
    *,
    week_start: WeekStart = WeekStart.SUNDAY,
    locale: str = "zh_CN",
    today: Optional[DateLike] = None,
) -> WeekGrid:
    return _engine(week_start, DisplayMode.ALL_SIX_ROWS, locale, today).week_grid(_as_date(d))

def page_positions(
    d: DateLike,
    *,
    min_date: DateLike,
    max_date: DateLike,
    week_start: WeekStart = WeekStart.SUNDAY,
) -> PagePositions:
    config = EngineConfig(date_range=DateRange(_as_date(min_date), _as_date(max_date)), week_start=week_start)
    return make_engine(config).pages_for(_as_date(d))

def to_lunar(d: DateLike) -> LunarDate:
    return _LUNAR.to_lunar(_as_date(d))

def festival(d: DateLike, *, locale: str = "zh_CN") -> Resolution:
    tables = names(locale)
    resolver = FestivalResolver(tables, _LUNAR, SolarTermTable(tuple(tables.solar_terms)))
    return resolver.resolve(_as_date(d))

def solar_terms(year: int, *, locale: str = "zh_CN") -> Dict[Date, str]:
    return dict(SolarTermTable(tuple(names(locale).solar_terms)).terms(year))

def ganzhi(year: int, *, locale: str = "zh_CN") -> Dict[str, Any]:
    sx = SexagenaryYear(names(locale))
    return {
        "year": year,
        "stem": sx.stem(year),
        "branch": sx.branch(year),
        "zodiac": sx.zodiac(year),
        "label": sx.label(year),
    }
