"""calgrid public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    day_info,
    month_grid,
    week_grid,
    page_positions,
    to_lunar,
    festival,
    solar_terms,
    ganzhi,
    list_locales,
    names,
    register_names,
    make_engine,
)
from .core.types import (
    Cell,
    Date,
    DateRange,
    DayPolicy,
    DisplayMode,
    LunarDate,
    Marker,
    Outcome,
    SchemeTag,
    SelectMode,
    Surface,
    WeekStart,
)
from .core.errors import CalgridError, ConfigurationError, UnknownLocaleError
from .engines.calendar import CalendarEngine, EngineConfig, PagePositions

__all__ = [
    "day_info",
    "month_grid",
    "week_grid",
    "page_positions",
    "to_lunar",
    "festival",
    "solar_terms",
    "ganzhi",
    "list_locales",
    "names",
    "register_names",
    "make_engine",
    "Cell",
    "Date",
    "DateRange",
    "DayPolicy",
    "DisplayMode",
    "LunarDate",
    "Marker",
    "Outcome",
    "SchemeTag",
    "SelectMode",
    "Surface",
    "WeekStart",
    "CalgridError",
    "ConfigurationError",
    "UnknownLocaleError",
    "CalendarEngine",
    "EngineConfig",
    "PagePositions",
]
