"""
calgrid.engines.calendar
------------------------
The Orchestrator. Owns the configuration, the collaborators, today's date and
the single selection state, and keeps the month, week and year surfaces in step
with it.

Every reconfiguration rebuilds the page mapper and grid builders from the new
configuration and reclamps the selection, so page indices handed out before a
reconfiguration must be treated as stale.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from calgrid.attributes.festival import FestivalResolver
from calgrid.attributes.registry import compute_attributes
from calgrid.attributes.scheme import DEFAULT_SCHEME_TEXT, DateKey, SchemeOverlay
from calgrid.attributes.sexagenary import SexagenaryYear
from calgrid.core.errors import ConfigurationError
from calgrid.core.types import (
    MAX_YEAR,
    MIN_YEAR,
    Cell,
    Date,
    DateRange,
    DayPolicy,
    DisplayMode,
    Marker,
    Outcome,
    SelectMode,
    Surface,
    WeekStart,
)
from calgrid.engines.cells import CellFactory
from calgrid.engines.interfaces import (
    InterceptionHook,
    LunarDateConverter,
    NameTableProvider,
    SolarTermProvider,
)
from calgrid.engines.month_grid import MonthGrid, MonthGridBuilder
from calgrid.engines.pages import PageIndexMapper
from calgrid.engines.selection import SelectionStateMachine, Snapshot
from calgrid.engines.week_grid import WeekGrid, WeekGridBuilder

logger = logging.getLogger(__name__)

DEFAULT_RANGE = DateRange(Date(1971, 1, 1), Date(2055, 12, 31))
LUNAR_FENCE = DateRange(Date(MIN_YEAR, 1, 1), Date(MAX_YEAR, 12, 31))


def clamp_to_fence(r: DateRange) -> DateRange:
    lo = max(r.min_date, LUNAR_FENCE.min_date)
    hi = min(r.max_date, LUNAR_FENCE.max_date)
    if lo > hi:
        raise ConfigurationError(
            f"Range {r.min_date}..{r.max_date} lies outside {LUNAR_FENCE.min_date}..{LUNAR_FENCE.max_date}"
        )
    if (lo, hi) != (r.min_date, r.max_date):
        logger.warning("Range %s..%s clamped to %s..%s", r.min_date, r.max_date, lo, hi)
        return DateRange(lo, hi)
    return r


def _check_limit(name: str, value: Any) -> None:
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        raise ConfigurationError(f"{name} must be an int or None, got {value!r}")


@dataclass(frozen=True)
class EngineConfig:
    """
    Engine configuration. Range limits <= 0 mean unset, as does None.
    """
    date_range: DateRange = DEFAULT_RANGE
    week_start: WeekStart = WeekStart.SUNDAY
    display_mode: DisplayMode = DisplayMode.ALL_SIX_ROWS
    select_mode: SelectMode = SelectMode.DEFAULT
    day_policy: DayPolicy = DayPolicy.FIRST_DAY
    min_select_range: Optional[int] = None
    max_select_range: Optional[int] = None
    max_multi_select: Optional[int] = None
    default_scheme_text: str = DEFAULT_SCHEME_TEXT
    locale: str = "zh_CN"

    def __post_init__(self) -> None:
        typed = (
            ("date_range", self.date_range, DateRange),
            ("week_start", self.week_start, WeekStart),
            ("display_mode", self.display_mode, DisplayMode),
            ("select_mode", self.select_mode, SelectMode),
            ("day_policy", self.day_policy, DayPolicy),
        )
        for name, value, kind in typed:
            if not isinstance(value, kind):
                raise ConfigurationError(f"{name} must be a {kind.__name__}, got {value!r}")
        _check_limit("min_select_range", self.min_select_range)
        _check_limit("max_select_range", self.max_select_range)
        _check_limit("max_multi_select", self.max_multi_select)

    def tweak(self, **changes: Any) -> "EngineConfig":
        return replace(self, **changes)


@dataclass(frozen=True)
class PagePositions:
    """Page index of one date on each surface."""
    month: int
    week: int
    year: int


class PagedSurface:
    """One paged view (month, week or year) as seen by its host."""

    def __init__(self, engine: "CalendarEngine", surface: Surface):
        if not isinstance(surface, Surface):
            raise ConfigurationError(f"surface must be a Surface, got {surface!r}")
        self.engine = engine
        self.surface = surface

    def total_pages(self) -> int:
        m = self.engine.mapper
        if self.surface is Surface.MONTH:
            return m.total_month_pages
        if self.surface is Surface.WEEK:
            return m.total_week_pages
        return m.total_year_pages

    def grid_for_page(self, idx: int) -> Union[MonthGrid, WeekGrid, Tuple[MonthGrid, ...]]:
        if self.surface is Surface.MONTH:
            return self.engine.month_grid_for_page(idx)
        if self.surface is Surface.WEEK:
            return self.engine.week_grid_for_page(idx)
        return self.engine.year_grids(self.engine.mapper.year_from_page(idx))

    def page_of(self, d: Date) -> int:
        p = self.engine.pages_for(d)
        return getattr(p, self.surface.value)

    def selection_snapshot(self) -> Snapshot:
        return self.engine.selection.snapshot()

    def user_clicked(self, d: Date) -> Outcome:
        return self.engine.click(d)


class CalendarEngine:
    """
    Date line shared by the three paged surfaces.
    """
    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        names: Optional[NameTableProvider] = None,
        lunar: Optional[LunarDateConverter] = None,
        solar_terms: Optional[SolarTermProvider] = None,
        intercept: Optional[InterceptionHook] = None,
        today: Optional[Date] = None,
        markers: Optional[Mapping[DateKey, Marker]] = None,
    ):
        config = config or EngineConfig()
        self.config = config.tweak(date_range=clamp_to_fence(config.date_range))
        self.today = today or Date.today()
        self.names = names
        self.intercept = intercept

        self.overlay = SchemeOverlay(markers, self.config.default_scheme_text)
        self.resolver: Optional[FestivalResolver] = None
        self.sexagenary: Optional[SexagenaryYear] = None
        if names is not None and lunar is not None:
            self.resolver = FestivalResolver(names, lunar, solar_terms)
        if names is not None:
            self.sexagenary = SexagenaryYear(names)
        self.cells = CellFactory(lunar, self.resolver)

        self.selection = SelectionStateMachine(
            self.config.date_range,
            self.today,
            mode=self.config.select_mode,
            intercept=intercept,
            min_range=self.config.min_select_range,
            max_range=self.config.max_select_range,
            cap=self.config.max_multi_select,
            overlay=self.overlay,
        )
        self._rebuild()

    def _rebuild(self) -> None:
        c = self.config
        self.mapper = PageIndexMapper(c.date_range, c.week_start)
        self.month_builder = MonthGridBuilder(c.week_start, c.display_mode, self.cells, self.intercept)
        self.week_builder = WeekGridBuilder(c.week_start, self.cells, self.intercept)

    # ---------------------------------------------------------
    # Reconfiguration
    # ---------------------------------------------------------

    def set_range(self, min_date: Date, max_date: Date) -> Outcome:
        """Replace the fence; a range that is inverted or wholly outside the lunar table is refused."""
        if min_date > max_date:
            logger.warning("Refusing range %s..%s: min after max", min_date, max_date)
            return Outcome.INVALID_RANGE
        try:
            r = clamp_to_fence(DateRange(min_date, max_date))
        except ConfigurationError as e:
            logger.warning("Refusing range %s..%s: %s", min_date, max_date, e)
            return Outcome.INVALID_RANGE
        if r == self.config.date_range:
            return Outcome.UNCHANGED
        logger.debug("range %s..%s -> %s..%s", self.config.date_range.min_date, self.config.date_range.max_date, r.min_date, r.max_date)
        self.config = self.config.tweak(date_range=r)
        self._rebuild()
        self.selection.reclamp(r)
        return Outcome.SELECTED

    def set_week_start(self, week_start: WeekStart) -> None:
        logger.debug("week start -> %s", week_start)
        self.config = self.config.tweak(week_start=week_start)
        self._rebuild()

    def set_display_mode(self, display_mode: DisplayMode) -> None:
        logger.debug("display mode -> %s", display_mode)
        self.config = self.config.tweak(display_mode=display_mode)
        self._rebuild()

    def set_select_mode(self, select_mode: SelectMode) -> None:
        logger.debug("select mode -> %s", select_mode)
        self.config = self.config.tweak(select_mode=select_mode)
        self.selection.set_mode(select_mode)

    def set_day_policy(self, day_policy: DayPolicy) -> None:
        self.config = self.config.tweak(day_policy=day_policy)

    def set_select_limits(self, min_range: Optional[int], max_range: Optional[int]) -> None:
        self.config = self.config.tweak(min_select_range=min_range, max_select_range=max_range)
        self.selection.set_limits(min_range, max_range)

    def set_max_multi_select(self, cap: Optional[int]) -> None:
        self.config = self.config.tweak(max_multi_select=cap)
        self.selection.set_capacity(cap)

    def set_intercept(self, intercept: Optional[InterceptionHook]) -> None:
        self.intercept = intercept
        self.selection.intercept = intercept
        self._rebuild()

    def update_today(self, today: Date) -> None:
        self.today = today
        self.selection.update_today(today)

    # ---------------------------------------------------------
    # Markers
    # ---------------------------------------------------------

    def set_markers(self, markers: Mapping[DateKey, Marker]) -> None:
        self.overlay.replace(markers)
        self.selection.refresh_marker()

    def add_marker(self, d: DateKey, marker: Marker) -> None:
        self.overlay.add(d, marker)
        self.selection.refresh_marker()

    def add_markers(self, markers: Mapping[DateKey, Marker]) -> None:
        self.overlay.add_all(markers)
        self.selection.refresh_marker()

    def remove_marker(self, d: Date) -> bool:
        removed = self.overlay.remove(d)
        self.selection.marker_removed(d)
        return removed

    def clear_markers(self) -> None:
        self.overlay.clear()
        self.selection.refresh_marker()

    # ---------------------------------------------------------
    # Selection
    # ---------------------------------------------------------

    def click(self, d: Date) -> Outcome:
        outcome = self.selection.click(d)
        logger.debug("click %s -> %s", d, outcome.value)
        return outcome

    def select_range(self, start: Date, end: Date) -> Outcome:
        return self.selection.select_range(start, end)

    # ---------------------------------------------------------
    # Grids
    # ---------------------------------------------------------

    def month_grid(self, year: int, month: int) -> MonthGrid:
        grid = self.month_builder.build(year, month, self.today, self.selection.focus())
        return dataclasses.replace(grid, cells=tuple(self.overlay.apply(grid.cells)))

    def month_grid_for_page(self, idx: int) -> MonthGrid:
        return self.month_grid(*self.mapper.month_of_page(idx))

    def week_grid(self, d: Date) -> WeekGrid:
        grid = self.week_builder.build(d, self.today, self.selection.focus())
        return dataclasses.replace(grid, cells=tuple(self.overlay.apply(grid.cells)))

    def week_grid_for_page(self, idx: int) -> WeekGrid:
        return self.week_grid(self.mapper.date_from_week_page(idx))

    def year_grids(self, year: int) -> Tuple[MonthGrid, ...]:
        return tuple(self.month_grid(year, m) for m in range(1, 13))

    def cell(self, d: Date, attributes: Sequence[str] = ()) -> Cell:
        c = self.overlay.apply([self.cells.build(d, self.today, True)])[0]
        if attributes:
            c = replace(c, attributes=compute_attributes(c, attributes))
        return c

    # ---------------------------------------------------------
    # Paging
    # ---------------------------------------------------------

    def surface(self, surface: Surface) -> PagedSurface:
        return PagedSurface(self, surface)

    def pages_for(self, d: Date) -> PagePositions:
        m = self.mapper
        return PagePositions(
            month=m.month_page_index(d.year, d.month),
            week=m.week_page_index(d),
            year=m.year_page_index(d.year),
        )

    def initial_positions(self) -> PagePositions:
        focus = self.selection.focus() or self.today
        return self.pages_for(self.mapper.range_edge(focus, self.today, self.config.day_policy))

    def scroll_to(self, d: Date) -> PagePositions:
        """Positions of d on every surface; DEFAULT mode also selects it."""
        d = self.config.date_range.clamp(d)
        if self.selection.mode is SelectMode.DEFAULT:
            self.selection.select(d)
        return self.pages_for(d)

    def month_page_changed(self, idx: int) -> Date:
        """
        Landing day after the month surface settles on page ``idx``.

        Today wins when it is on that month unless the policy ignores it. In
        DEFAULT mode the landing day becomes the selection.
        """
        policy = self.config.day_policy
        focus = self.selection.focus()
        d = self.mapper.date_from_month_page(idx, policy, focus.day if focus is not None else None)
        if (
            policy is not DayPolicy.FOLLOW_SELECTED_IGNORE_TODAY
            and self.today.is_same_month(d)
            and self.config.date_range.contains(self.today)
        ):
            d = self.today
        if self.selection.mode is SelectMode.DEFAULT:
            self.selection.select(d)
        return d
