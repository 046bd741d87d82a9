"""
calgrid.engines.week_grid
-------------------------
Seven consecutive days anchored on the week row that owns a date.

Week cells are all flagged ``is_current_month``: in a week view every day is
active regardless of which month it belongs to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from calgrid.core.dates import add_days, week_start_offset
from calgrid.core.types import Cell, Date, WeekStart
from calgrid.engines.cells import CellFactory
from calgrid.engines.interfaces import InterceptionHook


@dataclass(frozen=True)
class WeekGrid:
    week_start: WeekStart
    cells: Tuple[Cell, ...]
    selected_index: int = -1

    @property
    def first(self) -> Date:
        return self.cells[0].date

    @property
    def last(self) -> Date:
        return self.cells[-1].date

    def index_of(self, d: Date) -> int:
        for i, c in enumerate(self.cells):
            if c.date == d:
                return i
        return -1


class WeekGridBuilder:
    def __init__(
        self,
        week_start: WeekStart = WeekStart.SUNDAY,
        cells: Optional[CellFactory] = None,
        intercept: Optional[InterceptionHook] = None,
    ):
        self.week_start = week_start
        self.cells = cells or CellFactory()
        self.intercept = intercept

    def dates(self, d: Date) -> Tuple[Date, ...]:
        first = add_days(d, -week_start_offset(d, self.week_start))
        return tuple(add_days(first, i) for i in range(7))

    def build(self, d: Date, today: Date, selected: Optional[Date] = None) -> WeekGrid:
        days = self.dates(d)
        cells = tuple(self.cells.build(x, today, True) for x in days)

        idx = -1
        for candidate in (today, selected):
            if candidate is not None and candidate in days:
                idx = days.index(candidate)
                if self.intercept is not None and self.intercept(candidate):
                    idx = -1
                break
        return WeekGrid(week_start=self.week_start, cells=cells, selected_index=idx)
