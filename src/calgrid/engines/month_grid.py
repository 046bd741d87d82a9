"""
calgrid.engines.month_grid
--------------------------
The fixed 6x7 month grid.

Every month grid holds 42 cells in row-major order: the tail of the previous
month, the month itself, then the head of the next month. Display modes only
decide how much of it is shown (``line_count`` / ``visible_cells``); the cells
themselves are always computed.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import List, Optional, Tuple

from calgrid.core.dates import (
    days_in_month,
    line_count,
    next_month,
    prev_month,
    start_offset,
)
from calgrid.core.types import Cell, Date, DisplayMode, WeekStart
from calgrid.engines.cells import CellFactory
from calgrid.engines.interfaces import InterceptionHook

GRID_CELLS = 42
WEEK_DAYS = 7


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    week_start: WeekStart
    display_mode: DisplayMode
    cells: Tuple[Cell, ...]
    start_offset: int
    line_count: int
    selected_index: int = -1

    def rows(self) -> List[Tuple[Cell, ...]]:
        return [self.cells[i:i + WEEK_DAYS] for i in range(0, GRID_CELLS, WEEK_DAYS)]

    def visible_cells(self) -> Tuple[Cell, ...]:
        if self.display_mode is DisplayMode.ALL_SIX_ROWS:
            return self.cells
        if self.display_mode is DisplayMode.CURRENT_MONTH_ONLY:
            return tuple(c for c in self.cells if c.is_current_month)
        return self.cells[: self.line_count * WEEK_DAYS]

    def current_month_cells(self) -> Tuple[Cell, ...]:
        n = days_in_month(self.year, self.month)
        return self.cells[self.start_offset:self.start_offset + n]

    def index_of(self, d: Date) -> int:
        for i, c in enumerate(self.cells):
            if c.date == d:
                return i
        return -1

    def week_row_of(self, d: Date) -> int:
        """0-based row holding d, or -1 if d is not on this grid."""
        i = self.index_of(d)
        return -1 if i < 0 else i // WEEK_DAYS

    @property
    def selected_cell(self) -> Optional[Cell]:
        return self.cells[self.selected_index] if self.selected_index >= 0 else None


class MonthGridBuilder:
    def __init__(
        self,
        week_start: WeekStart = WeekStart.SUNDAY,
        display_mode: DisplayMode = DisplayMode.ALL_SIX_ROWS,
        cells: Optional[CellFactory] = None,
        intercept: Optional[InterceptionHook] = None,
    ):
        self.week_start = week_start
        self.display_mode = display_mode
        self.cells = cells or CellFactory()
        self.intercept = intercept

    def dates(self, year: int, month: int) -> List[Tuple[Date, bool]]:
        """The 42 (date, is_current_month) pairs of the grid, row-major."""
        pre = start_offset(year, month, self.week_start)
        dim = days_in_month(year, month)
        py, pm = prev_month(year, month)
        ny, nm = next_month(year, month)
        prev_dim = days_in_month(py, pm)

        out: List[Tuple[Date, bool]] = []
        for i in range(GRID_CELLS):
            if i < pre:
                out.append((Date(py, pm, prev_dim - pre + i + 1), False))
            elif i < pre + dim:
                out.append((Date(year, month, i - pre + 1), True))
            else:
                out.append((Date(ny, nm, i - pre - dim + 1), False))
        return out

    def build(self, year: int, month: int, today: Date, selected: Optional[Date] = None) -> MonthGrid:
        cells = tuple(self.cells.build(d, today, current) for d, current in self.dates(year, month))
        grid = MonthGrid(
            year=year,
            month=month,
            week_start=self.week_start,
            display_mode=self.display_mode,
            cells=cells,
            start_offset=start_offset(year, month, self.week_start),
            line_count=line_count(year, month, self.week_start, self.display_mode),
        )
        idx = self.selected_index(grid, today, selected)
        if idx < 0:
            return grid
        return dataclasses.replace(grid, selected_index=idx)

    def selected_index(self, grid: MonthGrid, today: Date, selected: Optional[Date]) -> int:
        # today wins when it is on the grid
        i = grid.index_of(today)
        candidate = today
        if i < 0 and selected is not None:
            i = grid.index_of(selected)
            candidate = selected
        if i < 0:
            return -1
        if self.intercept is not None and self.intercept(candidate):
            return -1
        return i

    def build_year(self, year: int, today: Date, selected: Optional[Date] = None) -> Tuple[MonthGrid, ...]:
        return tuple(self.build(year, m, today, selected) for m in range(1, 13))
