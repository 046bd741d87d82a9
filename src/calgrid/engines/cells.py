"""
calgrid.engines.cells
---------------------
Builds immutable :class:`Cell` snapshots, including the lunar overlay when a
converter and festival resolver are available.
"""

from __future__ import annotations

from typing import Optional

from calgrid.attributes.festival import FestivalResolver
from calgrid.core.dates import is_leap_year, weekday_of
from calgrid.core.types import MAX_YEAR, MIN_YEAR, Cell, Date
from calgrid.engines.interfaces import LunarDateConverter


class CellFactory:
    def __init__(
        self,
        lunar: Optional[LunarDateConverter] = None,
        resolver: Optional[FestivalResolver] = None,
    ):
        if lunar is None and resolver is not None:
            lunar = resolver.lunar
        self.lunar = lunar
        self.resolver = resolver

    def build(self, d: Date, today: Date, is_current_month: bool = True) -> Cell:
        w = weekday_of(d)
        lunar = None
        # overflow cells of the fence months may fall outside the lunar table
        if self.lunar is not None and MIN_YEAR <= d.year <= MAX_YEAR + 1:
            lunar = self.lunar.to_lunar(d)
        text, source = "", ""
        if lunar is not None and self.resolver is not None:
            r = self.resolver.resolve(d, lunar)
            text, source = r.text, r.source
        return Cell(
            date=d,
            is_current_month=is_current_month,
            is_today=(d == today),
            weekday=w,
            is_weekend=w in (0, 6),
            is_leap_year=is_leap_year(d.year),
            lunar=lunar,
            lunar_text=text,
            festival_source=source,
        )
