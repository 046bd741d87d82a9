"""
calgrid.engines.pages
---------------------
Date <-> page-index mapping for the three paged surfaces (month, week, year).

All indices are 0-based. Date -> index mappings clamp into the fence; index ->
date mappings raise ``IndexError`` for pages that do not exist.
"""

from __future__ import annotations

from typing import Optional, Tuple

from calgrid.core.dates import (
    add_days,
    day_diff,
    days_in_month,
    next_day,
    week_end_offset,
    week_start_offset,
)
from calgrid.core.types import Date, DateRange, DayPolicy, WeekStart


class PageIndexMapper:
    def __init__(self, date_range: DateRange, week_start: WeekStart = WeekStart.SUNDAY):
        self.date_range = date_range
        self.week_start = week_start

    @property
    def min_date(self) -> Date:
        return self.date_range.min_date

    @property
    def max_date(self) -> Date:
        return self.date_range.max_date

    def _check(self, idx: int, total: int, surface: str) -> None:
        if not 0 <= idx < total:
            raise IndexError(f"{surface} page {idx} outside 0..{total - 1}")

    # ---------------------------------------------------------
    # Month surface
    # ---------------------------------------------------------

    @property
    def total_month_pages(self) -> int:
        lo, hi = self.min_date, self.max_date
        return 12 * (hi.year - lo.year) - lo.month + 1 + hi.month

    def month_page_index(self, year: int, month: int) -> int:
        idx = 12 * (year - self.min_date.year) + month - self.min_date.month
        return max(0, min(idx, self.total_month_pages - 1))

    def month_of_page(self, idx: int) -> Tuple[int, int]:
        self._check(idx, self.total_month_pages, "month")
        n = idx + self.min_date.month - 1
        return n // 12 + self.min_date.year, n % 12 + 1

    def date_from_month_page(
        self,
        idx: int,
        policy: DayPolicy = DayPolicy.FIRST_DAY,
        follow_day: Optional[int] = None,
    ) -> Date:
        """
        Landing date of a month page.

        FIRST_DAY lands on day 1; the FOLLOW policies keep ``follow_day`` (the day
        selected on the previous page) clamped to the month length. The result is
        snapped to the fence edge when the partial fence months cut it off.
        """
        year, month = self.month_of_page(idx)
        day = 1
        if policy is not DayPolicy.FIRST_DAY and follow_day:
            day = max(1, min(follow_day, days_in_month(year, month)))
        d = Date(year, month, day)
        if d < self.min_date:
            return self.min_date
        if d > self.max_date:
            return self.max_date
        return d

    def is_month_in_range(self, year: int, month: int) -> bool:
        return self.date_range.contains_month(year, month)

    # ---------------------------------------------------------
    # Week surface
    # ---------------------------------------------------------

    @property
    def total_week_pages(self) -> int:
        lo, hi = self.min_date, self.max_date
        pre = week_start_offset(lo, self.week_start)
        post = week_end_offset(hi, self.week_start)
        return (pre + post + day_diff(hi, lo) + 1) // 7

    def week_page_index(self, d: Date) -> int:
        d = self.date_range.clamp(d)
        pre = week_start_offset(self.min_date, self.week_start)
        # Look one day ahead when d opens its week row; keeps d off the previous
        # row if the offsets ever disagree with the grid.
        if week_start_offset(d, self.week_start) == 0:
            d = next_day(d)
        return (pre + day_diff(d, self.min_date)) // 7

    def date_from_week_page(self, idx: int) -> Date:
        """First day (column 0) of a week page; may precede min_date on page 0."""
        self._check(idx, self.total_week_pages, "week")
        s = add_days(self.min_date, idx * 7)
        return add_days(s, -week_start_offset(s, self.week_start))

    def week_start_of(self, d: Date) -> Date:
        return add_days(d, -week_start_offset(d, self.week_start))

    # ---------------------------------------------------------
    # Year surface
    # ---------------------------------------------------------

    @property
    def total_year_pages(self) -> int:
        return self.max_date.year - self.min_date.year + 1

    def year_page_index(self, year: int) -> int:
        return max(0, min(year - self.min_date.year, self.total_year_pages - 1))

    def year_from_page(self, idx: int) -> int:
        self._check(idx, self.total_year_pages, "year")
        return self.min_date.year + idx

    # ---------------------------------------------------------
    # Scroll targets
    # ---------------------------------------------------------

    def range_edge(self, d: Date, today: Date, policy: DayPolicy = DayPolicy.FIRST_DAY) -> Date:
        """
        Date a view should land on when asked to show ``d``: today when it is in
        the fence and the policy does not ignore it, else ``d`` if in the fence,
        else the fence edge on the side ``d`` fell off.
        """
        if self.date_range.contains(today) and policy is not DayPolicy.FOLLOW_SELECTED_IGNORE_TODAY:
            return today
        if self.date_range.contains(d):
            return d
        if d.is_same_month(self.min_date) or d < self.min_date:
            return self.min_date
        return self.max_date

