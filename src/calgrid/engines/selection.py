"""
calgrid.engines.selection
-------------------------
One state machine for the four selection modes.

Every transition takes a candidate date and answers with an :class:`Outcome`.
Nothing here raises on user input: a rejected candidate leaves the state exactly
as it was, so callers may retry freely.

Modes and their state:

    DEFAULT   exactly one selected day (today, or the fence minimum)
    SINGLE    zero or one selected day
    RANGE     start / end, end only after a second valid click, start <= end
    MULTI     a set of days no larger than the capacity
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple, Union

from calgrid.attributes.scheme import SchemeOverlay
from calgrid.core.dates import add_days, day_diff, next_day, prev_day
from calgrid.core.errors import ConfigurationError
from calgrid.core.types import (
    Date,
    DateRange,
    DefaultSelection,
    Marker,
    MultiSelection,
    Outcome,
    RangeSelection,
    SelectMode,
    SingleSelection,
)
from calgrid.engines.interfaces import InterceptionHook

logger = logging.getLogger(__name__)

Snapshot = Union[DefaultSelection, SingleSelection, RangeSelection, MultiSelection]


@dataclass(frozen=True)
class SelectedDay:
    date: Date
    marker: Optional[Marker] = None


def normalize_limits(min_range: Optional[int], max_range: Optional[int]) -> Tuple[Optional[int], Optional[int]]:
    """Values <= 0 mean unset; a maximum below the minimum is raised to it."""
    lo = min_range if min_range is not None and min_range > 0 else None
    hi = max_range if max_range is not None and max_range > 0 else None
    if lo is not None and hi is not None and hi < lo:
        hi = lo
    return lo, hi


class SelectionStateMachine:
    def __init__(
        self,
        date_range: DateRange,
        today: Date,
        mode: SelectMode = SelectMode.DEFAULT,
        intercept: Optional[InterceptionHook] = None,
        min_range: Optional[int] = None,
        max_range: Optional[int] = None,
        cap: Optional[int] = None,
        overlay: Optional[SchemeOverlay] = None,
    ):
        self.date_range = date_range
        self.today = today
        self.intercept = intercept
        self.overlay = overlay
        self.min_range, self.max_range = normalize_limits(min_range, max_range)
        self.cap = cap if cap is not None and cap > 0 else None

        self._mode = mode
        self._selected: Optional[Date] = None
        self._marker: Optional[Marker] = None
        self._start: Optional[Date] = None
        self._end: Optional[Date] = None
        self._multi: Set[Date] = set()
        self._reset()

    # ---------------------------------------------------------
    # State
    # ---------------------------------------------------------

    @property
    def mode(self) -> SelectMode:
        return self._mode

    @property
    def selected(self) -> Optional[Date]:
        return self._selected

    @property
    def start(self) -> Optional[Date]:
        return self._start

    @property
    def end(self) -> Optional[Date]:
        return self._end

    @property
    def multi(self) -> Tuple[Date, ...]:
        return tuple(sorted(self._multi))

    @property
    def marker(self) -> Optional[Marker]:
        return self._marker

    def default_day(self) -> Date:
        return self.today if self.date_range.contains(self.today) else self.date_range.min_date

    def _reset(self) -> None:
        self._selected = self.default_day() if self._mode is SelectMode.DEFAULT else None
        self._start = self._end = None
        self._multi = set()
        self.refresh_marker()

    def snapshot(self) -> Snapshot:
        if self._mode is SelectMode.DEFAULT:
            if self._selected is None:
                self._selected = self.default_day()
                self.refresh_marker()
            return DefaultSelection(self._selected, self._marker)
        if self._mode is SelectMode.SINGLE:
            return SingleSelection(self._selected, self._marker)
        if self._mode is SelectMode.RANGE:
            return RangeSelection(self._start, self._end)
        return MultiSelection(self.multi, self.cap)

    def focus(self) -> Optional[Date]:
        """The day other views should follow after a selection change."""
        if self._mode in (SelectMode.DEFAULT, SelectMode.SINGLE):
            return self._selected
        if self._mode is SelectMode.RANGE:
            return self._end or self._start
        return max(self._multi) if self._multi else None

    # ---------------------------------------------------------
    # Markers cached for the selected day
    # ---------------------------------------------------------

    def refresh_marker(self) -> None:
        if self.overlay is None or self._selected is None:
            self._marker = None
        else:
            self._marker = self.overlay.get(self._selected)

    def marker_removed(self, d: Date) -> None:
        if self._selected == d:
            self._marker = None

    # ---------------------------------------------------------
    # Candidate screening
    # ---------------------------------------------------------

    def _screen(self, d: Date) -> Optional[Outcome]:
        if not d.is_valid() or not self.date_range.contains(d):
            logger.debug("%s rejected: outside %s..%s", d, self.date_range.min_date, self.date_range.max_date)
            return Outcome.OUT_OF_RANGE
        if self.intercept is not None and self.intercept(d):
            logger.debug("%s rejected: intercepted", d)
            return Outcome.INTERCEPTED
        return None

    def _check_length(self, start: Date, end: Date) -> Optional[Outcome]:
        diff = day_diff(end, start) + 1
        if self.min_range is not None and diff < self.min_range:
            logger.debug("range %s..%s rejected: %d days < %d", start, end, diff, self.min_range)
            return Outcome.RANGE_TOO_SHORT
        if self.max_range is not None and diff > self.max_range:
            logger.debug("range %s..%s rejected: %d days > %d", start, end, diff, self.max_range)
            return Outcome.RANGE_TOO_LONG
        return None

    # ---------------------------------------------------------
    # Clicks
    # ---------------------------------------------------------

    def click(self, d: Date) -> Outcome:
        rejected = self._screen(d)
        if rejected is not None:
            return rejected
        if self._mode is SelectMode.RANGE:
            return self._click_range(d)
        if self._mode is SelectMode.MULTI:
            return self._click_multi(d)
        self._selected = d
        self.refresh_marker()
        return Outcome.SELECTED

    def _click_range(self, d: Date) -> Outcome:
        if self._start is None or self._end is not None:
            self._start, self._end = d, None
            return Outcome.SELECTED

        if d >= self._start:
            rejected = self._check_length(self._start, d)
            if rejected is not None:
                return rejected

        if d < self._start or (d == self._start and self.min_range is None):
            # restart from the earlier day
            self._start, self._end = d, None
            return Outcome.SELECTED
        self._end = d
        return Outcome.SELECTED

    def _click_multi(self, d: Date) -> Outcome:
        if d in self._multi:
            self._multi.discard(d)
            return Outcome.DESELECTED
        if self.cap is not None and len(self._multi) >= self.cap:
            logger.debug("%s rejected: %d of %d already selected", d, len(self._multi), self.cap)
            return Outcome.CAPACITY_EXCEEDED
        self._multi.add(d)
        return Outcome.SELECTED

    # ---------------------------------------------------------
    # Programmatic selection
    # ---------------------------------------------------------

    def select(self, d: Date) -> Outcome:
        """Select one day in DEFAULT or SINGLE mode."""
        if self._mode not in (SelectMode.DEFAULT, SelectMode.SINGLE):
            return Outcome.UNCHANGED
        return self.click(d)

    def set_range_start(self, d: Date) -> Outcome:
        if self._mode is not SelectMode.RANGE:
            return Outcome.UNCHANGED
        rejected = self._screen(d)
        if rejected is not None:
            return rejected
        self._start, self._end = d, None
        return Outcome.SELECTED

    def select_range(self, start: Date, end: Date) -> Outcome:
        if self._mode is not SelectMode.RANGE:
            return Outcome.UNCHANGED
        for d in (start, end):
            rejected = self._screen(d)
            if rejected is not None:
                return rejected
        if end < start:
            logger.debug("range %s..%s rejected: end before start", start, end)
            return Outcome.INVALID_RANGE
        rejected = self._check_length(start, end)
        if rejected is not None:
            return rejected
        if start == end and self.min_range is None:
            self._start, self._end = start, None
        else:
            self._start, self._end = start, end
        return Outcome.SELECTED

    def put_multi(self, *dates: Date) -> Outcome:
        """Add days in MULTI mode; all or nothing."""
        if self._mode is not SelectMode.MULTI:
            return Outcome.UNCHANGED
        for d in dates:
            rejected = self._screen(d)
            if rejected is not None:
                return rejected
        fresh = set(dates) - self._multi
        if not fresh:
            return Outcome.UNCHANGED
        if self.cap is not None and len(self._multi) + len(fresh) > self.cap:
            logger.debug("%d days rejected: capacity %d", len(fresh), self.cap)
            return Outcome.CAPACITY_EXCEEDED
        self._multi |= fresh
        return Outcome.SELECTED

    def remove_multi(self, *dates: Date) -> Outcome:
        if self._mode is not SelectMode.MULTI:
            return Outcome.UNCHANGED
        gone = self._multi & set(dates)
        if not gone:
            return Outcome.UNCHANGED
        self._multi -= gone
        return Outcome.DESELECTED

    def clear(self) -> None:
        """Drop the selection; DEFAULT mode falls back to its default day."""
        self._reset()

    # ---------------------------------------------------------
    # Reconfiguration
    # ---------------------------------------------------------

    def set_mode(self, mode: SelectMode) -> None:
        if not isinstance(mode, SelectMode):
            raise ConfigurationError(f"mode must be a SelectMode, got {mode!r}")
        self._mode = mode
        self._reset()

    def set_limits(self, min_range: Optional[int], max_range: Optional[int]) -> None:
        self.min_range, self.max_range = normalize_limits(min_range, max_range)

    def set_capacity(self, cap: Optional[int]) -> None:
        self.cap = cap if cap is not None and cap > 0 else None
        if self.cap is not None and len(self._multi) > self.cap:
            self._multi = set(sorted(self._multi)[: self.cap])

    def reclamp(self, date_range: DateRange) -> None:
        """Adopt a new fence, dropping whatever selection falls outside it."""
        self.date_range = date_range
        if self._selected is not None and not date_range.contains(self._selected):
            self._selected = date_range.min_date if self._mode is SelectMode.DEFAULT else None
            self.refresh_marker()
        if (self._start is not None and not date_range.contains(self._start)) or (
            self._end is not None and not date_range.contains(self._end)
        ):
            self._start = self._end = None
        self._multi = {d for d in self._multi if date_range.contains(d)}

    def update_today(self, today: Date) -> None:
        self.today = today

    # ---------------------------------------------------------
    # Queries
    # ---------------------------------------------------------

    def in_selection(self, d: Date) -> bool:
        if self._mode in (SelectMode.DEFAULT, SelectMode.SINGLE):
            return d == self._selected
        if self._mode is SelectMode.RANGE:
            if self._start is None:
                return False
            if self._end is None:
                return d == self._start
            return self._start <= d <= self._end
        return d in self._multi

    def neighbours(self, d: Date) -> Tuple[bool, bool]:
        """Whether the day before and the day after d are selected too."""
        return self.in_selection(prev_day(d)), self.in_selection(next_day(d))

    def range_days(self) -> List[SelectedDay]:
        """
        Every day of the current range, inclusive, skipping intercepted days.
        O(days in range); call on demand rather than per frame.
        """
        if self._start is None:
            return []
        end = self._end or self._start
        out: List[SelectedDay] = []
        for i in range(day_diff(end, self._start) + 1):
            d = add_days(self._start, i)
            if self.intercept is not None and self.intercept(d):
                continue
            out.append(SelectedDay(d, self.overlay.get(d) if self.overlay is not None else None))
        return out

    def multi_days(self) -> List[SelectedDay]:
        return [SelectedDay(d, self.overlay.get(d) if self.overlay is not None else None) for d in self.multi]

    def selected_days(self) -> List[SelectedDay]:
        """Current selection as days, whatever the mode."""
        if self._mode is SelectMode.RANGE:
            return self.range_days()
        if self._mode is SelectMode.MULTI:
            return self.multi_days()
        if self._selected is None:
            return []
        return [SelectedDay(self._selected, self._marker)]

