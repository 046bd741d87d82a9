"""
calgrid.engines.interfaces
--------------------------
Boundaries between the index/selection engine and the collaborators it consumes
as opaque providers (lunar conversion, solar terms, name tables, interception),
plus the host-side view of a paged surface.

The engine never recomputes what these providers return; it only reads them.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol, Sequence

from calgrid.core.types import Date, LunarDate

InterceptionHook = Callable[[Date], bool]


class LunarDateConverter(Protocol):
    """
    Deterministic Gregorian -> lunisolar conversion.
    Must be total over the engine fence (1900-01-01 .. 2099-12-31).
    """
    def to_lunar(self, d: Date) -> LunarDate:
        ...


class SolarTermProvider(Protocol):
    def terms(self, year: int) -> Mapping[Date, str]:
        """Civil dates of the 24 solar terms of a Gregorian year, mapped to their names."""
        ...


class NameTableProvider(Protocol):
    """
    Read-only string tables, indexed by fixed position.

    Festival tables hold "MMDD<name>" entries; ``traditional_festivals[0]`` is the
    bare name used for New Year's Eve. ``solar_terms`` starts with the term near
    January 5 (solar longitude 285 deg).
    """
    lunar_months: Sequence[str]
    lunar_days: Sequence[str]
    leap_prefix: str
    traditional_festivals: Sequence[str]
    gregorian_festivals: Sequence[str]
    special_festivals: Sequence[str]
    solar_terms: Sequence[str]
    stems: Sequence[str]
    branches: Sequence[str]
    zodiac: Sequence[str]
    month_names: Sequence[str]
    weekday_names: Sequence[str]


class PagedViewHost(Protocol):
    """What a paged view (month, week or year pager) needs from the engine."""

    def total_pages(self) -> int:
        ...

    def grid_for_page(self, idx: int) -> Any:
        ...

    def selection_snapshot(self) -> Any:
        ...

    def user_clicked(self, d: Date) -> Any:
        ...
