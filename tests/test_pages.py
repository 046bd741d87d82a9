# tests/test_pages.py

import random

import pytest

from calgrid.core import dates as dt
from calgrid.core.types import Date, DateRange, DayPolicy, WeekStart
from calgrid.engines.pages import PageIndexMapper

YEAR_2023 = DateRange(Date(2023, 1, 1), Date(2023, 12, 31))
WIDE = DateRange(Date(1971, 3, 15), Date(2055, 10, 20))
MODES = (WeekStart.SUNDAY, WeekStart.MONDAY, WeekStart.SATURDAY)


@pytest.fixture
def monday_2023():
    return PageIndexMapper(YEAR_2023, WeekStart.MONDAY)


def test_totals_for_one_year(monday_2023):
    assert monday_2023.total_month_pages == 12
    assert monday_2023.total_week_pages == 53
    assert monday_2023.total_year_pages == 1


def test_month_page_mapping(monday_2023):
    assert monday_2023.month_page_index(2023, 1) == 0
    assert monday_2023.month_page_index(2023, 12) == 11
    # clamped
    assert monday_2023.month_page_index(2022, 5) == 0
    assert monday_2023.month_page_index(2030, 5) == 11
    assert monday_2023.month_of_page(4) == (2023, 5)
    with pytest.raises(IndexError):
        monday_2023.month_of_page(12)


def test_week_page_mapping(monday_2023):
    # Jan 1 2023 is a Sunday, so it closes the first Monday row
    assert monday_2023.week_page_index(Date(2023, 1, 1)) == 0
    assert monday_2023.week_page_index(Date(2023, 1, 2)) == 1
    assert monday_2023.week_page_index(Date(2023, 1, 8)) == 1
    assert monday_2023.week_page_index(Date(2023, 12, 31)) == 52
    assert monday_2023.date_from_week_page(0) == Date(2022, 12, 26)
    assert monday_2023.date_from_week_page(1) == Date(2023, 1, 2)
    assert monday_2023.date_from_week_page(52) == Date(2023, 12, 25)


def test_total_month_pages_partial_years():
    m = PageIndexMapper(WIDE)
    assert m.total_month_pages == 12 * (2055 - 1971) - 3 + 1 + 10
    assert m.month_of_page(0) == (1971, 3)
    assert m.month_of_page(m.total_month_pages - 1) == (2055, 10)
    assert m.total_year_pages == 85
    assert m.year_from_page(84) == 2055
    assert m.year_page_index(1960) == 0


@pytest.mark.parametrize("mode", MODES)
def test_month_page_idempotence(mode):
    m = PageIndexMapper(WIDE, mode)
    random.seed(42)
    for _ in range(1000):
        d = dt.from_jdn(random.randint(dt.to_jdn(WIDE.min_date), dt.to_jdn(WIDE.max_date)))
        back = m.date_from_month_page(m.month_page_index(d.year, d.month))
        assert (back.year, back.month) == (d.year, d.month)


@pytest.mark.parametrize("mode", MODES)
def test_week_page_idempotence(mode):
    m = PageIndexMapper(WIDE, mode)
    random.seed(42)
    for _ in range(1000):
        d = dt.from_jdn(random.randint(dt.to_jdn(WIDE.min_date), dt.to_jdn(WIDE.max_date)))
        idx = m.week_page_index(d)
        assert 0 <= idx < m.total_week_pages
        first = m.date_from_week_page(idx)
        assert 0 <= dt.day_diff(d, first) <= 6


@pytest.mark.parametrize("mode", MODES)
def test_week_pages_cover_every_day_once(mode):
    r = DateRange(Date(2023, 12, 20), Date(2024, 3, 10))
    m = PageIndexMapper(r, mode)
    seen = []
    for idx in range(m.total_week_pages):
        first = m.date_from_week_page(idx)
        seen.extend(dt.add_days(first, i) for i in range(7))
    inside = [d for d in seen if r.contains(d)]
    assert inside == [dt.add_days(r.min_date, i) for i in range(dt.day_diff(r.max_date, r.min_date) + 1)]


def test_day_policy_on_month_page():
    r = DateRange(Date(2023, 1, 15), Date(2023, 12, 10))
    m = PageIndexMapper(r)
    assert m.date_from_month_page(1) == Date(2023, 2, 1)
    assert m.date_from_month_page(1, DayPolicy.FOLLOW_SELECTED, follow_day=31) == Date(2023, 2, 28)
    assert m.date_from_month_page(3, DayPolicy.FOLLOW_SELECTED, follow_day=31) == Date(2023, 4, 30)
    assert m.date_from_month_page(3, DayPolicy.FOLLOW_SELECTED, follow_day=0) == Date(2023, 4, 1)
    # fence months snap to the fence
    assert m.date_from_month_page(0) == Date(2023, 1, 15)
    assert m.date_from_month_page(11, DayPolicy.FOLLOW_SELECTED, follow_day=20) == Date(2023, 12, 10)


def test_range_edge():
    m = PageIndexMapper(YEAR_2023)
    today = Date(2023, 6, 1)
    assert m.range_edge(Date(2023, 3, 3), today) == today
    assert m.range_edge(Date(2023, 3, 3), today, DayPolicy.FOLLOW_SELECTED_IGNORE_TODAY) == Date(2023, 3, 3)
    outside = Date(2030, 1, 1)
    assert m.range_edge(Date(2023, 3, 3), outside) == Date(2023, 3, 3)
    assert m.range_edge(Date(2020, 1, 1), outside) == YEAR_2023.min_date
    assert m.range_edge(Date(2024, 2, 1), outside) == YEAR_2023.max_date


def test_is_month_in_range():
    m = PageIndexMapper(DateRange(Date(2023, 3, 15), Date(2023, 5, 2)))
    assert m.is_month_in_range(2023, 3)
    assert m.is_month_in_range(2023, 5)
    assert not m.is_month_in_range(2023, 6)
