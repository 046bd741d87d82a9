# tests/test_engine.py

import logging

import pytest

import calgrid
from calgrid.core.errors import ConfigurationError, UnknownLocaleError
from calgrid.core.types import (
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
from calgrid.engines.calendar import EngineConfig, PagePositions, clamp_to_fence

TODAY = Date(2023, 6, 15)
YEAR_2023 = DateRange(Date(2023, 1, 1), Date(2023, 12, 31))


@pytest.fixture
def engine():
    config = EngineConfig(date_range=YEAR_2023, week_start=WeekStart.MONDAY)
    return calgrid.make_engine(config, today=TODAY)


def test_config_validation():
    with pytest.raises(ConfigurationError):
        EngineConfig(week_start="monday")
    with pytest.raises(ConfigurationError):
        EngineConfig(max_multi_select="3")
    with pytest.raises(ConfigurationError):
        DateRange(Date(2023, 2, 1), Date(2023, 1, 1))
    c = EngineConfig().tweak(display_mode=DisplayMode.FIT_EXACT_ROWS)
    assert c.display_mode is DisplayMode.FIT_EXACT_ROWS
    assert c.date_range == DateRange(Date(1971, 1, 1), Date(2055, 12, 31))


def test_range_clamped_to_lunar_fence(caplog):
    with caplog.at_level(logging.WARNING, logger="calgrid.engines.calendar"):
        r = clamp_to_fence(DateRange(Date(1850, 1, 1), Date(2200, 1, 1)))
    assert r == DateRange(Date(1900, 1, 1), Date(2099, 12, 31))
    assert "clamped" in caplog.text
    with pytest.raises(ConfigurationError):
        clamp_to_fence(DateRange(Date(2150, 1, 1), Date(2200, 1, 1)))


def test_surfaces_page_counts(engine):
    assert engine.surface(Surface.MONTH).total_pages() == 12
    assert engine.surface(Surface.WEEK).total_pages() == 53
    assert engine.surface(Surface.YEAR).total_pages() == 1


def test_grid_for_page_and_overlay(engine):
    engine.add_marker(Date(2023, 2, 14), Marker("约"))
    grid = engine.surface(Surface.MONTH).grid_for_page(1)
    assert grid.cells[0].date == Date(2023, 1, 30)
    marked = [c for c in grid.cells if c.has_marker]
    assert [c.date for c in marked] == [Date(2023, 2, 14)]
    assert marked[0].lunar_text == "情人节"

    week = engine.surface(Surface.WEEK).grid_for_page(1)
    assert week.first == Date(2023, 1, 2)

    year = engine.surface(Surface.YEAR).grid_for_page(0)
    assert len(year) == 12

    engine.clear_markers()
    assert not any(c.has_marker for c in engine.month_grid(2023, 2).cells)


def test_pages_for_and_surface_page_of(engine):
    assert engine.pages_for(Date(2023, 1, 2)) == PagePositions(month=0, week=1, year=0)
    assert engine.surface(Surface.WEEK).page_of(Date(2023, 12, 31)) == 52
    assert engine.initial_positions() == engine.pages_for(TODAY)


def test_click_through_surface_syncs_views(engine):
    engine.set_select_mode(SelectMode.SINGLE)
    month = engine.surface(Surface.MONTH)
    assert month.user_clicked(Date(2023, 3, 9)) is Outcome.SELECTED
    assert month.selection_snapshot() == engine.surface(Surface.WEEK).selection_snapshot()
    pos = engine.pages_for(engine.selection.focus())
    assert pos.month == 2
    assert engine.month_grid(2023, 3).selected_cell.date == Date(2023, 3, 9)


def test_set_range_rejects_inverted(engine):
    before = engine.config.date_range
    assert engine.set_range(Date(2023, 5, 1), Date(2023, 4, 1)) is Outcome.INVALID_RANGE
    assert engine.config.date_range == before
    assert engine.set_range(Date(2023, 1, 1), Date(2023, 12, 31)) is Outcome.UNCHANGED


def test_set_range_rejects_range_outside_lunar_table(engine, caplog):
    before = engine.config.date_range
    with caplog.at_level(logging.WARNING, logger="calgrid.engines.calendar"):
        assert engine.set_range(Date(2150, 1, 1), Date(2160, 1, 1)) is Outcome.INVALID_RANGE
    assert engine.config.date_range == before
    assert "Refusing range" in caplog.text
    assert engine.mapper.total_month_pages == 12


def test_set_range_reclamps_selection(engine):
    assert engine.selection.selected == TODAY
    assert engine.set_range(Date(2023, 8, 1), Date(2024, 7, 31)) is Outcome.SELECTED
    assert engine.selection.selected == Date(2023, 8, 1)
    assert engine.mapper.total_month_pages == 12
    assert engine.surface(Surface.YEAR).total_pages() == 2


def test_week_start_change_rebuilds_pages(engine):
    assert engine.mapper.total_week_pages == 53
    engine.set_week_start(WeekStart.SUNDAY)
    assert engine.mapper.total_week_pages == 53
    assert engine.week_grid(Date(2023, 1, 4)).first == Date(2023, 1, 1)
    engine.set_week_start(WeekStart.SATURDAY)
    assert engine.week_grid(Date(2023, 1, 4)).first == Date(2022, 12, 31)
    with pytest.raises(ConfigurationError):
        engine.set_week_start("sun")


def test_display_mode_change(engine):
    engine.set_display_mode(DisplayMode.FIT_EXACT_ROWS)
    assert engine.month_grid(2023, 2).line_count == 5


def test_scroll_to_selects_in_default_mode(engine):
    pos = engine.scroll_to(Date(2023, 9, 9))
    assert engine.selection.selected == Date(2023, 9, 9)
    assert pos.month == 8
    pos = engine.scroll_to(Date(2030, 1, 1))
    assert engine.selection.selected == Date(2023, 12, 31)
    assert pos.week == 52


def test_month_page_changed_day_policy(engine):
    assert engine.month_page_changed(5) == TODAY
    assert engine.month_page_changed(6) == Date(2023, 7, 1)
    engine.set_day_policy(DayPolicy.FOLLOW_SELECTED)
    engine.scroll_to(Date(2023, 1, 31))
    assert engine.month_page_changed(1) == Date(2023, 2, 28)
    assert engine.selection.selected == Date(2023, 2, 28)


def test_select_limits_and_multi_cap(engine):
    engine.set_select_mode(SelectMode.RANGE)
    engine.set_select_limits(3, 7)
    engine.click(Date(2023, 3, 1))
    assert engine.click(Date(2023, 3, 2)) is Outcome.RANGE_TOO_SHORT
    assert engine.select_range(Date(2023, 3, 1), Date(2023, 3, 5)) is Outcome.SELECTED

    engine.set_select_mode(SelectMode.MULTI)
    engine.set_max_multi_select(1)
    assert engine.click(Date(2023, 3, 1)) is Outcome.SELECTED
    assert engine.click(Date(2023, 3, 2)) is Outcome.CAPACITY_EXCEEDED


def test_remove_marker_clears_selection_marker(engine):
    engine.set_select_mode(SelectMode.SINGLE)
    engine.add_markers({Date(2023, 4, 4): Marker("a"), "20230405": Marker("b")})
    engine.click(Date(2023, 4, 4))
    assert engine.selection.snapshot().marker == Marker("a")
    assert engine.remove_marker(Date(2023, 4, 4)) is True
    assert engine.selection.snapshot().marker is None
    engine.set_markers({Date(2023, 4, 4): Marker("c")})
    assert engine.selection.snapshot().marker == Marker("c")


def test_interception_hook(engine):
    engine.set_intercept(lambda d: d.day == 13)
    assert engine.click(Date(2023, 6, 13)) is Outcome.INTERCEPTED
    engine.update_today(Date(2023, 6, 13))
    assert engine.month_grid(2023, 6).selected_index == -1


def test_cell_attributes(engine):
    c = engine.cell(Date(2024, 2, 10), attributes=("weekday", "sexagenary_year", "jdn"))
    assert c.lunar_text == "春节"
    assert c.attributes["weekday"] == 6
    assert c.attributes["stem_index"] == 0
    assert c.attributes["branch_index"] == 4
    assert c.attributes["jdn"] == 2460351
    with pytest.raises(KeyError):
        engine.cell(Date(2024, 2, 10), attributes=("nope",))


def test_fence_month_cells_outside_lunar_table():
    config = EngineConfig(date_range=DateRange(Date(1900, 1, 1), Date(1900, 12, 31)))
    grid = calgrid.make_engine(config, today=TODAY).month_grid(1900, 1)
    assert grid.cells[0].date == Date(1899, 12, 31)
    assert grid.cells[0].lunar is None
    assert grid.cells[1].lunar is not None


def test_api_helpers():
    assert "zh_CN" in calgrid.list_locales()
    with pytest.raises(UnknownLocaleError):
        calgrid.names("xx")
    assert calgrid.ganzhi(2024)["label"] == "甲辰"
    assert calgrid.to_lunar(Date(2023, 1, 22)).month == 1
    assert calgrid.festival(Date(2023, 10, 1)).text == "国庆节"
    assert calgrid.page_positions(
        Date(2023, 12, 31), min_date=Date(2023, 1, 1), max_date=Date(2023, 12, 31), week_start=WeekStart.MONDAY
    ) == PagePositions(11, 52, 0)
    info = calgrid.day_info(Date(2023, 6, 22), today=TODAY)
    assert info.lunar_text == "端午"
