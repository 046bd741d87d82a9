# tests/test_offsets.py

import random

import pytest

from calgrid.core import dates as dt
from calgrid.core.types import Date, WeekStart

# First-of-month dates of 2023 by weekday of day 1 (0=Sun..6=Sat)
FIRST_BY_WEEKDAY = {
    0: (2023, 1),
    1: (2023, 5),
    2: (2023, 8),
    3: (2023, 2),
    4: (2023, 6),
    5: (2023, 9),
    6: (2023, 4),
}

# (weekday of day 1) -> (SUNDAY, MONDAY, SATURDAY) leading cells
START_CASES = {
    0: (0, 6, 1),
    1: (1, 0, 2),
    2: (2, 1, 3),
    3: (3, 2, 4),
    4: (4, 3, 5),
    5: (5, 4, 6),
    6: (6, 5, 0),
}

MODES = (WeekStart.SUNDAY, WeekStart.MONDAY, WeekStart.SATURDAY)


@pytest.mark.parametrize("weekday", range(7))
@pytest.mark.parametrize("mode_idx", range(3))
def test_start_offset_table(weekday, mode_idx):
    y, m = FIRST_BY_WEEKDAY[weekday]
    assert dt.weekday_of(Date(y, m, 1)) == weekday
    assert dt.start_offset(y, m, MODES[mode_idx]) == START_CASES[weekday][mode_idx]


@pytest.mark.parametrize("mode", MODES)
def test_offsets_fill_one_row(mode):
    random.seed(42)
    for _ in range(500):
        d = dt.from_jdn(random.randint(2415021, 2488069))
        s = dt.week_start_offset(d, mode)
        e = dt.week_end_offset(d, mode)
        assert 0 <= s <= 6 and 0 <= e <= 6
        assert s + e == 6
        # column 0 is the configured week start
        assert dt.weekday_of(dt.add_days(d, -s)) == mode.value


@pytest.mark.parametrize("mode", MODES)
def test_month_rows_are_whole_weeks(mode):
    for y in (2023, 2024):
        for m in range(1, 13):
            pre = dt.start_offset(y, m, mode)
            post = dt.end_offset(y, m, mode)
            assert (pre + dt.days_in_month(y, m) + post) % 7 == 0


def test_end_offset_examples():
    # Jan 2023 ends on a Tuesday
    assert dt.end_offset(2023, 1, WeekStart.SUNDAY) == 4
    assert dt.end_offset(2023, 1, WeekStart.MONDAY) == 5
    assert dt.end_offset(2023, 1, WeekStart.SATURDAY) == 3
    # Dec 2023 ends on a Sunday
    assert dt.end_offset(2023, 12, WeekStart.MONDAY) == 0
    assert dt.end_offset(2023, 12, WeekStart.SATURDAY) == 5
