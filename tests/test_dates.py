# tests/test_dates.py

import random

import pytest

from calgrid.core import dates as dt
from calgrid.core.errors import ConfigurationError
from calgrid.core.types import Date, DisplayMode, WeekStart


def _random_date(rng):
    jdn = rng.randint(dt.to_jdn(Date(1900, 1, 1)), dt.to_jdn(Date(2099, 12, 31)))
    return dt.from_jdn(jdn)


def test_jdn_date_roundtrip():
    random.seed(42)
    for _ in range(5000):
        jdn_in = random.randint(2415021, 2488069)
        assert dt.to_jdn(dt.from_jdn(jdn_in)) == jdn_in


def test_known_epochs():
    assert dt.to_jdn(Date(2000, 1, 1)) == 2451545
    assert dt.to_jdn(Date(1970, 1, 1)) == 2440588


@pytest.mark.parametrize("d, w", [
    (Date(2023, 1, 1), 0),
    (Date(2000, 1, 1), 6),
    (Date(1970, 1, 1), 4),
    (Date(2024, 2, 29), 4),
    (Date(1900, 1, 1), 1),
    (Date(2099, 12, 31), 4),
])
def test_weekday_known_dates(d, w):
    assert dt.weekday_of(d) == w


def test_weekday_matches_datetime():
    random.seed(42)
    for _ in range(2000):
        d = _random_date(random)
        # datetime: Monday=0..Sunday=6
        assert dt.weekday_of(d) == (d.to_date().weekday() + 1) % 7


@pytest.mark.parametrize("y, leap", [(2000, True), (1900, False), (2024, True), (2023, False), (2100, False)])
def test_is_leap_year(y, leap):
    assert dt.is_leap_year(y) is leap


def test_days_in_month():
    assert dt.days_in_month(2023, 2) == 28
    assert dt.days_in_month(2024, 2) == 29
    assert dt.days_in_month(1900, 2) == 28
    assert [dt.days_in_month(2023, m) for m in (1, 4, 12)] == [31, 30, 31]
    with pytest.raises(ConfigurationError):
        dt.days_in_month(2023, 13)


def test_day_diff_laws():
    random.seed(42)
    for _ in range(2000):
        a, b = _random_date(random), _random_date(random)
        assert dt.day_diff(a, b) == -dt.day_diff(b, a)
        assert dt.day_diff(a, a) == 0
        assert dt.add_days(b, dt.day_diff(a, b)) == a


def test_day_diff_across_boundaries():
    assert dt.day_diff(Date(2024, 3, 1), Date(2024, 2, 28)) == 2
    assert dt.day_diff(Date(2023, 3, 1), Date(2023, 2, 28)) == 1
    assert dt.day_diff(Date(2024, 1, 1), Date(2023, 12, 31)) == 1
    assert dt.day_diff(Date(2023, 12, 31), Date(2023, 1, 1)) == 364


def test_compare():
    assert dt.compare(Date(2023, 1, 2), Date(2023, 1, 1)) == 1
    assert dt.compare(Date(2022, 12, 31), Date(2023, 1, 1)) == -1
    assert dt.compare(Date(2023, 5, 5), Date(2023, 5, 5)) == 0


def test_month_steps():
    assert dt.prev_month(2023, 1) == (2022, 12)
    assert dt.next_month(2023, 12) == (2024, 1)
    assert dt.next_day(Date(2024, 2, 28)) == Date(2024, 2, 29)
    assert dt.prev_day(Date(2023, 3, 1)) == Date(2023, 2, 28)


def test_week_of_month_and_line_count():
    # Feb 2015 starts on a Sunday and fills exactly four rows
    assert dt.line_count(2015, 2, WeekStart.SUNDAY, DisplayMode.FIT_EXACT_ROWS) == 4
    assert dt.line_count(2015, 2, WeekStart.SUNDAY, DisplayMode.ALL_SIX_ROWS) == 6
    assert dt.line_count(2015, 2, WeekStart.MONDAY, DisplayMode.CURRENT_MONTH_ONLY) == 5
    assert dt.week_of_month(Date(2015, 2, 28), WeekStart.SUNDAY) == 4
    assert dt.week_of_month(Date(2023, 1, 1), WeekStart.MONDAY) == 1
    assert dt.week_of_month(Date(2023, 1, 2), WeekStart.MONDAY) == 2


def test_date_parse_and_key():
    d = Date.parse("2023-01-05")
    assert d == Date(2023, 1, 5)
    assert d.key() == "20230105"
    assert Date.parse("20230105") == d
    assert str(d) == "2023-01-05"
    with pytest.raises(ConfigurationError):
        Date.parse("2023-02-30")
    with pytest.raises(ConfigurationError):
        Date.parse("yesterday")


def test_date_is_valid():
    assert Date(2024, 2, 29).is_valid()
    assert not Date(2023, 2, 29).is_valid()
    assert not Date(1899, 12, 31).is_valid()
