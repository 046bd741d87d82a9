from __future__ import annotations

import argparse
from typing import List, Optional, Sequence, Tuple

import calgrid
from calgrid.core.types import Cell, Date, DisplayMode, WeekStart

DOW = ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa")

WEEK_STARTS = {"sun": WeekStart.SUNDAY, "mon": WeekStart.MONDAY, "sat": WeekStart.SATURDAY}
MODES = {"all": DisplayMode.ALL_SIX_ROWS, "only": DisplayMode.CURRENT_MONTH_ONLY, "fit": DisplayMode.FIT_EXACT_ROWS}


def dow_header(week_start: WeekStart = WeekStart.SUNDAY, w: int = 6) -> str:
    first = week_start.value
    return " ".join(DOW[(first + i) % 7].ljust(w) for i in range(7)).rstrip()


def cell(top: str, bot: str, w: int = 6) -> Tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def print_grid(title: str, weeks: Sequence[Sequence[Tuple[str, str]]], week_start: WeekStart = WeekStart.SUNDAY) -> None:
    header = dow_header(week_start)
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    print()


def label(c: Cell, shown: bool) -> Tuple[str, str]:
    if not shown:
        return cell("", "")
    mark = "*" if c.is_today else ("+" if c.has_marker else "")
    top = f"{c.date.day:2d}{mark}"
    if not c.is_current_month:
        top = f"({c.date.day})"
    return cell(top, c.lunar_text)


def month_calendar(year: int, month: int, week_start: WeekStart, mode: DisplayMode, today: Optional[Date] = None) -> None:
    grid = calgrid.month_grid(year, month, week_start=week_start, display_mode=mode, today=today)
    rows = grid.rows()[: grid.line_count]
    weeks: List[List[Tuple[str, str]]] = []
    for row in rows:
        shown = [mode is not DisplayMode.CURRENT_MONTH_ONLY or c.is_current_month for c in row]
        weeks.append([label(c, s) for c, s in zip(row, shown)])

    sx = calgrid.ganzhi(year)
    title = f"{year}-{month:02d}  {sx['label']}({sx['zodiac']})  week_start={week_start.name.lower()} mode={mode.value}"
    print_grid(title, weeks, week_start)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a Gregorian month grid with lunar / festival labels under each day."
    )
    p.add_argument("year", type=int, nargs="?", help="Gregorian year (default: this year)")
    p.add_argument("month", type=int, nargs="?", help="Gregorian month (default: this month)")
    p.add_argument("--week-start", choices=sorted(WEEK_STARTS), default="sun")
    p.add_argument("--mode", choices=sorted(MODES), default="all")
    p.add_argument("--today", help="YYYY-MM-DD used to flag today (default: system date)")
    args = p.parse_args(argv)

    today = Date.parse(args.today) if args.today else Date.today()
    year = args.year or today.year
    month = args.month or today.month
    month_calendar(year, month, WEEK_STARTS[args.week_start], MODES[args.mode], today)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
