from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

from calgrid.core.errors import CalgridError
from calgrid.core.types import Date, DateRange, DisplayMode, WeekStart

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_WEEK_STARTS = {"sun": WeekStart.SUNDAY, "mon": WeekStart.MONDAY, "sat": WeekStart.SATURDAY}
_MODES = {"all": DisplayMode.ALL_SIX_ROWS, "only": DisplayMode.CURRENT_MONTH_ONLY, "fit": DisplayMode.FIT_EXACT_ROWS}


def _parse_ymd(s: str) -> Date:
    try:
        return Date.parse(s)
    except CalgridError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _add_week_start(p: argparse.ArgumentParser) -> None:
    p.add_argument("--week-start", choices=sorted(_WEEK_STARTS), default="sun", help="first column of a week row")


def cmd_day(argv: list[str]) -> int:
    import calgrid

    p = argparse.ArgumentParser(prog="calgrid day", description="One annotated day cell")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    p.add_argument("--today", type=_parse_ymd, default=None, help="YYYY-MM-DD (default: system date)")
    args = p.parse_args(argv)

    c = calgrid.day_info(args.date, attributes=tuple(args.attr), today=args.today)
    lunar = c.lunar
    print(f"date      {c.date}  weekday={c.weekday} weekend={c.is_weekend} leap_year={c.is_leap_year}")
    if lunar is not None:
        leap = "闰" if lunar.is_leap_month else ""
        print(f"lunar     {lunar.year}-{leap}{lunar.month:02d}-{lunar.day:02d}")
    print(f"text      {c.lunar_text} ({c.festival_source})")
    for k, v in (c.attributes or {}).items():
        print(f"{k:<9s} {v}")
    return 0


def cmd_month(argv: list[str]) -> int:
    import calgrid

    p = argparse.ArgumentParser(prog="calgrid month", description="Dates of the 42-cell month grid")
    p.add_argument("year", type=int)
    p.add_argument("month", type=int)
    _add_week_start(p)
    p.add_argument("--mode", choices=sorted(_MODES), default="all", help="month display mode")
    args = p.parse_args(argv)

    grid = calgrid.month_grid(args.year, args.month, week_start=_WEEK_STARTS[args.week_start], display_mode=_MODES[args.mode])
    print(f"{args.year}-{args.month:02d}  rows={grid.line_count}  start_offset={grid.start_offset}")
    for row in grid.rows():
        print(" ".join(f" {c.date} " if c.is_current_month else f"({c.date})" for c in row))
    return 0


def cmd_week(argv: list[str]) -> int:
    import calgrid

    p = argparse.ArgumentParser(prog="calgrid week", description="The 7 days of a date's week row")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    _add_week_start(p)
    args = p.parse_args(argv)

    grid = calgrid.week_grid(args.date, week_start=_WEEK_STARTS[args.week_start])
    for c in grid.cells:
        flag = "<" if c.date == args.date else ""
        print(f"{c.date}  {c.lunar_text}{flag}")
    return 0


def cmd_pages(argv: list[str]) -> int:
    import calgrid

    p = argparse.ArgumentParser(prog="calgrid pages", description="Page counts and a date's page indices")
    p.add_argument("--min", dest="min_date", type=_parse_ymd, required=True, help="YYYY-MM-DD")
    p.add_argument("--max", dest="max_date", type=_parse_ymd, required=True, help="YYYY-MM-DD")
    p.add_argument("--date", type=_parse_ymd, default=None, help="YYYY-MM-DD to locate")
    _add_week_start(p)
    args = p.parse_args(argv)

    if args.min_date > args.max_date:
        print(f"invalid range: {args.min_date} is after {args.max_date}", file=sys.stderr)
        return 2

    config = calgrid.EngineConfig(
        date_range=DateRange(args.min_date, args.max_date),
        week_start=_WEEK_STARTS[args.week_start],
    )
    m = calgrid.make_engine(config).mapper
    print(f"month pages {m.total_month_pages}")
    print(f"week pages  {m.total_week_pages}")
    print(f"year pages  {m.total_year_pages}")
    if args.date is not None:
        pos = calgrid.page_positions(args.date, min_date=args.min_date, max_date=args.max_date, week_start=config.week_start)
        print(f"{args.date}: month={pos.month} week={pos.week} year={pos.year}")
    return 0


def cmd_ganzhi(argv: list[str]) -> int:
    import calgrid

    p = argparse.ArgumentParser(prog="calgrid ganzhi", description="Sexagenary label of a year")
    p.add_argument("year", type=int, nargs="+")
    args = p.parse_args(argv)

    for y in args.year:
        g = calgrid.ganzhi(y)
        print(f"{y}  {g['label']}  {g['zodiac']}")
    return 0


def cmd_terms(argv: list[str]) -> int:
    import calgrid

    p = argparse.ArgumentParser(prog="calgrid terms", description="Civil dates of the 24 solar terms")
    p.add_argument("year", type=int)
    args = p.parse_args(argv)

    for d, name in sorted(calgrid.solar_terms(args.year).items()):
        print(f"{d}  {name}")
    return 0


_COMMANDS = {
    "day": cmd_day,
    "month": cmd_month,
    "week": cmd_week,
    "pages": cmd_pages,
    "ganzhi": cmd_ganzhi,
    "terms": cmd_terms,
}


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    verbose = "--verbose" in argv or "-v" in argv
    argv = [a for a in argv if a not in ("--verbose", "-v")]
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    # Shorthand: `calgrid YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="calgrid", description="Calendar grid, paging and selection toolkit CLI.")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="One annotated day cell", add_help=False)
    sub.add_parser("month", help="Dates of a month grid", add_help=False)
    sub.add_parser("week", help="Days of a week row", add_help=False)
    sub.add_parser("pages", help="Page counts for a date range", add_help=False)
    sub.add_parser("ganzhi", help="Sexagenary year labels", add_help=False)
    sub.add_parser("terms", help="Solar terms of a year", add_help=False)

    # diagnostics
    sub.add_parser("pretty-month", help="Print a month grid with lunar labels (diagnostics)", add_help=False)

    args, rest = p.parse_known_args(argv)

    try:
        if args.cmd == "pretty-month":
            return _run_module_main("calgrid.diagnostics.pretty_month", rest)
        return _COMMANDS[args.cmd](rest)
    except CalgridError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
