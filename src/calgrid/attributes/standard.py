from __future__ import annotations
from typing import Any, Dict

from .registry import register_attribute, jdn as _jdn
from .sexagenary import branch_index, cycle_index, stem_index

def weekday(cell) -> Dict[str, Any]:
    # 0=Sun..6=Sat
    return {"weekday": int((_jdn(cell) + 1) % 7)}

def sexagenary_year(cell) -> Dict[str, Any]:
    # Lunar year when known, so days before the new year keep the previous label.
    y = cell.lunar.year if cell.lunar is not None else cell.date.year
    return {
        "stem_index": stem_index(y),
        "branch_index": branch_index(y),
        "cycle_index": cycle_index(y),
    }

def jdn(cell) -> Dict[str, Any]:
    return {"jdn": _jdn(cell)}

register_attribute("weekday", weekday)
register_attribute("sexagenary_year", sexagenary_year)
register_attribute("jdn", jdn)
