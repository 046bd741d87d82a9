# tests/test_overlay.py

from calgrid.attributes.scheme import DEFAULT_SCHEME_TEXT, SchemeOverlay, apply_markers
from calgrid.core.types import Date, Marker, SchemeTag, WeekStart
from calgrid.engines.month_grid import MonthGridBuilder

TODAY = Date(2023, 3, 1)


def _cells():
    return MonthGridBuilder(WeekStart.SUNDAY).build(2023, 3, TODAY).cells


def test_apply_copies_and_defaults_text():
    tags = (SchemeTag(1, 0xFF0000, "会", "meeting"),)
    markers = {
        "20230308": Marker("假", 0x00FF00),
        "20230315": Marker("", 0x0000FF, tags),
    }
    cells = apply_markers(_cells(), markers)
    by_date = {c.date: c for c in cells}
    assert by_date[Date(2023, 3, 8)].marker == Marker("假", 0x00FF00)
    m = by_date[Date(2023, 3, 15)].marker
    assert m.text == DEFAULT_SCHEME_TEXT
    assert m.tags == tags
    assert sum(c.has_marker for c in cells) == 2


def test_apply_is_idempotent_and_clears():
    overlay = SchemeOverlay({Date(2023, 3, 8): Marker("假")})
    once = overlay.apply(_cells())
    assert overlay.apply(once) == once
    overlay.remove(Date(2023, 3, 8))
    cleared = overlay.apply(once)
    assert not any(c.has_marker for c in cleared)
    assert cleared == list(_cells())


def test_overlay_map_management():
    overlay = SchemeOverlay(default_text="*")
    overlay.add(Date(2023, 3, 1), Marker())
    overlay.add("20230302", Marker("x"))
    assert len(overlay) == 2
    assert Date(2023, 3, 2) in overlay
    assert overlay.get(Date(2023, 3, 1)).text == "*"
    assert overlay.remove(Date(2023, 3, 9)) is False
    overlay.replace({Date(2023, 3, 9): Marker("y")})
    assert list(overlay.markers) == ["20230309"]
    overlay.clear()
    assert len(overlay) == 0
