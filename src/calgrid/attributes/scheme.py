"""
calgrid.attributes.scheme
-------------------------
Caller-supplied markers ("schemes") merged onto grid cells.

The map is keyed by the ``YYYYMMDD`` date key. Entries are only ever read and
copied onto cells; nothing here invents markers for unmapped days.
"""

from __future__ import annotations

import dataclasses
from typing import Dict, Iterable, List, Mapping, Optional, Union

from calgrid.core.types import Cell, Date, Marker

DEFAULT_SCHEME_TEXT = "记"

DateKey = Union[Date, str]


def _key(k: DateKey) -> str:
    return k.key() if isinstance(k, Date) else k


def merge_marker(marker: Marker, default_text: str) -> Marker:
    if marker.text:
        return marker
    return dataclasses.replace(marker, text=default_text)


def apply_markers(cells: Iterable[Cell], markers: Mapping[str, Marker], default_text: str = DEFAULT_SCHEME_TEXT) -> List[Cell]:
    """Copy each cell's marker from ``markers``, clearing it where the map has no entry."""
    out: List[Cell] = []
    for c in cells:
        m = markers.get(c.key)
        marker = merge_marker(m, default_text) if m is not None else None
        out.append(c if c.marker == marker else dataclasses.replace(c, marker=marker))
    return out


class SchemeOverlay:
    """Mutable marker map owned by an engine."""

    def __init__(self, markers: Optional[Mapping[DateKey, Marker]] = None, default_text: str = DEFAULT_SCHEME_TEXT):
        self.default_text = default_text
        self._markers: Dict[str, Marker] = {}
        if markers:
            self.add_all(markers)

    def __len__(self) -> int:
        return len(self._markers)

    def __contains__(self, k: DateKey) -> bool:
        return _key(k) in self._markers

    @property
    def markers(self) -> Mapping[str, Marker]:
        return dict(self._markers)

    def get(self, k: DateKey) -> Optional[Marker]:
        m = self._markers.get(_key(k))
        return merge_marker(m, self.default_text) if m is not None else None

    def replace(self, markers: Mapping[DateKey, Marker]) -> None:
        self._markers = {}
        self.add_all(markers)

    def add(self, k: DateKey, marker: Marker) -> None:
        self._markers[_key(k)] = marker

    def add_all(self, markers: Mapping[DateKey, Marker]) -> None:
        for k, m in markers.items():
            self.add(k, m)

    def remove(self, k: DateKey) -> bool:
        return self._markers.pop(_key(k), None) is not None

    def clear(self) -> None:
        self._markers.clear()

    def apply(self, cells: Iterable[Cell]) -> List[Cell]:
        return apply_markers(cells, self._markers, self.default_text)
