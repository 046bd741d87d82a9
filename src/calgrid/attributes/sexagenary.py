"""
calgrid.attributes.sexagenary
-----------------------------
60-year stem/branch year labels.

Stem and branch indices are 0-based into 10- and 12-entry tables that start at
甲 and 子, so 1984 (甲子) is index 0 for both. The cycle is reduced against the
year 3 AD anchor and a zero remainder wraps to the last entry.
"""

from __future__ import annotations

from dataclasses import dataclass

from calgrid.engines.interfaces import NameTableProvider


def stem_index(year: int) -> int:
    r = (year - 3) % 10
    return 9 if r == 0 else r - 1


def branch_index(year: int) -> int:
    r = (year - 3) % 12
    return 11 if r == 0 else r - 1


def cycle_index(year: int) -> int:
    """Position 0..59 of the year inside the sexagenary cycle (甲子 = 0)."""
    return (year - 1984) % 60


@dataclass(frozen=True)
class SexagenaryYear:
    names: NameTableProvider

    def stem(self, year: int) -> str:
        return self.names.stems[stem_index(year)]

    def branch(self, year: int) -> str:
        return self.names.branches[branch_index(year)]

    def zodiac(self, year: int) -> str:
        return self.names.zodiac[branch_index(year)]

    def label(self, year: int) -> str:
        return self.stem(year) + self.branch(year)
