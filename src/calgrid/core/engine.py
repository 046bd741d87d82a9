from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List

from .errors import UnknownLocaleError
from ..engines.interfaces import NameTableProvider

@dataclass
class NameTableRegistry:
    _tables: Dict[str, NameTableProvider]

    def get(self, locale: str) -> NameTableProvider:
        if locale not in self._tables:
            raise UnknownLocaleError(f"Unknown locale '{locale}'. Available: {sorted(self._tables)}")
        return self._tables[locale]

    def list(self) -> List[str]:
        return sorted(self._tables.keys())

    def register(self, locale: str, tables: NameTableProvider, *, overwrite: bool = False) -> None:
        if (not overwrite) and (locale in self._tables):
            raise KeyError(f"Locale '{locale}' already exists. Use overwrite=True to replace.")
        self._tables[locale] = tables
