from __future__ import annotations
from calgrid.core.engine import NameTableRegistry
from calgrid.reference.names import ZH_CN

def build_registry() -> NameTableRegistry:
    return NameTableRegistry({"zh_CN": ZH_CN})
