"""Registry bootstrap (import side-effect)."""
from .api import set_registry
from .bootstrap import build_registry

set_registry(build_registry())

# built-in per-cell attributes register themselves on import
from .attributes import standard as _standard  # noqa: F401,E402
