"""Public interface re-exports for auto_apply_core."""

from auto_apply_core.interfaces.run_store import RunStore
from auto_apply_core.interfaces.scorer import Scorer
from auto_apply_core.interfaces.sink import RunSink

__all__ = [
    "RunSink",
    "RunStore",
    "Scorer",
]
