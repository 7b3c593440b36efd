"""Abstract run store interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from auto_apply_core.models.run import RunSnapshot


@runtime_checkable
class RunStore(Protocol):
    """Mapping from run id to the latest snapshot of that run."""

    def get(self, run_id: str) -> RunSnapshot | None:
        """Return the current snapshot, or None if the run is unknown."""
        ...

    def require(self, run_id: str) -> RunSnapshot:
        """Return the current snapshot or raise UnknownRunError."""
        ...

    def put(self, snapshot: RunSnapshot) -> None:
        """Replace the snapshot stored for ``snapshot.run_id``."""
        ...

    def __len__(self) -> int: ...

    def __contains__(self, run_id: object) -> bool: ...
