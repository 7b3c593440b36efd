"""In-memory implementation of RunStore."""

from __future__ import annotations

from auto_apply_core.exceptions import UnknownRunError
from auto_apply_core.models.run import RunSnapshot


class InMemoryRunStore:
    """Process-lifetime store of the latest snapshot per run.

    Entries are never evicted. Each ``put`` swaps the whole snapshot, so a
    reader sees either the previous state or the next one.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._runs: dict[str, RunSnapshot] = {}

    def get(self, run_id: str) -> RunSnapshot | None:
        """Return the current snapshot, or None if the run is unknown."""
        return self._runs.get(run_id)

    def require(self, run_id: str) -> RunSnapshot:
        """Return the current snapshot or raise UnknownRunError."""
        snapshot = self._runs.get(run_id)
        if snapshot is None:
            raise UnknownRunError(run_id)
        return snapshot

    def put(self, snapshot: RunSnapshot) -> None:
        """Replace the snapshot stored for ``snapshot.run_id``."""
        self._runs[snapshot.run_id] = snapshot

    def __len__(self) -> int:
        return len(self._runs)

    def __contains__(self, run_id: object) -> bool:
        return run_id in self._runs
