"""Abstract durable sink interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RunSink(Protocol):
    """Best-effort mirror of run state into an external store."""

    enabled: bool

    async def upsert(self, run_id: str, payload: dict[str, object]) -> None:
        """Merge ``payload`` into the document keyed by ``run_id``."""
        ...

    async def close(self) -> None:
        """Release any underlying connection."""
        ...
