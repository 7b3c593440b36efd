"""No-op RunSink used when no durable store is configured."""

from __future__ import annotations


class NullRunSink:
    """Discards every write."""

    enabled = False

    async def upsert(self, run_id: str, payload: dict[str, object]) -> None:
        """Do nothing."""

    async def close(self) -> None:
        """Do nothing."""
