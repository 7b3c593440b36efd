"""Redis-backed implementation of RunSink."""

from __future__ import annotations

import json

from redis.asyncio import Redis
from redis.exceptions import RedisError

from auto_apply_core.exceptions import SinkWriteError


class RedisRunSink:
    """Mirror runs into Redis hashes with merge semantics.

    Each run is the hash ``<prefix>:<run_id>``; every payload field is stored
    JSON-encoded under its own hash field, so fields absent from a write are
    left untouched.
    """

    enabled = True

    def __init__(
        self,
        redis: Redis,  # type: ignore[type-arg]
        key_prefix: str = "applications",
    ) -> None:
        """Initialize with a redis-py asyncio client."""
        self._redis = redis
        self._key_prefix = key_prefix

    def key_for(self, run_id: str) -> str:
        """Return the Redis key for a run."""
        return f"{self._key_prefix}:{run_id}"

    async def upsert(self, run_id: str, payload: dict[str, object]) -> None:
        """Merge payload fields into the run's hash."""
        if not payload:
            return
        mapping = {field: json.dumps(value) for field, value in payload.items()}
        try:
            await self._redis.hset(self.key_for(run_id), mapping=mapping)
        except (RedisError, OSError) as e:
            msg = f"Failed to mirror run {run_id}: {e}"
            raise SinkWriteError(msg) from e

    async def fetch(self, run_id: str) -> dict[str, object]:
        """Read back a mirrored run as decoded fields."""
        raw = await self._redis.hgetall(self.key_for(run_id))
        decoded: dict[str, object] = {}
        for field, value in raw.items():
            name = field.decode("utf-8") if isinstance(field, bytes) else str(field)
            text = value.decode("utf-8") if isinstance(value, bytes) else str(value)
            decoded[name] = json.loads(text)
        return decoded

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._redis.aclose()
