"""HTTP client that starts a run and polls it to completion."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from types import TracebackType

import httpx
import structlog

from auto_apply_core.exceptions import UnknownRunError
from auto_apply_core.models.run import AutoApplyResponse, RunSnapshot

logger = structlog.get_logger()


class AutoApplyClient:
    """Thin async wrapper around the auto-apply HTTP API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize with the server base URL."""
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> AutoApplyClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def start(self, threshold: float | None = None) -> str:
        """Request a new run and return its id."""
        body = {} if threshold is None else {"threshold": threshold}
        response = await self._client.post("/auto-apply", json=body)
        response.raise_for_status()
        return AutoApplyResponse.model_validate(response.json()).run_id

    async def status(self, run_id: str) -> RunSnapshot:
        """Fetch the current snapshot of a run."""
        response = await self._client.get(f"/status/{run_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            raise UnknownRunError(run_id)
        response.raise_for_status()
        return RunSnapshot.model_validate(response.json())

    async def poll(
        self,
        run_id: str,
        interval: float = 2.0,
        on_update: Callable[[RunSnapshot], None] | None = None,
        max_wait: float | None = None,
    ) -> RunSnapshot:
        """Poll until the run reaches a terminal state and return it.

        Raises ``TimeoutError`` when ``max_wait`` seconds pass first.
        """
        deadline = None if max_wait is None else time.monotonic() + max_wait
        while True:
            snapshot = await self.status(run_id)
            if on_update is not None:
                on_update(snapshot)
            if snapshot.status.is_terminal:
                return snapshot
            if deadline is not None and time.monotonic() >= deadline:
                msg = f"Run {run_id} still {snapshot.status.value} after {max_wait}s"
                raise TimeoutError(msg)
            logger.debug("poll_wait", run_id=run_id, status=snapshot.status.value)
            await asyncio.sleep(interval)
