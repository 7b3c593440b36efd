"""Integration fixtures: real timers over in-process HTTP, optional local Redis."""

from __future__ import annotations

import logging
import os
import socket
from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio

REDIS_TEST_URL = os.environ.get("AUTO_APPLY_TEST_REDIS_URL", "redis://localhost:6379/1")


def _port_open(host: str, port: int, timeout: float = 0.5) -> bool:
    """Return True when something accepts TCP connections on host:port."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


require_redis = pytest.mark.skipif(
    not _port_open("localhost", 6379),
    reason="Redis not reachable on localhost:6379",
)


@pytest_asyncio.fixture
async def redis_client() -> AsyncGenerator[object, None]:
    """Redis client on the test database, emptied before and after each test."""
    from redis.asyncio import Redis

    client = Redis.from_url(REDIS_TEST_URL, decode_responses=True)
    await client.flushdb()
    try:
        yield client
    finally:
        await client.flushdb()
        await client.aclose()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
