"""Factory for the run sink selected by settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from auto_apply_core.interfaces.sink import RunSink
from auto_apply_infra.sinks.null_sink import NullRunSink

if TYPE_CHECKING:
    from auto_apply_core.config.settings import Settings


def create_run_sink(settings: Settings) -> RunSink:
    """Create a run sink based on settings.

    Returns ``RedisRunSink`` when ``settings.redis_url`` is set, otherwise a
    ``NullRunSink`` that drops every write.
    """
    if settings.redis_url:
        from redis.asyncio import Redis

        from auto_apply_infra.sinks.redis_sink import RedisRunSink

        return RedisRunSink(Redis.from_url(settings.redis_url), settings.sink_key_prefix)

    return NullRunSink()
