"""Structured logging shared by the HTTP server and the CLI client."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from auto_apply_core.config.settings import Settings

# Capped at WARNING unless the root level is stricter
_NOISY_LOGGERS = ("httpx", "httpcore", "anthropic", "instructor", "uvicorn.access")


def configure_logging(settings: Settings) -> None:
    """Route structlog and stdlib records through a single renderer.

    uvicorn is started with ``log_config=None``, so its ``uvicorn.error``
    records propagate to the root handler installed here and are rendered
    the same way as pipeline events.
    """
    shared_processors: list[structlog.types.Processor] = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    render_chain: list[structlog.types.Processor]
    if settings.log_format == "json":
        render_chain = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        render_chain = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *render_chain,
        ],
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    level = _resolve_level(settings.log_level)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def bind_run_context(run_id: str, **extra: object) -> None:
    """Attach the run id (and any extra fields) to every log entry in this task."""
    bind_contextvars(run_id=run_id, **extra)


def clear_run_context() -> None:
    """Drop all fields bound for the current task."""
    clear_contextvars()


def _resolve_level(level_name: str) -> int:
    """Map a level name to its logging constant, INFO when unknown."""
    return logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)
