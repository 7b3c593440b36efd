"""FastAPI HTTP surface: start a run, poll its status."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auto_apply_agents.orchestrator.pipeline import AutoApplyPipeline
from auto_apply_agents.scoring.factories import create_scorer
from auto_apply_core.config.settings import Settings
from auto_apply_core.constants import RUN_NOT_FOUND_MESSAGE
from auto_apply_core.exceptions import UnknownRunError
from auto_apply_core.interfaces import RunSink, RunStore, Scorer
from auto_apply_core.models.run import (
    AutoApplyRequest,
    AutoApplyResponse,
    HealthStatus,
    RunSnapshot,
)
from auto_apply_infra.sinks.factories import create_run_sink
from auto_apply_infra.store.run_store import InMemoryRunStore

logger = structlog.get_logger()


def create_app(
    settings: Settings | None = None,
    *,
    store: RunStore | None = None,
    scorer: Scorer | None = None,
    sink: RunSink | None = None,
) -> FastAPI:
    """Build the application with its run store and pipeline.

    Collaborators are created here rather than in the lifespan so the app is
    usable under transports that skip lifespan events.
    """
    settings = settings or Settings()
    store = store if store is not None else InMemoryRunStore()
    sink = sink if sink is not None else create_run_sink(settings)
    pipeline = AutoApplyPipeline(
        settings,
        store=store,
        scorer=scorer if scorer is not None else create_scorer(settings),
        sink=sink,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "server_start",
            port=settings.port,
            scorer=pipeline.scorer.name,
            sink=sink.enabled,
        )
        try:
            yield
        finally:
            await pipeline.drain()
            await sink.close()
            logger.info("server_stop", runs=len(store))

    app = FastAPI(title="auto-apply-agent", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(UnknownRunError)
    async def unknown_run_handler(request: Request, exc: UnknownRunError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": RUN_NOT_FOUND_MESSAGE})

    @app.get("/health", response_model=HealthStatus)
    async def health(request: Request) -> HealthStatus:
        return HealthStatus(
            ok=True,
            llm=request.app.state.settings.llm_enabled,
            sink=request.app.state.pipeline.sink.enabled,
            port=request.app.state.settings.port,
        )

    @app.post("/auto-apply", response_model=AutoApplyResponse)
    async def auto_apply(
        request: Request,
        body: AutoApplyRequest | None = None,
    ) -> AutoApplyResponse:
        threshold = body.threshold if body is not None else None
        snapshot = request.app.state.pipeline.start(threshold)
        return AutoApplyResponse(run_id=snapshot.run_id)

    @app.get(
        "/status/{run_id}",
        response_model=RunSnapshot,
        response_model_exclude_none=True,
    )
    async def status(run_id: str, request: Request) -> RunSnapshot:
        snapshot: RunSnapshot = request.app.state.store.require(run_id)
        return snapshot

    return app
