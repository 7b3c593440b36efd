"""Auto-apply run pipeline: processing -> matching-complete -> completed | failed."""

from __future__ import annotations

import asyncio
import time
import uuid
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any

import structlog

from auto_apply_agents.data.demo_profile import DEMO_PROFILE
from auto_apply_agents.observability import bind_run_context, clear_run_context
from auto_apply_agents.sources.job_source import load_job_postings
from auto_apply_core.constants import (
    APPLIED_REASON,
    BELOW_THRESHOLD_REASON,
    DEFAULT_SCORE_REASON,
    FALLBACK_REASON,
    FALLBACK_SCORE_STEP,
    FALLBACK_TOP_SCORE,
)
from auto_apply_core.models.job import JobPosting, MatchResult, MatchStatus
from auto_apply_core.models.run import RunSnapshot, RunStatus

if TYPE_CHECKING:
    from auto_apply_core.config.settings import Settings
    from auto_apply_core.interfaces import RunSink, RunStore, Scorer
    from auto_apply_core.models.candidate import CandidateProfile

logger = structlog.get_logger()


def fallback_match(postings: list[JobPosting], top_n: int) -> list[MatchResult]:
    """Deterministic ranking used when scoring fails: 0.9, 0.8, 0.7, ..."""
    return [
        MatchResult(
            job_id=job.id,
            title=job.title,
            company=job.company,
            match_score=round(max(0.0, FALLBACK_TOP_SCORE - i * FALLBACK_SCORE_STEP), 2),
            status=MatchStatus.PENDING,
            reason=FALLBACK_REASON,
        )
        for i, job in enumerate(postings[:top_n])
    ]


def apply_to_jobs(matched: list[MatchResult], threshold: float) -> list[MatchResult]:
    """Mark each match applied if it clears the threshold, skipped otherwise."""
    applied: list[MatchResult] = []
    for match in matched:
        if match.match_score >= threshold:
            update = {"status": MatchStatus.APPLIED, "reason": match.reason or APPLIED_REASON}
        else:
            update = {"status": MatchStatus.SKIPPED, "reason": BELOW_THRESHOLD_REASON}
        applied.append(match.model_copy(update=update))
    return applied


class AutoApplyPipeline:
    """Drives runs through their state machine and records snapshots in the store."""

    def __init__(
        self,
        settings: Settings,
        store: RunStore,
        scorer: Scorer,
        sink: RunSink,
        profile: CandidateProfile = DEMO_PROFILE,
    ) -> None:
        """Initialize with settings and injected collaborators."""
        self.settings = settings
        self.store = store
        self.scorer = scorer
        self.sink = sink
        self.profile = profile
        self._tasks: set[asyncio.Task[None]] = set()
        self._sink_writes: dict[str, asyncio.Task[None]] = {}

    def start(self, threshold: float | None = None) -> RunSnapshot:
        """Register a new run and schedule its work. Returns without waiting.

        Must be called from a running event loop.
        """
        run_id = str(uuid.uuid4())
        resolved = self.settings.min_match_threshold if threshold is None else threshold
        snapshot = RunSnapshot(run_id=run_id, status=RunStatus.PROCESSING, threshold=resolved)
        self.store.put(snapshot)
        self._persist(snapshot, created=True)

        self._spawn(self._run(run_id, resolved))
        logger.info("run_started", run_id=run_id, threshold=resolved)
        return snapshot

    async def drain(self) -> None:
        """Wait for every scheduled run and sink write to finish."""
        while pending := [t for t in self._tasks if not t.done()]:
            await asyncio.gather(*pending, return_exceptions=True)

    @property
    def pending(self) -> int:
        """Number of background tasks still running."""
        return sum(1 for t in self._tasks if not t.done())

    async def _run(self, run_id: str, threshold: float) -> None:
        """Execute the matching and apply stages for one run."""
        bind_run_context(run_id, threshold=threshold)
        start = time.monotonic()
        try:
            await asyncio.sleep(self.settings.match_delay_seconds)
            matched = await self._match()
            self._transition(run_id, RunStatus.MATCHING_COMPLETE, threshold, matched)
            logger.info("matching_complete", matched=len(matched))

            await asyncio.sleep(self.settings.apply_delay_seconds)
            final_jobs = apply_to_jobs(matched, threshold)
            self._transition(run_id, RunStatus.COMPLETED, threshold, final_jobs)
            logger.info(
                "run_completed",
                applied=sum(1 for j in final_jobs if j.status == MatchStatus.APPLIED),
                skipped=sum(1 for j in final_jobs if j.status == MatchStatus.SKIPPED),
                duration_seconds=round(time.monotonic() - start, 2),
            )
        except Exception as e:
            logger.exception("run_failed", error_type=type(e).__name__, error=str(e))
            self._transition(
                run_id,
                RunStatus.FAILED,
                threshold,
                [],
                error=str(e) or type(e).__name__,
            )
        finally:
            clear_run_context()

    async def _match(self) -> list[MatchResult]:
        """Score every posting and keep the best ``top_n``.

        Any failure, an unreadable job source included, falls back to the
        deterministic ranking of whatever postings were loaded.
        """
        postings: list[JobPosting] = []
        try:
            postings = load_job_postings(self.settings.jobs_path)
            return await self._score_postings(postings)
        except Exception as e:
            logger.warning(
                "matching_fallback",
                error_type=type(e).__name__,
                error=str(e),
                postings=len(postings),
            )
            return fallback_match(postings, self.settings.top_n)

    async def _score_postings(self, postings: list[JobPosting]) -> list[MatchResult]:
        """Score postings concurrently, then sort deterministically."""
        results = await asyncio.gather(
            *(self.scorer.score(self.profile, job) for job in postings)
        )
        matches = [
            MatchResult(
                job_id=job.id,
                title=job.title,
                company=job.company,
                match_score=round(max(0, min(100, result.score)) / 100, 2),
                status=MatchStatus.PENDING,
                reason=result.reason or DEFAULT_SCORE_REASON,
            )
            for job, result in zip(postings, results, strict=True)
        ]
        # sorted() is stable, so ties keep source order
        ranked = sorted(matches, key=lambda m: m.match_score, reverse=True)
        return ranked[: self.settings.top_n]

    def _transition(
        self,
        run_id: str,
        status: RunStatus,
        threshold: float,
        jobs: list[MatchResult],
        error: str | None = None,
    ) -> None:
        """Replace the stored snapshot in one assignment and mirror it."""
        snapshot = RunSnapshot(
            run_id=run_id,
            status=status,
            threshold=threshold,
            jobs=jobs,
            error=error,
        )
        self.store.put(snapshot)
        self._persist(snapshot)

    def _persist(self, snapshot: RunSnapshot, *, created: bool = False) -> None:
        """Schedule a best-effort sink write. Never awaited by the pipeline."""
        if not self.sink.enabled:
            return
        payload: dict[str, object] = {
            "userId": self.settings.demo_user_id,
            "status": snapshot.status.value,
            "threshold": snapshot.threshold,
            "jobs": [j.model_dump(mode="json", by_alias=True) for j in snapshot.jobs],
            "createdAt" if created else "updatedAt": int(time.time() * 1000),
        }
        if snapshot.error is not None:
            payload["error"] = snapshot.error
        previous = self._sink_writes.get(snapshot.run_id)
        task = self._spawn(self._write_sink(snapshot.run_id, payload, previous))
        if snapshot.status.is_terminal:
            self._sink_writes.pop(snapshot.run_id, None)
        else:
            self._sink_writes[snapshot.run_id] = task

    async def _write_sink(
        self,
        run_id: str,
        payload: dict[str, object],
        after: asyncio.Task[None] | None,
    ) -> None:
        # Writes for one run land in transition order
        if after is not None:
            await asyncio.wait([after])
        try:
            await self.sink.upsert(run_id, payload)
        except Exception as e:
            logger.warning(
                "sink_write_failed",
                run_id=run_id,
                error_type=type(e).__name__,
                error=str(e),
            )

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task
