"""Credential-gated LLM scorer with heuristic fallback."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

import instructor
import structlog
from anthropic import AsyncAnthropic
from pydantic import BaseModel, Field
from tenacity import retry, stop_after_attempt, wait_exponential

from auto_apply_agents.prompts.match_scorer import MATCH_SCORER_SYSTEM, MATCH_SCORER_USER
from auto_apply_agents.scoring.heuristic import HeuristicScorer
from auto_apply_core.exceptions import ScoringError
from auto_apply_core.models.job import ScoreResult

if TYPE_CHECKING:
    from auto_apply_core.config.settings import Settings
    from auto_apply_core.models.candidate import CandidateProfile
    from auto_apply_core.models.job import JobPosting

logger = structlog.get_logger()

MAX_DESCRIPTION_CHARS = 2000


class MatchScoreResponse(BaseModel):
    """Structured scoring result from the LLM."""

    score: int = Field(ge=0, le=100, description="Overall fit score 0-100")
    reason: str = Field(min_length=1, description="One-sentence justification")


class LLMScorer:
    """Score jobs with an Anthropic model, falling back to the heuristic."""

    name = "llm"

    def __init__(
        self,
        settings: Settings,
        fallback: HeuristicScorer | None = None,
        client: AsyncAnthropic | None = None,
    ) -> None:
        """Initialize with settings and an optional pre-built client."""
        if client is None:
            if settings.anthropic_api_key is None:
                msg = "anthropic_api_key required for the LLM scorer"
                raise ValueError(msg)
            client = AsyncAnthropic(api_key=settings.anthropic_api_key.get_secret_value())
        self.settings = settings
        self._fallback = fallback or HeuristicScorer()
        self._instructor = instructor.from_anthropic(client)

    async def score(self, profile: CandidateProfile, job: JobPosting) -> ScoreResult:
        """Score via the LLM within the configured time bound, else the heuristic."""
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                self._request(profile, job),
                timeout=self.settings.scorer_timeout_seconds,
            )
        except TimeoutError:
            logger.warning(
                "llm_score_fallback",
                job_id=job.id,
                error="timeout",
                timeout=self.settings.scorer_timeout_seconds,
            )
            return await self._fallback.score(profile, job)
        except Exception as e:
            logger.warning(
                "llm_score_fallback",
                job_id=job.id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return await self._fallback.score(profile, job)

        logger.debug(
            "llm_score_complete",
            job_id=job.id,
            score=response.score,
            duration=round(time.monotonic() - start, 2),
        )
        return ScoreResult(score=response.score, reason=response.reason, scorer=self.name)

    async def _request(self, profile: CandidateProfile, job: JobPosting) -> MatchScoreResponse:
        """Call the model with structured output, retrying transient failures."""

        @retry(
            stop=stop_after_attempt(self.settings.scorer_max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            reraise=True,
        )
        async def _do_call() -> MatchScoreResponse:
            response: MatchScoreResponse = await self._instructor.messages.create(
                model=self.settings.scorer_model,
                max_tokens=512,
                system=MATCH_SCORER_SYSTEM,
                messages=[{"role": "user", "content": self._format_prompt(profile, job)}],
                response_model=MatchScoreResponse,
            )
            return response

        result = await _do_call()
        if not isinstance(result, MatchScoreResponse):
            msg = f"Unexpected scorer response type: {type(result).__name__}"
            raise ScoringError(msg)
        return result

    @staticmethod
    def _format_prompt(profile: CandidateProfile, job: JobPosting) -> str:
        """Render the user prompt for one job."""
        return MATCH_SCORER_USER.format(
            name=profile.name,
            years_of_experience=profile.years_of_experience,
            skills=", ".join(profile.skills) or "Not specified",
            locations=", ".join(profile.preferred_locations) or "Not specified",
            title=job.title,
            company=job.company,
            description=job.description[:MAX_DESCRIPTION_CHARS] or "Not specified",
        )
