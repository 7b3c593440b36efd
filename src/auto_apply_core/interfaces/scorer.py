"""Abstract scorer interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from auto_apply_core.models.candidate import CandidateProfile
    from auto_apply_core.models.job import JobPosting, ScoreResult


@runtime_checkable
class Scorer(Protocol):
    """Scores a job posting against a candidate profile. Must never raise."""

    name: str

    async def score(self, profile: CandidateProfile, job: JobPosting) -> ScoreResult:
        """Return a 0-100 score and a reason for the pair."""
        ...
