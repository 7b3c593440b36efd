"""Domain models for auto-apply-agent."""

from auto_apply_core.models.candidate import CandidateProfile
from auto_apply_core.models.job import JobPosting, MatchResult, MatchStatus, ScoreResult
from auto_apply_core.models.run import (
    AutoApplyRequest,
    AutoApplyResponse,
    HealthStatus,
    RunSnapshot,
    RunStatus,
)

__all__ = [
    "AutoApplyRequest",
    "AutoApplyResponse",
    "CandidateProfile",
    "HealthStatus",
    "JobPosting",
    "MatchResult",
    "MatchStatus",
    "RunSnapshot",
    "RunStatus",
    "ScoreResult",
]
