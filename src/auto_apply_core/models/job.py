"""Job posting, score, and match result models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MatchStatus(StrEnum):
    """Outcome of the apply step for a single matched job."""

    PENDING = "pending"
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


class JobPosting(BaseModel):
    """A job posting from the static job source."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    id: str = Field(min_length=1, description="Unique posting identifier")
    title: str = Field(description="Job title")
    company: str = Field(description="Hiring company")
    description: str = Field(default="", description="Full job description text")


class ScoreResult(BaseModel):
    """Output of a scorer for one (profile, job) pair."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100, description="Match score 0-100")
    reason: str = Field(description="Human-readable explanation of the score")
    scorer: str = Field(default="heuristic", description="Strategy that produced the score")


class MatchResult(BaseModel):
    """A scored job inside a run snapshot."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    job_id: str = Field(description="Reference to the job posting")
    title: str = Field(description="Job title")
    company: str = Field(description="Hiring company")
    match_score: float = Field(ge=0.0, le=1.0, description="Normalized match score")
    status: MatchStatus = Field(default=MatchStatus.PENDING, description="Apply outcome")
    reason: str = Field(default="", description="Why the job scored or was skipped")
