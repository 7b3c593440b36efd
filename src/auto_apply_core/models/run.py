"""Run snapshot and HTTP payload models."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, Strict
from pydantic.alias_generators import to_camel

from auto_apply_core.models.job import MatchResult


class RunStatus(StrEnum):
    """Lifecycle states of an auto-apply run."""

    PROCESSING = "processing"
    MATCHING_COMPLETE = "matching-complete"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        """Whether the run will not transition again."""
        return self in (RunStatus.COMPLETED, RunStatus.FAILED)


class RunSnapshot(BaseModel):
    """Complete state of a run. Replaced wholesale on every transition."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    run_id: str = Field(description="Unique run identifier")
    status: RunStatus = Field(description="Current lifecycle state")
    threshold: float = Field(ge=0.0, le=1.0, description="Minimum score to apply")
    jobs: list[MatchResult] = Field(default_factory=list, description="Top matches")
    error: str | None = Field(default=None, description="Failure message for failed runs")


class AutoApplyRequest(BaseModel):
    """Optional body of ``POST /auto-apply``."""

    # Strict: booleans and numeric strings are rejected, ints are accepted
    threshold: Annotated[float, Strict()] | None = Field(
        default=None, ge=0.0, le=1.0, description="Override for the default threshold"
    )


class AutoApplyResponse(BaseModel):
    """Response of ``POST /auto-apply``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    run_id: str = Field(description="Identifier to poll")


class HealthStatus(BaseModel):
    """Response of ``GET /health``."""

    ok: bool = Field(default=True)
    llm: bool = Field(description="Whether the LLM scorer is configured")
    sink: bool = Field(description="Whether runs are mirrored to a durable sink")
    port: int = Field(description="Port the server listens on")
