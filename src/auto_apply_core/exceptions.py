"""Custom exception hierarchy for auto-apply-agent."""

from __future__ import annotations


class AutoApplyError(Exception):
    """Base exception for all auto-apply-agent errors."""


class SourceUnavailableError(AutoApplyError):
    """Raised when the job source cannot be read or parsed."""


class ScoringError(AutoApplyError):
    """Raised when a scoring backend fails or returns an unusable result."""


class SinkWriteError(AutoApplyError):
    """Raised when mirroring a run to the durable sink fails."""


class UnknownRunError(AutoApplyError):
    """Raised when a run id is not present in the run store."""

    def __init__(self, run_id: str) -> None:
        super().__init__(f"Run not found: {run_id}")
        self.run_id = run_id
