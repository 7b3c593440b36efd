"""Static JSON job source."""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from auto_apply_core.exceptions import SourceUnavailableError
from auto_apply_core.models.job import JobPosting

logger = structlog.get_logger()

DEFAULT_JOBS_PATH = Path(__file__).resolve().parent.parent / "data" / "jobs.json"

_POSTINGS_ADAPTER = TypeAdapter(list[JobPosting])


def load_job_postings(path: Path | None = None) -> list[JobPosting]:
    """Load job postings from a JSON array file.

    Reads the file fresh on every call. Raises ``SourceUnavailableError`` if
    the file is missing, is not valid JSON, or holds anything other than an
    array of ``{id, title, company, description}`` objects.
    """
    source = path or DEFAULT_JOBS_PATH
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Failed to read job source {source}: {e}"
        raise SourceUnavailableError(msg) from e

    if not isinstance(data, list):
        msg = f"Job source {source} must contain a JSON array"
        raise SourceUnavailableError(msg)

    try:
        postings = _POSTINGS_ADAPTER.validate_python(data)
    except ValidationError as e:
        msg = f"Invalid job posting in {source}: {e.error_count()} error(s)"
        raise SourceUnavailableError(msg) from e

    logger.debug("job_source_loaded", path=str(source), count=len(postings))
    return postings
