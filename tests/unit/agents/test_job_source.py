"""Tests for the static JSON job source."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from auto_apply_agents.sources.job_source import DEFAULT_JOBS_PATH, load_job_postings
from auto_apply_core.exceptions import SourceUnavailableError


@pytest.mark.unit
class TestLoadJobPostings:
    """Test load_job_postings."""

    def test_bundled_fixture_loads(self) -> None:
        """The default fixture is a non-empty list with unique ids."""
        postings = load_job_postings()
        assert DEFAULT_JOBS_PATH.exists()
        assert len(postings) >= 3
        assert len({p.id for p in postings}) == len(postings)

    def test_custom_path(self, jobs_file: Path) -> None:
        """Postings load in file order from an explicit path."""
        postings = load_job_postings(jobs_file)
        assert [p.id for p in postings] == ["a", "b", "c", "d"]
        assert postings[0].title == "Full Stack Engineer"

    def test_missing_description_defaults_empty(self, tmp_path: Path) -> None:
        """Description is optional."""
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps([{"id": "x", "title": "T", "company": "C"}]))
        assert load_job_postings(path)[0].description == ""

    def test_numeric_ids_load(self, tmp_path: Path) -> None:
        """Postings with integer ids load with string ids."""
        path = tmp_path / "jobs.json"
        path.write_text(
            json.dumps(
                [
                    {"id": 1, "title": "Full Stack Engineer", "company": "A"},
                    {"id": 2, "title": "DevOps Engineer", "company": "B"},
                ]
            )
        )
        assert [p.id for p in load_job_postings(path)] == ["1", "2"]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Unreadable source raises SourceUnavailableError."""
        with pytest.raises(SourceUnavailableError, match="Failed to read"):
            load_job_postings(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        """Malformed JSON raises SourceUnavailableError."""
        path = tmp_path / "jobs.json"
        path.write_text("[{not json")
        with pytest.raises(SourceUnavailableError):
            load_job_postings(path)

    def test_non_array_raises(self, tmp_path: Path) -> None:
        """A JSON object instead of an array is rejected."""
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps({"jobs": []}))
        with pytest.raises(SourceUnavailableError, match="JSON array"):
            load_job_postings(path)

    def test_invalid_entry_raises(self, tmp_path: Path) -> None:
        """An entry without a title is rejected."""
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps([{"id": "x", "company": "C"}]))
        with pytest.raises(SourceUnavailableError, match="Invalid job posting"):
            load_job_postings(path)
