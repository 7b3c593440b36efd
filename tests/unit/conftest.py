"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from auto_apply_agents.data.demo_profile import DEMO_PROFILE
from auto_apply_core.models.candidate import CandidateProfile
from auto_apply_infra.store.run_store import InMemoryRunStore
from tests.mocks.mock_factories import make_candidate_profile
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with sensible defaults."""
    return make_settings()


@pytest.fixture
def run_store() -> InMemoryRunStore:
    """Return an empty in-memory run store."""
    return InMemoryRunStore()


@pytest.fixture
def sample_profile() -> CandidateProfile:
    """Return a minimal valid CandidateProfile."""
    return make_candidate_profile()


@pytest.fixture
def demo_profile() -> CandidateProfile:
    """Return the fixed demo profile used by the server."""
    return DEMO_PROFILE


@pytest.fixture
def jobs_file(tmp_path: Path) -> Path:
    """Write a small job source file and return its path."""
    path = tmp_path / "jobs.json"
    path.write_text(
        """[
  {"id": "a", "title": "Full Stack Engineer", "company": "A",
   "description": "React and Node.js with TypeScript"},
  {"id": "b", "title": "Frontend Developer", "company": "B",
   "description": "Build UI components"},
  {"id": "c", "title": "DevOps Engineer", "company": "C",
   "description": "Own Docker builds"},
  {"id": "d", "title": "Data Analyst", "company": "D",
   "description": "SQL dashboards"}
]"""
    )
    return path
