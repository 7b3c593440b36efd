"""Tests for Settings configuration."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from auto_apply_core.config.settings import Settings


def _settings(**kwargs: object) -> Settings:
    """Build Settings without reading a local .env file."""
    return Settings(_env_file=None, **kwargs)  # type: ignore[arg-type, call-arg]


@pytest.mark.unit
class TestSettings:
    """Test Settings validation and defaults."""

    def test_default_settings(self) -> None:
        """Settings loads with no environment and correct defaults."""
        with patch.dict(os.environ, {}, clear=True):
            s = _settings()
        assert s.port == 3001
        assert s.min_match_threshold == 0.70
        assert s.top_n == 3
        assert s.jobs_path is None
        assert s.redis_url is None
        assert s.llm_enabled is False
        assert s.log_format == "console"

    def test_env_prefix(self) -> None:
        """AUTO_APPLY_ variables override defaults."""
        env = {
            "AUTO_APPLY_PORT": "8080",
            "AUTO_APPLY_MIN_MATCH_THRESHOLD": "0.85",
            "AUTO_APPLY_JOBS_PATH": "/tmp/jobs.json",
            "AUTO_APPLY_REDIS_URL": "redis://localhost:6379/0",
        }
        with patch.dict(os.environ, env, clear=True):
            s = _settings()
        assert s.port == 8080
        assert s.min_match_threshold == 0.85
        assert s.jobs_path == Path("/tmp/jobs.json")
        assert s.redis_url == "redis://localhost:6379/0"

    def test_api_key_enables_llm(self) -> None:
        """A non-empty Anthropic key turns the LLM scorer on."""
        with patch.dict(os.environ, {"AUTO_APPLY_ANTHROPIC_API_KEY": "sk-ant-test"}, clear=True):
            s = _settings()
        assert s.llm_enabled is True
        assert s.anthropic_api_key is not None
        assert s.anthropic_api_key.get_secret_value() == "sk-ant-test"

    def test_empty_api_key_keeps_llm_off(self) -> None:
        """An empty key is treated as absent."""
        with patch.dict(os.environ, {}, clear=True):
            s = _settings(anthropic_api_key="")
        assert s.llm_enabled is False

    @pytest.mark.parametrize("threshold", [-0.1, 1.1])
    def test_threshold_out_of_range(self, threshold: float) -> None:
        """Default threshold must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            _settings(min_match_threshold=threshold)

    def test_negative_delay_rejected(self) -> None:
        """Delays cannot be negative."""
        with pytest.raises(ValidationError, match="must be >= 0"):
            _settings(match_delay_seconds=-1)

    def test_top_n_must_be_positive(self) -> None:
        """top_n of zero is rejected."""
        with pytest.raises(ValidationError, match="top_n must be >= 1"):
            _settings(top_n=0)

    def test_invalid_log_format(self) -> None:
        """Only console and json renderers are accepted."""
        with pytest.raises(ValidationError):
            _settings(log_format="xml")
