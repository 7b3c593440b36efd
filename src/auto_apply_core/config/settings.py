"""Application settings using pydantic-settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for auto-apply-agent."""

    model_config = SettingsConfigDict(env_prefix="AUTO_APPLY_", env_file=".env")

    # --- Server ---
    host: str = Field(
        default="127.0.0.1",
        description="Interface the HTTP server binds to",
    )
    port: int = Field(
        default=3001,
        description="Port the HTTP server listens on",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )

    # --- Run ---
    min_match_threshold: float = Field(
        default=0.70,
        ge=0.0,
        le=1.0,
        description="Default minimum match score for a job to be applied to",
    )
    top_n: int = Field(
        default=3,
        description="Number of best matches kept per run",
    )
    match_delay_seconds: float = Field(
        default=1.0,
        description="Simulated delay before the matching stage",
    )
    apply_delay_seconds: float = Field(
        default=0.5,
        description="Simulated delay between matching and applying",
    )
    jobs_path: Path | None = Field(
        default=None,
        description="JSON file of job postings (bundled fixture when unset)",
    )
    demo_user_id: str = Field(
        default="demo-user",
        description="User id recorded with persisted runs",
    )

    # --- LLM scorer (optional) ---
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        description="Anthropic API key; enables the LLM scorer when set",
    )
    scorer_model: str = Field(
        default="claude-haiku-4-5-20251001",
        description="Model ID used by the LLM scorer",
    )
    scorer_timeout_seconds: float = Field(
        default=8.0,
        description="Upper bound for one LLM scoring call, retries included",
    )
    scorer_max_retries: int = Field(
        default=2,
        description="Maximum attempts per LLM scoring call",
    )

    # --- Durable sink (optional) ---
    redis_url: str | None = Field(
        default=None,
        description="Redis URL; enables run mirroring when set",
    )
    sink_key_prefix: str = Field(
        default="applications",
        description="Key prefix for mirrored run documents",
    )

    # --- Client ---
    server_url: str = Field(
        default="http://127.0.0.1:3001",
        description="Base URL the CLI client talks to",
    )
    poll_interval_seconds: float = Field(
        default=2.0,
        description="Seconds between status polls",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for machines",
    )

    @model_validator(mode="after")
    def validate_run_config(self) -> Settings:
        """Reject negative delays and an empty match list."""
        if self.match_delay_seconds < 0 or self.apply_delay_seconds < 0:
            msg = "match_delay_seconds and apply_delay_seconds must be >= 0"
            raise ValueError(msg)
        if self.top_n < 1:
            msg = f"top_n must be >= 1, got {self.top_n}"
            raise ValueError(msg)
        return self

    @property
    def llm_enabled(self) -> bool:
        """Whether the credential-gated scorer is configured."""
        return self.anthropic_api_key is not None and bool(
            self.anthropic_api_key.get_secret_value()
        )
