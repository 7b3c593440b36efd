"""Candidate profile model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CandidateProfile(BaseModel):
    """Static description of the candidate every run is scored for."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Full name")
    skills: tuple[str, ...] = Field(description="Ordered skill tags, original case")
    years_of_experience: float = Field(ge=0, description="Total years of professional experience")
    preferred_locations: tuple[str, ...] = Field(
        default=(), description="Preferred work locations"
    )

    @property
    def skills_lower(self) -> list[str]:
        """Skill tags lowercased, in profile order."""
        return [s.lower() for s in self.skills]
