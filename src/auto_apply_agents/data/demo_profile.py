"""Fixed candidate profile used for every run."""

from __future__ import annotations

from auto_apply_core.models.candidate import CandidateProfile

DEMO_PROFILE = CandidateProfile(
    name="Demo Candidate",
    skills=(
        "React",
        "Node.js",
        "TypeScript",
        "JavaScript",
        "Express",
        "REST",
        "Docker",
        "CI/CD",
    ),
    years_of_experience=4,
    preferred_locations=("Remote", "Gurugram", "Bengaluru"),
)
