"""Keyword-overlap heuristic scorer."""

from __future__ import annotations

import math
import re

from auto_apply_core.constants import (
    AI_KEYWORDS,
    AI_MENTION_CAP,
    DESCRIPTION_MATCH_WEIGHT,
    DEVOPS_FLOOR,
    DEVOPS_SKILLS,
    FRONTEND_CORE_SKILLS,
    FRONTEND_FLOOR,
    FULL_STACK_FLOOR,
    LOW_OVERLAP_REASON,
    REACT_OR_NODE_SKILLS,
    ROLE_BOOSTS,
    SCORE_SCALE,
    TECH_BOOSTS,
    TITLE_MATCH_WEIGHT,
)
from auto_apply_core.models.candidate import CandidateProfile
from auto_apply_core.models.job import JobPosting, ScoreResult

_NON_TOKEN_RE = re.compile(r"[^a-z0-9+.#/ ]")


def tokenize(text: str | None) -> list[str]:
    """Lowercase, blank out everything but ``a-z0-9+.#/``, and split."""
    return _NON_TOKEN_RE.sub(" ", (text or "").lower()).split()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def heuristic_fraction(profile: CandidateProfile, job: JobPosting) -> tuple[float, list[str]]:
    """Return the [0, 1] score and the distinct matched skills in original case."""
    title_tokens = set(tokenize(job.title))
    desc_tokens = set(tokenize(job.description))
    all_tokens = title_tokens | desc_tokens

    skills = list(zip(profile.skills, profile.skills_lower, strict=True))
    skill_set = {lower for _, lower in skills}
    title_matches = [orig for orig, lower in skills if lower in title_tokens]
    desc_matches = [orig for orig, lower in skills if lower in desc_tokens]

    raw = TITLE_MATCH_WEIGHT * len(title_matches) + DESCRIPTION_MATCH_WEIGHT * len(desc_matches)

    for keywords, boost in ROLE_BOOSTS:
        if keywords <= all_tokens:
            raw += boost
    for keyword, boost in TECH_BOOSTS.items():
        if keyword in all_tokens:
            raw += boost

    score01 = max(0.0, min(1.0, raw / SCORE_SCALE))

    has_react_or_node = bool(skill_set & REACT_OR_NODE_SKILLS)
    if {"full", "stack"} <= all_tokens and has_react_or_node:
        score01 = max(score01, FULL_STACK_FLOOR)
    if "frontend" in all_tokens and skill_set & FRONTEND_CORE_SKILLS:
        score01 = max(score01, FRONTEND_FLOOR)
    if "devops" in all_tokens and skill_set & DEVOPS_SKILLS:
        score01 = max(score01, DEVOPS_FLOOR)
    # Cap runs after the floors
    if all_tokens & AI_KEYWORDS and not has_react_or_node:
        score01 = min(score01, AI_MENTION_CAP)

    matched = list(dict.fromkeys([*title_matches, *desc_matches]))
    return score01, matched


def heuristic_score(profile: CandidateProfile, job: JobPosting) -> ScoreResult:
    """Score a job with the keyword heuristic."""
    score01, matched = heuristic_fraction(profile, job)
    reason = f"matched skills {', '.join(matched)}" if matched else LOW_OVERLAP_REASON
    return ScoreResult(score=_round_half_up(score01 * 100), reason=reason, scorer="heuristic")


class HeuristicScorer:
    """Scorer backed by :func:`heuristic_score`. Always available."""

    name = "heuristic"

    async def score(self, profile: CandidateProfile, job: JobPosting) -> ScoreResult:
        """Score a job with the keyword heuristic."""
        return heuristic_score(profile, job)
