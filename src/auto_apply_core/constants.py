"""Shared constants for auto-apply-agent."""

from __future__ import annotations

# Heuristic scorer: role boosts apply when every keyword is present
ROLE_BOOSTS: list[tuple[frozenset[str], int]] = [
    (frozenset({"full", "stack"}), 4),
    (frozenset({"frontend"}), 3),
    (frozenset({"devops"}), 3),
    (frozenset({"ai"}), 1),
    (frozenset({"ml"}), 1),
]

# Heuristic scorer: single-keyword tech boosts
TECH_BOOSTS: dict[str, int] = {
    "react": 3,
    "node": 3,
    "node.js": 3,
    "typescript": 2,
    "javascript": 1,
    "express": 2,
    "rest": 2,
    "docker": 2,
    "ci": 1,
    "cd": 1,
    "ci/cd": 2,
    "kubernetes": 2,
    "aws": 2,
}

TITLE_MATCH_WEIGHT = 3
DESCRIPTION_MATCH_WEIGHT = 1

# Rough maximum raw score; raw / scale is clamped to [0, 1]
SCORE_SCALE = 25.0

# Strong-fit floors and the AI-mention cap
FULL_STACK_FLOOR = 0.82
FRONTEND_FLOOR = 0.78
DEVOPS_FLOOR = 0.66
AI_MENTION_CAP = 0.45

REACT_OR_NODE_SKILLS = frozenset({"react", "node", "node.js"})
FRONTEND_CORE_SKILLS = frozenset({"react", "typescript", "javascript"})
DEVOPS_SKILLS = frozenset({"docker", "ci/cd", "ci", "cd"})
AI_KEYWORDS = frozenset({"ai", "ml", "nlp"})

LOW_OVERLAP_REASON = "low skill overlap"

# Run pipeline
FALLBACK_TOP_SCORE = 0.9
FALLBACK_SCORE_STEP = 0.1
FALLBACK_REASON = "fallback"
APPLIED_REASON = "applied"
BELOW_THRESHOLD_REASON = "below-threshold"
DEFAULT_SCORE_REASON = "ai-score"

RUN_NOT_FOUND_MESSAGE = "Run not found"
