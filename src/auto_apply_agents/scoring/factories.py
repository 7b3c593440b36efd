"""Factory for the scorer selected by settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from auto_apply_agents.scoring.heuristic import HeuristicScorer
from auto_apply_core.interfaces.scorer import Scorer

if TYPE_CHECKING:
    from auto_apply_core.config.settings import Settings


def create_scorer(settings: Settings) -> Scorer:
    """Create a scorer based on settings.

    Returns ``LLMScorer`` when an Anthropic key is configured, otherwise the
    always-available ``HeuristicScorer``.
    """
    if settings.llm_enabled:
        from auto_apply_agents.scoring.llm_scorer import LLMScorer

        return LLMScorer(settings)

    return HeuristicScorer()
