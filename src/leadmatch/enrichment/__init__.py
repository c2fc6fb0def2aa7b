"""External enrichment for match results.

Enrichment is optional: failures never change a numeric score.
"""

from .match_reasoning import (
    GeminiMatchReasoner,
    MatchInsight,
    build_match_prompt,
)

__all__ = [
    "GeminiMatchReasoner",
    "MatchInsight",
    "build_match_prompt",
]
