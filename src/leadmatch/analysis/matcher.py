"""Lead matching: score, explain and rank properties for a buyer.

Scores come from the deterministic CompatibilityScorer. When AI reasoning is
enabled, each match is additionally explained by a reasoner (Gemini by
default). Reasoning is best-effort: a slow, failing or malformed reasoning
call falls back to template text and never changes the score, the
recommended action or the interest level.
"""

import asyncio
import logging
from typing import Any, Optional, Protocol

from ..config import config
from ..enrichment.match_reasoning import GeminiMatchReasoner, MatchInsight
from ..models.buyer import BuyerProfile
from ..models.match import CompatibilityScore, RecommendedAction
from ..models.property import PropertyListing
from .compatibility import CompatibilityScorer

logger = logging.getLogger(__name__)


class MatchReasoner(Protocol):
    """Anything that can explain a scored match."""

    async def generate(
        self,
        buyer: BuyerProfile,
        listing: PropertyListing,
        score: CompatibilityScore,
    ) -> MatchInsight: ...


class LeadMatcher:
    """Match buyers to properties and rank the results.

    Example:
        matcher = LeadMatcher()
        matches = await matcher.rank_matches(buyer, listings, limit=5)
        for m in matches:
            print(f"{m.property_id}: {m.overall_score}/100 - {m.reasoning}")
    """

    def __init__(
        self,
        scorer: Optional[CompatibilityScorer] = None,
        reasoner: Optional[MatchReasoner] = None,
        enable_ai_reasoning: Optional[bool] = None,
        timeout_s: Optional[float] = None,
        retry_backoff_s: Optional[float] = None,
        max_retries: Optional[int] = None,
        max_concurrent: Optional[int] = None,
    ):
        """Initialize matcher.

        Args:
            scorer: Optional CompatibilityScorer. Creates new instance if not provided.
            reasoner: Optional reasoner. Defaults to GeminiMatchReasoner when a
                      Gemini API key is configured.
            enable_ai_reasoning: Override settings.enable_ai_reasoning
            timeout_s: Seconds allowed per reasoning call
            retry_backoff_s: Pause before retrying a failed reasoning call
            max_retries: Retries after the first failed reasoning call
            max_concurrent: Reasoning calls allowed in flight at once
        """
        self.scorer = scorer or CompatibilityScorer()

        enabled = (
            config.enable_ai_reasoning
            if enable_ai_reasoning is None
            else enable_ai_reasoning
        )
        if enabled and reasoner is None:
            gemini = GeminiMatchReasoner()
            if gemini.is_configured:
                reasoner = gemini
            else:
                logger.info("Gemini not configured, using template reasoning")
        self.reasoner = reasoner if enabled else None

        self.timeout_s = timeout_s if timeout_s is not None else config.reasoning_timeout_s
        self.retry_backoff_s = (
            retry_backoff_s
            if retry_backoff_s is not None
            else config.reasoning_retry_backoff_s
        )
        self.max_retries = (
            max_retries if max_retries is not None else config.reasoning_max_retries
        )
        self._semaphore = asyncio.Semaphore(
            max_concurrent or config.max_concurrent_reasoning
        )

    # =========================================================================
    # Single match
    # =========================================================================

    async def match(
        self, buyer: BuyerProfile, listing: PropertyListing
    ) -> CompatibilityScore:
        """Score one listing for a buyer and attach reasoning.

        Args:
            buyer: Buyer profile
            listing: Listing to score

        Returns:
            CompatibilityScore. ``ai_enriched`` is True only when the
            reasoning text came from the reasoner.
        """
        score = self.scorer.score_match(buyer, listing)
        return await self._enrich(buyer, listing, score)

    async def _enrich(
        self,
        buyer: BuyerProfile,
        listing: PropertyListing,
        score: CompatibilityScore,
    ) -> CompatibilityScore:
        """Replace template reasoning with the reasoner's text when it answers."""
        if self.reasoner is None:
            return score

        insight = await self._explain(buyer, listing, score)
        if insight is None:
            return score

        if (
            insight.recommended_action != score.recommended_action.value
            or insight.estimated_interest_level != score.estimated_interest_level.value
        ):
            logger.debug(
                f"Ignoring AI labels for {listing.id}: "
                f"{insight.recommended_action}/{insight.estimated_interest_level} "
                f"vs {score.recommended_action.value}/"
                f"{score.estimated_interest_level.value}"
            )

        return score.model_copy(
            update={"reasoning": insight.reasoning, "ai_enriched": True}
        )

    async def _explain(
        self,
        buyer: BuyerProfile,
        listing: PropertyListing,
        score: CompatibilityScore,
    ) -> Optional[MatchInsight]:
        """Call the reasoner with a timeout and bounded retries.

        Returns None when every attempt failed.
        """
        attempts = self.max_retries + 1
        for attempt in range(attempts):
            try:
                async with self._semaphore:
                    return await asyncio.wait_for(
                        self.reasoner.generate(buyer, listing, score),
                        timeout=self.timeout_s,
                    )
            except asyncio.TimeoutError:
                logger.warning(
                    f"Match reasoning timed out after {self.timeout_s}s "
                    f"for {listing.id} (attempt {attempt + 1}/{attempts})"
                )
            except Exception as e:
                logger.warning(
                    f"Match reasoning failed for {listing.id} "
                    f"(attempt {attempt + 1}/{attempts}): {e}"
                )

            if attempt + 1 < attempts and self.retry_backoff_s > 0:
                await asyncio.sleep(self.retry_backoff_s)

        return None

    # =========================================================================
    # Ranking
    # =========================================================================

    async def rank_matches(
        self,
        buyer: BuyerProfile,
        listings: list[PropertyListing],
        limit: Optional[int] = None,
    ) -> list[CompatibilityScore]:
        """Score every listing and return the best matches first.

        Every listing is scored, then only the top ``limit`` are sent to the
        reasoner (concurrently). Sorting is stable, so listings with equal
        scores keep their input order.

        Args:
            buyer: Buyer profile
            listings: Listings to consider
            limit: Maximum matches to return (default settings.default_match_limit)

        Returns:
            Up to ``limit`` CompatibilityScore objects, highest score first
        """
        if limit is None:
            limit = config.default_match_limit
        if not listings or limit <= 0:
            return []

        logger.info(f"Ranking {len(listings)} listings for buyer {buyer.id}")

        scored = [(listing, self.scorer.score_match(buyer, listing)) for listing in listings]
        ranked = sorted(scored, key=lambda pair: pair[1].overall_score, reverse=True)

        return list(
            await asyncio.gather(
                *(self._enrich(buyer, listing, score) for listing, score in ranked[:limit])
            )
        )


def summarize(matches: list[CompatibilityScore]) -> dict[str, Any]:
    """Summary statistics for a list of matches.

    Returns:
        Dict with count, avg_score, top_score, ai_enriched count and
        counts per recommended action.
    """
    by_action = {action.value: 0 for action in RecommendedAction}
    for m in matches:
        by_action[m.recommended_action.value] += 1

    scores = [m.overall_score for m in matches]
    return {
        "count": len(matches),
        "avg_score": round(sum(scores) / len(scores), 1) if scores else 0,
        "top_score": max(scores) if scores else 0,
        "ai_enriched": len([m for m in matches if m.ai_enriched]),
        "by_action": by_action,
    }
