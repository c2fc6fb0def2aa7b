"""Deterministic buyer/property compatibility scoring.

Combines five sub-scores (each 0-100) into a weighted overall score:
- Price (30%): asking price against the buyer's budget
- Location (25%): listing city/state against preferred locations
- Features (25%): listing features against must-have features
- Size (15%): bedrooms and bathrooms against the desired counts
- Timeline (5%): listing status against how soon the buyer wants to move

Every function here is pure; AI-written explanations are layered on top by
``leadmatch.analysis.matcher``.
"""

import logging
import math

from ..models.buyer import Budget, BuyerPreferences, BuyerProfile, Timeline
from ..models.match import (
    CompatibilityScore,
    InterestLevel,
    RecommendedAction,
    ScoreBreakdown,
)
from ..models.property import ListingStatus, PropertyListing

logger = logging.getLogger(__name__)

# Component weights (must sum to 1.0)
WEIGHTS = {
    "price_match": 0.30,
    "location_match": 0.25,
    "features_match": 0.25,
    "size_match": 0.15,
    "timeline_match": 0.05,
}

# Under budget is good but slightly discounted; over budget costs double
UNDER_BUDGET_FLOOR = 70.0
OVER_BUDGET_PENALTY = 2.0

# Credit for a listing outside every preferred location
LOCATION_MISS_SCORE = 30.0

# Share of full credit a room count can earn while short of the target
SIZE_SHORTFALL_SCALE = 70.0

PENDING_IMMEDIATE_SCORE = 50.0
PENDING_FLEXIBLE_SCORE = 80.0

# Classification thresholds on the overall score
HIGH_PRIORITY_MIN = 80
GOOD_MATCH_MIN = 60
POTENTIAL_MIN = 40

FALLBACK_REASONING = (
    "Basic compatibility analysis based on buyer preferences and property features."
)


def _round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


# =========================================================================
# Sub-scores
# =========================================================================


def price_match(budget: Budget, price: float) -> float:
    """Score an asking price against a budget range.

    Args:
        budget: Buyer's inclusive min/max range
        price: Listing asking price

    Returns:
        100 inside the range, at least 70 below it, and a score falling
        twice as fast as the overage (floor 0) above it.
    """
    if price < budget.min:
        if budget.min <= 0:
            return UNDER_BUDGET_FLOOR
        percent_below = (budget.min - price) / budget.min * 100
        return _clamp(max(UNDER_BUDGET_FLOOR, 100 - percent_below))

    if price > budget.max:
        if budget.max <= 0:
            return 0.0
        percent_over = (price - budget.max) / budget.max * 100
        return _clamp(max(0.0, 100 - percent_over * OVER_BUDGET_PENALTY))

    return 100.0


def location_match(preferred_locations: list[str], city: str, state: str) -> float:
    """Score a listing's city/state against preferred location substrings."""
    if not preferred_locations:
        return 100.0

    location = f"{city}, {state}".lower()
    if any(loc.lower() in location for loc in preferred_locations):
        return 100.0
    return LOCATION_MISS_SCORE


def features_match(must_have_features: list[str], listing_features: list[str]) -> float:
    """Percentage of must-have features present in the listing.

    A must-have counts as present when any listing feature contains it,
    case-insensitively ("garage" matches "Two-car garage").
    """
    if not must_have_features:
        return 100.0

    available = [f.lower() for f in listing_features]
    matched = [
        feature
        for feature in must_have_features
        if any(feature.lower() in pf for pf in available)
    ]
    return float(_round_half_up(len(matched) / len(must_have_features) * 100))


def _room_score(actual: float, desired: float) -> float:
    if actual >= desired:
        return 100.0
    if desired <= 0:
        return 100.0
    return _clamp(actual / desired * SIZE_SHORTFALL_SCALE)


def size_match(preferences: BuyerPreferences, listing: PropertyListing) -> float:
    """Average of the bedroom and bathroom scores, rounded."""
    bedrooms = _room_score(listing.bedrooms, preferences.bedrooms)
    bathrooms = _room_score(listing.bathrooms, preferences.bathrooms)
    return float(_round_half_up((bedrooms + bathrooms) / 2))


def timeline_match(timeline: Timeline, status: ListingStatus) -> float:
    """Score listing availability against the buyer's timeline."""
    if status == ListingStatus.SOLD:
        return 0.0
    if status == ListingStatus.PENDING:
        if timeline == Timeline.IMMEDIATE:
            return PENDING_IMMEDIATE_SCORE
        return PENDING_FLEXIBLE_SCORE
    return 100.0


# =========================================================================
# Overall score and classification
# =========================================================================


def overall_score(breakdown: ScoreBreakdown) -> int:
    """Weighted sum of the breakdown, rounded half-up and clamped to 0-100."""
    total = sum(getattr(breakdown, name) * weight for name, weight in WEIGHTS.items())
    return int(_clamp(_round_half_up(total)))


def recommend_action(score: int) -> RecommendedAction:
    if score >= HIGH_PRIORITY_MIN:
        return RecommendedAction.HIGH_PRIORITY
    if score >= GOOD_MATCH_MIN:
        return RecommendedAction.GOOD_MATCH
    if score >= POTENTIAL_MIN:
        return RecommendedAction.POTENTIAL
    return RecommendedAction.NOT_RECOMMENDED


def estimate_interest_level(score: int) -> InterestLevel:
    if score >= HIGH_PRIORITY_MIN:
        return InterestLevel.VERY_HIGH
    if score >= GOOD_MATCH_MIN:
        return InterestLevel.HIGH
    return InterestLevel.MEDIUM


def template_reasoning(
    score: int,
    breakdown: ScoreBreakdown,
    action: RecommendedAction,
    interest: InterestLevel,
) -> str:
    """Fixed explanation used whenever AI reasoning is unavailable."""
    return (
        f"{FALLBACK_REASONING} "
        f"Overall {score}/100 (price {breakdown.price_match:.0f}, "
        f"location {breakdown.location_match:.0f}, "
        f"features {breakdown.features_match:.0f}, "
        f"size {breakdown.size_match:.0f}, "
        f"timeline {breakdown.timeline_match:.0f}). "
        f"Recommended action: {action.value}; estimated interest: {interest.value}."
    )


# =========================================================================
# Scorer
# =========================================================================


class CompatibilityScorer:
    """Score how well a property fits a buyer.

    Example:
        scorer = CompatibilityScorer()
        result = scorer.score_match(buyer, listing)
        print(f"{listing.id}: {result.overall_score}/100 ({result.recommended_action.value})")
    """

    def compute_breakdown(
        self, buyer: BuyerProfile, listing: PropertyListing
    ) -> ScoreBreakdown:
        """Compute the five sub-scores for a buyer/listing pair."""
        prefs = buyer.preferences
        return ScoreBreakdown(
            price_match=price_match(buyer.budget, listing.price),
            location_match=location_match(prefs.locations, listing.city, listing.state),
            features_match=features_match(prefs.must_have_features, listing.features),
            size_match=size_match(prefs, listing),
            timeline_match=timeline_match(buyer.timeline, listing.status),
        )

    def score_match(
        self, buyer: BuyerProfile, listing: PropertyListing
    ) -> CompatibilityScore:
        """Score one listing for one buyer.

        Args:
            buyer: Buyer profile with budget, preferences and timeline
            listing: Property listing to evaluate

        Returns:
            CompatibilityScore with template reasoning and a classification
            derived from the overall score.
        """
        breakdown = self.compute_breakdown(buyer, listing)
        score = overall_score(breakdown)
        action = recommend_action(score)
        interest = estimate_interest_level(score)

        logger.debug(
            f"Scored listing {listing.id} for buyer {buyer.id}: {score}/100 "
            f"({action.value})"
        )

        return CompatibilityScore(
            property_id=listing.id,
            buyer_id=buyer.id,
            overall_score=score,
            breakdown=breakdown,
            reasoning=template_reasoning(score, breakdown, action, interest),
            recommended_action=action,
            estimated_interest_level=interest,
        )
