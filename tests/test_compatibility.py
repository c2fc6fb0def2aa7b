"""Tests for CompatibilityScorer and the sub-score functions."""

import pytest

from leadmatch.analysis import CompatibilityScorer
from leadmatch.analysis.compatibility import (
    FALLBACK_REASONING,
    WEIGHTS,
    estimate_interest_level,
    features_match,
    location_match,
    overall_score,
    price_match,
    recommend_action,
    size_match,
    timeline_match,
)
from leadmatch.models.buyer import Budget, BuyerPreferences, BuyerProfile, Timeline
from leadmatch.models.match import InterestLevel, RecommendedAction, ScoreBreakdown
from leadmatch.models.property import ListingStatus


BUDGET = Budget(min=400000, max=500000)


class TestPriceMatch:
    """Test price scoring against the budget."""

    @pytest.mark.parametrize("price", [400000, 450000, 500000])
    def test_within_budget_is_perfect(self, price: int):
        """Prices on or inside the bounds score 100."""
        assert price_match(BUDGET, price) == 100.0

    def test_below_budget_discounted(self):
        """25% under the minimum loses 25 points."""
        assert price_match(BUDGET, 300000) == pytest.approx(75.0)

    def test_below_budget_floor(self):
        """Far under budget never drops below 70."""
        assert price_match(BUDGET, 100000) == 70.0
        assert price_match(BUDGET, 0) == 70.0

    def test_negative_price_uses_floor(self):
        """Malformed negative price still lands on the under-budget floor."""
        assert price_match(BUDGET, -50000) == 70.0

    def test_over_budget_penalized_double(self):
        """30% over the maximum loses 60 points."""
        assert price_match(BUDGET, 650000) == pytest.approx(40.0)

    def test_over_budget_clamped_at_zero(self):
        """Way over budget scores 0, never negative."""
        assert price_match(BUDGET, 1000000) == 0.0
        assert price_match(BUDGET, 5000000) == 0.0

    def test_over_budget_strictly_decreasing(self):
        """Score falls as price rises until it reaches 0."""
        prices = [510000, 550000, 600000, 700000]
        scores = [price_match(BUDGET, p) for p in prices]
        assert all(a > b for a, b in zip(scores, scores[1:]))

    def test_zero_budget(self):
        """A zero budget does not divide by zero."""
        zero = Budget(min=0, max=0)
        assert price_match(zero, 0) == 100.0
        assert price_match(zero, 1000) == 0.0


class TestLocationMatch:
    """Test location scoring."""

    def test_no_preference(self):
        assert location_match([], "Austin", "TX") == 100.0

    def test_city_match_case_insensitive(self):
        assert location_match(["san francisco"], "San Francisco", "CA") == 100.0

    def test_state_match(self):
        assert location_match(["Boston", "CA"], "San Francisco", "CA") == 100.0

    def test_no_match_gets_partial_credit(self):
        assert location_match(["Denver"], "Austin", "TX") == 30.0


class TestFeaturesMatch:
    """Test must-have feature scoring."""

    def test_no_requirements(self):
        """Empty must-have list always scores 100."""
        assert features_match([], []) == 100.0
        assert features_match([], ["Pool"]) == 100.0

    def test_substring_match(self):
        """'garage' is found inside 'Two-car garage'."""
        assert features_match(["Garage"], ["Two-car garage"]) == 100.0

    def test_partial_match(self):
        assert features_match(["garage", "pool"], ["Two-car garage"]) == 50.0

    def test_rounding(self):
        """1 of 3 rounds to 33, 1 of 8 (12.5) rounds up to 13."""
        assert features_match(["a", "b", "c"], ["a"]) == 33.0
        required = ["pool", "b1", "b2", "b3", "b4", "b5", "b6", "b7"]
        assert features_match(required, ["Heated pool"]) == 13.0

    def test_none_matched(self):
        assert features_match(["pool"], ["Garage"]) == 0.0


class TestSizeMatch:
    """Test bedroom/bathroom scoring."""

    def test_meets_desired(self, make_listing):
        prefs = BuyerPreferences(bedrooms=3, bathrooms=2)
        assert size_match(prefs, make_listing(bedrooms=4, bathrooms=2.5)) == 100.0

    def test_short_on_bedrooms(self, make_listing):
        """2 of 3 bedrooms scores 46.7, averaged with 100 -> 73."""
        prefs = BuyerPreferences(bedrooms=3, bathrooms=2)
        assert size_match(prefs, make_listing(bedrooms=2, bathrooms=2)) == 73.0

    def test_short_never_reaches_full_credit(self, make_listing):
        prefs = BuyerPreferences(bedrooms=3, bathrooms=2)
        assert size_match(prefs, make_listing(bedrooms=2.9, bathrooms=1.9)) < 100.0

    def test_no_preference(self, make_listing):
        prefs = BuyerPreferences()
        assert size_match(prefs, make_listing(bedrooms=0, bathrooms=0)) == 100.0


class TestTimelineMatch:
    """Test listing status against buyer timeline."""

    def test_for_sale(self):
        for timeline in Timeline:
            assert timeline_match(timeline, ListingStatus.FOR_SALE) == 100.0

    def test_pending(self):
        assert timeline_match(Timeline.IMMEDIATE, ListingStatus.PENDING) == 50.0
        assert timeline_match(Timeline.THREE_TO_SIX_MONTHS, ListingStatus.PENDING) == 80.0

    def test_sold(self):
        for timeline in Timeline:
            assert timeline_match(timeline, ListingStatus.SOLD) == 0.0


class TestOverallScore:
    """Test weighting and clamping."""

    def test_weights_sum_to_one(self):
        assert sum(WEIGHTS.values()) == pytest.approx(1.0)

    def test_weighted_sum(self):
        breakdown = ScoreBreakdown(
            price_match=50,
            location_match=30,
            features_match=100,
            size_match=73,
            timeline_match=80,
        )
        # 15 + 7.5 + 25 + 10.95 + 4 = 62.45
        assert overall_score(breakdown) == 62

    def test_all_zero(self):
        breakdown = ScoreBreakdown(
            price_match=0,
            location_match=0,
            features_match=0,
            size_match=0,
            timeline_match=0,
        )
        assert overall_score(breakdown) == 0


class TestClassification:
    """Test recommended action and interest thresholds."""

    @pytest.mark.parametrize(
        "score,expected",
        [
            (100, RecommendedAction.HIGH_PRIORITY),
            (80, RecommendedAction.HIGH_PRIORITY),
            (79, RecommendedAction.GOOD_MATCH),
            (60, RecommendedAction.GOOD_MATCH),
            (59, RecommendedAction.POTENTIAL),
            (40, RecommendedAction.POTENTIAL),
            (39, RecommendedAction.NOT_RECOMMENDED),
            (0, RecommendedAction.NOT_RECOMMENDED),
        ],
    )
    def test_recommend_action(self, score: int, expected: RecommendedAction):
        assert recommend_action(score) == expected

    @pytest.mark.parametrize(
        "score,expected",
        [
            (80, InterestLevel.VERY_HIGH),
            (60, InterestLevel.HIGH),
            (59, InterestLevel.MEDIUM),
            (5, InterestLevel.MEDIUM),
        ],
    )
    def test_interest_level(self, score: int, expected: InterestLevel):
        assert estimate_interest_level(score) == expected


class TestScoreMatch:
    """Test end-to-end scoring of buyer/listing pairs."""

    def test_perfect_match(self, scorer: CompatibilityScorer, buyer, make_listing):
        """Listing inside budget with desired size scores 100 across the board."""
        result = scorer.score_match(buyer, make_listing())

        b = result.breakdown
        assert (b.price_match, b.location_match, b.features_match) == (100, 100, 100)
        assert (b.size_match, b.timeline_match) == (100, 100)
        assert result.overall_score == 100
        assert result.recommended_action == RecommendedAction.HIGH_PRIORITY
        assert result.estimated_interest_level == InterestLevel.VERY_HIGH
        assert result.property_id == "prop-1"
        assert result.buyer_id == "buyer-1"

    def test_over_budget_still_high_priority(
        self, scorer: CompatibilityScorer, buyer, make_listing
    ):
        """30% over budget: price 40, overall 82."""
        result = scorer.score_match(buyer, make_listing(price=650000))

        assert result.breakdown.price_match == pytest.approx(40.0)
        assert result.overall_score == 82
        assert result.recommended_action == RecommendedAction.HIGH_PRIORITY

    def test_sold_contributes_nothing_from_timeline(
        self, scorer: CompatibilityScorer, buyer, make_listing
    ):
        result = scorer.score_match(buyer, make_listing(status=ListingStatus.SOLD))

        assert result.breakdown.timeline_match == 0.0
        assert result.overall_score == 95

    def test_poor_match_not_recommended(self, scorer: CompatibilityScorer, make_listing):
        picky = BuyerProfile(
            id="picky",
            name="Picky Buyer",
            budget=Budget(min=200000, max=250000),
            preferences=BuyerPreferences(
                bedrooms=5,
                bathrooms=4,
                locations=["Seattle"],
                must_have_features=["pool", "elevator"],
            ),
            timeline="immediate",
            financing="cash",
        )
        result = scorer.score_match(picky, make_listing(status="Pending", bedrooms=2, bathrooms=1))

        # price 0, location 30, features 0, size round((28 + 17.5) / 2) = 23, timeline 50
        assert result.breakdown.size_match == 23.0
        assert result.overall_score == 13
        assert result.recommended_action == RecommendedAction.NOT_RECOMMENDED
        assert result.estimated_interest_level == InterestLevel.MEDIUM

    def test_template_reasoning_mentions_breakdown(
        self, scorer: CompatibilityScorer, buyer, make_listing
    ):
        result = scorer.score_match(buyer, make_listing(price=650000))

        assert result.reasoning.startswith(FALLBACK_REASONING)
        assert "Overall 82/100" in result.reasoning
        assert "price 40" in result.reasoning
        assert "high-priority" in result.reasoning
        assert result.ai_enriched is False

    def test_overall_in_range_for_malformed_price(
        self, scorer: CompatibilityScorer, buyer, make_listing
    ):
        result = scorer.score_match(buyer, make_listing(price=-100))
        assert isinstance(result.overall_score, int)
        assert 0 <= result.overall_score <= 100
