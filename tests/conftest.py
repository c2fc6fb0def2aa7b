"""Pytest fixtures and test utilities."""

from typing import Callable

import pytest

from leadmatch.analysis import CompatibilityScorer, LeadMatcher
from leadmatch.enrichment.match_reasoning import MatchInsight
from leadmatch.models.buyer import (
    Budget,
    BuyerPreferences,
    BuyerProfile,
    Financing,
    Timeline,
)
from leadmatch.models.property import ListingStatus, PropertyListing


@pytest.fixture
def scorer() -> CompatibilityScorer:
    """CompatibilityScorer instance."""
    return CompatibilityScorer()


@pytest.fixture
def offline_matcher() -> LeadMatcher:
    """LeadMatcher that never calls an AI model."""
    return LeadMatcher(enable_ai_reasoning=False)


@pytest.fixture
def buyer() -> BuyerProfile:
    """Buyer with a $400k-$500k budget wanting 3 bed / 2 bath now."""
    return BuyerProfile(
        id="buyer-1",
        name="Jordan Lee",
        email="jordan@example.com",
        budget=Budget(min=400000, max=500000),
        preferences=BuyerPreferences(bedrooms=3, bathrooms=2),
        timeline=Timeline.IMMEDIATE,
        financing=Financing.PRE_APPROVED,
    )


@pytest.fixture
def make_listing() -> Callable[..., PropertyListing]:
    """Factory for listings that fully satisfy the default buyer."""

    def _make(**overrides) -> PropertyListing:
        fields = {
            "id": "prop-1",
            "title": "Craftsman Bungalow",
            "address": "12 Elm Street",
            "city": "Austin",
            "state": "TX",
            "price": 450000,
            "bedrooms": 3,
            "bathrooms": 2,
            "square_feet": 1800,
            "features": ["Two-car garage", "Hardwood floors", "Fenced yard"],
            "status": ListingStatus.FOR_SALE,
        }
        fields.update(overrides)
        return PropertyListing(**fields)

    return _make


@pytest.fixture
def sample_listings(make_listing) -> list[PropertyListing]:
    """Listings with clearly different scores for the default buyer."""
    return [
        make_listing(id="over-budget", price=650000),
        make_listing(id="perfect"),
        make_listing(id="sold", status=ListingStatus.SOLD, price=900000, bedrooms=1),
    ]


class FakeReasoner:
    """Reasoner returning a fixed insight and recording calls."""

    def __init__(
        self,
        reasoning: str = "Great fit for the buyer's budget and size needs.",
        recommended_action: str = "high-priority",
        estimated_interest_level: str = "very-high",
    ):
        self.insight = MatchInsight(
            reasoning=reasoning,
            recommended_action=recommended_action,
            estimated_interest_level=estimated_interest_level,
        )
        self.calls: list[str] = []

    async def generate(self, buyer, listing, score) -> MatchInsight:
        self.calls.append(listing.id)
        return self.insight


@pytest.fixture
def fake_reasoner() -> FakeReasoner:
    return FakeReasoner()
