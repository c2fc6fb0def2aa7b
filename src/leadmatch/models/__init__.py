"""Data models for LeadMatch."""

from leadmatch.models.buyer import (
    Budget,
    BuyerPreferences,
    BuyerProfile,
    Financing,
    Timeline,
    parse_buyer,
)
from leadmatch.models.match import (
    CompatibilityScore,
    InterestLevel,
    RecommendedAction,
    ScoreBreakdown,
)
from leadmatch.models.property import ListingStatus, PropertyListing, parse_listing

__all__ = [
    "Budget",
    "BuyerPreferences",
    "BuyerProfile",
    "Financing",
    "Timeline",
    "parse_buyer",
    "ListingStatus",
    "PropertyListing",
    "parse_listing",
    "CompatibilityScore",
    "InterestLevel",
    "RecommendedAction",
    "ScoreBreakdown",
]
