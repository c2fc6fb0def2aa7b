"""Compatibility score data models."""

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class RecommendedAction(str, Enum):
    """Follow-up priority for a buyer/property match."""

    HIGH_PRIORITY = "high-priority"
    GOOD_MATCH = "good-match"
    POTENTIAL = "potential"
    NOT_RECOMMENDED = "not-recommended"


class InterestLevel(str, Enum):
    """Estimated buyer interest in a property."""

    VERY_HIGH = "very-high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ScoreBreakdown(BaseModel):
    """The five sub-scores behind an overall compatibility score."""

    price_match: float = Field(..., ge=0, le=100)
    location_match: float = Field(..., ge=0, le=100)
    features_match: float = Field(..., ge=0, le=100)
    size_match: float = Field(..., ge=0, le=100)
    timeline_match: float = Field(..., ge=0, le=100)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class CompatibilityScore(BaseModel):
    """How well one property fits one buyer.

    Recomputed on every call; never persisted.
    """

    property_id: str
    buyer_id: str

    overall_score: int = Field(..., ge=0, le=100, description="Weighted score 0-100")
    breakdown: ScoreBreakdown

    reasoning: str = Field(..., description="Short explanation of the match")
    recommended_action: RecommendedAction
    estimated_interest_level: InterestLevel
    ai_enriched: bool = Field(
        default=False, description="True when reasoning was written by the AI model"
    )

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }
