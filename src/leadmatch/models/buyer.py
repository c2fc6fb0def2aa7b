"""Buyer profile data models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..exceptions import InputError


class Timeline(str, Enum):
    """How soon the buyer intends to purchase."""

    IMMEDIATE = "immediate"
    ONE_TO_THREE_MONTHS = "1-3mo"
    THREE_TO_SIX_MONTHS = "3-6mo"
    SIX_MONTHS_PLUS = "6mo+"


# Spellings used by the storefront forms
_TIMELINE_ALIASES = {
    "1-3 months": Timeline.ONE_TO_THREE_MONTHS,
    "3-6 months": Timeline.THREE_TO_SIX_MONTHS,
    "6+ months": Timeline.SIX_MONTHS_PLUS,
}


class Financing(str, Enum):
    """Buyer's financing situation."""

    CASH = "cash"
    PRE_APPROVED = "pre-approved"
    NEEDS_APPROVAL = "needs-approval"


class Budget(BaseModel):
    """Inclusive price range the buyer is shopping in."""

    min: float = Field(..., description="Lowest acceptable price")
    max: float = Field(..., description="Highest acceptable price")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_bounds(self) -> "Budget":
        if self.min > self.max:
            raise ValueError(f"budget min ({self.min}) is greater than max ({self.max})")
        return self


class BuyerPreferences(BaseModel):
    """What the buyer is looking for in a property."""

    bedrooms: float = Field(default=0, ge=0, description="Desired bedroom count")
    bathrooms: float = Field(default=0, ge=0, description="Desired bathroom count")
    property_types: list[str] = Field(default_factory=list)
    locations: list[str] = Field(
        default_factory=list,
        description="Location substrings matched against 'City, ST'",
    )
    must_have_features: list[str] = Field(default_factory=list)
    nice_to_have_features: list[str] = Field(default_factory=list)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "str_strip_whitespace": True,
        "frozen": True,
    }


class BuyerProfile(BaseModel):
    """A prospective buyer and their stated preferences.

    Created by the storefront lead forms; scoring treats it as read-only input.
    """

    # Identification
    id: str = Field(..., min_length=1, description="Buyer identifier")
    name: str = Field(..., description="Buyer display name")
    email: str | None = Field(default=None)
    phone: str | None = Field(default=None)

    budget: Budget
    preferences: BuyerPreferences = Field(default_factory=BuyerPreferences)
    timeline: Timeline
    financing: Financing

    created_at: datetime | None = Field(default=None)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "str_strip_whitespace": True,
        "frozen": True,
    }

    @field_validator("timeline", mode="before")
    @classmethod
    def _normalize_timeline(cls, value: Any) -> Any:
        if isinstance(value, str):
            key = value.strip().lower()
            return _TIMELINE_ALIASES.get(key, key)
        return value

    @field_validator("financing", mode="before")
    @classmethod
    def _normalize_financing(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower().replace(" ", "-")
        return value


def parse_buyer(data: Any) -> BuyerProfile:
    """Validate raw buyer data, raising InputError when it is unusable."""
    if data is None:
        raise InputError("Buyer profile is required")
    if isinstance(data, BuyerProfile):
        return data
    try:
        return BuyerProfile.model_validate(data)
    except ValidationError as e:
        raise InputError(f"Invalid buyer profile: {e}") from e
