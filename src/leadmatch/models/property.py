"""Property listing data models."""

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..exceptions import InputError


class ListingStatus(str, Enum):
    """Market status of a listing."""

    FOR_SALE = "for-sale"
    PENDING = "pending"
    SOLD = "sold"


class PropertyListing(BaseModel):
    """Real estate listing data model.

    Represents a listing from the storefront catalog or an MLS feed with the
    fields compatibility scoring needs. Price is not range-checked;
    out-of-range scores are clamped downstream.
    """

    # Identification
    id: str = Field(..., min_length=1, description="Listing identifier")
    title: str | None = Field(default=None)
    mls_number: str | None = Field(default=None)

    # Location
    address: str | None = Field(default=None, description="Street address")
    city: str = Field(..., description="City name")
    state: str = Field(..., description="State or province code")
    zip_code: str | None = Field(default=None)

    # Pricing
    price: float = Field(..., description="Asking price in USD")

    # Property details
    property_type: str | None = Field(default=None, description="Single Family, Condo, ...")
    bedrooms: float = Field(..., description="Number of bedrooms")
    bathrooms: float = Field(..., description="Number of bathrooms (allows half)")
    square_feet: float | None = Field(default=None, description="Living area in sqft")
    year_built: int | None = Field(default=None)
    features: list[str] = Field(default_factory=list)
    description: str | None = Field(default=None)

    # Listing info
    status: ListingStatus = Field(default=ListingStatus.FOR_SALE)
    listing_date: date | None = Field(default=None)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "str_strip_whitespace": True,
        "frozen": True,
    }

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        # "For Sale" / "for_sale" -> "for-sale"
        if isinstance(value, str):
            return value.strip().lower().replace("_", "-").replace(" ", "-")
        return value

    @property
    def location(self) -> str:
        """City and state as shown on listing cards."""
        return f"{self.city}, {self.state}"


def parse_listing(data: Any) -> PropertyListing:
    """Validate raw listing data, raising InputError when it is unusable."""
    if isinstance(data, PropertyListing):
        return data
    try:
        return PropertyListing.model_validate(data)
    except ValidationError as e:
        raise InputError(f"Invalid property listing: {e}") from e
