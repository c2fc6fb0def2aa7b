"""AI-written match explanations using Google Gemini.

Sends the buyer profile, the listing and the computed sub-scores to Gemini
and asks for a 2-3 sentence explanation as structured JSON. The numeric
score is never taken from the model; only the ``reasoning`` prose is used.

Env vars:
    GEMINI_API_KEY (from Google AI Studio)
    LEADMATCH_GEMINI_MODEL (default: gemini-2.5-flash-lite)
"""

import logging
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from ..config import config
from ..exceptions import EnrichmentError
from ..models.buyer import BuyerProfile
from ..models.match import CompatibilityScore
from ..models.property import PropertyListing

logger = logging.getLogger(__name__)


class MatchInsight(BaseModel):
    """Pydantic schema for Gemini structured JSON output."""

    reasoning: str = Field(
        min_length=1,
        description="Why this is or isn't a good match (2-3 sentences)",
    )
    recommended_action: Literal[
        "high-priority", "good-match", "potential", "not-recommended"
    ] = Field(description="Follow-up priority for the agent")
    estimated_interest_level: Literal["very-high", "high", "medium", "low"] = Field(
        description="How interested the buyer is likely to be"
    )


MATCH_PROMPT = """\
Analyze this buyer-property match and provide insights:

Buyer Profile:
- Budget: ${budget_min:,.0f} - ${budget_max:,.0f}
- Desired: {want_beds:g} bed, {want_baths:g} bath
- Property types: {property_types}
- Locations: {locations}
- Must-have features: {must_have}
- Nice-to-have features: {nice_to_have}
- Timeline: {timeline}
- Financing: {financing}

Property:
- Price: ${price:,.0f}
- Specs: {beds:g} bed, {baths:g} bath, {sqft} sq ft
- Location: {location}
- Features: {features}
- Status: {status}

Compatibility Scores:
- Price Match: {price_match:.0f}/100
- Location Match: {location_match:.0f}/100
- Features Match: {features_match:.0f}/100
- Size Match: {size_match:.0f}/100
- Timeline Match: {timeline_match:.0f}/100
- Overall: {overall}/100

Provide a brief reasoning (2-3 sentences) for why this is or isn't a good match, \
recommend an action priority, and estimate the buyer's interest level."""


def _join(values: list[str]) -> str:
    return ", ".join(values) if values else "none specified"


def build_match_prompt(
    buyer: BuyerProfile,
    listing: PropertyListing,
    score: CompatibilityScore,
) -> str:
    """Render the Gemini prompt for one buyer/listing pair."""
    prefs = buyer.preferences
    b = score.breakdown
    return MATCH_PROMPT.format(
        budget_min=buyer.budget.min,
        budget_max=buyer.budget.max,
        want_beds=prefs.bedrooms,
        want_baths=prefs.bathrooms,
        property_types=_join(prefs.property_types),
        locations=_join(prefs.locations),
        must_have=_join(prefs.must_have_features),
        nice_to_have=_join(prefs.nice_to_have_features),
        timeline=buyer.timeline.value,
        financing=buyer.financing.value,
        price=listing.price,
        beds=listing.bedrooms,
        baths=listing.bathrooms,
        sqft=f"{listing.square_feet:,.0f}" if listing.square_feet else "unknown",
        location=listing.location,
        features=_join(listing.features),
        status=listing.status.value,
        price_match=b.price_match,
        location_match=b.location_match,
        features_match=b.features_match,
        size_match=b.size_match,
        timeline_match=b.timeline_match,
        overall=score.overall_score,
    )


class GeminiMatchReasoner:
    """Ask Gemini to explain a scored match.

    The client is created on first use so that importing this module or
    constructing a matcher never requires an API key.

    Example:
        reasoner = GeminiMatchReasoner()
        insight = await reasoner.generate(buyer, listing, score)
        print(insight.reasoning)
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        temperature: float = 0.3,
    ):
        """Initialize reasoner.

        Args:
            api_key: Gemini API key. Falls back to settings / GEMINI_API_KEY.
            model: Gemini model name. Falls back to settings.
            temperature: Sampling temperature for the explanation.
        """
        self.api_key = api_key or config.gemini_api_key
        self.model = model or config.gemini_model
        self.temperature = temperature
        self._client = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self):
        """Lazy-initialize the Gemini client."""
        if self._client is not None:
            return self._client

        if not self.api_key:
            raise EnrichmentError("GEMINI_API_KEY environment variable is not set")

        from google import genai

        self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(
        self,
        buyer: BuyerProfile,
        listing: PropertyListing,
        score: CompatibilityScore,
    ) -> MatchInsight:
        """Generate an explanation for a scored match.

        Returns:
            Validated MatchInsight

        Raises:
            EnrichmentError: Gemini is not configured, the call failed, or
                the response did not match the MatchInsight schema.
        """
        client = self._get_client()

        from google.genai import types

        prompt = build_match_prompt(buyer, listing, score)

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=MatchInsight,
                    temperature=self.temperature,
                ),
            )
        except Exception as e:
            raise EnrichmentError(f"Gemini match reasoning failed: {e}") from e

        text = response.text
        if not text:
            raise EnrichmentError("Gemini returned an empty response")

        try:
            return MatchInsight.model_validate_json(text)
        except ValidationError as e:
            raise EnrichmentError(f"Gemini response did not match schema: {e}") from e
