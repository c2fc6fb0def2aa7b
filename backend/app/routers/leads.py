"""Lead matching API endpoints."""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from leadmatch.analysis.matcher import LeadMatcher, summarize
from leadmatch.exceptions import InputError
from leadmatch.models.buyer import parse_buyer
from leadmatch.models.match import CompatibilityScore
from leadmatch.models.property import PropertyListing, parse_listing
from leadmatch.storage.listings import default_listings

router = APIRouter()
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_matcher() -> LeadMatcher:
    """Shared matcher instance (overridable in tests)."""
    return LeadMatcher()


class MatchRequest(BaseModel):
    """Buyer profile plus optional listings to rank.

    Raw JSON is validated by the endpoint so that malformed profiles are
    reported as 400 errors with a readable message.
    """

    buyer: Optional[Any] = None
    properties: Optional[Any] = None


class MatchResponse(BaseModel):
    """Ranked matches for a buyer."""

    success: bool = True
    matches: list[CompatibilityScore]
    count: int
    summary: dict[str, Any]
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def _parse_listings(properties: Any) -> list[PropertyListing]:
    if not isinstance(properties, list):
        raise InputError("properties must be a list of property listings")
    return [parse_listing(item) for item in properties]


@router.post("/match", response_model=MatchResponse)
async def match_leads(
    request: MatchRequest,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    matcher: LeadMatcher = Depends(get_matcher),
) -> MatchResponse:
    """Rank properties for a buyer by compatibility score.

    Uses the listings in the request body, or the configured catalog
    (the demo listing by default) when none are given.
    """
    buyer_id = request.buyer.get("id") if isinstance(request.buyer, dict) else None
    logger.info(
        f"Lead matching request: buyer={buyer_id}, "
        f"properties={len(request.properties) if isinstance(request.properties, list) else 0}"
    )

    try:
        buyer = parse_buyer(request.buyer)
        if request.properties:
            listings = _parse_listings(request.properties)
        else:
            listings = default_listings()
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        matches = await matcher.rank_matches(buyer, listings, limit=limit)
    except Exception as e:
        logger.error(f"Error in lead matching: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to match leads: {str(e)}")

    logger.info(f"Found {len(matches)} matches for buyer {buyer.id}")

    return MatchResponse(
        matches=matches,
        count=len(matches),
        summary=summarize(matches),
    )


@router.post("/score", response_model=CompatibilityScore)
async def score_lead(
    request: MatchRequest,
    matcher: LeadMatcher = Depends(get_matcher),
) -> CompatibilityScore:
    """Score a single property for a buyer.

    The body must contain exactly one property.
    """
    try:
        buyer = parse_buyer(request.buyer)
        listings = _parse_listings(request.properties or [])
        if len(listings) != 1:
            raise InputError("Exactly one property is required")
    except InputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await matcher.match(buyer, listings[0])
    except Exception as e:
        logger.error(f"Error scoring lead: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to match leads: {str(e)}")
