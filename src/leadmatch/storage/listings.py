"""Listing catalog used when a match request names no properties.

Listings come from a JSON file (``LEADMATCH_LISTINGS_FILE``) when one is
configured, otherwise from the built-in demo listing.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..config import config
from ..exceptions import InputError
from ..models.property import ListingStatus, PropertyListing, parse_listing

logger = logging.getLogger(__name__)

# Demo listing shown on the storefront property page
DEMO_LISTING = PropertyListing(
    id="1",
    title="Stunning Modern Architectural Masterpiece",
    mls_number="MLS-2025-001234",
    address="2847 Oakwood Boulevard",
    city="San Francisco",
    state="CA",
    zip_code="94110",
    price=2850000,
    property_type="Single Family",
    bedrooms=4,
    bathrooms=3.5,
    square_feet=3200,
    year_built=2021,
    features=[
        "Smart home technology",
        "Hardwood floors",
        "Gourmet kitchen",
        "Walk-in closets",
        "Central air conditioning",
        "Two-car garage",
        "Outdoor entertainment area",
        "Energy-efficient windows",
        "Security system",
        "Landscaped yard",
    ],
    status=ListingStatus.FOR_SALE,
)


def load_listings(path: Path) -> list[PropertyListing]:
    """Load listings from a JSON file.

    The file holds either a list of listing objects or an object with a
    ``properties`` list (the shape of a match request body).

    Args:
        path: JSON file to read

    Returns:
        Validated listings in file order

    Raises:
        InputError: The file is missing, is not valid JSON, or holds an
            invalid listing.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise InputError(f"Listings file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Listings file {path} is not valid JSON: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("properties", [])
    if not isinstance(raw, list):
        raise InputError(f"Listings file {path} must contain a list of properties")

    listings = [parse_listing(item) for item in raw]
    logger.info(f"Loaded {len(listings)} listings from {path}")
    return listings


def default_listings(path: Optional[Path] = None) -> list[PropertyListing]:
    """Listings to match against when a request names none."""
    path = path or config.listings_file
    if path:
        return load_listings(path)
    return [DEMO_LISTING]
