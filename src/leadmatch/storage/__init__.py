"""Listing sources for lead matching.

This package provides the demo listing and a JSON file loader used when
a match request does not supply its own properties.
"""

from .listings import DEMO_LISTING, default_listings, load_listings

__all__ = ["DEMO_LISTING", "default_listings", "load_listings"]
