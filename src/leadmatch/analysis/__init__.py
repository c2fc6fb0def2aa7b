"""Compatibility analysis for buyer/property matching.

This package provides the deterministic compatibility scorer and the
lead matcher that explains and ranks matches.
"""

from .compatibility import CompatibilityScorer
from .matcher import LeadMatcher, summarize

__all__ = ["CompatibilityScorer", "LeadMatcher", "summarize"]
