"""LeadMatch: buyer/property compatibility scoring and lead ranking."""

__version__ = "0.1.0"
