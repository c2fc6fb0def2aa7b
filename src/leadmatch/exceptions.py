"""Exception types raised by LeadMatch."""


class LeadMatchError(Exception):
    """Base class for LeadMatch errors."""


class InputError(LeadMatchError, ValueError):
    """Buyer or listing data is missing required fields or is malformed.

    Raised before any scoring is attempted.
    """


class EnrichmentError(LeadMatchError):
    """The external reasoning call failed or returned unusable output.

    Never surfaced to API callers: the matcher falls back to template reasoning.
    """
