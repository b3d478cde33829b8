"""Exception hierarchy for the scanner core."""


class ChainscopeError(Exception):
    """Base exception for scanner errors."""


class TransportError(ChainscopeError):
    """Indexer query failed (network error, bad status or unusable body)."""


class NormalizationError(ChainscopeError):
    """Raw indexer record is missing a structurally required field."""


class FormatError(ChainscopeError):
    """Amount string is not a non-negative base-10 integer."""
