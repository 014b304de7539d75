"""
Error taxonomy for the summary pipeline.

Required steps (search, entity fetch, label batch) raise these to the
caller unchanged. Optional enrichment failures are absorbed by the
resolver and never reach the caller.
"""

from typing import Optional


class SmartSummaryError(Exception):
    """Base class for all pipeline errors."""
    pass


class NotFoundError(SmartSummaryError):
    """Raised when a search or page lookup yields nothing."""
    pass


class ValidationError(SmartSummaryError):
    """Raised when caller input is missing or too short."""
    pass


class UpstreamError(SmartSummaryError):
    """Raised when an upstream API answers with a non-success status."""

    def __init__(self, status: Optional[int], url: str, message: Optional[str] = None):
        self.status = status
        self.url = url
        super().__init__(message or f"Fetch failed {status}: {url}")


class NetworkError(SmartSummaryError):
    """Raised on transport failures (connection, timeout, bad body)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request error: {reason} ({url})")
