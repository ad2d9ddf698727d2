"""
Error types raised while loading the Avinor feeds.

Only whole-feed failures are errors. Missing optional fields and unknown
status codes degrade to empty strings or pass-through values instead.
"""

from typing import Optional


class FeedError(Exception):
    """Base class for failures that abort a load."""

    def __init__(self, message: str, feed: Optional[str] = None):
        super().__init__(message)
        self.feed = feed


class NetworkError(FeedError):
    """A feed request failed in transport or returned a non-success status."""


class MalformedFeedError(FeedError):
    """A feed payload could not be parsed into the expected document."""
