"""
Failures raised by the feed analysis core.
"""
from __future__ import annotations


class FeedAnalysisError(Exception):
    """Base class for terminal analysis failures. No partial result exists."""

    message = "Feed analysis failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidTimeWindowError(FeedAnalysisError):
    message = "Invalid time window"


class SimulatedFailureError(FeedAnalysisError):
    """Raised for the reserved sentinel window used by downstream tests."""

    message = "Simulated error for testing purposes"
