"""
Custom exceptions for Fairway.
"""


class FairwayError(Exception):
    """Base exception for all Fairway errors."""
    pass


class ValidationError(FairwayError, ValueError):
    """Raised when expense or roster data cannot be used for settlement."""
    pass


class ExternalServiceError(FairwayError):
    """Raised when a third-party HTTP service (email, weather) fails."""

    def __init__(self, service: str, message: str):
        self.service = service
        super().__init__(f"{service}: {message}")
