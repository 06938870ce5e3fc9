"""Exceptions raised by snykclient."""


class SnykError(Exception):
    """Base exception for Snyk client errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigurationError(SnykError):
    """Client could not be constructed from the given configuration."""


class ApiError(SnykError):
    """Response body carried a populated ``error`` field."""


class TransportError(SnykError):
    """Request failed at the HTTP level (status, network or decoding)."""
