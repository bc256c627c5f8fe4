"""
Custom exceptions for the EdgeGrid client library.
"""


class EdgeGridClientError(Exception):
    """Base exception for EdgeGrid client errors."""
    pass


class ConfigurationError(EdgeGridClientError):
    """Raised when credentials or client configuration are invalid."""

    def __init__(self, message, missing=()):
        super().__init__(message)
        self.missing = tuple(missing)


class SigningError(EdgeGridClientError):
    """Raised when a request cannot be signed."""
    pass


class HTTPError(EdgeGridClientError):
    """Raised when HTTP request fails."""
    pass
