"""
Exceptions raised by the OANDA client.

Transport failures (DNS, TLS, refused connections) are not wrapped: they
reach the caller as the ``requests`` exception that produced them.
"""

from typing import Optional


class OandaError(Exception):
    """Base exception for all client errors."""
    pass


class OandaAPIError(OandaError):
    """Raised when a transported response body carries an API error marker."""

    def __init__(self, route: str, body: str, status_code: Optional[int] = None) -> None:
        self.route = route
        self.body = body
        self.status_code = status_code
        super().__init__(f"OANDA API Error: {body}. Route: {route}")


class DecodeError(OandaError):
    """Raised on an undecodable payload when strict decoding is enabled."""
    pass


class ConfigurationError(OandaError):
    """Raised when a connection cannot be built from the given configuration."""
    pass
