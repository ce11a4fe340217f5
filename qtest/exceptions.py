"""
Exceptions raised by the qTest client.
"""

from typing import Any, Dict, Optional


class QTestError(Exception):
    """Base exception for all qTest client errors."""
    
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class APIError(QTestError):
    """The service answered with an unexpected HTTP status."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        details: Optional[str] = None
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.response_data = response_data or {}


class AuthenticationError(APIError):
    """Bad credentials or a malformed token response."""


class NotFoundError(APIError):
    """The requested resource does not exist (HTTP 404)."""


class ValidationError(APIError):
    """The service rejected a create payload."""


class TransportError(QTestError):
    """The request never produced an HTTP response."""


class DecodeError(QTestError):
    """A response body does not match the expected JSON shape."""
