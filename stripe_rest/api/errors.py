# stripe_rest/api/errors.py
# Created: 2026-10-17 10:12:41

"""
Error model for API calls.

Every failure of a client call surfaces as one of the four ``APIError``
subclasses below, so callers can tell a declined request apart from a
dropped connection or a local encoding bug.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, field
from enum import Enum
from ..core.exceptions import StripeRestError

class ErrorType(Enum):
    """Values of the ``type`` field in an error envelope"""
    API_ERROR = "api_error"
    API_CONNECTION_ERROR = "api_connection_error"
    AUTHENTICATION_ERROR = "authentication_error"
    CARD_ERROR = "card_error"
    IDEMPOTENCY_ERROR = "idempotency_error"
    INVALID_REQUEST_ERROR = "invalid_request_error"
    RATE_LIMIT_ERROR = "rate_limit_error"
    VALIDATION_ERROR = "validation_error"

@dataclass
class ErrorDetail:
    """The ``error`` object returned by the service"""
    type: Optional[str] = None
    message: Optional[str] = None
    code: Optional[str] = None
    param: Optional[str] = None
    decline_code: Optional[str] = None
    charge: Optional[str] = None
    doc_url: Optional[str] = None
    # Not part of the payload; stamped from the response status.
    http_status: int = field(default=0, metadata={"skip_decode": True})

    @property
    def error_type(self) -> Optional[ErrorType]:
        if self.type is None:
            return None
        try:
            return ErrorType(self.type)
        except ValueError:
            return None

@dataclass
class ErrorEnvelope:
    """Wire shape of an error response: ``{"error": {...}}``"""
    error: ErrorDetail

class APIError(StripeRestError):
    """Base exception for API-related errors"""
    pass

class RequestError(APIError):
    """Raised when the service answers with a non-2xx status"""

    def __init__(self, error: ErrorDetail):
        self.error = error
        message = error.message or "request failed"
        if error.type:
            message = f"{error.type}: {message}"
        super().__init__(message, details={"http_status": error.http_status, "code": error.code})
        # Keep the service's own message reachable as-is when it sent one.
        if error.message:
            self.message = error.message

    @property
    def status(self) -> int:
        return self.error.http_status

class TransportError(APIError):
    """Raised when no complete response could be obtained"""
    pass

class SerializationError(APIError):
    """Raised when request parameters cannot be form-encoded"""
    pass

class DeserializationError(APIError):
    """Raised when a successful response body cannot be decoded"""

    def __init__(self, message: str, body: bytes = b"", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.body = body
