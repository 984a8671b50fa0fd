"""
stripe-rest: request/response core of a client for the Stripe REST API.
"""

from .api import (
    Client,
    ScopingParams,
    APIError,
    RequestError,
    TransportError,
    SerializationError,
    DeserializationError
)

__all__ = [
    'Client',
    'ScopingParams',
    'APIError',
    'RequestError',
    'TransportError',
    'SerializationError',
    'DeserializationError'
]
