# stripe_rest/api/__init__.py
# Created: 2026-10-17 10:02:11

"""
Request pipeline for the payments REST API: URL building, header injection,
form encoding, transport dispatch and response classification.
"""

from .api_client import Client

from .auth import (
    Credentials,
    apply_headers
)

from .encoder import encode_params

from .errors import (
    APIError,
    RequestError,
    TransportError,
    SerializationError,
    DeserializationError,
    ErrorDetail,
    ErrorEnvelope,
    ErrorType
)

from .models import (
    Request,
    RequestMethod,
    Response,
    ScopingParams
)

from .response_handler import (
    ResponseHandler,
    decode_value
)

from .transport import (
    Transport,
    AsyncTransport,
    AiohttpTransport,
    EventLoopThread,
    TlsBackend,
    build_ssl_context
)

from .url import (
    API_BASE,
    API_VERSION,
    build_url
)

__all__ = [
    'Client',
    'Credentials',
    'apply_headers',
    'encode_params',
    'APIError',
    'RequestError',
    'TransportError',
    'SerializationError',
    'DeserializationError',
    'ErrorDetail',
    'ErrorEnvelope',
    'ErrorType',
    'Request',
    'RequestMethod',
    'Response',
    'ScopingParams',
    'ResponseHandler',
    'decode_value',
    'Transport',
    'AsyncTransport',
    'AiohttpTransport',
    'EventLoopThread',
    'TlsBackend',
    'build_ssl_context',
    'API_BASE',
    'API_VERSION',
    'build_url'
]
