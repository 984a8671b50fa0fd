# stripe_rest/api/api_client.py
# Created: 2026-10-17 12:15:50

from typing import Any, Optional
import copy
import dataclasses
import logging
from ..core.config import Config
from ..core.exceptions import ConfigError
from .auth import Credentials, apply_headers
from .encoder import encode_params
from .errors import RequestError, TransportError
from .models import Request, RequestMethod, Response, ScopingParams
from .response_handler import ResponseHandler
from .transport import AiohttpTransport, Transport
from .url import build_url

logger = logging.getLogger(__name__)

class Client:
    """
    Blocking client for the payments REST API.

    Each call builds a fresh request, sends it through the transport and
    decodes the response into ``expected_type`` (raw JSON when omitted).
    Failures raise a subclass of ``APIError``:

    - ``RequestError`` for any non-2xx response
    - ``TransportError`` when no complete response was received
    - ``SerializationError`` when ``params`` cannot be form-encoded
    - ``DeserializationError`` when a 2xx body does not decode

    Clients made with ``with_params`` share credentials and the transport
    (and its connection pool) with the client they came from.
    """

    def __init__(
        self,
        secret_key: str,
        transport: Optional[Transport] = None,
        params: Optional[ScopingParams] = None
    ):
        self._credentials = Credentials(secret_key)
        self._transport = transport if transport is not None else AiohttpTransport()
        self._params = params or ScopingParams()
        self._handler = ResponseHandler()

    @classmethod
    def from_config(cls, config: Config, transport: Optional[Transport] = None) -> "Client":
        """Build a client and its default transport from configuration"""
        secret_key = config.get("auth.secret_key")
        if not secret_key:
            raise ConfigError("auth.secret_key is required", details={"key": "auth.secret_key"})
        if transport is None:
            transport = AiohttpTransport(
                timeout=config.get("http.timeout", 80.0),
                max_connections=config.get("http.max_connections", 100),
                tls_backend=config.get("http.tls_backend", "certifi"),
                verify_ssl=config.get("http.verify_ssl", True)
            )
        return cls(
            str(secret_key),
            transport=transport,
            params=ScopingParams(stripe_account=config.get("auth.stripe_account"))
        )

    @property
    def params(self) -> ScopingParams:
        return self._params

    @property
    def transport(self) -> Transport:
        return self._transport

    def with_params(self, params: ScopingParams) -> "Client":
        """
        Clone this client with different scoping params.

        This is the recommended way to act for many accounts with one secret
        key; the clone and the original never see each other's params.
        """
        client = copy.copy(self)
        client._params = params
        return client

    def set_stripe_account(self, account_id: str) -> None:
        """
        Set the Stripe-Account header for every later call on this client.

        Meant for clients acting as a single account for their whole
        lifetime. When serving several accounts, prefer
        ``with_params(ScopingParams(stripe_account=...))``.
        """
        self._params = dataclasses.replace(self._params, stripe_account=account_id)

    def get(self, path: str, expected_type: Optional[Any] = None) -> Any:
        """Perform GET request"""
        return self.request(RequestMethod.GET, path, expected_type=expected_type)

    def post(self, path: str, params: Any, expected_type: Optional[Any] = None) -> Any:
        """Perform POST request with a form-encoded body"""
        return self.request(RequestMethod.POST, path, params=params, expected_type=expected_type)

    def post_empty(self, path: str, expected_type: Optional[Any] = None) -> Any:
        """Perform POST request without a body"""
        return self.request(RequestMethod.POST, path, expected_type=expected_type)

    def delete(self, path: str, expected_type: Optional[Any] = None) -> Any:
        """Perform DELETE request"""
        return self.request(RequestMethod.DELETE, path, expected_type=expected_type)

    def request(
        self,
        method: RequestMethod,
        path: str,
        params: Any = None,
        expected_type: Optional[Any] = None,
        scoping: Optional[ScopingParams] = None
    ) -> Any:
        """
        Make an API request

        Args:
            method: HTTP method to use
            path: Resource path, starting with '/'
            params: Parameters to form-encode into the body
            expected_type: Type to decode a successful response into
            scoping: Scoping params for this call only

        Returns:
            The decoded response body
        """
        if scoping is None:
            scoping = self._params
        url = build_url(path)
        body = encode_params(params) if params is not None else None

        request = Request(method=method, url=url, body=body)
        apply_headers(request.headers, self._credentials, scoping)

        context = {"account": scoping.stripe_account}
        logger.debug(f"Sending {method.value} {url.path}", extra=context)
        try:
            response = self._transport.send(request)
        except TransportError as e:
            logger.error(f"{method.value} {url.path} failed: {e.message}", extra=context)
            raise

        return self._classify(method, url.path, response, expected_type, context)

    def _classify(
        self,
        method: RequestMethod,
        path: str,
        response: Response,
        expected_type: Optional[Any],
        context: dict
    ) -> Any:
        context = dict(context, request_id=response.request_id)
        try:
            result = self._handler.classify(response, expected_type)
        except RequestError as e:
            logger.warning(f"{method.value} {path} returned {e.status}: {e.message}", extra=context)
            raise
        logger.debug(f"{method.value} {path} returned {response.status}", extra=context)
        return result

    def close(self) -> None:
        """Close the transport shared by this client and its clones"""
        self._transport.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
