# stripe_rest/api/auth.py
# Created: 2026-10-17 10:26:47

from dataclasses import dataclass, field
from multidict import CIMultiDict
import aiohttp
from .errors import SerializationError
from .models import ScopingParams

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
STRIPE_ACCOUNT_HEADER = "Stripe-Account"

@dataclass(frozen=True)
class Credentials:
    """Secret API key, sent as the Basic auth username with no password"""
    secret_key: str = field(repr=False)

    def __post_init__(self):
        if not isinstance(self.secret_key, str) or not self.secret_key:
            raise ValueError("secret_key must be a non-empty string")

    def auth_header(self) -> str:
        return aiohttp.BasicAuth(login=self.secret_key, password="").encode()

def apply_headers(
    headers: CIMultiDict,
    credentials: Credentials,
    params: ScopingParams
) -> None:
    """
    Set authentication, content type and account scoping headers.

    Values are overwritten rather than appended, so applying the same inputs
    twice leaves the headers unchanged.

    Raises:
        SerializationError: if the account id cannot be sent as a header value
    """
    headers["Authorization"] = credentials.auth_header()
    headers["Content-Type"] = FORM_CONTENT_TYPE
    if params.stripe_account:
        if not (params.stripe_account.isascii() and params.stripe_account.isprintable()):
            raise SerializationError(
                "stripe_account must be printable ASCII",
                details={"header": STRIPE_ACCOUNT_HEADER}
            )
        headers[STRIPE_ACCOUNT_HEADER] = params.stripe_account
    else:
        headers.popall(STRIPE_ACCOUNT_HEADER, None)
