# stripe_rest/api/url.py
# Created: 2026-10-17 10:21:03

import yarl

API_BASE = "https://api.stripe.com"
API_VERSION = "v1"

def build_url(path: str) -> yarl.URL:
    """
    Build the full request URL for a resource path.

    The path is relative to the versioned API base and must start with a
    single '/', which is dropped before joining:
    ``/customers/cus_123`` -> ``https://api.stripe.com/v1/customers/cus_123``.

    Raises:
        ValueError: if the path is malformed. This is a caller bug and is
            never converted into an API error.
    """
    if not isinstance(path, str) or not path.startswith("/"):
        raise ValueError(f"resource path must start with '/': {path!r}")
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7f for ch in path):
        raise ValueError(f"resource path contains whitespace or control characters: {path!r}")

    url = yarl.URL(f"{API_BASE}/{API_VERSION}/{path[1:]}")
    if not url.is_absolute() or url.host is None:
        raise ValueError(f"could not build a request URL from {path!r}")
    return url
