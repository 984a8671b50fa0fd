# stripe_rest/api/models.py
# Created: 2026-10-17 10:05:19

from typing import Dict, Optional
from dataclasses import dataclass, field
from enum import Enum
from multidict import CIMultiDict
import yarl

class RequestMethod(Enum):
    """HTTP request methods"""
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"

@dataclass(frozen=True)
class ScopingParams:
    """Per-client or per-call request context"""
    stripe_account: Optional[str] = None

@dataclass
class Request:
    """A single outgoing request, built fresh for every call"""
    method: RequestMethod
    url: yarl.URL
    headers: CIMultiDict = field(default_factory=CIMultiDict)
    body: Optional[bytes] = None

@dataclass
class Response:
    """Status and fully buffered body of a completed request"""
    status: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def request_id(self) -> Optional[str]:
        for name, value in self.headers.items():
            if name.lower() == "request-id":
                return value
        return None
