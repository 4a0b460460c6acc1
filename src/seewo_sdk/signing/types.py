"""
Type definitions for request signing functionality

This module provides the enums, data classes and wire-level header names used
by the Seewo open API signature scheme.
"""

from typing import Dict, List, Optional, Tuple, Callable
from dataclasses import dataclass, field
from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class SignType(str, Enum):
    """Signature algorithm types"""
    HMAC = "hmac"  # HMAC-MD5 keyed with the app secret
    MD5 = "md5"    # MD5 over secret + string + secret


class Stage(str, Enum):
    """Deployment stage selecting the API host"""
    DEVELOPMENT = "Development"
    PRODUCTION = "Production"


# Wire-level header names
HEADER_APP_ID = "x-sw-app-id"
HEADER_REQ_PATH = "x-sw-req-path"
HEADER_VERSION = "x-sw-version"
HEADER_TIMESTAMP = "x-sw-timestamp"
HEADER_SIGN_HEADERS = "x-sw-sign-headers"
HEADER_SIGN_TYPE = "x-sw-sign-type"
HEADER_CONTENT_MD5 = "x-sw-content-md5"
HEADER_SIGN = "x-sw-sign"

HEADER_REQUEST_ID = "x-sw-req-id"
HEADER_MESSAGE = "x-sw-message"

PROTOCOL_VERSION = "2"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class SigningConfig:
    """
    Configuration for request signing

    Attributes:
        app_id: Application identifier issued by the open platform
        app_secret: Application secret, used as HMAC key or MD5 salt
        sign_type: Signature algorithm to use
        timestamp_generator: Optional custom millisecond timestamp generator
    """
    app_id: str
    app_secret: str = field(repr=False)
    sign_type: SignType = SignType.HMAC
    timestamp_generator: Optional[Callable[[], int]] = None

    def __post_init__(self):
        """Validate signing configuration"""
        if not isinstance(self.sign_type, SignType):
            # frozen dataclass, so bypass __setattr__
            object.__setattr__(self, 'sign_type', SignType(self.sign_type))


@dataclass
class SeewoRequest:
    """
    Logical request before signing

    Attributes:
        method: HTTP method
        uri: URI template with {name} placeholders
        vars: Values for the URI template placeholders
        queries: Query parameters
        headers: Custom headers, signed and sent as-is
        body: Optional raw request body
    """
    method: HttpMethod = HttpMethod.GET
    uri: str = ""
    vars: Dict[str, str] = field(default_factory=dict)
    queries: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    def __post_init__(self):
        """Normalize method and validate mappings"""
        if not isinstance(self.method, HttpMethod):
            self.method = HttpMethod(str(self.method).upper())

        for name in ('vars', 'queries', 'headers'):
            if not isinstance(getattr(self, name), dict):
                raise ValueError(f"{name} must be a dictionary")

        if self.body is not None and not isinstance(self.body, bytes):
            raise ValueError("Body must be bytes or None")


@dataclass
class SigningOptions:
    """
    Signing options for individual requests

    Attributes:
        timestamp: Fixed timestamp in milliseconds for this request
    """
    timestamp: Optional[int] = None


@dataclass
class SignedHeaders:
    """
    Result of assembling the protocol headers for one request

    Attributes:
        headers: Protocol headers in construction order, x-sw-sign last
        signing_string: Concatenated key/value string that was hashed
        resolved_path: URI template after variable substitution
        timestamp: Millisecond timestamp that was signed
    """
    headers: Dict[str, str]
    signing_string: str
    resolved_path: str
    timestamp: int

    @property
    def signature(self) -> str:
        return self.headers[HEADER_SIGN]


# Type aliases for convenience
KvPairs = Dict[str, str]
ParamPairs = List[Tuple[str, str]]
TimestampGenerator = Callable[[], int]
