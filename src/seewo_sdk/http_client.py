"""
HTTP client for the Seewo open API

This module materializes signed logical requests into transport-ready
requests, sends them with the requests library and normalizes responses.
"""

import logging
from typing import Optional, Any
from urllib.parse import urlparse
from dataclasses import dataclass

import requests

from .exceptions import (
    ValidationError, UrlError, TransportError, StatusError, DecodeError
)
from .config import ClientConfig, validate_client_config
from .signing import (
    SeewoRequest, SeewoSigner, SigningOptions, SignedHeaders,
    check_header, resolve_uri_template,
    HEADER_REQUEST_ID, HEADER_MESSAGE,
)
from .signing.types import JSON_CONTENT_TYPE, TimestampGenerator

logger = logging.getLogger(__name__)

CONTENT_TYPE_HEADER = 'Content-Type'


@dataclass
class SeewoResponse:
    """Normalized response from the Seewo API."""
    request_id: Optional[str]
    message: Optional[str]
    body: Any


class SeewoClient:
    """
    HTTP client for the Seewo open API.

    Signs every request with the configured credentials. The configuration
    is immutable; the underlying requests.Session is only used for sending.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        timestamp_generator: Optional[TimestampGenerator] = None
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration
            session: Optional requests session to send with
            timestamp_generator: Optional millisecond timestamp generator

        Raises:
            ConfigurationError: If configuration is invalid
        """
        validate_client_config(config)

        self.config = config
        self.signer = SeewoSigner(config.to_signing_config(timestamp_generator))
        self.session = session or requests.Session()

        logger.info(f"Initialized Seewo client for app {config.app_id} at {config.host}")

    @classmethod
    def from_env(cls) -> 'SeewoClient':
        """Create client from SEEWO_* environment variables."""
        return cls(ClientConfig.from_env())

    def sign_only(
        self,
        request: SeewoRequest,
        options: Optional[SigningOptions] = None
    ) -> SignedHeaders:
        """
        Build the protocol headers for a request without materializing it.

        Args:
            request: Logical request
            options: Optional per-request signing options

        Returns:
            SignedHeaders: Protocol headers including x-sw-sign
        """
        return self.signer.build_sw_headers(request, options)

    def build_url(self, request: SeewoRequest) -> str:
        """
        Resolve the URI template against the stage host.

        Args:
            request: Logical request

        Returns:
            str: Absolute URL without query string

        Raises:
            TemplateError: If the URI template cannot be resolved
            UrlError: If the resulting URL is malformed
        """
        path = resolve_uri_template(request.uri, request.vars)
        url = f"{self.config.host}{path}"

        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise UrlError(f"Failed to parse URL: {e}", url, {"original_error": str(e)}) from e

        expected = urlparse(self.config.host)
        if parsed.scheme not in ('http', 'https') or parsed.netloc != expected.netloc:
            raise UrlError(
                f"Invalid URL format: {url}",
                url,
                {"host": self.config.host, "path": path}
            )

        return url

    def build_request(
        self,
        request: SeewoRequest,
        options: Optional[SigningOptions] = None
    ) -> requests.PreparedRequest:
        """
        Materialize a logical request into a signed, transport-ready request.

        Args:
            request: Logical request
            options: Optional per-request signing options

        Returns:
            requests.PreparedRequest: Request ready to send

        Raises:
            TemplateError: If the URI template cannot be resolved
            UrlError: If the resulting URL is malformed
            HeaderError: If a header name or value is invalid
            ValidationError: If a custom header collides with a generated one
        """
        headers = self.signer.build_headers(request, options)
        url = self.build_url(request)

        for name, value in headers.items():
            check_header(name, value)

        data = None
        if request.body is not None:
            for name in request.headers:
                if name.lower() == CONTENT_TYPE_HEADER.lower():
                    raise ValidationError(
                        f"Header '{name}' collides with the JSON content type set for the body",
                        "DUPLICATE_PARAMETER",
                        {"key": name, "conflicts_with": CONTENT_TYPE_HEADER}
                    )
            headers[CONTENT_TYPE_HEADER] = JSON_CONTENT_TYPE
            data = request.body

        try:
            prepared = requests.Request(
                method=request.method.value,
                url=url,
                params=list(request.queries.items()),
                headers=headers,
                data=data
            ).prepare()
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            raise UrlError(f"Invalid URL: {e}", url, {"original_error": str(e)}) from e

        return prepared

    def invoke(
        self,
        request: SeewoRequest,
        options: Optional[SigningOptions] = None
    ) -> SeewoResponse:
        """
        Sign, send and decode a request.

        Args:
            request: Logical request
            options: Optional per-request signing options

        Returns:
            SeewoResponse: Request id, message and decoded JSON body

        Raises:
            TemplateError, UrlError, HeaderError: Before anything is sent
            TransportError: On network errors
            StatusError: On non-2xx status codes
            DecodeError: If the body is not valid JSON
        """
        prepared = self.build_request(request, options)

        logger.debug(f"Making {prepared.method} request to {prepared.url}")
        try:
            response = self.session.send(prepared, timeout=self.config.timeout)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timeout after {self.config.timeout} seconds") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}", {"original_error": str(e)}) from e

        if not 200 <= response.status_code < 300:
            raise StatusError(
                f"Response status code error: {response.status_code}",
                response.status_code,
                {"url": prepared.url}
            )

        request_id = response.headers.get(HEADER_REQUEST_ID)
        message = response.headers.get(HEADER_MESSAGE)

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON response: {e}", {"request_id": request_id}) from e

        result = SeewoResponse(request_id=request_id, message=message, body=body)
        logger.debug(f"Received response: {result}")
        return result

    def close(self):
        """Close the HTTP session."""
        self.session.close()
        logger.debug("HTTP session closed")

    def __enter__(self) -> 'SeewoClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def create_client(
    app_id: str,
    app_secret: str,
    **kwargs: Any
) -> SeewoClient:
    """
    Create Seewo client with default configuration.

    Args:
        app_id: Application identifier
        app_secret: Application secret
        **kwargs: Other ClientConfig fields (sign_type, stage, timeout)

    Returns:
        SeewoClient: Configured client
    """
    config = ClientConfig(app_id=app_id, app_secret=app_secret, **kwargs)
    return SeewoClient(config)
