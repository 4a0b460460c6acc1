"""
Seewo open API request signer

This module provides the signature engine (HMAC-MD5 or salted MD5 over the
canonical parameter string) and the assembler that generates the x-sw-*
protocol headers for a logical request.
"""

import hashlib
import logging
from typing import Dict, Optional

from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import ValidationError
from .types import (
    SeewoRequest,
    SigningConfig,
    SigningOptions,
    SignedHeaders,
    SignType,
    ParamPairs,
    HEADER_APP_ID,
    HEADER_REQ_PATH,
    HEADER_VERSION,
    HEADER_TIMESTAMP,
    HEADER_SIGN_HEADERS,
    HEADER_SIGN_TYPE,
    HEADER_CONTENT_MD5,
    HEADER_SIGN,
    PROTOCOL_VERSION,
)
from .canonical import build_canonical_params, build_signing_string
from .signing_config import validate_signing_config
from .utils import (
    generate_timestamp,
    md5_hex,
    resolve_uri_template,
    to_upper_hex,
    PerformanceTimer,
)

logger = logging.getLogger(__name__)


def compute_signature(params: ParamPairs, secret: str, sign_type: SignType) -> str:
    """
    Compute the signature over a sorted canonical parameter set.

    Args:
        params: Sorted (key, value) pairs
        secret: Application secret
        sign_type: HMAC (keyed hash) or MD5 (salted digest)

    Returns:
        str: 32-character uppercase hex signature
    """
    signing_string = build_signing_string(params)
    secret_bytes = secret.encode('utf-8')

    if sign_type == SignType.MD5:
        salted = secret + signing_string + secret
        return to_upper_hex(hashlib.md5(salted.encode('utf-8')).digest())

    if sign_type == SignType.HMAC:
        mac = hmac.HMAC(secret_bytes, hashes.MD5())
        mac.update(signing_string.encode('utf-8'))
        return to_upper_hex(mac.finalize())

    raise ValueError(f"Unsupported sign type: {sign_type}")


class SeewoSigner:
    """
    Generates the signed x-sw-* header set for logical requests.

    The signer holds only an immutable SigningConfig and may be shared
    between threads.
    """

    def __init__(self, config: SigningConfig):
        """
        Initialize the signer with configuration.

        Args:
            config: Signing configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        validate_signing_config(config)
        self.config = config

    def build_sw_headers(
        self,
        request: SeewoRequest,
        options: Optional[SigningOptions] = None
    ) -> SignedHeaders:
        """
        Build the protocol headers for a request, x-sw-sign last.

        Args:
            request: Logical request to sign
            options: Optional per-request signing options

        Returns:
            SignedHeaders: Protocol headers plus signing metadata

        Raises:
            TemplateError: If the URI template cannot be resolved
            ValidationError: If a parameter key is given by more than one source
        """
        timer = PerformanceTimer()

        # x-sw-sign is added after hashing, so the canonical set never sees it
        for name in request.headers:
            if name.lower() == HEADER_SIGN:
                raise ValidationError(
                    f"Header '{name}' collides with the generated {HEADER_SIGN}",
                    "DUPLICATE_PARAMETER",
                    {"key": name, "conflicts_with": HEADER_SIGN}
                )

        path = resolve_uri_template(request.uri, request.vars)
        timestamp = self._resolve_timestamp(options)

        sw_headers: Dict[str, str] = {}
        sw_headers[HEADER_APP_ID] = self.config.app_id
        sw_headers[HEADER_REQ_PATH] = path
        sw_headers[HEADER_VERSION] = PROTOCOL_VERSION
        sw_headers[HEADER_TIMESTAMP] = str(timestamp)

        sign_headers = ','.join(request.headers.keys())
        if sign_headers:
            sw_headers[HEADER_SIGN_HEADERS] = sign_headers

        sw_headers[HEADER_SIGN_TYPE] = self.config.sign_type.value

        if request.body is not None:
            sw_headers[HEADER_CONTENT_MD5] = md5_hex(request.body)

        params = build_canonical_params(request.queries, request.headers, sw_headers)
        sw_headers[HEADER_SIGN] = compute_signature(
            params, self.config.app_secret, self.config.sign_type
        )

        elapsed_ms = timer.elapsed_ms()
        if elapsed_ms > 10:
            logger.warning(f"Signing operation took {elapsed_ms:.2f}ms (target: <10ms)")

        return SignedHeaders(
            headers=sw_headers,
            signing_string=build_signing_string(params),
            resolved_path=path,
            timestamp=timestamp
        )

    def build_headers(
        self,
        request: SeewoRequest,
        options: Optional[SigningOptions] = None
    ) -> Dict[str, str]:
        """
        Merge custom headers with the signed protocol headers.

        Protocol headers are applied last and win on collision.

        Args:
            request: Logical request to sign
            options: Optional per-request signing options

        Returns:
            dict: Complete header set to send
        """
        headers = dict(request.headers)
        headers.update(self.build_sw_headers(request, options).headers)
        return headers

    def _resolve_timestamp(self, options: Optional[SigningOptions]) -> int:
        if options is not None and options.timestamp is not None:
            return options.timestamp

        timestamp_gen = self.config.timestamp_generator or generate_timestamp
        return timestamp_gen()


def create_signer(config: SigningConfig) -> SeewoSigner:
    """
    Create a new Seewo signer.

    Args:
        config: Signing configuration

    Returns:
        SeewoSigner: Configured signer instance
    """
    return SeewoSigner(config)


def sign_request(
    request: SeewoRequest,
    config: SigningConfig,
    options: Optional[SigningOptions] = None
) -> SignedHeaders:
    """
    Sign a request with the given configuration.

    Args:
        request: Request to sign
        config: Signing configuration
        options: Optional signing options

    Returns:
        SignedHeaders: Protocol headers including x-sw-sign
    """
    return create_signer(config).build_sw_headers(request, options)
