"""
Seewo Python SDK - Request Signing Module

Implementation of the Seewo open API signature scheme (x-sw-* headers signed
with HMAC-MD5 or salted MD5). This module turns a logical request into the
protocol headers the server expects.
"""

from .types import (
    SeewoRequest,
    SigningConfig,
    SigningOptions,
    SignedHeaders,
    HttpMethod,
    SignType,
    Stage,
    HEADER_APP_ID,
    HEADER_REQ_PATH,
    HEADER_VERSION,
    HEADER_TIMESTAMP,
    HEADER_SIGN_HEADERS,
    HEADER_SIGN_TYPE,
    HEADER_CONTENT_MD5,
    HEADER_SIGN,
    HEADER_REQUEST_ID,
    HEADER_MESSAGE,
)

from .canonical import (
    CanonicalParameterSetBuilder,
    build_canonical_params,
    build_signing_string,
)

from .signer import (
    SeewoSigner,
    compute_signature,
    create_signer,
    sign_request,
)

from .signing_config import (
    create_signing_config,
    validate_signing_config,
)

from .utils import (
    generate_timestamp,
    resolve_uri_template,
    md5_hex,
    validate_header_name,
    validate_header_value,
    check_header,
)

# Public API exports
__all__ = [
    # Types
    'SeewoRequest',
    'SigningConfig',
    'SigningOptions',
    'SignedHeaders',
    'HttpMethod',
    'SignType',
    'Stage',
    # Wire header names
    'HEADER_APP_ID',
    'HEADER_REQ_PATH',
    'HEADER_VERSION',
    'HEADER_TIMESTAMP',
    'HEADER_SIGN_HEADERS',
    'HEADER_SIGN_TYPE',
    'HEADER_CONTENT_MD5',
    'HEADER_SIGN',
    'HEADER_REQUEST_ID',
    'HEADER_MESSAGE',
    # Canonical parameter set
    'CanonicalParameterSetBuilder',
    'build_canonical_params',
    'build_signing_string',
    # Core signing functionality
    'SeewoSigner',
    'compute_signature',
    'create_signer',
    'sign_request',
    # Configuration
    'create_signing_config',
    'validate_signing_config',
    # Utilities
    'generate_timestamp',
    'resolve_uri_template',
    'md5_hex',
    'validate_header_name',
    'validate_header_value',
    'check_header',
]
