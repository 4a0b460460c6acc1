"""
Seewo Python SDK
Signed HTTP client for the Seewo live streaming open API
"""

from .version import __version__
from .exceptions import (
    SeewoSDKError,
    ValidationError,
    ConfigurationError,
    TemplateError,
    UrlError,
    HeaderError,
    TransportError,
    StatusError,
    DecodeError,
)
from .config import (
    ClientConfig,
    STAGE_HOSTS,
    DEFAULT_TIMEOUT_SECONDS,
    validate_client_config,
    load_client_config,
)
from .http_client import (
    SeewoClient,
    SeewoResponse,
    create_client,
)
from .typed import (
    SeewoTypedRequest,
    SeewoTypedResponse,
    JsonModel,
)
from .recording import (
    OtherDeviceV1StreamingStartRequest,
    OtherDeviceV1StreamingStartResponse,
    OtherDeviceV1StreamingStopRequest,
    OtherDeviceV1StreamingStopResponse,
    StreamingVideosRequest,
    StreamingVideosResponse,
    StreamingVideo,
)
from .signing import (
    # Core signing functionality
    SeewoSigner,
    compute_signature,
    create_signer,
    sign_request,
    build_canonical_params,
    build_signing_string,
    # Types
    SeewoRequest,
    SigningConfig,
    SigningOptions,
    SignedHeaders,
    HttpMethod,
    SignType,
    Stage,
    # Configuration
    create_signing_config,
    validate_signing_config,
    # Utilities
    generate_timestamp,
    resolve_uri_template,
)


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'SeewoSDKError',
    'ValidationError',
    'ConfigurationError',
    'TemplateError',
    'UrlError',
    'HeaderError',
    'TransportError',
    'StatusError',
    'DecodeError',
    # Configuration
    'ClientConfig',
    'STAGE_HOSTS',
    'DEFAULT_TIMEOUT_SECONDS',
    'validate_client_config',
    'load_client_config',
    # HTTP Client
    'SeewoClient',
    'SeewoResponse',
    'create_client',
    # Typed requests
    'SeewoTypedRequest',
    'SeewoTypedResponse',
    'JsonModel',
    # Live streaming endpoints
    'OtherDeviceV1StreamingStartRequest',
    'OtherDeviceV1StreamingStartResponse',
    'OtherDeviceV1StreamingStopRequest',
    'OtherDeviceV1StreamingStopResponse',
    'StreamingVideosRequest',
    'StreamingVideosResponse',
    'StreamingVideo',
    # Request Signing - Core
    'SeewoSigner',
    'compute_signature',
    'create_signer',
    'sign_request',
    'build_canonical_params',
    'build_signing_string',
    # Request Signing - Types
    'SeewoRequest',
    'SigningConfig',
    'SigningOptions',
    'SignedHeaders',
    'HttpMethod',
    'SignType',
    'Stage',
    # Request Signing - Configuration
    'create_signing_config',
    'validate_signing_config',
    # Request Signing - Utilities
    'generate_timestamp',
    'resolve_uri_template',
]
