"""
Configuration validation for request signing

Credentials are checked once, when a signer or client is created, so that a
bad secret surfaces as a configuration error instead of failing every call.
"""

from typing import Optional

from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import ConfigurationError
from .types import SigningConfig, SignType, TimestampGenerator


def create_signing_config(
    app_id: str,
    app_secret: str,
    sign_type: SignType = SignType.HMAC,
    timestamp_generator: Optional[TimestampGenerator] = None
) -> SigningConfig:
    """
    Create and validate a signing configuration.

    Args:
        app_id: Application identifier
        app_secret: Application secret
        sign_type: Signature algorithm
        timestamp_generator: Optional millisecond timestamp generator

    Returns:
        SigningConfig: Validated signing configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    try:
        config = SigningConfig(
            app_id=app_id,
            app_secret=app_secret,
            sign_type=sign_type,
            timestamp_generator=timestamp_generator
        )
    except ValueError as e:
        raise ConfigurationError(
            f"Unsupported sign type: {sign_type}",
            "INVALID_SIGN_TYPE",
            {"sign_type": str(sign_type), "original_error": str(e)}
        ) from e

    validate_signing_config(config)
    return config


def validate_signing_config(config: SigningConfig) -> None:
    """
    Validate signing configuration.

    Args:
        config: Signing configuration to validate

    Raises:
        ConfigurationError: If configuration is invalid
    """
    if not isinstance(config, SigningConfig):
        raise ConfigurationError(
            "Configuration must be SigningConfig instance",
            "INVALID_CONFIG"
        )

    if not config.app_id or not isinstance(config.app_id, str):
        raise ConfigurationError(
            "App ID must be non-empty string",
            "MISSING_APP_ID"
        )

    if not config.app_secret or not isinstance(config.app_secret, str):
        raise ConfigurationError(
            "App secret must be non-empty string",
            "INVALID_SECRET"
        )

    if not isinstance(config.sign_type, SignType):
        raise ConfigurationError(
            f"Unsupported sign type: {config.sign_type}",
            "INVALID_SIGN_TYPE"
        )

    # The secret must be usable as an HMAC key
    try:
        mac = hmac.HMAC(config.app_secret.encode('utf-8'), hashes.MD5())
        mac.update(b'')
        mac.finalize()
    except Exception as e:
        raise ConfigurationError(
            f"App secret cannot be used as HMAC-MD5 key: {e}",
            "INVALID_SECRET",
            {"original_error": str(e)}
        ) from e

    if config.timestamp_generator:
        try:
            test_timestamp = config.timestamp_generator()
        except Exception as e:
            raise ConfigurationError(
                f"Timestamp generator failed: {e}",
                "INVALID_CONFIG",
                {"original_error": str(e)}
            ) from e
        if not isinstance(test_timestamp, int) or test_timestamp <= 0:
            raise ConfigurationError(
                "Timestamp generator must return positive millisecond timestamp",
                "INVALID_CONFIG"
            )
