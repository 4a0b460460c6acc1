"""
Client configuration management for Python SDK

Provides the immutable client configuration (credentials, sign type,
deployment stage, timeout) and loaders from environment variables,
JSON strings and JSON files.
"""

import os
import json
from typing import Dict, Optional, Any, Mapping, Union
from dataclasses import dataclass, field
from pathlib import Path

from ..exceptions import ConfigurationError
from ..signing.types import SigningConfig, SignType, Stage, TimestampGenerator
from ..signing.signing_config import validate_signing_config

# Sandbox: https://openapi.test.seewo.com/live/resource/v1/videos
# Production: https://openapi.seewo.com/live/resource/v1/videos
STAGE_HOSTS: Dict[Stage, str] = {
    Stage.DEVELOPMENT: "https://openapi.test.seewo.com",
    Stage.PRODUCTION: "https://openapi.seewo.com",
}

# TODO: allow a per-request timeout once typed requests can carry transport options
DEFAULT_TIMEOUT_SECONDS = 15.0

ENV_APP_ID = "SEEWO_APP_ID"
ENV_APP_SECRET = "SEEWO_APP_SECRET"
ENV_SIGN_TYPE = "SEEWO_SIGN_TYPE"
ENV_STAGE = "SEEWO_STAGE"


def parse_sign_type(value: Optional[str]) -> Optional[SignType]:
    """Parse "hmac"/"md5" (case-insensitive); None if unknown."""
    if not value:
        return None
    try:
        return SignType(value.strip().lower())
    except ValueError:
        return None


def parse_stage(value: Optional[str]) -> Optional[Stage]:
    """Parse "Development"/"Production" (case-insensitive); None if unknown."""
    if not value:
        return None
    normalized = value.strip().lower()
    for stage in Stage:
        if stage.value.lower() == normalized:
            return stage
    return None


@dataclass(frozen=True)
class ClientConfig:
    """
    Configuration for a Seewo API client

    Attributes:
        app_id: Application identifier
        app_secret: Application secret
        sign_type: Signature algorithm
        stage: Deployment stage selecting the API host
        timeout: Request timeout in seconds
    """
    app_id: str
    app_secret: str = field(repr=False)
    sign_type: SignType = SignType.HMAC
    stage: Stage = Stage.PRODUCTION
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self):
        """Coerce string enums"""
        if not isinstance(self.sign_type, SignType):
            sign_type = parse_sign_type(self.sign_type)
            if sign_type is None:
                raise ValueError(f"unknown sign_type {self.sign_type!r}")
            object.__setattr__(self, 'sign_type', sign_type)

        if not isinstance(self.stage, Stage):
            stage = parse_stage(self.stage)
            if stage is None:
                raise ValueError(f"unknown stage {self.stage!r}")
            object.__setattr__(self, 'stage', stage)

    @property
    def host(self) -> str:
        """Base URL for the configured stage"""
        return STAGE_HOSTS[self.stage]

    def to_signing_config(self, timestamp_generator: Optional[TimestampGenerator] = None) -> SigningConfig:
        """Convert to signing configuration"""
        return SigningConfig(
            app_id=self.app_id,
            app_secret=self.app_secret,
            sign_type=self.sign_type,
            timestamp_generator=timestamp_generator
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ClientConfig':
        """
        Load configuration from environment variables.

        SEEWO_APP_ID and SEEWO_APP_SECRET are required. Unknown values of
        SEEWO_SIGN_TYPE or SEEWO_STAGE fall back to the defaults.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            ClientConfig: Loaded configuration

        Raises:
            ConfigurationError: If a required variable is missing
        """
        if environ is None:
            environ = os.environ

        app_id = environ.get(ENV_APP_ID)
        if not app_id:
            raise ConfigurationError(f"{ENV_APP_ID} is not set", "MISSING_APP_ID")

        app_secret = environ.get(ENV_APP_SECRET)
        if not app_secret:
            raise ConfigurationError(f"{ENV_APP_SECRET} is not set", "INVALID_SECRET")

        return cls(
            app_id=app_id,
            app_secret=app_secret,
            sign_type=parse_sign_type(environ.get(ENV_SIGN_TYPE)) or SignType.HMAC,
            stage=parse_stage(environ.get(ENV_STAGE)) or Stage.PRODUCTION
        )

    @classmethod
    def from_json(cls, json_string: str) -> 'ClientConfig':
        """Load client configuration from JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR") from e

        try:
            return cls.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Invalid configuration format: {e}", "INVALID_FORMAT") from e

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'ClientConfig':
        """Load client configuration from file"""
        try:
            path = Path(file_path)
            with open(path, 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}", "FILE_ERROR") from e
        return cls.from_json(json_string)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClientConfig':
        """Build configuration from a parsed JSON object"""
        return cls(
            app_id=data['app_id'],
            app_secret=data['app_secret'],
            sign_type=data.get('sign_type') or SignType.HMAC,
            stage=data.get('stage') or Stage.PRODUCTION,
            timeout=float(data.get('timeout', DEFAULT_TIMEOUT_SECONDS))
        )


def validate_client_config(config: ClientConfig) -> None:
    """
    Validate client configuration.

    Args:
        config: Client configuration to validate

    Raises:
        ConfigurationError: If configuration is invalid
    """
    if not isinstance(config, ClientConfig):
        raise ConfigurationError(
            "Configuration must be ClientConfig instance",
            "INVALID_CONFIG"
        )

    if config.stage not in STAGE_HOSTS:
        raise ConfigurationError(
            f"Unknown stage: {config.stage}",
            "INVALID_STAGE",
            {"available_stages": [s.value for s in STAGE_HOSTS]}
        )

    if config.timeout <= 0:
        raise ConfigurationError("Timeout must be positive", "INVALID_TIMEOUT")

    validate_signing_config(config.to_signing_config())


def load_client_config(
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None
) -> ClientConfig:
    """
    Load client configuration from a file if given, otherwise from environment.

    Args:
        config_file: Optional path to JSON configuration file
        environ: Optional mapping to read instead of os.environ

    Returns:
        ClientConfig: Loaded configuration
    """
    if config_file is not None:
        return ClientConfig.from_file(config_file)
    return ClientConfig.from_env(environ)
