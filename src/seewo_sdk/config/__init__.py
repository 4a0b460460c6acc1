"""
Configuration management for Seewo Python SDK

This module provides the client configuration and its loaders.
"""

from .client_config import (
    ClientConfig,
    STAGE_HOSTS,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_APP_ID,
    ENV_APP_SECRET,
    ENV_SIGN_TYPE,
    ENV_STAGE,
    parse_sign_type,
    parse_stage,
    validate_client_config,
    load_client_config,
)

__all__ = [
    'ClientConfig',
    'STAGE_HOSTS',
    'DEFAULT_TIMEOUT_SECONDS',
    'ENV_APP_ID',
    'ENV_APP_SECRET',
    'ENV_SIGN_TYPE',
    'ENV_STAGE',
    'parse_sign_type',
    'parse_stage',
    'validate_client_config',
    'load_client_config',
]
