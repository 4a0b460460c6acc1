"""
Utility functions for request signing

This module provides utility functions for the Seewo signature scheme,
including URI template resolution, timestamp generation, MD5 helpers
and HTTP header validation.
"""

import time
import hashlib
import re
from string import Formatter
from typing import Mapping

from ..exceptions import TemplateError, HeaderError


# RFC 7230 token characters
_HEADER_NAME_PATTERN = re.compile(r'^[!#$%&\'*+\-.0-9A-Z^_`a-z|~]+$')
# Anything other than horizontal tab and visible ASCII (including space)
_HEADER_VALUE_FORBIDDEN = re.compile(r'[^\t\x20-\x7e]')


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp in milliseconds since epoch
    """
    return time.time_ns() // 1_000_000


def resolve_uri_template(template: str, variables: Mapping[str, str]) -> str:
    """
    Substitute {name} placeholders in a URI template.

    Doubled braces ({{ and }}) produce literal braces. A placeholder may carry
    a format spec ({name:>4}); conversions and attribute/index access are
    not supported.

    Args:
        template: URI template, e.g. "/live/{x}/y"
        variables: Values for the placeholders

    Returns:
        str: Resolved path

    Raises:
        TemplateError: If a variable is missing or the template is malformed
    """
    parts = []
    try:
        parsed = list(Formatter().parse(template))
    except ValueError as e:
        raise TemplateError(
            f"Malformed URI template: {e}",
            template,
            {"original_error": str(e)}
        ) from e

    for literal, field_name, format_spec, conversion in parsed:
        parts.append(literal)
        if field_name is None:
            continue

        if not field_name or not field_name.isidentifier():
            raise TemplateError(
                f"Invalid placeholder {{{field_name}}} in URI template",
                template,
                {"placeholder": field_name}
            )

        if conversion:
            raise TemplateError(
                f"Conversions are not supported in URI templates: {{{field_name}!{conversion}}}",
                template,
                {"placeholder": field_name}
            )

        if field_name not in variables:
            raise TemplateError(
                f"Missing variable for URI template: {field_name}",
                template,
                {"variable": field_name, "available": sorted(variables)}
            )

        try:
            parts.append(format(str(variables[field_name]), format_spec or ''))
        except ValueError as e:
            raise TemplateError(
                f"Invalid format spec for {field_name}: {e}",
                template,
                {"variable": field_name, "format_spec": format_spec}
            ) from e

    return ''.join(parts)


def md5_hex(data: bytes) -> str:
    """
    Calculate the uppercase hex MD5 digest of raw bytes.

    Args:
        data: Bytes to hash

    Returns:
        str: 32-character uppercase hex digest
    """
    return to_upper_hex(hashlib.md5(data).digest())


def to_upper_hex(data: bytes) -> str:
    """
    Convert bytes to uppercase hex string.

    Args:
        data: Bytes to convert

    Returns:
        str: Uppercase hex string
    """
    return data.hex().upper()


def validate_header_name(name: str) -> bool:
    """
    Validate header name against the RFC 7230 token grammar.

    Args:
        name: Header name to validate

    Returns:
        bool: True if header name is valid
    """
    if not isinstance(name, str):
        return False

    return bool(_HEADER_NAME_PATTERN.match(name))


def validate_header_value(value: str) -> bool:
    """
    Validate header value (visible ASCII, space and tab only, no leading
    whitespace).

    Args:
        value: Header value to validate

    Returns:
        bool: True if header value is valid
    """
    if not isinstance(value, str):
        return False

    if value[:1] in (' ', '\t'):
        return False

    return not _HEADER_VALUE_FORBIDDEN.search(value)


def check_header(name: str, value: str) -> None:
    """
    Raise HeaderError if a header pair cannot be sent over HTTP.

    Args:
        name: Header name
        value: Header value

    Raises:
        HeaderError: Identifying the offending name and value
    """
    if not validate_header_name(name):
        raise HeaderError(
            f"invalid header name, name={name!r}, value={value!r}",
            name,
            value,
            "INVALID_HEADER_NAME"
        )

    if not validate_header_value(value):
        raise HeaderError(
            f"invalid header value, name={name!r}, value={value!r}",
            name,
            value,
            "INVALID_HEADER_VALUE"
        )


class PerformanceTimer:
    """Simple performance timer for monitoring signing operations."""

    def __init__(self):
        self.start_time = time.perf_counter()

    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        return (time.perf_counter() - self.start_time) * 1000
