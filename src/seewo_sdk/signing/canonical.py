"""
Canonical parameter set construction for Seewo request signatures

The server signs the union of query parameters, custom headers and the
generated x-sw-* headers, sorted by key and concatenated as key + value
with no separators. This module builds that sequence and string.
"""

from typing import Mapping, List

from ..exceptions import ValidationError
from .types import ParamPairs

HEADER_SOURCES = ('header', 'protocol header')


class CanonicalParameterSetBuilder:
    """
    Builder for the sorted key/value sequence that is signed
    """

    def __init__(
        self,
        queries: Mapping[str, str],
        headers: Mapping[str, str],
        sw_headers: Mapping[str, str]
    ):
        """
        Initialize canonical parameter set builder.

        Args:
            queries: Query parameters of the logical request
            headers: Custom headers of the logical request
            sw_headers: Generated protocol headers, x-sw-sign excluded
        """
        self.sources = (
            ('query', queries),
            ('header', headers),
            ('protocol header', sw_headers),
        )

    def build(self) -> ParamPairs:
        """
        Merge all sources into one sequence sorted by key.

        Returns:
            list: (key, value) pairs in ascending key order

        Raises:
            ValidationError: If a key appears in more than one source, or two
                header names differ only in case
        """
        seen = {}
        header_names = {}
        params = []

        for source_name, pairs in self.sources:
            for key, value in pairs.items():
                if key in seen:
                    raise ValidationError(
                        f"Parameter '{key}' is given both as {seen[key]} and as {source_name}",
                        "DUPLICATE_PARAMETER",
                        {"key": key, "sources": [seen[key], source_name]}
                    )
                seen[key] = source_name

                # HTTP header names are case-insensitive on the wire
                if source_name in HEADER_SOURCES:
                    folded = key.lower()
                    if folded in header_names:
                        other_key, other_source = header_names[folded]
                        raise ValidationError(
                            f"Header '{key}' ({source_name}) collides with '{other_key}' ({other_source})",
                            "DUPLICATE_PARAMETER",
                            {"key": key, "conflicts_with": other_key, "sources": [other_source, source_name]}
                        )
                    header_names[folded] = (key, source_name)

                params.append((key, value))

        params.sort(key=lambda pair: pair[0])
        return params


def build_canonical_params(
    queries: Mapping[str, str],
    headers: Mapping[str, str],
    sw_headers: Mapping[str, str]
) -> ParamPairs:
    """
    Build the canonical parameter set for signing.

    Args:
        queries: Query parameters
        headers: Custom headers
        sw_headers: Generated protocol headers

    Returns:
        list: Sorted (key, value) pairs
    """
    return CanonicalParameterSetBuilder(queries, headers, sw_headers).build()


def build_signing_string(params: ParamPairs) -> str:
    """
    Concatenate sorted pairs into the string that is hashed.

    Pairs with an empty value are skipped; they are still sent as headers.

    Args:
        params: Sorted (key, value) pairs

    Returns:
        str: key1value1key2value2...
    """
    parts: List[str] = []
    for key, value in params:
        if value:
            parts.append(key)
            parts.append(value)
    return ''.join(parts)
