"""
Typed request and response layer for the Seewo API

Endpoints are declared as dataclasses deriving from SeewoTypedRequest: the
class attributes give method, URI template and response model, and the
overridable hooks supply template variables, query parameters, headers and
body. Response models derive from JsonModel and decode themselves from the
JSON body.
"""

import json
from dataclasses import dataclass, field, fields, MISSING
from datetime import timedelta
from typing import (
    Any, Callable, Dict, Generic, List, Optional, Type, TypeVar, TYPE_CHECKING
)

from .exceptions import DecodeError
from .signing.types import HttpMethod, KvPairs, SeewoRequest

if TYPE_CHECKING:
    from .http_client import SeewoClient, SeewoResponse

T = TypeVar('T')
M = TypeVar('M', bound='JsonModel')

Decoder = Callable[[Any], Any]
Encoder = Callable[[Any], Any]


def to_camel_case(name: str) -> str:
    """Convert snake_case to camelCase."""
    head, *tail = name.split('_')
    return head + ''.join(part.capitalize() for part in tail)


def json_field(
    name: Optional[str] = None,
    decoder: Optional[Decoder] = None,
    encoder: Optional[Encoder] = None,
    **kwargs: Any
):
    """
    Declare a dataclass field with JSON mapping metadata.

    Args:
        name: JSON key (defaults to the camelCase field name)
        decoder: Converts the JSON value to the field value
        encoder: Converts the field value to the JSON value
        **kwargs: Passed through to dataclasses.field
    """
    metadata = {'json_name': name, 'decoder': decoder, 'encoder': encoder}
    return field(metadata=metadata, **kwargs)


# Decoders

def as_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer, got {value!r}")
    return value


def as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {value!r}")
    return value


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return as_str(value)


def empty_as_none(value: Any) -> Optional[str]:
    """Empty string decodes to None."""
    if value is None or value == "":
        return None
    return as_str(value)


def seconds(value: Any) -> timedelta:
    return timedelta(seconds=as_int(value))


def total_seconds(value: timedelta) -> int:
    return int(value.total_seconds())


def list_of(model: Type['JsonModel']) -> Decoder:
    def decode(value: Any) -> List[Any]:
        if not isinstance(value, list):
            raise TypeError(f"expected list, got {value!r}")
        return [model.from_dict(item) for item in value]
    return decode


class JsonModel:
    """
    Mixin for dataclasses that map to camelCase JSON objects.

    Fields with a value of None are skipped when encoding.
    """

    @classmethod
    def from_dict(cls: Type[M], data: Any) -> M:
        """
        Decode an instance from a parsed JSON object.

        Raises:
            KeyError: If a required key is missing
            TypeError: If the data or a value has the wrong type
        """
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")

        kwargs = {}
        for f in fields(cls):
            key = f.metadata.get('json_name') or to_camel_case(f.name)
            decoder = f.metadata.get('decoder')

            if key not in data:
                if f.default is MISSING and f.default_factory is MISSING:
                    raise KeyError(f"{cls.__name__}.{key}")
                continue

            value = data[key]
            kwargs[f.name] = decoder(value) if decoder else value

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Encode to a JSON-ready dict."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            key = f.metadata.get('json_name') or to_camel_case(f.name)
            encoder = f.metadata.get('encoder')
            result[key] = encoder(value) if encoder else _encode_value(value)
        return result


def _encode_value(value: Any) -> Any:
    if isinstance(value, JsonModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


def encode_json_body(model: JsonModel) -> bytes:
    """Serialize a model to compact UTF-8 JSON bytes."""
    return json.dumps(model.to_dict(), separators=(',', ':'), ensure_ascii=False).encode('utf-8')


@dataclass
class SeewoTypedResponse(Generic[T]):
    """Response whose body has been decoded into a model."""
    request_id: Optional[str]
    message: Optional[str]
    body: T

    @classmethod
    def from_response(cls, response: 'SeewoResponse', model: Type[T]) -> 'SeewoTypedResponse[T]':
        """
        Decode a normalized response into the given model.

        Raises:
            DecodeError: If the body does not match the model
        """
        try:
            body = model.from_dict(response.body)
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(
                f"Response body does not match {model.__name__}: {e}",
                {"request_id": response.request_id}
            ) from e

        return cls(request_id=response.request_id, message=response.message, body=body)


class SeewoTypedRequest:
    """
    Base class for declarative endpoint requests.

    Subclasses set METHOD, URI and RESPONSE and override the hooks they need.
    """
    METHOD: HttpMethod = HttpMethod.GET
    URI: str = ""
    RESPONSE: Type[JsonModel]

    def vars(self) -> KvPairs:
        return {}

    def queries(self) -> KvPairs:
        return {}

    def headers(self) -> KvPairs:
        return {}

    def body(self) -> Optional[bytes]:
        return None

    def into_request(self) -> SeewoRequest:
        """Build the logical request for this endpoint."""
        return SeewoRequest(
            method=self.METHOD,
            uri=self.URI,
            vars=self.vars(),
            queries=self.queries(),
            headers=self.headers(),
            body=self.body()
        )

    def invoke(self, client: 'SeewoClient') -> SeewoTypedResponse:
        """
        Send this request with the given client and decode the response.

        Raises:
            SeewoSDKError: Any error from signing, sending or decoding
        """
        response = client.invoke(self.into_request())
        return SeewoTypedResponse.from_response(response, self.RESPONSE)


class JsonBodyMixin:
    """Send the request dataclass itself as the JSON body."""

    def body(self) -> Optional[bytes]:
        return encode_json_body(self)
