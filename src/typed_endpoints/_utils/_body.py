"""Classification of request bodies.

A body selector may return a value that is already fit for the wire (text,
bytes, a form, a stream, url-encoded parameters) or an arbitrary object that
has to be JSON encoded first. The set of wire types is closed and enumerated
by ``BodyKind``.
"""

import io
from collections.abc import AsyncIterator, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

from httpx import QueryParams
from pydantic_core import to_json

from ._headers import find_header
from .constants import CONTENT_TYPE_JSON, HEADER_CONTENT_TYPE


class BodyKind(str, Enum):
    NONE = "none"
    TEXT = "text"
    BINARY = "binary"
    BINARY_VIEW = "binary_view"
    FORM = "form"
    URL_ENCODED = "url_encoded"
    STREAM = "stream"
    JSON = "json"

    @property
    def is_pass_through(self) -> bool:
        return self not in (BodyKind.NONE, BodyKind.JSON)


@dataclass(frozen=True)
class MultipartForm:
    """A multipart form payload.

    ``fields`` and ``files`` are handed to httpx as ``data=`` and ``files=``
    respectively, so any shape httpx accepts for those works here.
    """

    fields: Mapping[str, Any] = field(default_factory=dict)
    files: Any = None


class AssembledBody(NamedTuple):
    body: Any
    kind: BodyKind
    headers: dict[str, str]


def classify_body(value: Any) -> BodyKind:
    """Classify a body selector result.

    Raises:
        TypeError: For text-mode streams; only binary streams go on the wire.
    """
    if value is None:
        return BodyKind.NONE
    if isinstance(value, str):
        return BodyKind.TEXT
    if isinstance(value, (bytes, bytearray)):
        return BodyKind.BINARY
    if isinstance(value, memoryview):
        return BodyKind.BINARY_VIEW
    if isinstance(value, MultipartForm):
        return BodyKind.FORM
    if isinstance(value, QueryParams):
        return BodyKind.URL_ENCODED
    if isinstance(value, io.TextIOBase):
        raise TypeError(
            f"Text stream {value!r} cannot be sent as a body; open it in binary mode"
        )
    if isinstance(value, (io.RawIOBase, io.BufferedIOBase, Iterator, AsyncIterator)):
        return BodyKind.STREAM
    return BodyKind.JSON


def encode_json(value: Any) -> str:
    return to_json(value).decode("utf-8")


def assemble_body(
    value: Any, headers: Optional[Mapping[str, str]] = None
) -> AssembledBody:
    """Turn a body selector result into a wire body.

    Pass-through values are returned as they are with the headers untouched.
    Anything else is JSON encoded, and ``Content-Type: application/json`` is
    added unless the headers already carry a content type.

    Args:
        value: Whatever the body selector returned.
        headers: Headers produced by the endpoint's header provider.

    Returns:
        AssembledBody: The body, its kind and the resulting headers.
    """
    headers = dict(headers or {})
    kind = classify_body(value)

    if kind is not BodyKind.JSON:
        return AssembledBody(value, kind, headers)

    if find_header(headers, HEADER_CONTENT_TYPE) is None:
        headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
    return AssembledBody(encode_json(value), kind, headers)
