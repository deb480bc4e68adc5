"""Decode results and decoder adapters.

A decoder turns a raw response payload into a typed value. Malformed input is
reported as a ``DecodeFailure`` value instead of an exception, so callers
branch on ``result.ok`` explicitly.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Protocol, TypeVar, Union, get_origin

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import DecodeError

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@dataclass(frozen=True)
class DecodeSuccess(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class DecodeFailure:
    error: Any

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise DecodeError(self.error)


DecodeResult = Union[DecodeSuccess[T], DecodeFailure]


class Decoder(Protocol[T_co]):
    def __call__(self, raw: Any) -> "DecodeSuccess[T_co] | DecodeFailure": ...


def identity(raw: Any) -> DecodeSuccess[Any]:
    """Accept any payload unchanged."""
    return DecodeSuccess(raw)


def guard(predicate: Callable[[Any], bool]) -> Decoder[Any]:
    """Build a decoder from a boolean predicate.

    Args:
        predicate: Returns ``True`` when the payload has the expected shape.

    Returns:
        A decoder yielding the payload itself on success, or a failure naming
        the predicate.
    """
    name = getattr(predicate, "__name__", type(predicate).__name__)

    def _decode(raw: Any) -> "DecodeSuccess[Any] | DecodeFailure":
        if predicate(raw):
            return DecodeSuccess(raw)
        return DecodeFailure(f"payload rejected by '{name}'")

    return _decode


def from_type_adapter(adapter: TypeAdapter[T]) -> Decoder[T]:
    def _decode(raw: Any) -> "DecodeSuccess[T] | DecodeFailure":
        try:
            return DecodeSuccess(adapter.validate_python(raw))
        except ValidationError as e:
            return DecodeFailure(e.errors(include_url=False))

    return _decode


def _is_annotation(value: Any) -> bool:
    if isinstance(value, type):
        return True
    # typing constructs such as list[int], Optional[X], int | None or Annotated[...]
    return get_origin(value) is not None


def as_decoder(value: Any) -> Decoder[Any]:
    """Normalize whatever ``returns()`` was given into a decoder.

    Accepted inputs, checked in this order:

    - a pydantic ``TypeAdapter``
    - a pydantic model class
    - an object or class exposing an ``is_`` predicate method
    - any other type or typing annotation
    - a decoder callable returning ``DecodeSuccess`` / ``DecodeFailure``
    """
    if isinstance(value, TypeAdapter):
        return from_type_adapter(value)
    if isinstance(value, type) and issubclass(value, BaseModel):
        return from_type_adapter(TypeAdapter(value))
    if callable(getattr(value, "is_", None)):
        return guard(value.is_)
    if _is_annotation(value):
        return from_type_adapter(TypeAdapter(value))
    if callable(value):
        return value
    raise TypeError(f"Cannot build a decoder from {value!r}")
