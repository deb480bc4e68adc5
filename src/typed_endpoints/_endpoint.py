"""Immutable endpoint definitions and their copy-on-write builder.

Examples:
    ```python
    from typed_endpoints import EndpointBuilder, HttpMethod

    login = (
        EndpointBuilder.base("https://api.example.com/")
        .headers({"Content-Type": "application/json"})
        .url("api/v1/thing/{id}")
        .method(HttpMethod.POST)
        .expects(lambda login, password: {"login": login, "password": password})
        .build()
    )

    request = login.to_request({"id": "42"}, "user@x.com", "secret")
    ```
"""

import inspect
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from ._config import ClientConfig
from ._utils import (
    PathTemplate,
    RequestInit,
    RequestSpec,
    assemble_body,
    join_url,
    merge_headers,
)
from ._utils.constants import RESERVED_OPTION_KEYS
from .models.decoding import DecodeFailure, DecodeSuccess, Decoder, as_decoder, identity
from .models.errors import BodySelectorError, UnsupportedMethodError

HeaderProvider = Callable[[], Mapping[str, str]]
BodySelector = Callable[..., Any]


class HttpMethod(str, Enum):
    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, value: Union["HttpMethod", str]) -> "HttpMethod":
        if isinstance(value, HttpMethod):
            return value
        if isinstance(value, str):
            try:
                return cls(value.upper())
            except ValueError:
                pass
        raise UnsupportedMethodError(value)

    @property
    def is_mutation(self) -> bool:
        return self in MUTATION_METHODS


QUERY_METHODS = frozenset({HttpMethod.GET, HttpMethod.HEAD, HttpMethod.OPTIONS})
MUTATION_METHODS = frozenset(
    {HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH, HttpMethod.DELETE}
)


def _no_headers() -> Mapping[str, str]:
    return {}


def _no_body() -> None:
    return None


@dataclass(frozen=True)
class EndpointDefinition:
    template: PathTemplate = PathTemplate("/")
    method: HttpMethod = HttpMethod.GET
    header_provider: HeaderProvider = _no_headers
    body_selector: BodySelector = _no_body
    output_decoder: Decoder[Any] = identity
    extra_options: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({})
    )
    base_url: Optional[str] = None


def _merging_provider(
    previous: HeaderProvider, headers: Mapping[str, str]
) -> HeaderProvider:
    snapshot = dict(headers)

    def provide() -> Mapping[str, str]:
        return merge_headers(previous(), snapshot)

    return provide


def _callable_name(func: Callable[..., Any]) -> str:
    return getattr(func, "__qualname__", None) or type(func).__name__


class EndpointBuilder:
    """Fluent builder for endpoints.

    Every method returns a new builder; the receiver is never modified, so a
    partially configured builder can be shared and specialized freely.
    """

    def __init__(self, definition: Optional[EndpointDefinition] = None) -> None:
        self._definition = definition or EndpointDefinition()

    @classmethod
    def base(cls, base_url: str) -> "EndpointBuilder":
        return cls(EndpointDefinition(base_url=base_url))

    @classmethod
    def from_url(cls, template: str) -> "EndpointBuilder":
        return cls(EndpointDefinition(template=PathTemplate(template)))

    @classmethod
    def from_config(cls, config: ClientConfig) -> "EndpointBuilder":
        builder = cls(EndpointDefinition(base_url=config.base_url))
        if config.headers:
            builder = builder.headers(config.headers)
        return builder

    @property
    def definition(self) -> EndpointDefinition:
        return self._definition

    def _with(self, **changes: Any) -> "EndpointBuilder":
        return EndpointBuilder(replace(self._definition, **changes))

    def url(self, template: str) -> "EndpointBuilder":
        return self._with(template=PathTemplate(template))

    def base_url(self, base_url: Optional[str]) -> "EndpointBuilder":
        return self._with(base_url=base_url)

    def method(self, method: Union[HttpMethod, str]) -> "EndpointBuilder":
        return self._with(method=HttpMethod.parse(method))

    def expects(self, selector: BodySelector) -> "EndpointBuilder":
        """Set the function that maps call arguments to the request body.

        The selector's signature is the call-site contract: the positional
        arguments given to ``to_request_init``/``to_request`` must bind to it.
        """
        if not callable(selector):
            raise TypeError(f"Body selector must be callable, got {selector!r}")
        return self._with(body_selector=selector)

    def returns(self, decoder: Any) -> "EndpointBuilder":
        """Set the decoder used by ``Endpoint.to_validation``.

        Accepts a pydantic model class, a ``TypeAdapter``, any type annotation,
        an object with an ``is_`` predicate, or a decoder callable.
        """
        return self._with(output_decoder=as_decoder(decoder))

    def headers(
        self, headers: Union[Mapping[str, str], HeaderProvider]
    ) -> "EndpointBuilder":
        """Configure request headers.

        A mapping is merged on top of the headers configured so far, later
        values winning. A zero-argument callable replaces the provider
        entirely and is called again for every request, which suits values
        such as timestamps or short-lived tokens.
        """
        if isinstance(headers, Mapping):
            return self._with(
                header_provider=_merging_provider(
                    self._definition.header_provider, headers
                )
            )
        if callable(headers):
            return self._with(header_provider=headers)
        raise TypeError(
            f"Headers must be a mapping or a zero-argument callable, got {headers!r}"
        )

    def options(self, extra: Mapping[str, Any]) -> "EndpointBuilder":
        reserved = sorted(RESERVED_OPTION_KEYS.intersection(extra))
        if reserved:
            raise ValueError(
                f"Options {reserved} are managed by the endpoint and cannot be set"
            )
        merged = {**self._definition.extra_options, **extra}
        return self._with(extra_options=MappingProxyType(merged))

    def build(self) -> "Endpoint":
        return Endpoint(self._definition)

    def __repr__(self) -> str:
        return f"EndpointBuilder({self._definition!r})"


class Endpoint:
    """A finished, immutable description of one HTTP operation.

    Endpoints are safe to share between threads and tasks: producing a request
    reads the definition but never changes it.
    """

    def __init__(self, definition: EndpointDefinition) -> None:
        self._definition = definition

    @property
    def definition(self) -> EndpointDefinition:
        return self._definition

    @property
    def method(self) -> HttpMethod:
        return self._definition.method

    @property
    def template(self) -> str:
        return self._definition.template.template

    @property
    def path_parameters(self) -> tuple[str, ...]:
        return self._definition.template.parameter_names

    def to_url(self, path_params: Optional[Mapping[str, Any]] = None) -> str:
        """Substitute path parameters and prepend the base URL, if any.

        Raises:
            MissingParameterError: If a placeholder has no value.
        """
        path = self._definition.template.substitute(path_params or {})
        if self._definition.base_url is None:
            return path
        return join_url(self._definition.base_url, path)

    def to_request_init(self, *args: Any) -> RequestInit:
        """Build method, headers, body and options from the body arguments.

        No I/O happens here.

        Raises:
            BodySelectorError: If the arguments do not fit the body selector
                or the selector raises.
        """
        value = self._select_body(args)
        headers = dict(self._definition.header_provider())
        assembled = assemble_body(value, headers)
        return RequestInit(
            method=self._definition.method.value,
            headers=assembled.headers,
            body=assembled.body,
            body_kind=assembled.kind,
            options=dict(self._definition.extra_options),
        )

    def to_request(
        self, path_params: Optional[Mapping[str, Any]] = None, *args: Any
    ) -> RequestSpec:
        return RequestSpec.from_init(self.to_url(path_params), self.to_request_init(*args))

    def to_validation(self, raw: Any) -> "DecodeSuccess[Any] | DecodeFailure":
        return self._definition.output_decoder(raw)

    def to_builder(self) -> EndpointBuilder:
        return EndpointBuilder(self._definition)

    def _select_body(self, args: tuple[Any, ...]) -> Any:
        selector = self._definition.body_selector
        name = _callable_name(selector)

        try:
            signature: Optional[inspect.Signature] = inspect.signature(selector)
        except (TypeError, ValueError):
            # some builtins expose no signature
            signature = None

        if signature is not None:
            try:
                signature.bind(*args)
            except TypeError as e:
                raise BodySelectorError(
                    name, f"arguments {args!r} do not match signature {signature}"
                ) from e

        try:
            return selector(*args)
        except Exception as e:
            raise BodySelectorError(name, str(e) or type(e).__name__) from e

    def __repr__(self) -> str:
        target = self.template
        if self._definition.base_url is not None:
            target = join_url(self._definition.base_url, target)
        return f"Endpoint({self.method.value} {target})"
