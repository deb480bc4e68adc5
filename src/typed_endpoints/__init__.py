from . import _hooks as hooks
from ._config import ClientConfig
from ._endpoint import (
    MUTATION_METHODS,
    QUERY_METHODS,
    Endpoint,
    EndpointBuilder,
    EndpointDefinition,
    HttpMethod,
)
from ._middleware import HookSequences, Hooks, Middleware
from ._transport import AsyncHttpxTransport, AsyncTransport, HttpxTransport, Transport
from ._utils import (
    BodyKind,
    MultipartForm,
    PathTemplate,
    RequestInit,
    RequestSpec,
    join_url,
    parameter_names,
    substitute,
)
from .models import (
    BodySelectorError,
    DecodeError,
    DecodeFailure,
    Decoder,
    DecodeResult,
    DecodeSuccess,
    HttpStatusError,
    MissingParameterError,
    PathTemplateError,
    TransportError,
    TypedEndpointsError,
    UnsupportedMethodError,
    as_decoder,
    guard,
    identity,
)

__all__ = [
    "AsyncHttpxTransport",
    "AsyncTransport",
    "BodyKind",
    "BodySelectorError",
    "ClientConfig",
    "DecodeError",
    "DecodeFailure",
    "DecodeResult",
    "DecodeSuccess",
    "Decoder",
    "Endpoint",
    "EndpointBuilder",
    "EndpointDefinition",
    "HookSequences",
    "Hooks",
    "HttpMethod",
    "HttpStatusError",
    "HttpxTransport",
    "MUTATION_METHODS",
    "Middleware",
    "MissingParameterError",
    "MultipartForm",
    "PathTemplate",
    "PathTemplateError",
    "QUERY_METHODS",
    "RequestInit",
    "RequestSpec",
    "Transport",
    "TransportError",
    "TypedEndpointsError",
    "UnsupportedMethodError",
    "as_decoder",
    "guard",
    "hooks",
    "identity",
    "join_url",
    "parameter_names",
    "substitute",
]
