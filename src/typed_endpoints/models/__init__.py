from .decoding import (
    DecodeFailure,
    Decoder,
    DecodeResult,
    DecodeSuccess,
    as_decoder,
    guard,
    identity,
)
from .errors import (
    BodySelectorError,
    DecodeError,
    HttpStatusError,
    MissingParameterError,
    PathTemplateError,
    TransportError,
    TypedEndpointsError,
    UnsupportedMethodError,
)

__all__ = [
    "BodySelectorError",
    "DecodeError",
    "DecodeFailure",
    "DecodeResult",
    "DecodeSuccess",
    "Decoder",
    "HttpStatusError",
    "MissingParameterError",
    "PathTemplateError",
    "TransportError",
    "TypedEndpointsError",
    "UnsupportedMethodError",
    "as_decoder",
    "guard",
    "identity",
]
