from typing import Any, Iterable, Optional


class TypedEndpointsError(Exception):
    """Base class for every error raised by typed_endpoints."""


class PathTemplateError(TypedEndpointsError, ValueError):
    def __init__(self, template: str, segment: str):
        self.template = template
        self.segment = segment
        self.message = (
            f"Invalid path segment '{segment}' in template '{template}'. "
            "Parameter segments must be exactly '{identifier}'."
        )
        super().__init__(self.message)


class MissingParameterError(TypedEndpointsError):
    """Raised when a path template placeholder has no value.

    The URL is never built with a placeholder left in it; the call fails
    before anything is sent.
    """

    def __init__(self, template: str, missing: Iterable[str]):
        self.template = template
        self.missing = tuple(missing)
        names = ", ".join(f"'{name}'" for name in self.missing)
        self.message = f"Missing path parameter(s) {names} for template '{template}'"
        super().__init__(self.message)


class UnsupportedMethodError(TypedEndpointsError, ValueError):
    def __init__(self, method: Any):
        self.method = method
        self.message = (
            f"Unsupported HTTP method {method!r}. "
            "Expected one of GET, HEAD, OPTIONS, POST, PUT, PATCH, DELETE."
        )
        super().__init__(self.message)


class BodySelectorError(TypedEndpointsError):
    """Raised when the body selector of an endpoint fails.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, selector_name: str, reason: str):
        self.selector_name = selector_name
        self.reason = reason
        self.message = f"Body selector '{selector_name}' failed: {reason}"
        super().__init__(self.message)


class TransportError(TypedEndpointsError):
    """Raised when the transport could not complete the request."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.message = message
        self.method = method
        self.url = url
        super().__init__(self.message)


class HttpStatusError(TransportError):
    def __init__(
        self,
        status_code: int,
        body: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ):
        self.status_code = status_code
        self.body = body
        message = f"HTTP {status_code} for {method} {url}"
        if body:
            message = f"{message}: {body}"
        super().__init__(message, method=method, url=url)


class DecodeError(TypedEndpointsError):
    """Raised by ``DecodeFailure.unwrap`` for callers that prefer exceptions."""

    def __init__(self, failure: Any):
        self.failure = failure
        self.message = f"Response payload could not be decoded: {failure}"
        super().__init__(self.message)
