"""Hook pipeline around a single HTTP request.

Hooks are like middleware, except that a hook can't stop the request flow and
is not required to return anything. Each phase holds an ordered sequence of
hooks; composing middlewares appends, so base hooks always run first.
"""

from dataclasses import dataclass
from logging import getLogger
from typing import Any, Callable, Mapping, Optional, TypedDict

from httpx import Response

from ._endpoint import Endpoint
from ._transport import AsyncHttpxTransport, AsyncTransport, HttpxTransport, Transport
from ._utils import RequestSpec
from ._utils.constants import LOGGER_NAME
from .models.decoding import DecodeFailure, DecodeSuccess

OnCreated = Callable[[RequestSpec], Optional[RequestSpec]]
OnSuccess = Callable[[Response], Optional[Response]]
OnFailure = Callable[[BaseException], Optional[BaseException]]
OnSettled = Callable[[], None]


class Hooks(TypedDict, total=False):
    """A partial set of hooks, at most one per phase.

    Attributes:
        on_created: Runs before the request is dispatched; returns a
            replacement request or ``None`` to keep it.
        on_success: Runs after a successful dispatch; returns a replacement
            response or ``None``. Only inspect metadata (status, headers)
            here, leave the body to the caller.
        on_failure: Runs when a creation hook, the dispatch or a success hook
            raised; returns a replacement exception or ``None``. The failure
            is always re-raised, avoid raising inside this hook.
        on_settled: Runs unconditionally once the request is over. Must not
            raise, or it masks the outcome of the request.
    """

    on_created: OnCreated
    on_success: OnSuccess
    on_failure: OnFailure
    on_settled: OnSettled


@dataclass(frozen=True)
class HookSequences:
    on_created: tuple[OnCreated, ...] = ()
    on_success: tuple[OnSuccess, ...] = ()
    on_failure: tuple[OnFailure, ...] = ()
    on_settled: tuple[OnSettled, ...] = ()

    @classmethod
    def from_hooks(cls, hooks: Hooks) -> "HookSequences":
        return cls(
            on_created=_single(hooks.get("on_created")),
            on_success=_single(hooks.get("on_success")),
            on_failure=_single(hooks.get("on_failure")),
            on_settled=_single(hooks.get("on_settled")),
        )

    @staticmethod
    def concat(target: "HookSequences", source: "HookSequences") -> "HookSequences":
        return HookSequences(
            on_created=target.on_created + source.on_created,
            on_success=target.on_success + source.on_success,
            on_failure=target.on_failure + source.on_failure,
            on_settled=target.on_settled + source.on_settled,
        )


def _single(hook: Optional[Callable[..., Any]]) -> tuple[Any, ...]:
    return (hook,) if hook is not None else ()


def _hooks(
    on_created: Optional[OnCreated],
    on_success: Optional[OnSuccess],
    on_failure: Optional[OnFailure],
    on_settled: Optional[OnSettled],
) -> Hooks:
    hooks: Hooks = {}
    if on_created is not None:
        hooks["on_created"] = on_created
    if on_success is not None:
        hooks["on_success"] = on_success
    if on_failure is not None:
        hooks["on_failure"] = on_failure
    if on_settled is not None:
        hooks["on_settled"] = on_settled
    return hooks


class Middleware:
    """Ordered hook sequences plus the transport they wrap.

    A middleware is immutable once created; ``extend`` derives a new one. When
    no transport is injected, every send uses a fresh httpx client that is
    closed as soon as the request is over.
    """

    def __init__(
        self,
        hooks: HookSequences,
        transport: Optional[Transport] = None,
        async_transport: Optional[AsyncTransport] = None,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._hooks = hooks
        self._transport = transport
        self._async_transport = async_transport

    @classmethod
    def create(
        cls,
        *,
        on_created: Optional[OnCreated] = None,
        on_success: Optional[OnSuccess] = None,
        on_failure: Optional[OnFailure] = None,
        on_settled: Optional[OnSettled] = None,
        transport: Optional[Transport] = None,
        async_transport: Optional[AsyncTransport] = None,
    ) -> "Middleware":
        hooks = _hooks(on_created, on_success, on_failure, on_settled)
        return cls(HookSequences.from_hooks(hooks), transport, async_transport)

    @classmethod
    def extend(
        cls,
        middleware: "Middleware",
        *,
        on_created: Optional[OnCreated] = None,
        on_success: Optional[OnSuccess] = None,
        on_failure: Optional[OnFailure] = None,
        on_settled: Optional[OnSettled] = None,
        transport: Optional[Transport] = None,
        async_transport: Optional[AsyncTransport] = None,
    ) -> "Middleware":
        """Append hooks to a copy of ``middleware``.

        The existing hooks run before the new ones in every phase. Transports
        are inherited unless overridden.
        """
        hooks = _hooks(on_created, on_success, on_failure, on_settled)
        return cls(
            HookSequences.concat(middleware.hooks, HookSequences.from_hooks(hooks)),
            transport or middleware._transport,
            async_transport or middleware._async_transport,
        )

    @property
    def hooks(self) -> HookSequences:
        return self._hooks

    def send(self, request: RequestSpec) -> Response:
        """Run ``request`` through the hooks and the transport.

        Returns:
            Response: The response after all success hooks ran.

        Raises:
            Exception: Whatever failed, after every failure hook had the chance
                to replace it. Settled hooks run in every case.
        """
        try:
            request = self._run_created(request)
            self._logger.debug(f"Request: {request.method} {request.url}")
            if self._transport is not None:
                response = self._transport(request)
            else:
                with HttpxTransport() as transport:
                    response = transport(request)
            self._logger.debug(f"Response: {response.status_code} {request.url}")
            return self._run_success(response)
        except Exception as failure:
            error = self._run_failure(failure)
            if error is failure:
                raise
            raise error from failure
        finally:
            self._run_settled()

    async def send_async(self, request: RequestSpec) -> Response:
        """Asynchronously run ``request`` through the hooks and the transport.

        Hooks are plain functions; the transport call is the only await.
        """
        try:
            request = self._run_created(request)
            self._logger.debug(f"Request: {request.method} {request.url}")
            if self._async_transport is not None:
                response = await self._async_transport(request)
            else:
                async with AsyncHttpxTransport() as transport:
                    response = await transport(request)
            self._logger.debug(f"Response: {response.status_code} {request.url}")
            return self._run_success(response)
        except Exception as failure:
            error = self._run_failure(failure)
            if error is failure:
                raise
            raise error from failure
        finally:
            self._run_settled()

    def call(
        self,
        endpoint: Endpoint,
        path_params: Optional[Mapping[str, Any]] = None,
        *args: Any,
    ) -> "DecodeSuccess[Any] | DecodeFailure":
        """Build a request from ``endpoint``, send it and decode the JSON body.

        Examples:
            ```python
            result = middleware.call(get_thing, {"id": "42"})
            if result.ok:
                thing = result.value
            ```
        """
        response = self.send(endpoint.to_request(path_params, *args))
        response.read()
        return _decode(endpoint, response)

    async def call_async(
        self,
        endpoint: Endpoint,
        path_params: Optional[Mapping[str, Any]] = None,
        *args: Any,
    ) -> "DecodeSuccess[Any] | DecodeFailure":
        response = await self.send_async(endpoint.to_request(path_params, *args))
        await response.aread()
        return _decode(endpoint, response)

    def _run_created(self, request: RequestSpec) -> RequestSpec:
        for hook in self._hooks.on_created:
            replacement = hook(request)
            if replacement is not None:
                request = replacement
        return request

    def _run_success(self, response: Response) -> Response:
        for hook in self._hooks.on_success:
            replacement = hook(response)
            if replacement is not None:
                response = replacement
        return response

    def _run_failure(self, failure: Exception) -> BaseException:
        error: BaseException = failure
        for hook in self._hooks.on_failure:
            replacement = hook(error)
            if replacement is None:
                continue
            if not isinstance(replacement, BaseException):
                raise TypeError(
                    f"Failure hook {_name(hook)} returned {replacement!r}; "
                    "expected an exception or None"
                ) from failure
            error = replacement
        if error is not failure:
            self._logger.debug(
                f"Failure replaced: {type(failure).__name__} -> {type(error).__name__}"
            )
        return error

    def _run_settled(self) -> None:
        for hook in self._hooks.on_settled:
            hook()

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{phase}={len(getattr(self._hooks, phase))}"
            for phase in ("on_created", "on_success", "on_failure", "on_settled")
        )
        return f"Middleware({counts})"


def _name(hook: Callable[..., Any]) -> str:
    return getattr(hook, "__qualname__", None) or type(hook).__name__


def _decode(endpoint: Endpoint, response: Response) -> "DecodeSuccess[Any] | DecodeFailure":
    if not response.content:
        return endpoint.to_validation(None)
    try:
        payload = response.json()
    except ValueError as e:
        return DecodeFailure(f"Response body is not valid JSON: {e}")
    return endpoint.to_validation(payload)
