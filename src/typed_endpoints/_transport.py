from logging import getLogger
from typing import Any, Awaitable, Optional, Protocol

from httpx import AsyncClient, Client, Response

from ._config import ClientConfig
from ._utils import RequestSpec, get_httpx_client_kwargs, handle_errors
from ._utils.constants import LOGGER_NAME


class Transport(Protocol):
    def __call__(self, request: RequestSpec) -> Response: ...


class AsyncTransport(Protocol):
    def __call__(self, request: RequestSpec) -> Awaitable[Response]: ...


class HttpxTransport:
    """Synchronous transport backed by ``httpx.Client``.

    A client passed in is used as is and left open; a client created here is
    owned by the transport and closed by ``close()``.
    """

    def __init__(
        self, client: Optional[Client] = None, config: Optional[ClientConfig] = None
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._owns_client = client is None
        self._client = client or Client(**get_httpx_client_kwargs(config))

    def __call__(self, request: RequestSpec) -> Response:
        self._logger.debug(f"Dispatching: {request.method} {request.url}")
        with handle_errors(request.method, request.url):
            return self._client.request(
                request.method, request.url, **request.to_httpx_kwargs()
            )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncHttpxTransport:
    def __init__(
        self,
        client: Optional[AsyncClient] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._owns_client = client is None
        self._client = client or AsyncClient(**get_httpx_client_kwargs(config))

    async def __call__(self, request: RequestSpec) -> Response:
        self._logger.debug(f"Dispatching: {request.method} {request.url}")
        with handle_errors(request.method, request.url):
            return await self._client.request(
                request.method, request.url, **request.to_httpx_kwargs()
            )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
