"""Ready-made hooks for ``Middleware``.

Examples:
    ```python
    from typed_endpoints import Middleware, hooks

    base = Middleware.create(
        on_created=hooks.log_request,
        on_success=hooks.raise_for_status,
        on_failure=hooks.log_failure,
    )
    authed = Middleware.extend(
        base, on_created=hooks.with_headers({"Authorization": "Bearer ..."})
    )
    ```
"""

import logging
from typing import Mapping, Optional

from httpx import Response, ResponseNotRead

from ._utils import RequestSpec, merge_headers
from ._utils.constants import LOGGER_NAME
from .models.errors import HttpStatusError

logger = logging.getLogger(LOGGER_NAME)


def log_request(request: RequestSpec) -> None:
    logger.debug(f"Request: {request.method} {request.url}")
    logger.debug(f"HEADERS: {dict(request.headers)}")


def _request_line(response: Response) -> tuple[Optional[str], Optional[str]]:
    try:
        request = response.request
    except RuntimeError:
        # responses built by hand carry no request
        return None, None
    return request.method, str(request.url)


def log_response(response: Response) -> None:
    method, url = _request_line(response)
    logger.debug(f"Response: {response.status_code} {method} {url}")


def log_failure(failure: BaseException) -> None:
    logger.warning(f"Request failed: {type(failure).__name__}: {failure}")


def raise_for_status(response: Response) -> Optional[Response]:
    """Turn 4xx/5xx responses into ``HttpStatusError``.

    Raising here hands the error to the failure hooks like any other failure.
    """
    if response.status_code < 400:
        return None

    try:
        body = response.text
    except ResponseNotRead:
        body = ""

    method, url = _request_line(response)
    raise HttpStatusError(response.status_code, body, method=method, url=url)


def with_headers(headers: Mapping[str, str]):
    """Build an ``on_created`` hook merging ``headers`` into every request."""
    snapshot = dict(headers)

    def _with_headers(request: RequestSpec) -> RequestSpec:
        return request.replace(headers=merge_headers(request.headers, snapshot))

    return _with_headers
