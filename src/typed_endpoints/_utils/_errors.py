from contextlib import contextmanager
from typing import Generator

import httpx

from ..models.errors import TransportError


@contextmanager
def handle_errors(method: str, url: str) -> Generator[None, None, None]:
    """Context manager converting httpx failures into ``TransportError``.

    Only errors raised by httpx itself are converted; anything else raised
    inside the block propagates unchanged.

    Yields:
        None: The context manager yields control to the wrapped code.

    Raises:
        TransportError: When httpx could not complete the request.
    """
    try:
        yield
    except httpx.TimeoutException as e:
        raise TransportError(
            f"Request timed out: {method} {url}", method=method, url=url
        ) from e
    except httpx.HTTPError as e:
        raise TransportError(
            f"Request failed: {method} {url}: {e}", method=method, url=url
        ) from e
