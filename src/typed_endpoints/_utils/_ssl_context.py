import ssl
from typing import TYPE_CHECKING, Any, Optional

import truststore

if TYPE_CHECKING:
    from .._config import ClientConfig


def create_ssl_context() -> ssl.SSLContext:
    return truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def get_httpx_client_kwargs(config: Optional["ClientConfig"] = None) -> dict[str, Any]:
    """Keyword arguments shared by every httpx client the library creates."""
    from .._config import ClientConfig

    config = config or ClientConfig()
    return {
        "verify": create_ssl_context() if config.verify_ssl else False,
        "timeout": config.timeout,
        "follow_redirects": config.follow_redirects,
        "headers": dict(config.headers),
    }
