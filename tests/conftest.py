import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from typed_endpoints import ClientConfig, RequestSpec

# Ensure local source package (src/typed_endpoints) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))


class RecordingTransport:
    """Transport double returning canned responses and recording requests."""

    def __init__(
        self,
        status_code: int = 200,
        json: Any = None,
        content: bytes | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status_code = status_code
        self.json = json
        self.content = content
        self.error = error
        self.requests: list[RequestSpec] = []

    def _respond(self, request: RequestSpec) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        kwargs: dict[str, Any] = {}
        if self.content is not None:
            kwargs["content"] = self.content
        elif self.json is not None:
            kwargs["json"] = self.json
        return httpx.Response(
            self.status_code,
            request=httpx.Request(request.method, request.url),
            **kwargs,
        )

    def __call__(self, request: RequestSpec) -> httpx.Response:
        return self._respond(request)


class AsyncRecordingTransport(RecordingTransport):
    async def __call__(self, request: RequestSpec) -> httpx.Response:  # type: ignore[override]
        return self._respond(request)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        "TYPED_ENDPOINTS_BASE_URL",
        "TYPED_ENDPOINTS_TIMEOUT",
        "TYPED_ENDPOINTS_FOLLOW_REDIRECTS",
        "TYPED_ENDPOINTS_VERIFY_SSL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_url() -> str:
    return "https://api.example.com/"


@pytest.fixture
def config(base_url: str) -> ClientConfig:
    return ClientConfig(base_url=base_url, timeout=5.0)


@pytest.fixture
def transport_factory() -> Callable[..., RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def async_transport_factory() -> Callable[..., AsyncRecordingTransport]:
    return AsyncRecordingTransport
