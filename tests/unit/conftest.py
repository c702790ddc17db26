import json
import logging
from collections.abc import Iterator
from typing import Any

import httpx
import pytest

PAYLOAD = {"data": []}

_AsyncClient = httpx.AsyncClient


class RecordingTransport(httpx.MockTransport):
    """Answers every request with ``body`` and remembers what was asked."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.body = json.dumps(PAYLOAD).encode()
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, content=self.body)


class ClientFactory:
    """Stands in for ``httpx.AsyncClient`` and routes it through a transport."""

    def __init__(self, transport: httpx.AsyncBaseTransport) -> None:
        self.transport = transport
        self.clients: list[httpx.AsyncClient] = []
        self.timeouts: list[Any] = []

    def __call__(self, **kwargs: Any) -> httpx.AsyncClient:
        self.timeouts.append(kwargs.get("timeout"))
        client = _AsyncClient(transport=self.transport, **kwargs)
        self.clients.append(client)
        return client


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    # no stray .env file or exported variables may leak into the settings
    monkeypatch.chdir(tmp_path)
    for name in (
        "MONTHLY_CLOUD_STORAGE_URL",
        "MONTHLY_CLOUD_STORAGE_TIMEOUT",
        "MONTHLY_CLOUD_STORAGE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    # the CLI attaches a handler bound to the runner's captured stderr
    logger = logging.getLogger("monthly_storage")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client_factory(
    monkeypatch: pytest.MonkeyPatch, transport: RecordingTransport
) -> ClientFactory:
    factory = ClientFactory(transport)
    monkeypatch.setattr(httpx, "AsyncClient", factory)
    return factory
