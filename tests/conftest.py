from collections.abc import Callable, Iterator

import httpx
import pytest

from tgaudio.config import ENV_API_BASE, ENV_BOT_TOKEN

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_BOT_TOKEN, raising=False)
    monkeypatch.delenv(ENV_API_BASE, raising=False)


@pytest.fixture
def requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(
    requests: list[httpx.Request],
) -> Iterator[Callable[[Handler], httpx.Client]]:
    clients: list[httpx.Client] = []

    def _factory(handler: Handler) -> httpx.Client:
        def _recording(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_recording))
        clients.append(client)
        return client

    yield _factory
    for client in clients:
        client.close()
