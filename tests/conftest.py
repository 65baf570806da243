from typing import Awaitable, Callable

import httpx
import pytest

from witsml_client.config import ApiClientSettings
from witsml_client.models.authorization import AuthorizationState
from witsml_client.models.server import Server
from witsml_client.shared.authorization_bus import AuthorizationEventBus

API_URL = "http://api.example.com"

Responder = Callable[[httpx.Request], Awaitable[httpx.Response]]


class FakeBackend:
    """Scripted backend behind an httpx.MockTransport.

    Responses are served in order; the last one repeats once the script runs
    out. Every received request is recorded.
    """

    def __init__(self, *responses: httpx.Response | Responder):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.responses)) - 1
        response = self.responses[index]
        if callable(response):
            return await response(request)
        # Fresh copy so a repeated response is never consumed twice
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


class RecordingBus(AuthorizationEventBus):
    """Event bus that remembers everything published on it."""

    def __init__(self):
        super().__init__()
        self.published: list[AuthorizationState] = []

    def publish(self, state: AuthorizationState) -> None:
        self.published.append(state)
        super().publish(state)


def unauthorized(server: str | None = None) -> httpx.Response:
    body = {} if server is None else {"server": server}
    return httpx.Response(401, json=body)


@pytest.fixture
def target_server() -> Server:
    return Server(id="s1", url="https://witsml.target.example.com/store", name="S1")


@pytest.fixture
def source_server() -> Server:
    return Server(id="s2", url="https://witsml.source.example.com/store", name="S2")


@pytest.fixture
def bus() -> RecordingBus:
    return RecordingBus()


@pytest.fixture
def settings() -> ApiClientSettings:
    return ApiClientSettings(api_url=API_URL, _env_file=None)
