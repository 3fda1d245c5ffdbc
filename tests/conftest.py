"""Pytest configuration and shared fixtures."""
import io
import json
import os
from collections.abc import Callable

import httpx
import pytest
from PIL import Image

from interprete.assistant import create_assistant_client
from interprete.config import AssistantSettings
from interprete.transport import HttpxTransport


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingHandler:
    """httpx.MockTransport handler that records requests.

    Routes are matched by (method, path suffix); the first matching route
    wins. Each route returns a (status, json_body) pair or an httpx.Response.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: list[tuple[str, str, Callable[[httpx.Request], object]]] = []

    def route(self, method: str, path_suffix: str, responder: Callable[[httpx.Request], object]) -> None:
        self._routes.append((method, path_suffix, responder))

    def json_body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for method, suffix, responder in self._routes:
            if request.method == method and request.url.path.endswith(suffix):
                result = responder(request)
                if isinstance(result, httpx.Response):
                    return result
                status, body = result
                if isinstance(body, (bytes, str)):
                    return httpx.Response(status, content=body)
                return httpx.Response(status, json=body)
        return httpx.Response(404, json={"error": "no route"})


def completion_body(content: str) -> dict:
    """Build a chat completion response body."""
    return {
        "id": "chatcmpl-1",
        "model": "gpt-3.5-turbo",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
    }


def encode_image(width: int, height: int, mode: str = "RGB", fmt: str = "PNG") -> bytes:
    """Create an encoded image in memory."""
    color = (200, 30, 30, 128) if mode == "RGBA" else "red"
    img = Image.new(mode, (width, height), color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def fake_clock():
    """Return a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def settings():
    """Return settings suitable for offline tests."""
    return AssistantSettings(
        api_key="sk-test-key",
        assistant_id="asst_test",
        run_poll_interval=0,
        retry_backoff=0,
    )


@pytest.fixture
def handler():
    """Return a recording mock HTTP handler."""
    return RecordingHandler()


@pytest.fixture
async def make_client(settings, handler):
    """Return a factory for clients wired to the mock handler."""
    clients = []

    def _make(**overrides):
        transport = HttpxTransport(transport=httpx.MockTransport(handler))
        client = create_assistant_client(settings, transport=transport, **overrides)
        client.own_transport(transport)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.close()


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
        "assistant_id": os.getenv("OPENAI_ASSISTANT_ID"),
    }
