"""Shared fixtures: a temporary images directory, settings and a fake origin."""
from __future__ import annotations

from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from image_gateway.config import Settings, get_settings
from image_gateway.main import app
from image_gateway.services.gateway import ImageGateway, get_gateway

ORIGIN = "http://origin.test/"

# Smallest byte sequence shaped like a JPEG (SOI ... EOI).
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00" + bytes(range(256)) * 4 + b"\xff\xd9"

GATEWAY_ENV_VARS = (
    "ORIGIN_URL_BASE",
    "ORIGIN_URL",
    "SERVER_START_PORT",
    "SERVER_WORKER_THREADS",
    "SERVER_HOST",
    "IMAGES_PATH",
    "UPSTREAM_TIMEOUT",
    "MAX_UPSTREAM_BYTES",
    "LOG_LEVEL",
)


class BrokenStream(httpx.AsyncByteStream):
    """Body that yields a first chunk and then drops the connection."""

    def __init__(self, first_chunk: bytes = b"partial") -> None:
        self._first_chunk = first_chunk

    async def __aiter__(self):
        yield self._first_chunk
        raise httpx.ReadError("connection reset by peer")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in GATEWAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_gateway.cache_clear()
    yield
    get_settings.cache_clear()
    get_gateway.cache_clear()


@pytest.fixture
def images_dir(tmp_path):
    directory = tmp_path / "images"
    directory.mkdir()
    (directory / "thumbnail.jpg").write_bytes(JPEG_BYTES)
    (directory / "large.jpg").write_bytes(JPEG_BYTES * 3)
    return directory


@pytest.fixture
def settings(images_dir) -> Settings:
    return Settings(origin_url_base=ORIGIN, images_path=images_dir)


@pytest.fixture
def origin_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def origin(origin_requests) -> Callable[..., httpx.MockTransport]:
    """Build a mock origin transport answering from a ``{path: response}`` table.

    Values may be an ``httpx.Response``, an exception instance to raise
    instead of answering, or a callable building a fresh response per
    request. Unknown paths get a 404.
    """

    def build(routes: dict[str, httpx.Response | Exception | Callable[[], httpx.Response]]) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            origin_requests.append(request)
            answer = routes.get(request.url.path)
            if answer is None:
                return httpx.Response(404)
            if isinstance(answer, Exception):
                raise answer
            if callable(answer):
                return answer()
            return answer

        return httpx.MockTransport(handler)

    return build


@pytest.fixture
def client_for(settings):
    """Return a TestClient whose gateway talks to the given origin transport."""

    clients: list[TestClient] = []

    def build(transport: httpx.AsyncBaseTransport | None = None) -> TestClient:
        gateway = ImageGateway(settings, transport=transport)
        app.dependency_overrides[get_gateway] = lambda: gateway
        client = TestClient(app)
        clients.append(client)
        return client

    yield build
    for client in clients:
        client.close()
    app.dependency_overrides.clear()
