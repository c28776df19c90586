"""Fixtures compartidas: settings aislados, HTTP simulado y WebSocket falso.

Nada aquí toca la red: el HTTP va por `httpx.MockTransport` y el realtime por
una factoría `connect` que devuelve un `FakeWebSocket`.
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from directus_sdk.adapters.http_client import build_async_client
from directus_sdk.client import DirectusClient
from directus_sdk.core.config import DirectusSettings

BASE_URL = "http://directus.test"

Route = tuple[int, Any] | Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Sin `.env` del proyecto ni variables DIRECTUS_* del entorno real."""

    for key in list(os.environ):
        if key.upper().startswith("DIRECTUS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_settings() -> Callable[..., DirectusSettings]:
    def _make(**overrides: Any) -> DirectusSettings:
        values: dict[str, Any] = {"url": BASE_URL, "retry_backoff_seconds": 0.0}
        values.update(overrides)
        return DirectusSettings(_env_file=None, **values)

    return _make


class Recorder:
    """Handler de `httpx.MockTransport` que enruta por (método, path).

    Cada ruta es `(status, json)` o un callable `request -> Response`; una
    lista de rutas se consume en orden (una por llamada).
    """

    def __init__(self, routes: dict[tuple[str, str], Route | list[Route]]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if isinstance(route, list):
            route = route.pop(0) if route else None
        if route is None:
            return httpx.Response(404, json={"errors": [{"message": "Route not found"}]})
        if callable(route):
            return route(request)
        status, payload = route
        if payload is None:
            return httpx.Response(status)
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)

    def last(self) -> httpx.Request:
        return self.requests[-1]

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_client(make_settings) -> Callable[..., tuple[DirectusClient, Recorder]]:
    def _make(routes: dict[tuple[str, str], Any], **overrides: Any) -> tuple[DirectusClient, Recorder]:
        settings = make_settings(**overrides)
        recorder = Recorder(routes)
        http_client = build_async_client(settings, transport=httpx.MockTransport(recorder))
        return DirectusClient(settings=settings, http_client=http_client), recorder

    return _make


class FakeWebSocket:
    """Socket en memoria: `feed` encola frames del servidor, `sent` guarda los nuestros."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed = False
        self._incoming: asyncio.Queue[str | None] = asyncio.Queue()

    async def send(self, message: str) -> None:
        self.sent.append(json.loads(message))

    def feed(self, payload: Any) -> None:
        self._incoming.put_nowait(payload if isinstance(payload, str) else json.dumps(payload))

    def finish(self) -> None:
        self._incoming.put_nowait(None)

    async def close(self) -> None:
        self.closed = True
        self.finish()

    def __aiter__(self) -> FakeWebSocket:
        return self

    async def __anext__(self) -> str:
        item = await self._incoming.get()
        if item is None:
            raise StopAsyncIteration
        return item


class FakeConnector:
    """Sustituto de `websockets.connect`; crea el socket dentro del loop activo."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.sockets: list[FakeWebSocket] = []

    async def __call__(self, url: str, **kwargs: Any) -> FakeWebSocket:
        self.calls.append((url, kwargs))
        websocket = FakeWebSocket()
        self.sockets.append(websocket)
        return websocket

    @property
    def websocket(self) -> FakeWebSocket:
        return self.sockets[-1]


@pytest.fixture
def fake_connect() -> FakeConnector:
    return FakeConnector()


async def _drain() -> None:
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def drain() -> Callable[[], Any]:
    """Cede el loop para que el task de recepción procese lo encolado."""

    return _drain
