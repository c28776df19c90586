"""Cliente realtime (WebSocket) de Directus.

Modelo:
- Una única conexión y un dict `uid -> callback`.
- Un task de recepción reparte cada frame JSON al callback cuyo `uid`
  coincide; los frames sin `uid` conocido se ignoran.
- Sin reconexión ni backpressure: si el servidor cierra, el loop termina y
  `is_connected` pasa a `False`.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
import json
import logging
import uuid
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any

import websockets

from directus_sdk.core.config import DirectusSettings
from directus_sdk.core.domain.models import RealtimeMessage
from directus_sdk.core.domain.query import DirectusQuery
from directus_sdk.core.exceptions import DirectusError
from directus_sdk.core.interfaces.token_store import TokenStore

logger = logging.getLogger(__name__)

MessageCallback = Callable[[RealtimeMessage[Any]], Awaitable[None] | None]
Connector = Callable[..., Awaitable[Any]]


def to_websocket_url(base_url: str) -> str:
    """`http(s)://host` -> `ws(s)://host/websocket`."""

    url = base_url.rstrip("/")
    if url.startswith("https://"):
        url = "wss://" + url[len("https://") :]
    elif url.startswith("http://"):
        url = "ws://" + url[len("http://") :]
    return f"{url}/websocket"


class RealtimeService:
    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        settings: DirectusSettings | None = None,
        *,
        connect: Connector | None = None,
    ) -> None:
        self.url = to_websocket_url(base_url)
        self._token_store = token_store
        self._settings = settings or DirectusSettings()
        self._connect = connect or websockets.connect
        self._websocket: Any = None
        self._receive_task: asyncio.Task[None] | None = None
        self._subscriptions: dict[str, MessageCallback] = {}

    @property
    def is_connected(self) -> bool:
        return (
            self._websocket is not None
            and self._receive_task is not None
            and not self._receive_task.done()
        )

    @property
    def subscriptions(self) -> list[str]:
        return list(self._subscriptions)

    async def __aenter__(self) -> RealtimeService:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.disconnect()

    async def connect(self) -> None:
        if self.is_connected:
            logger.debug("WebSocket already connected")
            return

        logger.info("Connecting to WebSocket at %s", self.url)

        headers: dict[str, str] = {}
        token = await self._token_store.get_access_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._websocket = await self._connect(
            self.url,
            additional_headers=headers or None,
            open_timeout=self._settings.realtime_open_timeout_seconds,
        )
        self._receive_task = asyncio.create_task(self._receive_loop(self._websocket))

        logger.info("WebSocket connected")

    async def disconnect(self) -> None:
        if self._websocket is None:
            return

        logger.info("Disconnecting WebSocket")

        task, self._receive_task = self._receive_task, None
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

        websocket, self._websocket = self._websocket, None
        await websocket.close()

        logger.info("WebSocket disconnected")

    async def subscribe(
        self,
        collection: str,
        on_message: MessageCallback,
        *,
        query: DirectusQuery | None = None,
        event: str | None = None,
    ) -> str:
        """Suscribe `on_message` a los cambios de `collection`.

        Devuelve el `uid` de la suscripción (necesario para `unsubscribe`).
        `on_message` puede ser una función normal o una corrutina.
        """

        if not self.is_connected:
            await self.connect()

        uid = str(uuid.uuid4())
        logger.debug("Subscribing to collection %s with ID %s", collection, uid)

        self._subscriptions[uid] = on_message

        message: dict[str, Any] = {"type": "subscribe", "collection": collection, "uid": uid}
        if event:
            message["event"] = event
        if query is not None:
            message["query"] = query.model_dump(mode="json", exclude_none=True, by_alias=True)

        try:
            await self._send(message)
        except BaseException:
            self._subscriptions.pop(uid, None)
            raise
        return uid

    async def unsubscribe(self, uid: str) -> None:
        logger.debug("Unsubscribing from %s", uid)

        if self._subscriptions.pop(uid, None) is not None:
            await self._send({"type": "unsubscribe", "uid": uid})

    async def _send(self, message: dict[str, Any]) -> None:
        if not self.is_connected:
            raise DirectusError("WebSocket is not connected")
        await self._websocket.send(json.dumps(message))

    async def _receive_loop(self, websocket: Any) -> None:
        try:
            async for raw in websocket:
                if isinstance(raw, bytes):
                    raw = raw.decode("utf-8")
                logger.debug("Received WebSocket message: %s", raw)
                try:
                    await self._process(raw)
                except Exception:
                    logger.exception("Error processing WebSocket message")
            logger.info("WebSocket closed by server")
        except websockets.ConnectionClosed as exc:
            logger.warning("WebSocket connection lost: %s", exc)
        except Exception:
            logger.exception("WebSocket receive loop failed")

    async def _process(self, raw: str) -> None:
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            return

        if payload.get("type") == "ping":
            await self._websocket.send(json.dumps({"type": "pong"}))
            return

        uid = payload.get("uid")
        callback = self._subscriptions.get(uid) if isinstance(uid, str) else None
        if callback is None:
            return

        result = callback(RealtimeMessage[Any].model_validate(payload))
        if inspect.isawaitable(result):
            await result
