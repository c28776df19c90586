"""Cliente principal: cablea transporte, token store y servicios.

Ejemplo:

    async with DirectusClient("https://cms.example.com") as client:
        await client.auth.login("admin@example.com", "secret")
        posts = await client.items.read_items(
            "posts",
            QueryBuilder().limit(5).sort("-date_created").build(),
        )
"""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from directus_sdk.adapters.http_client import DirectusTransport, build_async_client
from directus_sdk.adapters.realtime import Connector, RealtimeService
from directus_sdk.adapters.token_stores import FileTokenStore, InMemoryTokenStore
from directus_sdk.core.config import DirectusSettings
from directus_sdk.core.interfaces.token_store import TokenStore
from directus_sdk.core.services import (
    AuthService,
    FilesService,
    GraphQLService,
    ItemsService,
    RolesService,
    UsersService,
    UtilsService,
)

logger = logging.getLogger(__name__)


class DirectusClient:
    """Fachada del SDK.

    Args:
        base_url: URL de la instancia (o `DIRECTUS_URL`).
        settings: configuración; por defecto se lee del entorno / `.env`.
        token_store: almacenamiento de tokens; por defecto `FileTokenStore`
            si `DIRECTUS_TOKEN_FILE` está definido, si no en memoria.
        http_client: `httpx.AsyncClient` propio. El SDK no lo cierra.
        ws_connect: factoría de conexión WebSocket (tests).
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        settings: DirectusSettings | None = None,
        token_store: TokenStore | None = None,
        http_client: httpx.AsyncClient | None = None,
        ws_connect: Connector | None = None,
    ) -> None:
        self.settings = settings or DirectusSettings()
        self.base_url = (base_url or self.settings.url).rstrip("/")

        if token_store is None:
            if self.settings.token_file is not None:
                token_store = FileTokenStore(self.settings.token_file)
            else:
                token_store = InMemoryTokenStore(access_token=self.settings.static_token)
        self.token_store = token_store

        self._owns_http_client = http_client is None
        self._http_client = http_client or build_async_client(self.settings, base_url=self.base_url)

        self.transport = DirectusTransport(self._http_client, self.token_store, self.settings)

        self.auth = AuthService(self.transport, self.token_store)
        self.items = ItemsService(self.transport)
        self.files = FilesService(self.transport)
        self.users = UsersService(self.transport)
        self.roles = RolesService(self.transport)
        self.graphql = GraphQLService(self.transport)
        self.utils = UtilsService(self.transport)
        self.realtime = RealtimeService(self.base_url, self.token_store, self.settings, connect=ws_connect)

        if self.settings.auto_refresh_token:
            self.transport.on_unauthorized = self.auth.try_refresh

    async def __aenter__(self) -> DirectusClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Cierra el WebSocket y, si es nuestro, el cliente HTTP."""

        await self.realtime.disconnect()
        if self._owns_http_client:
            await self._http_client.aclose()
        logger.debug("Directus client closed")
