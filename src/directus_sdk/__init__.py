"""directus-sdk: cliente tipado (REST, GraphQL, realtime) para Directus.

Capas:
- core: dominio (Pydantic), contratos, servicios, configuración y errores.
- adapters: I/O concreto (httpx, websockets, token stores).
- client: fachada `DirectusClient`.
- cli: diagnósticos (`directus-sdk doctor`).
"""

from directus_sdk.adapters.token_stores import FileTokenStore, InMemoryTokenStore
from directus_sdk.client import DirectusClient
from directus_sdk.core.config import DirectusSettings
from directus_sdk.core.domain import (
    AuthResponse,
    CollectionResponse,
    DirectusFile,
    DirectusQuery,
    DirectusRole,
    DirectusUser,
    GraphQLResponse,
    QueryBuilder,
    RealtimeMessage,
    ServerInfo,
)
from directus_sdk.core.exceptions import DirectusApiError, DirectusAuthError, DirectusError
from directus_sdk.core.interfaces.token_store import TokenStore

__version__ = "0.1.0"
__all__ = [
    "AuthResponse",
    "CollectionResponse",
    "DirectusApiError",
    "DirectusAuthError",
    "DirectusClient",
    "DirectusError",
    "DirectusFile",
    "DirectusQuery",
    "DirectusRole",
    "DirectusSettings",
    "DirectusUser",
    "FileTokenStore",
    "GraphQLResponse",
    "InMemoryTokenStore",
    "QueryBuilder",
    "RealtimeMessage",
    "ServerInfo",
    "TokenStore",
]
