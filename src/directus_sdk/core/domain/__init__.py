"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2).
- El dominio no conoce httpx, websockets ni la CLI: solo el contrato Directus.
"""

from directus_sdk.core.domain.models import (
    AuthResponse,
    CollectionResponse,
    DirectusFile,
    DirectusModel,
    DirectusRole,
    DirectusUser,
    GraphQLError,
    GraphQLResponse,
    ProjectInfo,
    RealtimeMessage,
    ResponseMeta,
    ServerInfo,
)
from directus_sdk.core.domain.query import DirectusQuery, QueryBuilder

__all__ = [
    "AuthResponse",
    "CollectionResponse",
    "DirectusFile",
    "DirectusModel",
    "DirectusQuery",
    "DirectusRole",
    "DirectusUser",
    "GraphQLError",
    "GraphQLResponse",
    "ProjectInfo",
    "QueryBuilder",
    "RealtimeMessage",
    "ResponseMeta",
    "ServerInfo",
]
