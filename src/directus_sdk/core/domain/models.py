"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar el Core
  a librerías de I/O.
- Directus ya habla snake_case, así que los nombres de campo coinciden con el
  contrato JSON y no hacen falta aliases.

Nota:
- Estos modelos describen *qué* devuelve la API, no *cómo* se obtiene.
- Todos los campos son opcionales: Directus omite columnas según permisos y
  `fields`, y un registro parcial sigue siendo válido.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

T = TypeVar("T")


class DirectusModel(BaseModel):
    """Base común: ignora campos desconocidos y permite poblar por nombre."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# =============================================================================
# Auth
# =============================================================================


class AuthResponse(DirectusModel):
    """Par de tokens devuelto por `/auth/login` y `/auth/refresh`."""

    access_token: str | None = Field(
        default=None,
        description="Access token (JWT) para el header Authorization.",
    )
    refresh_token: str | None = Field(
        default=None,
        description="Refresh token para renovar la sesión.",
    )
    expires: int | None = Field(
        default=None,
        description="Validez del access token en milisegundos.",
    )


# =============================================================================
# Users / Roles
# =============================================================================


class DirectusUser(DirectusModel):
    """Usuario de `directus_users`."""

    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    password: str | None = Field(
        default=None,
        description="Solo escritura: Directus nunca lo devuelve en claro.",
    )
    role: str | None = None
    status: str | None = None
    avatar: str | None = None
    title: str | None = None
    description: str | None = None
    location: str | None = None
    language: str | None = None
    last_access: datetime | None = None


class DirectusRole(DirectusModel):
    """Rol de `directus_roles`."""

    id: str | None = None
    name: str | None = None
    icon: str | None = None
    description: str | None = None
    ip_access: bool | None = None
    enforce_tfa: bool | None = None
    admin_access: bool | None = None
    app_access: bool | None = None


# =============================================================================
# Files
# =============================================================================


class DirectusFile(DirectusModel):
    """Metadata de un fichero en `directus_files`."""

    id: str | None = None
    storage: str | None = None
    filename_disk: str | None = None
    filename_download: str | None = None
    title: str | None = None
    type: str | None = None
    folder: str | None = None
    uploaded_by: str | None = None
    uploaded_on: datetime | None = None
    filesize: int | None = None
    width: int | None = None
    height: int | None = None


# =============================================================================
# Server
# =============================================================================


class ProjectInfo(DirectusModel):
    project_name: str | None = None
    project_descriptor: str | None = None
    project_logo: str | None = None
    project_color: str | None = None
    public_registration: bool | None = None


class ServerInfo(DirectusModel):
    """Respuesta de `/server/info` (solo el bloque `project` es público)."""

    project: ProjectInfo | None = None


# =============================================================================
# Envelopes
# =============================================================================


class ResponseMeta(DirectusModel):
    total_count: int | None = None
    filter_count: int | None = None


class CollectionResponse(DirectusModel, Generic[T]):
    """Lista de registros + `meta` opcional (cuando se pide `meta=`)."""

    data: list[T] = Field(default_factory=list)
    meta: ResponseMeta | None = None

    @classmethod
    def from_envelope(
        cls,
        payload: Any,
        parser: Callable[[Any], Any] | None = None,
    ) -> CollectionResponse[Any]:
        """Crea la respuesta desde el JSON completo `{"data": [...], "meta": {...}}`."""

        if not isinstance(payload, dict):
            return cls()
        raw_items = payload.get("data") or []
        meta = payload.get("meta")
        return cls(
            data=[parser(item) for item in raw_items] if parser else list(raw_items),
            meta=ResponseMeta.model_validate(meta) if isinstance(meta, dict) else None,
        )


class GraphQLError(DirectusModel):
    message: str | None = None
    locations: Any = None
    path: list[Any] | None = None
    extensions: dict[str, Any] | None = None


class GraphQLResponse(DirectusModel, Generic[T]):
    """Documento GraphQL completo: `data` y/o `errors`."""

    data: T | None = None
    errors: list[GraphQLError] | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


# =============================================================================
# Realtime
# =============================================================================


class RealtimeMessage(DirectusModel, Generic[T]):
    """Frame JSON recibido por el WebSocket de Directus.

    `event` es `init`, `create`, `update` o `delete` en mensajes de
    suscripción; `uid` es el id de correlación que enviamos al suscribir.
    """

    type: str | None = None
    event: str | None = None
    uid: str | None = None
    collection: str | None = None
    data: T | None = None
