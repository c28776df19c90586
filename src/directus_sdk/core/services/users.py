"""Servicio de usuarios (`/users`)."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from directus_sdk.core.domain.models import CollectionResponse, DirectusUser
from directus_sdk.core.domain.query import DirectusQuery
from directus_sdk.core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


class UsersService:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def get_users(self, query: DirectusQuery | None = None) -> CollectionResponse[DirectusUser]:
        logger.debug("Getting users")

        params = query.to_params() if query else None
        payload = await self._transport.get("/users", params=params, envelope=False)
        return CollectionResponse[DirectusUser].from_envelope(payload, DirectusUser.model_validate)

    async def get_user(self, user_id: str) -> DirectusUser | None:
        logger.debug("Getting user: %s", user_id)

        data = await self._transport.get(f"/users/{quote(user_id, safe='')}")
        return DirectusUser.model_validate(data) if data is not None else None

    async def get_me(self) -> DirectusUser | None:
        """Usuario dueño del access token actual."""

        logger.debug("Getting current user")

        data = await self._transport.get("/users/me")
        return DirectusUser.model_validate(data) if data is not None else None

    async def create_user(self, user: DirectusUser) -> DirectusUser | None:
        logger.debug("Creating user: %s", user.email)

        data = await self._transport.post("/users", user)
        return DirectusUser.model_validate(data) if data is not None else None

    async def update_user(self, user_id: str, changes: DirectusUser | dict[str, Any]) -> DirectusUser | None:
        logger.debug("Updating user: %s", user_id)

        data = await self._transport.patch(f"/users/{quote(user_id, safe='')}", changes)
        return DirectusUser.model_validate(data) if data is not None else None

    async def delete_user(self, user_id: str) -> None:
        logger.debug("Deleting user: %s", user_id)

        await self._transport.delete(f"/users/{quote(user_id, safe='')}")
