"""Servicio de roles (`/roles`)."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from directus_sdk.core.domain.models import CollectionResponse, DirectusRole
from directus_sdk.core.domain.query import DirectusQuery
from directus_sdk.core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


class RolesService:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def get_roles(self, query: DirectusQuery | None = None) -> CollectionResponse[DirectusRole]:
        logger.debug("Getting roles")

        params = query.to_params() if query else None
        payload = await self._transport.get("/roles", params=params, envelope=False)
        return CollectionResponse[DirectusRole].from_envelope(payload, DirectusRole.model_validate)

    async def get_role(self, role_id: str) -> DirectusRole | None:
        logger.debug("Getting role: %s", role_id)

        data = await self._transport.get(f"/roles/{quote(role_id, safe='')}")
        return DirectusRole.model_validate(data) if data is not None else None

    async def create_role(self, role: DirectusRole) -> DirectusRole | None:
        logger.debug("Creating role: %s", role.name)

        data = await self._transport.post("/roles", role)
        return DirectusRole.model_validate(data) if data is not None else None

    async def update_role(self, role_id: str, changes: DirectusRole | dict[str, Any]) -> DirectusRole | None:
        logger.debug("Updating role: %s", role_id)

        data = await self._transport.patch(f"/roles/{quote(role_id, safe='')}", changes)
        return DirectusRole.model_validate(data) if data is not None else None

    async def delete_role(self, role_id: str) -> None:
        logger.debug("Deleting role: %s", role_id)

        await self._transport.delete(f"/roles/{quote(role_id, safe='')}")
