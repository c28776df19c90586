"""Servicio de utilidades del servidor (`/server/*`)."""

from __future__ import annotations

import logging

from directus_sdk.core.domain.models import ServerInfo
from directus_sdk.core.exceptions import DirectusError
from directus_sdk.core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


class UtilsService:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def get_server_info(self) -> ServerInfo:
        logger.debug("Getting server info")

        data = await self._transport.get("/server/info")
        return ServerInfo.model_validate(data) if data is not None else ServerInfo()

    async def health_check(self) -> bool:
        """`True` si `/server/health` responde 2xx. Nunca lanza."""

        logger.debug("Performing health check")

        try:
            await self._transport.request_raw("GET", "/server/health")
        except DirectusError as exc:
            logger.warning("Health check failed: %s", exc.message)
            return False
        return True

    async def get_openapi_spec(self) -> str:
        """Especificación OpenAPI de la instancia, como texto JSON."""

        logger.debug("Getting OpenAPI spec")

        response = await self._transport.request_raw("GET", "/server/specs/oas")
        return response.text
