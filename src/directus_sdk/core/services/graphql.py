"""Servicio GraphQL (`/graphql`, `/graphql/system`).

Nota:
- GraphQL responde 200 aunque haya errores de resolución; esos errores se
  loguean y se devuelven en `GraphQLResponse.errors`, no se lanzan.
- Un error HTTP (p.ej. 400 por query inválida) sí sale como `DirectusApiError`.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from directus_sdk.core.domain.models import GraphQLResponse
from directus_sdk.core.exceptions import DirectusError
from directus_sdk.core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


class GraphQLService:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def query(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        model: type[BaseModel] | None = None,
        system: bool = False,
    ) -> GraphQLResponse[Any]:
        logger.debug("Executing GraphQL query")
        return await self._execute(query, variables, model=model, system=system)

    async def mutate(
        self,
        mutation: str,
        variables: dict[str, Any] | None = None,
        *,
        model: type[BaseModel] | None = None,
        system: bool = False,
    ) -> GraphQLResponse[Any]:
        logger.debug("Executing GraphQL mutation")
        return await self._execute(mutation, variables, model=model, system=system)

    async def _execute(
        self,
        document: str,
        variables: dict[str, Any] | None,
        *,
        model: type[BaseModel] | None,
        system: bool,
    ) -> GraphQLResponse[Any]:
        path = "/graphql/system" if system else "/graphql"
        payload = await self._transport.post(path, {"query": document, "variables": variables}, envelope=False)
        if payload is None:
            raise DirectusError("GraphQL request failed: No response from server")

        response = GraphQLResponse[Any].model_validate(payload)
        if response.errors:
            joined = ", ".join(error.message or "unknown error" for error in response.errors)
            logger.error("GraphQL errors: %s", joined)

        if model is not None and isinstance(response.data, dict):
            response.data = model.model_validate(response.data)
        return response
