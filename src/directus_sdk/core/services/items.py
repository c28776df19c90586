"""Servicio CRUD de items (`/items/{collection}`).

Por qué `model` opcional:
- Las colecciones son definidas por el usuario; por defecto devolvemos dicts.
- Si el llamador pasa un modelo Pydantic, validamos cada registro con él.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from directus_sdk.core.domain.models import CollectionResponse
from directus_sdk.core.domain.query import DirectusQuery
from directus_sdk.core.interfaces.transport import Transport

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ItemId = str | int


def _item_path(collection: str, item_id: ItemId | None = None) -> str:
    path = f"/items/{quote(collection, safe='')}"
    if item_id is not None:
        path += f"/{quote(str(item_id), safe='')}"
    return path


def _validate(data: Any, model: type[M] | None) -> Any:
    if data is None or model is None:
        return data
    if isinstance(data, list):
        return [model.model_validate(item) for item in data]
    return model.model_validate(data)


class ItemsService:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def read_items(
        self,
        collection: str,
        query: DirectusQuery | None = None,
        *,
        model: type[M] | None = None,
    ) -> CollectionResponse[Any]:
        """Lee varios items; `meta` solo viene si la query lo pide."""

        logger.debug("Reading items from collection: %s", collection)

        params = query.to_params() if query else None
        payload = await self._transport.get(_item_path(collection), params=params, envelope=False)
        return CollectionResponse.from_envelope(payload, model.model_validate if model else None)

    async def read_item(
        self,
        collection: str,
        item_id: ItemId,
        query: DirectusQuery | None = None,
        *,
        model: type[M] | None = None,
    ) -> Any:
        logger.debug("Reading item %s from collection: %s", item_id, collection)

        params = query.to_params() if query else None
        data = await self._transport.get(_item_path(collection, item_id), params=params)
        return _validate(data, model)

    async def create_item(self, collection: str, item: Any, *, model: type[M] | None = None) -> Any:
        logger.debug("Creating item in collection: %s", collection)

        data = await self._transport.post(_item_path(collection), item)
        return _validate(data, model)

    async def create_items(self, collection: str, items: Sequence[Any], *, model: type[M] | None = None) -> Any:
        logger.debug("Creating %d items in collection: %s", len(items), collection)

        data = await self._transport.post(_item_path(collection), list(items))
        return _validate(data, model)

    async def update_item(
        self,
        collection: str,
        item_id: ItemId,
        item: Any,
        *,
        model: type[M] | None = None,
    ) -> Any:
        logger.debug("Updating item %s in collection: %s", item_id, collection)

        data = await self._transport.patch(_item_path(collection, item_id), item)
        return _validate(data, model)

    async def update_items(
        self,
        collection: str,
        ids: Sequence[ItemId],
        item: Any,
        *,
        model: type[M] | None = None,
    ) -> Any:
        """Aplica el mismo cambio a varios items (`{"keys": [...], "data": {...}}`)."""

        logger.debug("Updating %d items in collection: %s", len(ids), collection)

        if isinstance(item, BaseModel):
            item = item.model_dump(mode="json", exclude_none=True, by_alias=True)
        data = await self._transport.patch(_item_path(collection), {"keys": list(ids), "data": item})
        return _validate(data, model)

    async def delete_item(self, collection: str, item_id: ItemId) -> None:
        logger.debug("Deleting item %s from collection: %s", item_id, collection)

        await self._transport.delete(_item_path(collection, item_id))

    async def delete_items(self, collection: str, ids: Sequence[ItemId]) -> None:
        """Borrado por lote: Directus espera la lista de claves en el body."""

        logger.debug("Deleting %d items from collection: %s", len(ids), collection)

        await self._transport.delete(_item_path(collection), list(ids))
