"""Descriptor de consulta y builder fluido.

Por qué un descriptor separado del builder:
- `DirectusQuery` es el dato (serializable, validable); `QueryBuilder` solo es
  azúcar para construirlo encadenando llamadas.
- La conversión a query string vive en el descriptor para que cualquier
  servicio (items, users, roles) la reutilice.

Los filtros son dicts planos con los operadores de Directus, p.ej.
`{"status": {"_eq": "published"}}`.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import Field
from pydantic.config import ConfigDict

from directus_sdk.core.domain.models import DirectusModel


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class DirectusQuery(DirectusModel):
    """Parámetros de consulta para endpoints de colección."""

    # El builder asigna campo a campo: se valida también en la asignación.
    model_config = ConfigDict(validate_assignment=True)

    filter: dict[str, Any] | None = Field(
        default=None,
        description="Árbol de filtros Directus (se envía como JSON).",
    )
    sort: list[str] | None = Field(
        default=None,
        description="Campos de orden; prefijo '-' para descendente.",
    )
    limit: int | None = Field(default=None, ge=-1)
    offset: int | None = Field(default=None, ge=0)
    page: int | None = Field(default=None, ge=1)
    fields: list[str] | None = None
    search: str | None = None
    meta: str | None = Field(
        default=None,
        description="Metadata solicitada: 'total_count', 'filter_count' o '*'.",
    )
    deep: dict[str, Any] | None = None
    aggregate: dict[str, str] | None = Field(
        default=None,
        description="Mapa campo -> función (count, sum, avg, min, max).",
    )
    group_by: list[str] | None = Field(default=None, alias="groupBy")

    def to_params(self) -> dict[str, str]:
        """Convierte el descriptor en query params (sin URL-encoding).

        Reglas:
        - filter/deep: JSON compacto.
        - sort/fields/groupBy: lista separada por comas.
        - aggregate: `aggregate[<función>]=<campo>`.
        - Valores `None` y listas vacías se omiten.
        """

        params: dict[str, str] = {}

        if self.filter is not None:
            params["filter"] = _dumps(self.filter)
        if self.sort:
            params["sort"] = ",".join(self.sort)
        if self.limit is not None:
            params["limit"] = str(self.limit)
        if self.offset is not None:
            params["offset"] = str(self.offset)
        if self.page is not None:
            params["page"] = str(self.page)
        if self.fields:
            params["fields"] = ",".join(self.fields)
        if self.search:
            params["search"] = self.search
        if self.meta:
            params["meta"] = self.meta
        if self.deep:
            params["deep"] = _dumps(self.deep)
        if self.aggregate:
            for field_name, function in self.aggregate.items():
                key = f"aggregate[{function}]"
                params[key] = f"{params[key]},{field_name}" if key in params else field_name
        if self.group_by:
            params["groupBy"] = ",".join(self.group_by)

        return params


class QueryBuilder:
    """Builder fluido para `DirectusQuery`.

    Cada setter sobrescribe el valor previo del mismo campo, salvo `deep` y
    `aggregate`, que acumulan entradas.
    """

    def __init__(self) -> None:
        self._query = DirectusQuery()

    def with_filter(self, filter: dict[str, Any]) -> QueryBuilder:
        self._query.filter = filter
        return self

    def sort(self, *fields: str) -> QueryBuilder:
        self._query.sort = list(fields)
        return self

    def limit(self, limit: int) -> QueryBuilder:
        self._query.limit = limit
        return self

    def offset(self, offset: int) -> QueryBuilder:
        self._query.offset = offset
        return self

    def page(self, page: int) -> QueryBuilder:
        self._query.page = page
        return self

    def fields(self, *fields: str) -> QueryBuilder:
        self._query.fields = list(fields)
        return self

    def search(self, search: str) -> QueryBuilder:
        self._query.search = search
        return self

    def with_meta(self, meta: str = "*") -> QueryBuilder:
        self._query.meta = meta
        return self

    def deep(self, relation: str, query: dict[str, Any]) -> QueryBuilder:
        if self._query.deep is None:
            self._query.deep = {}
        self._query.deep[relation] = query
        return self

    def aggregate(self, field: str, function: str) -> QueryBuilder:
        if self._query.aggregate is None:
            self._query.aggregate = {}
        self._query.aggregate[field] = function
        return self

    def group_by(self, *fields: str) -> QueryBuilder:
        self._query.group_by = list(fields)
        return self

    def build(self) -> DirectusQuery:
        return self._query
