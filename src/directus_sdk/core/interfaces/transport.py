"""Contrato del transporte HTTP.

Reglas de diseño:
- Los métodos devuelven el miembro `data` del envelope Directus (o el JSON
  completo con `envelope=False`); nunca objetos de la librería HTTP.
- Un status no-2xx siempre se traduce a `DirectusApiError`.
"""

from __future__ import annotations

from typing import IO, Any, Protocol, runtime_checkable

import httpx

Params = dict[str, str]
Files = dict[str, tuple[str, bytes | IO[bytes], str]]


@runtime_checkable
class Transport(Protocol):
    async def get(self, path: str, *, params: Params | None = None, envelope: bool = True) -> Any:
        ...

    async def post(self, path: str, body: Any = None, *, params: Params | None = None, envelope: bool = True) -> Any:
        ...

    async def patch(self, path: str, body: Any = None, *, params: Params | None = None) -> Any:
        ...

    async def delete(self, path: str, body: Any = None) -> None:
        ...

    async def send(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        params: Params | None = None,
        envelope: bool = True,
    ) -> Any:
        ...

    async def send_multipart(self, path: str, *, files: Files, data: dict[str, str] | None = None) -> Any:
        ...

    async def request_raw(self, method: str, path: str, *, params: Params | None = None) -> httpx.Response:
        """Request sin parseo JSON (assets, specs). Errores igual que `send`."""

        ...
