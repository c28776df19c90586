"""Contrato de almacenamiento de tokens.

Por qué Protocol:
- Un token store en memoria, en fichero o en la sesión de una app web cumplen
  el mismo contrato estructural sin heredar de una clase base.
- Los métodos son asíncronos porque un backend real (sesión, keyring, Redis)
  suele hacer I/O.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenStore(Protocol):
    """Tres ranuras de texto: access token, refresh token y `clear`."""

    async def get_access_token(self) -> str | None:
        ...

    async def set_access_token(self, token: str | None) -> None:
        ...

    async def get_refresh_token(self) -> str | None:
        ...

    async def set_refresh_token(self, token: str | None) -> None:
        ...

    async def clear(self) -> None:
        """Olvida ambos tokens."""

        ...
