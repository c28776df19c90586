"""Implementaciones de `TokenStore`.

- `InMemoryTokenStore`: vive lo que vive el proceso (scripts, tests).
- `FileTokenStore`: persiste en JSON en el directorio de configuración del
  usuario, para CLIs y workers que quieren reutilizar la sesión.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from directus_sdk.core.config import get_default_token_file

logger = logging.getLogger(__name__)

_ACCESS_KEY = "access_token"
_REFRESH_KEY = "refresh_token"


class InMemoryTokenStore:
    """Devuelve lo último guardado, o `None` si nunca se guardó / tras `clear`."""

    def __init__(self, access_token: str | None = None, refresh_token: str | None = None) -> None:
        self._access_token = access_token
        self._refresh_token = refresh_token

    async def get_access_token(self) -> str | None:
        return self._access_token

    async def set_access_token(self, token: str | None) -> None:
        self._access_token = token

    async def get_refresh_token(self) -> str | None:
        return self._refresh_token

    async def set_refresh_token(self, token: str | None) -> None:
        self._refresh_token = token

    async def clear(self) -> None:
        self._access_token = None
        self._refresh_token = None


class FileTokenStore:
    """Tokens en un JSON `{"access_token": ..., "refresh_token": ...}`.

    Reglas:
    - Guardar `None` o cadena vacía elimina la clave.
    - Un fichero ilegible o corrupto se trata como vacío (se loguea).
    - `clear` borra el fichero.
    - El I/O de disco corre en un hilo (`asyncio.to_thread`) para no bloquear
      el event loop.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_default_token_file()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable token file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str) and v}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        try:
            self.path.chmod(0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", self.path)

    def _set(self, key: str, token: str | None) -> None:
        data = self._read()
        if token:
            data[key] = token
        else:
            data.pop(key, None)
        self._write(data)

    async def get_access_token(self) -> str | None:
        return (await asyncio.to_thread(self._read)).get(_ACCESS_KEY)

    async def set_access_token(self, token: str | None) -> None:
        await asyncio.to_thread(self._set, _ACCESS_KEY, token)

    async def get_refresh_token(self) -> str | None:
        return (await asyncio.to_thread(self._read)).get(_REFRESH_KEY)

    async def set_refresh_token(self, token: str | None) -> None:
        await asyncio.to_thread(self._set, _REFRESH_KEY, token)

    async def clear(self) -> None:
        await asyncio.to_thread(self.path.unlink, missing_ok=True)
