"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers, reintentos, logging y el mapeo de errores.
- Facilita testeo: se puede inyectar un `httpx.AsyncClient` con
  `httpx.MockTransport`.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from pydantic import BaseModel

from directus_sdk.core.config import DirectusSettings
from directus_sdk.core.exceptions import DirectusApiError, DirectusError
from directus_sdk.core.interfaces.token_store import TokenStore
from directus_sdk.core.interfaces.transport import Files, Params

logger = logging.getLogger(__name__)

_BODY_METHODS = frozenset({"POST", "PATCH", "PUT", "DELETE"})
_RETRY_STATUSES = frozenset({429, 502, 503, 504})
# Un 401 en login/refresh/logout no dispara el refresco automático.
_AUTH_PREFIX = "/auth/"

UnauthorizedHook = Callable[[], Awaitable[bool]]


def build_async_client(
    settings: DirectusSettings | None = None,
    *,
    base_url: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando a la instancia Directus.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los servicios se comporten igual.
    - `transport` permite inyectar `httpx.MockTransport` en tests.
    """

    settings = settings or DirectusSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=(base_url or settings.url).rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _serialize_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True, by_alias=True)
    if isinstance(body, (list, tuple)):
        return [_serialize_body(item) for item in body]
    return body


def _retry_after_seconds(response: httpx.Response | None) -> float | None:
    if response is None:
        return None
    value = response.headers.get("retry-after")
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def _error_from_response(response: httpx.Response) -> DirectusApiError:
    """Traduce un no-2xx al error tipado.

    Formato Directus: `{"errors": [{"message": ..., "extensions": {"code": ...}}]}`.
    """

    message: str | None = None
    error_code: str | None = None
    error_response: Any = None

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    errors = payload.get("errors") if isinstance(payload, dict) else None
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        first = errors[0]
        if isinstance(first.get("message"), str):
            message = first["message"]
        extensions = first.get("extensions")
        if isinstance(extensions, dict) and isinstance(extensions.get("code"), str):
            error_code = extensions["code"]
        error_response = payload
    elif response.text:
        message = response.text.strip() or None

    if not message:
        message = f"HTTP {response.status_code}: {response.reason_phrase}"

    return DirectusApiError(message, response.status_code, error_code, error_response)


class DirectusTransport:
    """Transporte HTTP de paso: JSON in/out, envelope `data`, errores tipados.

    Por qué async:
    - Todo el SDK es asíncrono (httpx.AsyncClient + websockets) y así la app
      puede lanzar llamadas en paralelo con `asyncio.gather`.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token_store: TokenStore,
        settings: DirectusSettings | None = None,
        *,
        on_unauthorized: UnauthorizedHook | None = None,
    ) -> None:
        self._client = client
        self._token_store = token_store
        self._settings = settings or DirectusSettings()
        self.on_unauthorized = on_unauthorized

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def _auth_headers(self) -> dict[str, str]:
        token = await self._token_store.get_access_token()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def _dispatch(
        self,
        method: str,
        path: str,
        *,
        params: Params | None = None,
        json_body: Any = None,
        files: Files | None = None,
        data: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Ejecuta el request con reintentos y el hook de 401.

        Reintentos: errores de red/timeout y 429/502/503/504, con backoff
        exponencial + jitter (respeta `Retry-After`). El resto de errores de
        httpx se envuelven en `DirectusError` sin reintentar.
        """

        max_retries = self._settings.max_retries
        refreshed = False
        attempt = 0

        while True:
            headers = await self._auth_headers()
            request_kwargs: dict[str, Any] = {"params": params, "headers": headers}
            if json_body is not None:
                request_kwargs["json"] = json_body
            if files is not None:
                request_kwargs["files"] = files
                request_kwargs["data"] = data

            logger.debug("%s %s", method, path)
            try:
                response = await self._client.request(method, path, **request_kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                if attempt >= max_retries:
                    raise DirectusError(f"Request {method} {path} failed: {exc}") from exc
                logger.warning("Transient error on %s %s (%s), retrying", method, path, type(exc).__name__)
                await self._backoff(attempt, None)
                attempt += 1
                continue
            except httpx.RequestError as exc:
                # Protocolo, proxy, URL sin esquema, decodificación: no transitorios.
                raise DirectusError(f"Request {method} {path} failed: {exc}") from exc

            if (
                response.status_code == 401
                and self.on_unauthorized is not None
                and not refreshed
                and not path.startswith(_AUTH_PREFIX)
            ):
                refreshed = True
                if await self.on_unauthorized():
                    logger.debug("Replaying %s %s after token refresh", method, path)
                    continue

            if response.status_code in _RETRY_STATUSES and attempt < max_retries:
                logger.warning("HTTP %s on %s %s, retrying", response.status_code, method, path)
                await self._backoff(attempt, response)
                attempt += 1
                continue

            if response.is_success:
                return response

            error = _error_from_response(response)
            logger.error("API request failed: %s - %s", response.status_code, error.message)
            raise error

    async def _backoff(self, attempt: int, response: httpx.Response | None) -> None:
        retry_after = _retry_after_seconds(response)
        base = retry_after if retry_after is not None else self._settings.retry_backoff_seconds * (2**attempt)
        jitter = random.uniform(0.0, 0.25) if self._settings.retry_backoff_seconds else 0.0
        await asyncio.sleep(base + jitter)

    @staticmethod
    def _unwrap(response: httpx.Response, envelope: bool) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            raise DirectusError(f"Invalid JSON response: {exc}", response.status_code) from exc
        if not envelope:
            return payload
        if isinstance(payload, dict):
            return payload.get("data")
        return None

    # =========================================================================
    # Métodos HTTP
    # =========================================================================

    async def send(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        params: Params | None = None,
        envelope: bool = True,
    ) -> Any:
        method = method.upper()
        json_body = _serialize_body(body) if body is not None and method in _BODY_METHODS else None
        response = await self._dispatch(method, path, params=params, json_body=json_body)
        if method == "DELETE":
            return None
        return self._unwrap(response, envelope)

    async def get(self, path: str, *, params: Params | None = None, envelope: bool = True) -> Any:
        return await self.send("GET", path, params=params, envelope=envelope)

    async def post(self, path: str, body: Any = None, *, params: Params | None = None, envelope: bool = True) -> Any:
        return await self.send("POST", path, body, params=params, envelope=envelope)

    async def patch(self, path: str, body: Any = None, *, params: Params | None = None) -> Any:
        return await self.send("PATCH", path, body, params=params)

    async def delete(self, path: str, body: Any = None) -> None:
        await self.send("DELETE", path, body)

    async def send_multipart(self, path: str, *, files: Files, data: dict[str, str] | None = None) -> Any:
        logger.debug("Multipart upload to %s (%d file(s))", path, len(files))
        response = await self._dispatch("POST", path, files=files, data=data)
        return self._unwrap(response, envelope=True)

    async def request_raw(self, method: str, path: str, *, params: Params | None = None) -> httpx.Response:
        return await self._dispatch(method.upper(), path, params=params)
