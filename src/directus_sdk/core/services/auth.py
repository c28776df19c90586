"""Servicio de autenticación (`/auth/*`).

Mantiene el estado "logueado / no logueado" a través del `TokenStore`: el
transporte lee el access token de ahí en cada request.
"""

from __future__ import annotations

import logging

from directus_sdk.core.domain.models import AuthResponse
from directus_sdk.core.exceptions import DirectusAuthError, DirectusError
from directus_sdk.core.interfaces.token_store import TokenStore
from directus_sdk.core.interfaces.transport import Transport

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, transport: Transport, token_store: TokenStore) -> None:
        self._transport = transport
        self._token_store = token_store

    async def _store(self, auth: AuthResponse) -> None:
        if auth.access_token:
            await self._token_store.set_access_token(auth.access_token)
        if auth.refresh_token:
            await self._token_store.set_refresh_token(auth.refresh_token)

    async def login(self, email: str, password: str, *, otp: str | None = None) -> AuthResponse:
        """Login con email/password y guarda los tokens recibidos."""

        logger.info("Attempting login for user: %s", email)

        body: dict[str, str] = {"email": email, "password": password, "mode": "json"}
        if otp:
            body["otp"] = otp

        data = await self._transport.post("/auth/login", body)
        if data is None:
            raise DirectusAuthError("Login failed: No response from server")

        auth = AuthResponse.model_validate(data)
        await self._store(auth)

        logger.info("Login successful for user: %s", email)
        return auth

    async def refresh(self) -> AuthResponse:
        """Renueva el access token con el refresh token guardado."""

        logger.info("Refreshing access token")

        refresh_token = await self._token_store.get_refresh_token()
        if not refresh_token:
            raise DirectusAuthError("No refresh token available")

        data = await self._transport.post("/auth/refresh", {"refresh_token": refresh_token, "mode": "json"})
        if data is None:
            raise DirectusAuthError("Token refresh failed: No response from server")

        auth = AuthResponse.model_validate(data)
        await self._store(auth)

        logger.info("Token refresh successful")
        return auth

    async def try_refresh(self) -> bool:
        """Hook para el transporte ante un 401: nunca lanza."""

        if not await self._token_store.get_refresh_token():
            return False
        try:
            await self.refresh()
        except DirectusError as exc:
            logger.warning("Automatic token refresh failed: %s", exc.message)
            return False
        return True

    async def logout(self) -> None:
        """Invalida el refresh token en el servidor (best-effort) y limpia el store."""

        logger.info("Logging out")

        refresh_token = await self._token_store.get_refresh_token()
        if refresh_token:
            try:
                await self._transport.post("/auth/logout", {"refresh_token": refresh_token, "mode": "json"})
            except DirectusError as exc:
                logger.warning("Logout request failed, clearing tokens anyway: %s", exc.message)

        await self._token_store.clear()
        logger.info("Logout successful")

    async def get_token(self) -> str | None:
        return await self._token_store.get_access_token()

    async def set_token(self, token: str) -> None:
        """Usa un token estático (p.ej. el token de un usuario de servicio)."""

        await self._token_store.set_access_token(token)

    async def is_authenticated(self) -> bool:
        return bool(await self._token_store.get_access_token())
