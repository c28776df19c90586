"""Errores del SDK.

Por qué una jerarquía mínima:
- Los servicios solo necesitan distinguir "la API respondió con error"
  (`DirectusApiError`) de "no hay sesión válida" (`DirectusAuthError`).
- Todo hereda de `DirectusError`, así el código de aplicación puede capturar
  un único tipo.
"""

from __future__ import annotations

from typing import Any


class DirectusError(Exception):
    """Error base del SDK (opcionalmente con status HTTP y código Directus)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code

    def to_dict(self) -> dict[str, Any]:
        """Representación serializable (salida JSON de la CLI, logs)."""

        result: dict[str, Any] = {"error": self.message}
        if self.status_code is not None:
            result["status"] = self.status_code
        if self.error_code:
            result["code"] = self.error_code
        return result


class DirectusApiError(DirectusError):
    """La API devolvió una respuesta no-2xx."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str | None = None,
        error_response: Any = None,
    ) -> None:
        super().__init__(message, status_code, error_code)
        self.error_response = error_response

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.error_response is not None:
            result["details"] = self.error_response
        return result


class DirectusAuthError(DirectusError):
    """Fallo de autenticación (sin tokens, login/refresh sin respuesta)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 401, "UNAUTHORIZED")
