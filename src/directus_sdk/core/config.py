"""Configuración del SDK.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar servicios
  ni adaptadores con lecturas sueltas de `os.environ`.
- Permite que el transporte HTTP, el cliente realtime y la CLI lean la misma
  configuración de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://localhost:8055"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    Objetivo: guardar `.env` y tokens persistidos fuera del proyecto.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "directus-sdk"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "directus-sdk"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "directus-sdk"
    return Path.home() / ".config" / "directus-sdk"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def get_default_token_file() -> Path:
    return get_user_config_dir() / "tokens.json"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores `None` se ignoran (no borran claves existentes).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# directus-sdk user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class DirectusSettings(BaseSettings):
    """Configuración central del SDK.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar los servicios.
    - Un único contrato de configuración para transporte/realtime/CLI.
    """

    model_config = SettingsConfigDict(
        env_prefix="DIRECTUS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL de la instancia Directus (sin slash final).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request HTTP (segundos).",
    )
    user_agent: str = Field(
        default="directus-sdk-python/0.1",
        min_length=1,
        description="User-Agent enviado en cada request.",
    )

    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Reintentos ante fallos transitorios (red, 429, 502-504).",
    )
    retry_backoff_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Base del backoff exponencial entre reintentos (segundos).",
    )
    auto_refresh_token: bool = Field(
        default=True,
        description="Refrescar el access token automáticamente ante un 401.",
    )

    static_token: str | None = Field(
        default=None,
        description="Token estático (Directus user token) precargado en el token store.",
    )
    email: str | None = Field(
        default=None,
        description="Email para el login de diagnóstico (doctor).",
    )
    password: str | None = Field(
        default=None,
        description="Password para el login de diagnóstico (doctor).",
    )
    token_file: Path | None = Field(
        default=None,
        description="Ruta del JSON de tokens persistidos (FileTokenStore).",
    )

    realtime_open_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout del handshake WebSocket (segundos).",
    )

    @field_validator("url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
