"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI ni la API.
- Permite que adaptadores (HTTP/IA) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "forkfinder"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "forkfinder"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "forkfinder"
    return Path.home() / ".config" / "forkfinder"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Los valores `None` o vacíos no pisan lo que ya existe.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v})

    lines = ["# forkfinder user config (.env)"]
    for key in sorted(existing):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para API/CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="FORKFINDER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    environment: str = Field(
        default="development",
        min_length=1,
        description="Nombre del entorno (development, production, ...).",
    )
    host: str = Field(default="0.0.0.0", min_length=1, description="Interfaz de escucha HTTP.")
    port: int = Field(default=3000, ge=1, le=65535, description="Puerto HTTP.")

    endpoint_secret_code: str | None = Field(
        default=None,
        description="Código de acceso exigido por /api/v1/execute (sin código, todo es 401).",
    )

    fsq_api_key: str | None = Field(
        default=None,
        description="API key de Foursquare Places (Bearer).",
    )
    fsq_places_base_url: str = Field(
        default="https://places-api.foursquare.com",
        min_length=8,
        description="Base URL de Foursquare Places.",
    )
    fsq_api_version: str = Field(
        default="2025-06-17",
        min_length=1,
        description="Versión enviada en X-Places-Api-Version.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request a Foursquare (segundos).",
    )
    user_agent: str = Field(
        default="forkfinder/0.1",
        min_length=1,
        description="User-Agent para peticiones salientes.",
    )

    ai_api_key: str | None = Field(
        default=None,
        description="API key para el proveedor IA (compatible OpenAI).",
    )
    ai_base_url: str = Field(
        default="https://api.openai.com/v1",
        min_length=8,
        description="Base URL compatible OpenAI.",
    )
    ai_model: str = Field(
        default="gpt-4o-mini",
        min_length=1,
        description="Modelo usado para traducir mensajes a comandos.",
    )
    ai_timeout_seconds: float = Field(
        default=45.0,
        gt=0,
        description="Timeout para llamadas al proveedor IA (segundos).",
    )
    ai_max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Reintentos del propio SDK ante fallos transitorios.",
    )

    rate_limit_max_requests: int = Field(
        default=3,
        ge=1,
        description="Peticiones permitidas por ventana en /api/v1/execute.",
    )
    rate_limit_window_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Duración de la ventana fija de rate limit (segundos).",
    )

    log_level: str = Field(default="INFO", min_length=1, description="Nivel de log raíz.")
    log_dir: str = Field(
        default="logs",
        description="Directorio de app.log/error.log; vacío desactiva los ficheros.",
    )
