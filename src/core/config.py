"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/OWS) lean config de forma consistente.
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
        return base / "ows-dates"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ows-dates"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ows-dates"
    return Path.home() / ".config" / "ows-dates"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="OWS_DATES_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos). Un servidor colgado no bloquea el agregado.",
    )
    user_agent: str = Field(
        default="ows-dates/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones a servidores WMS/WCS.",
    )

    servers_config_path: Path | None = Field(
        default=None,
        description="Ruta al JSON de la aplicación con `serversUrls.wms` / `serversUrls.wcs`.",
    )
    wms_servers: list[str] = Field(
        default_factory=list,
        description="URIs WMS adicionales (JSON list en env var).",
    )
    wcs_servers: list[str] = Field(
        default_factory=list,
        description="URIs WCS adicionales (JSON list en env var).",
    )
