"""Cargador de la configuración de servidores.

Este módulo vive en `core/` porque:
- centraliza el *qué* servidores consultamos sin acoplarse a la CLI
- evita duplicar lógica de paths en adaptadores.

El JSON de aplicación (p.ej. `prism.json`) tiene la forma:
    {"serversUrls": {"wms": [...], "wcs": [...]}, ...}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from core.config import AppSettings, get_user_config_dir
from core.domain.models import ServersConfig, ServersUrls

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "prism.json"


def _project_root() -> Path:
    # core/resources_loader.py -> core -> src -> <project_root>
    return Path(__file__).resolve().parents[2]


def get_default_config_path(filename: str = DEFAULT_CONFIG_FILENAME) -> Path | None:
    """Busca el JSON de configuración en ubicaciones comunes.

    Orden:
    1) <project_root>/config/<filename>
    2) <user_config_dir>/<filename>
    3) ./<filename> (cwd)
    """

    candidates = [
        _project_root() / "config" / filename,
        get_user_config_dir() / filename,
        Path.cwd() / filename,
    ]
    for p in candidates:
        if p.exists() and p.is_file():
            return p
    return None


def load_servers_config(path: Path) -> ServersConfig:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return ServersConfig.model_validate(data)


def _dedupe(urls: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for url in urls:
        url = url.strip()
        if not url or url in seen:
            continue
        seen.add(url)
        out.append(url)
    return out


def resolve_servers(settings: AppSettings | None = None) -> ServersUrls:
    """Combina el JSON de aplicación con las listas de settings/env.

    Reglas:
    - Si `servers_config_path` está definido, se usa (debe existir).
    - Si no, se busca `prism.json` en ubicaciones por defecto.
    - Sin fichero: solo las listas de settings (posiblemente vacías).
    """

    settings = settings or AppSettings()

    path = settings.servers_config_path or get_default_config_path()
    config = ServersConfig()
    if path is not None:
        logger.debug("Loading servers config from %s", path)
        config = load_servers_config(path)

    return ServersUrls(
        wms=_dedupe([*config.servers_urls.wms, *settings.wms_servers]),
        wcs=_dedupe([*config.servers_urls.wcs, *settings.wcs_servers]),
    )
