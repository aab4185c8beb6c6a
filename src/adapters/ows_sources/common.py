"""Piezas compartidas por los fetchers WMS/WCS.

Ambos protocolos siguen el mismo flujo: GET -> XML -> árbol compacto. Lo que
cambia es el path a las capas y a sus campos.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from adapters.http_client import build_async_client, fetch_content
from adapters.xml_tree import xml_to_tree
from core.config import AppSettings

logger = logging.getLogger(__name__)

# Canal lateral de errores: (request_uri, excepción).
ErrorHook = Callable[[str, Exception], None]


async def request_capabilities_tree(
    request_uri: str,
    *,
    settings: AppSettings,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Descarga `request_uri` y lo devuelve como árbol compacto.

    Si no se inyecta `client`, se abre uno propio para esta petición.
    """

    if client is not None:
        content = await fetch_content(client, request_uri)
    else:
        async with build_async_client(settings) as own_client:
            content = await fetch_content(own_client, request_uri)
    return xml_to_tree(content)


def report_fetch_error(request_uri: str, exc: Exception, hook: ErrorHook | None = None) -> None:
    logger.error("Server returned an error for request GET/%s, error: %s", request_uri, exc)
    if hook is not None:
        hook(request_uri, exc)
