"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y logging para todos los servidores OWS.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que WMS y WCS se comporten igual.
    - Sin timeout, un único servidor colgado bloquearía el agregado completo.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/xml,text/xml;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def fetch_content(client: httpx.AsyncClient, url: str) -> bytes:
    """GET `url` y devuelve el cuerpo crudo.

    Sin decodificar: el XML declara su propio encoding.

    Respuestas no-2xx lanzan `httpx.HTTPStatusError`.
    """

    logger.debug("GET %s", url)
    response = await client.get(url)
    response.raise_for_status()
    return response.content
