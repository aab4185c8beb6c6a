"""Available-dates aggregation utilities.

This module owns the fan-out/fan-in flow: one fetch per configured WMS and
WCS server, all in flight at once, merged into a single
`{layer_id: frozenset[timestamp]}` mapping. The CLI delegates to these
helpers, which keeps side-effects (printing, progress bars) out of the core
logic and lets tests inject a mocked HTTP client.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable

import httpx

from adapters.http_client import build_async_client
from adapters.ows_sources import WCSCoverageFetcher, WMSCapabilitiesFetcher
from core.capabilities import empty_available_dates, merge_available_dates
from core.config import AppSettings
from core.domain.models import AvailableDates, ServersUrls
from core.interfaces.fetcher import CapabilitiesFetcher
from core.resources_loader import resolve_servers

logger = logging.getLogger(__name__)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (errors, progress)."""

    error: Callable[[str, Exception], None] | None = None
    server_done: Callable[[str], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation."""

    dates: AvailableDates
    servers: ServersUrls
    failed: list[str] = field(default_factory=list)


async def collect_available_dates(
    *,
    settings: AppSettings,
    servers: ServersUrls,
    hooks: PipelineHooks | None = None,
    client: httpx.AsyncClient | None = None,
) -> PipelineResult:
    hooks = hooks or PipelineHooks()
    failed: list[str] = []

    async def safe_fetch(
        fetcher_cls: Callable[..., CapabilitiesFetcher],
        shared: httpx.AsyncClient,
        server_uri: str,
    ) -> AvailableDates:
        errored = False

        def on_error(request_uri: str, exc: Exception) -> None:
            nonlocal errored
            errored = True
            if hooks.error is None:
                return
            try:
                hooks.error(request_uri, exc)
            except Exception as hook_exc:
                logger.warning("Error hook failed for %s: %s", request_uri, hook_exc)

        try:
            fetcher = fetcher_cls(settings, client=shared, on_error=on_error)
            return await fetcher.fetch(server_uri)
        except Exception as exc:
            # Los fetchers ya absorben sus fallos; esto cubre URIs ilegibles.
            logger.error("Unexpected error fetching %s: %s", server_uri, exc)
            errored = True
            return empty_available_dates()
        finally:
            # Un fallo por servidor, identificado por la URI configurada.
            if errored:
                failed.append(server_uri)
            if hooks.server_done:
                hooks.server_done(server_uri)

    async def run(shared: httpx.AsyncClient) -> list[AvailableDates]:
        tasks = [
            *(safe_fetch(WMSCapabilitiesFetcher, shared, url) for url in servers.wms),
            *(safe_fetch(WCSCoverageFetcher, shared, url) for url in servers.wcs),
        ]
        return await asyncio.gather(*tasks)

    if client is not None:
        results = await run(client)
    else:
        async with build_async_client(settings) as own_client:
            results = await run(own_client)

    dates = merge_available_dates(*results)
    logger.info(
        "Collected %d layers from %d servers (%d failed)",
        len(dates),
        len(servers.wms) + len(servers.wcs),
        len(failed),
    )
    return PipelineResult(dates=dates, servers=servers, failed=failed)


async def get_layers_available_dates(
    settings: AppSettings | None = None,
    *,
    hooks: PipelineHooks | None = None,
    client: httpx.AsyncClient | None = None,
) -> AvailableDates:
    """Fetch every configured WMS/WCS server and merge their available dates.

    Never raises for network or parse failures; the worst case is an empty
    mapping.
    """

    settings = settings or AppSettings()
    result = await collect_available_dates(
        settings=settings,
        servers=resolve_servers(settings),
        hooks=hooks,
        client=client,
    )
    return result.dates
