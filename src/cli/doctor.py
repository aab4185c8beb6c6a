"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import ServersUrls
from core.domain.service import OWSService
from core.resources_loader import get_default_config_path, resolve_servers
from core.uri_builder import format_server_uri

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(client: httpx.AsyncClient, url: str) -> tuple[bool, str]:
    try:
        response = await client.get(url)
        return response.is_success, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


async def _check_servers(
    settings: AppSettings,
    servers: ServersUrls,
) -> list[tuple[OWSService, str, bool, str]]:
    targets = [
        *((OWSService.WMS, url) for url in servers.wms),
        *((OWSService.WCS, url) for url in servers.wcs),
    ]
    async with build_async_client(settings) as client:
        checks = await asyncio.gather(
            *(
                _check_http(client, format_server_uri(url, {"request": service.request_name}))
                for service, url in targets
            )
        )
    return [(service, url, ok, detail) for (service, url), (ok, detail) in zip(targets, checks)]


@app.command()
def run(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="JSON file with serversUrls.wms / serversUrls.wcs.",
    ),
) -> None:
    """Run baseline diagnostics on configuration and server reachability."""

    settings = AppSettings(servers_config_path=config) if config else AppSettings()

    table = Table(title="OWS-Dates Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    config_path = settings.servers_config_path or get_default_config_path()
    if config_path:
        table.add_row("Servers config", "OK", str(config_path))
    else:
        table.add_row("Servers config", "OPTIONAL", "No prism.json found -> env lists only")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    try:
        servers = resolve_servers(settings)
    except (OSError, ValueError) as exc:
        table.add_row("Servers config", "FAIL", str(exc))
        _console.print(table)
        raise typer.Exit(code=1)

    if not servers.wms and not servers.wcs:
        table.add_row("Servers", "WARN", "No WMS/WCS servers configured")

    # Connectivity (best-effort)
    for service, url, ok, detail in asyncio.run(_check_servers(settings, servers)):
        table.add_row(f"{service.label()} {url}", "OK" if ok else "FAIL", detail)

    _console.print(table)
