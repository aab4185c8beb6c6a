"""CLI principal (Typer).

Comandos:
- `dates`: consulta todos los servidores configurados y muestra/exporta las
  fechas disponibles por capa.
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress

from adapters.json_exporter import export_available_dates_json
from cli import doctor
from cli.ui_components import build_dates_table, print_banner
from core.config import AppSettings
from core.domain.models import ServersUrls
from core.resources_loader import resolve_servers
from core.services.dates_pipeline import PipelineHooks, collect_available_dates

app = typer.Typer(no_args_is_help=True, help="Available dates of WMS/WCS layers.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    # httpx loguea cada request en INFO; solo interesa en modo verbose.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def dates(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="JSON file with serversUrls.wms / serversUrls.wcs.",
    ),
    wms: Optional[List[str]] = typer.Option(None, "--wms", help="Extra WMS server URI (repeatable)."),
    wcs: Optional[List[str]] = typer.Option(None, "--wcs", help="Extra WCS server URI (repeatable)."),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Write the result as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Skip the banner."),
) -> None:
    """Fetch every configured server and list the available dates per layer."""

    _configure_logging(verbose)
    if not no_banner:
        print_banner(_console)

    settings = AppSettings(servers_config_path=config) if config else AppSettings()
    try:
        configured = resolve_servers(settings)
    except (OSError, ValueError) as exc:
        _err_console.print(f"[red]Invalid servers config:[/red] {exc}")
        raise typer.Exit(code=1)

    servers = ServersUrls(
        wms=[*configured.wms, *[u for u in wms or [] if u not in configured.wms]],
        wcs=[*configured.wcs, *[u for u in wcs or [] if u not in configured.wcs]],
    )
    total = len(servers.wms) + len(servers.wcs)
    if not total:
        _err_console.print("[yellow]No WMS/WCS servers configured.[/yellow]")

    with Progress(console=_err_console, transient=True) as progress:
        task = progress.add_task("Fetching capabilities", total=total)
        hooks = PipelineHooks(server_done=lambda _uri: progress.advance(task))
        result = asyncio.run(
            collect_available_dates(settings=settings, servers=servers, hooks=hooks)
        )

    _console.print(build_dates_table(result.dates))
    if result.failed:
        _err_console.print(
            f"[yellow]{len(result.failed)} of {total} servers failed (see log above).[/yellow]"
        )

    if json_out:
        path = export_available_dates_json(dates=result.dates, servers=servers, output_path=json_out)
        _console.print(f"[green]Saved JSON to:[/green] {path}")


def run() -> None:
    app()
