"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from datetime import datetime, timezone

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AvailableDates, Timestamp, sort_timestamps


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("OWS-Dates", style="bold cyan")
    subtitle = Text("WMS • WCS • Fechas disponibles por capa", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_timestamp(ts: Timestamp) -> str:
    if ts is None:
        return "invalid"
    try:
        moment = datetime.fromtimestamp(ts / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        # Fuera del rango de datetime: se muestra el valor crudo.
        return f"{ts} ms"
    if moment.hour == moment.minute == moment.second == 0:
        return moment.date().isoformat()
    return moment.isoformat().replace("+00:00", "Z")


def build_dates_table(dates: AvailableDates) -> Table:
    """Tabla con un resumen por capa (conteo, primera y última fecha)."""

    table = Table(title="Available Dates")
    table.add_column("Layer", style="cyan", no_wrap=True)
    table.add_column("Dates", style="white", justify="right")
    table.add_column("First", style="green")
    table.add_column("Last", style="green")
    table.add_column("Invalid", style="red", justify="right")

    for layer_id in sorted(dates, key=lambda key: (key is not None, key or "")):
        ordered = sort_timestamps(dates[layer_id])
        valid = [ts for ts in ordered if ts is not None]
        invalid = len(ordered) - len(valid)
        table.add_row(
            Text(layer_id) if layer_id is not None else Text("<no id>", style="dim"),
            str(len(valid)),
            format_timestamp(valid[0]) if valid else "-",
            format_timestamp(valid[-1]) if valid else "-",
            str(invalid) if invalid else "",
        )
    return table
