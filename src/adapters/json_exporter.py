"""Exportación JSON del agregado.

Por qué JSON:
- Interoperabilidad con frontends de mapas y pipelines que consumen las fechas.
- Permite persistir el resultado sin volver a consultar los servidores.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import AvailableDates, AvailableDatesReport, ServersUrls


def export_available_dates_json(
    *,
    dates: AvailableDates,
    output_path: Path,
    servers: ServersUrls | None = None,
) -> Path:
    """Exporta las fechas disponibles a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    report = AvailableDatesReport.from_available_dates(dates, servers=servers)
    payload = report.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
