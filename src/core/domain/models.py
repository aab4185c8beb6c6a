"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El fichero de configuración de servidores llega como JSON arbitrario; se
  valida en el borde y el resto del código trabaja con tipos.

Nota:
- `AvailableDates` no es un modelo: es un mapping de solo lectura
  (`MappingProxyType`) con `frozenset` por capa, para que ninguna transformación
  pueda mutar un resultado ya construido.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

# Epoch en milisegundos; `None` marca una fecha que no se pudo interpretar.
Timestamp = int | None
INVALID_TIMESTAMP: Timestamp = None

AvailableDates = Mapping[str | None, frozenset[Timestamp]]


class ServersUrls(BaseModel):
    """Listas de endpoints configurados por protocolo."""

    wms: list[str] = Field(
        default_factory=list,
        description="Endpoints WMS (GetCapabilities).",
    )
    wcs: list[str] = Field(
        default_factory=list,
        description="Endpoints WCS (DescribeCoverage).",
    )


class ServersConfig(BaseModel):
    """Subset del JSON de aplicación que nos interesa.

    El fichero real lleva muchas más secciones (capas, mapa, etc.); se ignoran.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    servers_urls: ServersUrls = Field(
        default_factory=ServersUrls,
        alias="serversUrls",
        description="Bloque `serversUrls` con listas `wms` y `wcs`.",
    )


def sort_timestamps(values: frozenset[Timestamp] | set[Timestamp]) -> list[Timestamp]:
    """Orden estable para presentación: inválidos primero, luego cronológico."""

    return sorted(values, key=lambda ts: (ts is not None, ts or 0))


class AvailableDatesReport(BaseModel):
    """Artefacto exportable con el resultado del agregado."""

    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Momento de generación del reporte (UTC).",
    )
    servers: ServersUrls = Field(
        default_factory=ServersUrls,
        description="Servidores consultados.",
    )
    layers: dict[str, list[Timestamp]] = Field(
        default_factory=dict,
        description="Fechas disponibles por capa (epoch ms, ordenadas).",
    )

    @classmethod
    def from_available_dates(
        cls,
        dates: AvailableDates,
        *,
        servers: ServersUrls | None = None,
    ) -> "AvailableDatesReport":
        # JSON no admite claves nulas: la capa sin id se exporta como "null".
        layers = {
            ("null" if layer_id is None else layer_id): sort_timestamps(values)
            for layer_id, values in dates.items()
        }
        return cls(servers=servers or ServersUrls(), layers=layers)
