"""Contratos de fetchers OWS.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que los fetchers WMS/WCS sean intercambiables y testeables sin
  acoplar el Core a implementaciones concretas.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import AvailableDates


@runtime_checkable
class CapabilitiesFetcher(Protocol):
    """Contrato mínimo para una fuente de fechas disponibles.

    Reglas de diseño:
    - `fetch` es asíncrono porque hace I/O (HTTP).
    - Nunca propaga fallos de red/parseo: devuelve un mapping vacío.
    """

    async def fetch(self, server_uri: str) -> AvailableDates:
        """Consulta `server_uri` y devuelve `{layer_id: frozenset[timestamp]}`."""

        ...
