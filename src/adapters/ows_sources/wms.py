"""Fuente OWS: WMS `GetCapabilities`.

Implementación:
- Añade `request=GetCapabilities` a la URI configurada.
- Las capas cuelgan de `WMS_Capabilities.Capability.Layer` y pueden anidarse:
  se aplana un nivel.
- Id en `Name`, fechas en `Dimension` ("d1,d2,...").
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.ows_sources.common import ErrorHook, report_fetch_error, request_capabilities_tree
from core.capabilities import as_list, empty_available_dates, format_capabilities_info, get_path
from core.config import AppSettings
from core.domain.models import AvailableDates
from core.domain.service import OWSService
from core.interfaces.fetcher import CapabilitiesFetcher
from core.uri_builder import format_server_uri

LAYERS_PATH = "WMS_Capabilities.Capability.Layer"
LAYER_ID_PATH = "Name._text"
DATES_PATH = "Dimension._text"


def flatten_wms_layers(raw_layers: Any) -> list[Any]:
    """Aplana un nivel de capas WMS.

    - Lista de capas raíz: se concatenan sus `Layer` hijos.
    - Capa raíz única: se toman sus `Layer` (vacío si no hay).
    """

    if isinstance(raw_layers, list):
        flattened: list[Any] = []
        for root_layer in raw_layers:
            flattened.extend(as_list(get_path(root_layer, "Layer")))
        return flattened
    return as_list(get_path(raw_layers, "Layer", []))


class WMSCapabilitiesFetcher(CapabilitiesFetcher):
    """Lista las fechas disponibles de las capas de un servidor WMS."""

    service = OWSService.WMS

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        on_error: ErrorHook | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client
        self._on_error = on_error

    async def fetch(self, server_uri: str) -> AvailableDates:
        request_uri = format_server_uri(server_uri, {"request": self.service.request_name})

        try:
            tree = await request_capabilities_tree(
                request_uri, settings=self._settings, client=self._client
            )
            layers = flatten_wms_layers(get_path(tree, LAYERS_PATH))
            return format_capabilities_info(layers, LAYER_ID_PATH, DATES_PATH)
        except Exception as exc:
            report_fetch_error(request_uri, exc, self._on_error)
            return empty_available_dates()
