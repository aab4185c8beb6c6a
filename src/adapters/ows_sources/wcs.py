"""Fuente OWS: WCS `DescribeCoverage`."""

from __future__ import annotations

import httpx

from adapters.ows_sources.common import ErrorHook, report_fetch_error, request_capabilities_tree
from core.capabilities import empty_available_dates, format_capabilities_info, get_path
from core.config import AppSettings
from core.domain.models import AvailableDates
from core.domain.service import OWSService
from core.interfaces.fetcher import CapabilitiesFetcher
from core.uri_builder import format_server_uri

# WCS no anida coberturas: no hace falta aplanar.
LAYERS_PATH = "CoverageDescription.CoverageOffering"
LAYER_ID_PATH = "name._text"
DATES_PATH = "domainSet.temporalDomain.gml:timePosition"


class WCSCoverageFetcher(CapabilitiesFetcher):
    """Lista las fechas disponibles de las coberturas de un servidor WCS."""

    service = OWSService.WCS

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
            return format_capabilities_info(get_path(tree, LAYERS_PATH), LAYER_ID_PATH, DATES_PATH)
        except Exception as exc:
            report_fetch_error(request_uri, exc, self._on_error)
            return empty_available_dates()
