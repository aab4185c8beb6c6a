from __future__ import annotations

import asyncio

import httpx

from conftest import FEB_01, JAN_01, JAN_11, JAN_21, MAR_01
from core.config import AppSettings
from core.domain.models import ServersUrls
from core.services.dates_pipeline import (
    PipelineHooks,
    collect_available_dates,
    get_layers_available_dates,
)


def _available_dates(client: httpx.AsyncClient, settings: AppSettings, hooks: PipelineHooks | None = None):
    async def go():
        async with client:
            return await get_layers_available_dates(settings, hooks=hooks, client=client)

    return asyncio.run(go())


def test_wms_and_wcs_results_are_merged(make_client):
    settings = AppSettings(wms_servers=["http://wms.test/ows"], wcs_servers=["http://wcs.test/ows"])

    result = _available_dates(make_client(), settings)

    assert dict(result) == {
        "rainfall": frozenset({JAN_01, JAN_11, JAN_21}),
        "ndvi": frozenset({JAN_01, FEB_01}),
        "boundaries": frozenset(),
        "soil_moisture": frozenset({MAR_01}),
    }


def test_failing_server_does_not_affect_the_others(make_client):
    errors: list[str] = []
    done: list[str] = []
    hooks = PipelineHooks(error=lambda uri, exc: errors.append(uri), server_done=done.append)
    settings = AppSettings(
        wms_servers=["http://down.test/ows", "http://wms.test/ows"],
        wcs_servers=["http://broken.test/ows"],
    )

    result = _available_dates(make_client(), settings, hooks)

    assert dict(result) == {
        "rainfall": frozenset({JAN_01, JAN_11}),
        "ndvi": frozenset({JAN_01, FEB_01}),
        "boundaries": frozenset(),
    }
    assert sorted(errors) == [
        "http://broken.test/ows?request=DescribeCoverage",
        "http://down.test/ows?request=GetCapabilities",
    ]
    assert sorted(done) == ["http://broken.test/ows", "http://down.test/ows", "http://wms.test/ows"]


def test_every_server_failing_resolves_to_empty(make_client):
    settings = AppSettings(wms_servers=["http://down.test/a"], wcs_servers=["http://error.test/b"])
    assert dict(_available_dates(make_client(), settings)) == {}


def test_no_servers_configured_resolves_to_empty(make_client):
    assert dict(_available_dates(make_client(), AppSettings())) == {}


def test_hook_errors_do_not_abort_the_aggregate(make_client):
    def explode(uri: str, exc: Exception) -> None:
        raise RuntimeError("hook failed")

    servers = ServersUrls(wms=["http://down.test/ows", "http://wms.test/ows"])

    async def go():
        async with make_client() as client:
            return await collect_available_dates(
                settings=AppSettings(),
                servers=servers,
                hooks=PipelineHooks(error=explode),
                client=client,
            )

    result = asyncio.run(go())

    assert set(result.dates) == {"rainfall", "ndvi", "boundaries"}
    assert result.failed == ["http://down.test/ows"]


def test_collect_reports_failed_servers(make_client):
    servers = ServersUrls(wms=["http://wms.test/ows"], wcs=["http://down.test/ows"])

    async def go():
        async with make_client() as client:
            return await collect_available_dates(settings=AppSettings(), servers=servers, client=client)

    result = asyncio.run(go())

    assert result.servers == servers
    assert result.failed == ["http://down.test/ows"]
    assert "rainfall" in result.dates


def test_all_requests_are_in_flight_together(make_client):
    in_flight = 0
    peak = 0

    async def handler(request: httpx.Request) -> httpx.Response:
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.01)
        in_flight -= 1
        return httpx.Response(200, text="<WMS_Capabilities/>")

    settings = AppSettings(wms_servers=[f"http://wms{i}.test/ows" for i in range(3)], wcs_servers=["http://wcs.test/ows"])
    _available_dates(make_client(handler), settings)

    assert peak == 4
