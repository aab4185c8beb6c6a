"""Shared fixtures for the OWS-Dates test suite."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

WMS_CAPABILITIES = """<?xml version="1.0" encoding="UTF-8"?>
<WMS_Capabilities version="1.3.0" xmlns="http://www.opengis.net/wms" xmlns:xlink="http://www.w3.org/1999/xlink">
  <!-- generated by the map server -->
  <Service>
    <Name>WMS</Name>
  </Service>
  <Capability>
    <Layer>
      <Title>Root</Title>
      <Layer queryable="1">
        <Name>rainfall</Name>
        <Dimension name="time" units="ISO8601">2020-01-01,2020-01-11</Dimension>
      </Layer>
      <Layer>
        <Name>ndvi</Name>
        <Dimension name="time" units="ISO8601">2020-01-01T00:00:00Z,2020-02-01</Dimension>
      </Layer>
      <Layer>
        <Name>boundaries</Name>
      </Layer>
    </Layer>
  </Capability>
</WMS_Capabilities>
"""

WCS_COVERAGE = """<?xml version="1.0" encoding="UTF-8"?>
<CoverageDescription xmlns="http://www.opengis.net/wcs" xmlns:gml="http://www.opengis.net/gml" version="1.0.0">
  <CoverageOffering>
    <name>rainfall</name>
    <domainSet>
      <temporalDomain>
        <gml:timePosition>2020-01-11T00:00:00Z</gml:timePosition>
        <gml:timePosition>2020-01-21T00:00:00Z</gml:timePosition>
      </temporalDomain>
    </domainSet>
  </CoverageOffering>
  <CoverageOffering>
    <name>soil_moisture</name>
    <domainSet>
      <temporalDomain>
        <gml:timePosition>2020-03-01</gml:timePosition>
      </temporalDomain>
    </domainSet>
  </CoverageOffering>
</CoverageDescription>
"""

# Epoch ms (UTC midnight).
JAN_01 = 1577836800000
JAN_02 = 1577923200000
JAN_11 = 1578700800000
JAN_21 = 1579564800000
FEB_01 = 1580515200000
MAR_01 = 1583020800000


def ows_handler(request: httpx.Request) -> httpx.Response:
    """Fake OWS servers keyed by host."""

    host = request.url.host
    if host == "wms.test":
        return httpx.Response(200, text=WMS_CAPABILITIES)
    if host == "wcs.test":
        return httpx.Response(200, text=WCS_COVERAGE)
    if host == "broken.test":
        return httpx.Response(200, text="<WMS_Capabilities><Capability>")
    if host == "error.test":
        return httpx.Response(500, text="Internal Server Error")
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config dirs, `.env` files and `prism.json` lookups out of tests."""

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    for name in ("OWS_DATES_SERVERS_CONFIG_PATH", "OWS_DATES_WMS_SERVERS", "OWS_DATES_WCS_SERVERS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    def factory(handler=ows_handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
