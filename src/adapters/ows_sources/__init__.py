"""Fuentes OWS (fetchers concretos).

Por qué un paquete:
- Agrupa módulos por protocolo (WMS, WCS).
- Cada módulo implementa `core.interfaces.fetcher.CapabilitiesFetcher`.
"""

from adapters.ows_sources.common import ErrorHook
from adapters.ows_sources.wcs import WCSCoverageFetcher
from adapters.ows_sources.wms import WMSCapabilitiesFetcher, flatten_wms_layers

__all__ = [
	"ErrorHook",
	"WCSCoverageFetcher",
	"WMSCapabilitiesFetcher",
	"flatten_wms_layers",
]
