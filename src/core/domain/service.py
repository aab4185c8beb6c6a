"""OGC service kinds handled by OWS-Dates.

Each protocol publishes its per-layer metadata through a different request;
keeping the mapping here lets fetchers, the CLI and the doctor share a single
source of truth.
"""

from __future__ import annotations

from enum import Enum


class OWSService(str, Enum):
    """Supported OGC Web Services."""

    WMS = "wms"
    WCS = "wcs"

    @property
    def request_name(self) -> str:
        """Value of the `request` query parameter listing layer metadata."""

        return "GetCapabilities" if self is OWSService.WMS else "DescribeCoverage"

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.value.upper()
