"""Extracción de fechas disponibles desde árboles de capabilities.

Este módulo vive en `core/` porque es lógica pura: recibe el árbol compacto
(dicts/listas/strings) que producen los adaptadores XML y lo reduce a
`{layer_id: frozenset[timestamp]}`. No hace I/O.

Contrato de tolerancia:
- Un path ausente nunca lanza: resuelve a `None` (id) o lista vacía (fechas).
- Una fecha que no se puede interpretar produce `INVALID_TIMESTAMP`, no error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone
from functools import reduce
from types import MappingProxyType
from typing import Any

from dateutil import parser as date_parser

from core.domain.models import INVALID_TIMESTAMP, AvailableDates, Timestamp

logger = logging.getLogger(__name__)

_MISSING = object()
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_COLLECTIONS = (list, tuple, set, frozenset)


def get_path(tree: Any, path: str, default: Any = None) -> Any:
    """Lookup encadenado por puntos (`"Name._text"`).

    Recorre mappings por clave y listas por índice numérico. Cualquier
    segmento ausente devuelve `default`.
    """

    current = tree
    for segment in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        elif isinstance(current, list) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else _MISSING
        else:
            current = _MISSING
        if current is _MISSING:
            return default
    return current


def as_list(value: Any) -> list[Any]:
    """Normaliza la forma compacta: un hijo único no viene envuelto en lista."""

    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return [value]


def parse_timestamp(value: str) -> Timestamp:
    """Convierte una fecha a epoch en milisegundos.

    Orden:
    1) ISO-8601 estricto (`isoparse`).
    2) Formatos comunes (`parse`).

    Las fechas sin zona horaria se interpretan en UTC.
    """

    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError):
            logger.debug("Unparseable date value: %r", value)
            return INVALID_TIMESTAMP

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return (parsed - _EPOCH) // timedelta(milliseconds=1)


def _raw_date_entries(raw_dates: Any) -> list[Any]:
    # WMS publica "d1,d2,..." en un único texto; WCS una lista de nodos.
    if isinstance(raw_dates, str):
        return raw_dates.split(",")
    return as_list(raw_dates)


def _parse_dates(raw_dates: Any) -> Iterable[Timestamp]:
    for entry in _raw_date_entries(raw_dates):
        if isinstance(entry, Mapping):
            entry = entry.get("_text", "")
        text = str(entry).strip()
        if not text:
            continue
        yield parse_timestamp(text)


def format_capabilities_info(
    raw_layers: Any,
    layer_id_path: str,
    dates_path: str,
) -> AvailableDates:
    """Formatea capas crudas a `{layer_id: frozenset[timestamp]}`.

    - `raw_layers`: nodos de capa devueltos por el servidor.
    - `layer_id_path`: path al id de la capa.
    - `dates_path`: path a las fechas disponibles.

    Si dos nodos comparten id, sus fechas se unen (sin duplicados).
    """

    acc: dict[str | None, frozenset[Timestamp]] = {}
    for layer in as_list(raw_layers):
        layer_id = get_path(layer, layer_id_path)
        if layer_id is not None and not isinstance(layer_id, str):
            layer_id = str(layer_id)
        if layer_id is None:
            logger.debug("Layer without id at %r; kept under the None key", layer_id_path)

        available_dates = frozenset(_parse_dates(get_path(layer, dates_path, [])))
        acc[layer_id] = available_dates | acc.get(layer_id, frozenset())

    return MappingProxyType(acc)


def deep_merge(left: Any, right: Any) -> Any:
    """Merge recursivo sin mutar las entradas.

    - Mapping + Mapping: merge clave a clave.
    - Colección + colección: unión (frozenset).
    - Cualquier otra hoja: gana `right`.
    """

    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged = dict(left)
        for key, value in right.items():
            merged[key] = deep_merge(left[key], value) if key in left else value
        return merged
    if isinstance(left, _COLLECTIONS) and isinstance(right, _COLLECTIONS):
        return frozenset(left) | frozenset(right)
    return right


def merge_available_dates(*mappings: AvailableDates) -> AvailableDates:
    """Combina varios resultados; las fechas de una misma capa se unen."""

    merged = reduce(deep_merge, mappings, {})
    return MappingProxyType({key: frozenset(values) for key, values in merged.items()})


def empty_available_dates() -> AvailableDates:
    return MappingProxyType({})
