"""Construcción de URIs de petición OWS.

Los endpoints configurados suelen traer ya parámetros (`service=WMS`,
`version=1.3.0`, `map=...`). Aquí se fusionan con los de la petición concreta
sin duplicar claves.
"""

from __future__ import annotations

import re
from typing import Mapping, Union
from urllib.parse import parse_qs, quote, urlencode, urlsplit, urlunsplit

QueryValue = Union[str, bool, int, float]

# Caracteres que un valor de query deja sin escapar (como encodeURIComponent).
_QUERY_SAFE = "!*'()"
# Reservados: su escape se conserva al decodificar, o cambiaría la petición.
_RESERVED = set(";/?:@&=+$,#")
_ESCAPE_RUN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")


def _query_value(value: QueryValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _decode_escape_run(match: re.Match[str]) -> str:
    run = match.group(0)
    try:
        decoded = bytes.fromhex(run.replace("%", "")).decode("utf-8")
    except UnicodeDecodeError:
        return run
    return "".join(
        quote(char, safe="") if char in _RESERVED else char for char in decoded
    )


def decode_uri(uri: str) -> str:
    """Decodifica los escapes de `uri` salvo los de caracteres reservados.

    `%20` vuelve a ser un espacio; `%26`, `%2B`, `%2F`... se mantienen.
    """

    return _ESCAPE_RUN.sub(_decode_escape_run, uri)


def format_server_uri(server_uri: str, query_prop: Mapping[str, QueryValue]) -> str:
    """Fusiona `query_prop` sobre la query existente de `server_uri`.

    - Los parámetros extra ganan ante colisión de clave (reemplazan todos
      sus valores); las claves repetidas del resto se conservan.
    - El resultado se devuelve decodificado salvo los caracteres reservados.
    - Sin validación de esquema/host: los errores del parser se propagan.
    """

    parts = urlsplit(server_uri)

    # La query cruda se descarta: se reconstruye desde su forma parseada.
    query: dict[str, list[str]] = parse_qs(parts.query, keep_blank_values=True)
    query.update({key: [_query_value(value)] for key, value in query_prop.items()})

    encoded_query = urlencode(query, doseq=True, safe=_QUERY_SAFE, quote_via=quote)
    path = parts.path or ("/" if parts.netloc else "")
    formatted = urlunsplit((parts.scheme, parts.netloc, path, encoded_query, parts.fragment))
    return decode_uri(formatted)
