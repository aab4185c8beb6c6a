"""Conversión XML -> árbol compacto (dicts/listas/strings).

Forma del árbol:
- Cada elemento es un dict; sus hijos se indexan por nombre.
- Un hijo único queda como dict; hijos repetidos forman una lista.
- El texto (trimmed) vive en `_text`; los atributos en `_attributes`.
- Los comentarios se ignoran.
- Los nombres conservan el prefijo del documento (`gml:timePosition`); el
  namespace por defecto se omite (`WMS_Capabilities`).

Por qué un árbol compacto y no XPath:
- Los paths de capabilities se expresan igual para WMS y WCS (`Name._text`),
  y el Core no necesita conocer ElementTree.
"""

from __future__ import annotations

import io
import xml.etree.ElementTree as ET
from typing import Any

TEXT_KEY = "_text"
ATTRIBUTES_KEY = "_attributes"


def _qualified_name(tag: str, prefixes: dict[str, str]) -> str:
    if not tag.startswith("{"):
        return tag
    uri, local = tag[1:].split("}", 1)
    prefix = prefixes.get(uri, "")
    return f"{prefix}:{local}" if prefix else local


def _add_child(node: dict[str, Any], name: str, value: Any) -> None:
    existing = node.get(name)
    if existing is None:
        node[name] = value
    elif isinstance(existing, list):
        existing.append(value)
    else:
        node[name] = [existing, value]


def _element_to_node(element: ET.Element, prefixes: dict[str, str]) -> dict[str, Any]:
    node: dict[str, Any] = {}
    if element.attrib:
        node[ATTRIBUTES_KEY] = {
            _qualified_name(key, prefixes): value for key, value in element.attrib.items()
        }

    texts: list[str] = []
    if element.text and element.text.strip():
        texts.append(element.text.strip())

    for child in element:
        # ElementTree no emite comentarios por defecto, pero el tail sí cuenta.
        if isinstance(child.tag, str):
            _add_child(node, _qualified_name(child.tag, prefixes), _element_to_node(child, prefixes))
        if child.tail and child.tail.strip():
            texts.append(child.tail.strip())

    if texts:
        node[TEXT_KEY] = " ".join(texts)
    return node


def xml_to_tree(document: str | bytes) -> dict[str, Any]:
    """Parsea `document` y devuelve `{root_name: root_node}`.

    Con `bytes` manda la declaración `<?xml encoding=...?>` del documento.

    Lanza `xml.etree.ElementTree.ParseError` si el XML está mal formado.
    """

    prefixes: dict[str, str] = {}
    root: ET.Element | None = None
    source = io.BytesIO(document) if isinstance(document, bytes) else io.StringIO(document)
    for event, item in ET.iterparse(source, events=("start-ns", "end")):
        if event == "start-ns":
            prefix, uri = item
            # Si un URI aparece con varios prefijos, manda el primero.
            prefixes.setdefault(uri, prefix)
        else:
            root = item

    if root is None:  # pragma: no cover - iterparse ya falla sin raíz
        raise ET.ParseError("no element found")
    return {_qualified_name(root.tag, prefixes): _element_to_node(root, prefixes)}
