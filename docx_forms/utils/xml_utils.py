"""Helper functions to build WordprocessingML parts with ElementTree."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional
from xml.etree import ElementTree as ET


@dataclass(frozen=True)
class Namespaces:
    """Common OpenXML namespace prefixes used across writers."""

    WORD: Dict[str, str] = None  # type: ignore[assignment]
    RELS: Dict[str, str] = None  # type: ignore[assignment]
    CONTENT_TYPES: Dict[str, str] = None  # type: ignore[assignment]
    CORE_PROPERTIES: Dict[str, str] = None  # type: ignore[assignment]
    EXTENDED_PROPERTIES: Dict[str, str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:  # pragma: no cover
        raise RuntimeError("Namespaces should not be instantiated")


Namespaces.WORD = {  # type: ignore[attr-defined]
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
}
Namespaces.RELS = {  # type: ignore[attr-defined]
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}
Namespaces.CONTENT_TYPES = {  # type: ignore[attr-defined]
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
}
Namespaces.CORE_PROPERTIES = {  # type: ignore[attr-defined]
    "cp": "http://schemas.openxmlformats.org/package/2006/metadata/core-properties",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
}
Namespaces.EXTENDED_PROPERTIES = {  # type: ignore[attr-defined]
    "ep": "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties",
}

# Prefixes that must appear verbatim in written parts. Office readers accept
# any prefix in theory, but ``ns0`` style output trips several of them.
for _prefix, _uri in {**Namespaces.WORD, **Namespaces.CORE_PROPERTIES}.items():
    ET.register_namespace(_prefix, _uri)

XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

# Characters outside the XML 1.0 ``Char`` production.
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def qualify(name: str, namespaces: Optional[Dict[str, str]] = None) -> str:
    """Expand ``prefix:local`` into ElementTree's ``{uri}local`` notation."""
    prefix, local = name.split(":", 1)
    namespace = (namespaces or Namespaces.WORD)[prefix]
    return f"{{{namespace}}}{local}"


def w_element(parent: ET.Element, name: str, **attributes: object) -> ET.Element:
    """Append a ``w:`` child whose attributes are all in the ``w:`` namespace."""
    child = ET.SubElement(parent, qualify(f"w:{name}"))
    for key, value in attributes.items():
        child.set(qualify(f"w:{key}"), str(value))
    return child


def find_illegal_character(text: str) -> Optional[str]:
    """Return the first character XML 1.0 cannot carry, if any."""
    match = _ILLEGAL_XML_CHARS.search(text)
    return match.group(0) if match else None


def default_namespace_root(tag: str, namespace: str) -> ET.Element:
    """Root element whose unprefixed children live in ``namespace``.

    Package parts such as [Content_Types].xml use a default namespace with
    unqualified attributes, which ElementTree's ``default_namespace`` option rejects.
    """
    return ET.Element(tag, {"xmlns": namespace})


def to_xml_bytes(element: ET.Element) -> bytes:
    """Serialize an element tree as a standalone UTF-8 XML part."""
    body = ET.tostring(element, encoding="unicode")
    declaration = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
    return (declaration + body).encode("utf-8")
