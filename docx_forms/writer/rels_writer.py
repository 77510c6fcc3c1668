"""Build Open Packaging Convention relationship parts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List
from xml.etree import ElementTree as ET

from docx_forms.utils.xml_utils import Namespaces, default_namespace_root, to_xml_bytes

OFFICE_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"

RELTYPE_OFFICE_DOCUMENT = f"{OFFICE_REL_NS}/officeDocument"
RELTYPE_STYLES = f"{OFFICE_REL_NS}/styles"
RELTYPE_EXTENDED_PROPERTIES = f"{OFFICE_REL_NS}/extended-properties"
RELTYPE_CORE_PROPERTIES = f"{PACKAGE_REL_NS}/metadata/core-properties"


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    r_id: str
    rel_type: str
    target: str


class Relationships:
    """Ordered relationships of one source part, with sequential ids."""

    def __init__(self) -> None:
        self._items: List[Relationship] = []

    def add(self, rel_type: str, target: str) -> str:
        """Register a relationship and return its ``rIdN`` identifier."""
        r_id = f"rId{len(self._items) + 1}"
        self._items.append(Relationship(r_id=r_id, rel_type=rel_type, target=target))
        return r_id

    def __len__(self) -> int:
        return len(self._items)

    def to_xml(self) -> bytes:
        root = default_namespace_root("Relationships", Namespaces.RELS["rel"])
        for rel in self._items:
            ET.SubElement(
                root,
                "Relationship",
                {"Id": rel.r_id, "Type": rel.rel_type, "Target": rel.target},
            )
        return to_xml_bytes(root)
