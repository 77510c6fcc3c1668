"""DOCX package writer responsible for assembling XML parts into a zip archive."""
from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
from xml.etree import ElementTree as ET

from docx_forms.errors import SerializationError
from docx_forms.model.document_model import DOCX_MIME_TYPE
from docx_forms.model.elements import Section
from docx_forms.model.style_model import DEFAULT_STYLES, StylesCatalog
from docx_forms.utils.logger import get_logger
from docx_forms.utils.xml_utils import Namespaces, default_namespace_root, qualify, to_xml_bytes
from docx_forms.writer.document_writer import DocumentWriter
from docx_forms.writer.rels_writer import (
    RELTYPE_CORE_PROPERTIES,
    RELTYPE_EXTENDED_PROPERTIES,
    RELTYPE_OFFICE_DOCUMENT,
    RELTYPE_STYLES,
    Relationships,
)
from docx_forms.writer.styles_writer import StylesWriter

LOGGER = get_logger(__name__)

CONTENT_TYPES_PATH = "[Content_Types].xml"
PACKAGE_REL_PATH = "_rels/.rels"
DOCUMENT_XML_PATH = "word/document.xml"
STYLES_XML_PATH = "word/styles.xml"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"
CORE_PROPS_PATH = "docProps/core.xml"
APP_PROPS_PATH = "docProps/app.xml"

CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CT_XML = "application/xml"
CT_DOCUMENT = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
CT_STYLES = "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"
CT_CORE_PROPS = "application/vnd.openxmlformats-package.core-properties+xml"
CT_APP_PROPS = "application/vnd.openxmlformats-officedocument.extended-properties+xml"

APPLICATION_NAME = "docx_forms"

# Entries carry a fixed timestamp so identical trees give identical archives.
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


@dataclass(frozen=True, slots=True)
class CoreProperties:
    """Package metadata written to docProps/core.xml; only supplied values are emitted."""

    title: Optional[str] = None
    creator: Optional[str] = APPLICATION_NAME
    created: Optional[datetime] = None


@dataclass(slots=True)
class DocxPackageWriter:
    """Container for the XML parts of a DOCX archive, in write order."""

    parts: Dict[str, bytes] = field(default_factory=dict)
    overrides: Dict[str, str] = field(default_factory=dict)

    def add_part(self, name: str, payload: bytes, content_type: Optional[str] = None) -> None:
        if name in self.parts:
            raise SerializationError(f"Duplicate package part: {name}")
        self.parts[name] = payload
        if content_type is not None:
            self.overrides[name] = content_type

    def content_types_xml(self) -> bytes:
        root = default_namespace_root("Types", Namespaces.CONTENT_TYPES["ct"])
        for extension, content_type in (("rels", CT_RELATIONSHIPS), ("xml", CT_XML)):
            ET.SubElement(root, "Default", {"Extension": extension, "ContentType": content_type})
        for name, content_type in self.overrides.items():
            ET.SubElement(root, "Override", {"PartName": f"/{name}", "ContentType": content_type})
        return to_xml_bytes(root)

    def to_bytes(self) -> bytes:
        """Zip the content types manifest first, then every part in insertion order."""
        entries: List[Tuple[str, bytes]] = [(CONTENT_TYPES_PATH, self.content_types_xml())]
        entries.extend(self.parts.items())
        with io.BytesIO() as buffer:
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
                for name, payload in entries:
                    info = zipfile.ZipInfo(name, date_time=ZIP_EPOCH)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    archive.writestr(info, payload)
                    LOGGER.debug("Wrote part %s (%d bytes)", name, len(payload))
            return buffer.getvalue()


def _w3cdtf(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=0, tzinfo=None).isoformat() + "Z"


def _core_properties_xml(properties: CoreProperties) -> bytes:
    ns = Namespaces.CORE_PROPERTIES
    root = ET.Element(qualify("cp:coreProperties", ns))
    if properties.title:
        ET.SubElement(root, qualify("dc:title", ns)).text = properties.title
    if properties.creator:
        ET.SubElement(root, qualify("dc:creator", ns)).text = properties.creator
    if properties.created is not None:
        created = ET.SubElement(root, qualify("dcterms:created", ns), {qualify("xsi:type", ns): "dcterms:W3CDTF"})
        created.text = _w3cdtf(properties.created)
    return to_xml_bytes(root)


def _app_properties_xml() -> bytes:
    root = default_namespace_root("Properties", Namespaces.EXTENDED_PROPERTIES["ep"])
    ET.SubElement(root, "Application").text = APPLICATION_NAME
    return to_xml_bytes(root)


def serialize(
    section: Section,
    properties: Optional[CoreProperties] = None,
    styles: StylesCatalog = DEFAULT_STYLES,
) -> Tuple[bytes, str]:
    """Write ``section`` as a complete WordprocessingML package.

    Returns the archive bytes together with the OOXML word-processing MIME
    type. Any failure is reported as ``SerializationError``; no partial archive
    is ever returned.
    """
    properties = properties or CoreProperties()
    try:
        document_xml = DocumentWriter(styles).write(section)
        styles_xml = StylesWriter(styles).write()

        package_rels = Relationships()
        package_rels.add(RELTYPE_OFFICE_DOCUMENT, DOCUMENT_XML_PATH)
        package_rels.add(RELTYPE_CORE_PROPERTIES, CORE_PROPS_PATH)
        package_rels.add(RELTYPE_EXTENDED_PROPERTIES, APP_PROPS_PATH)

        document_rels = Relationships()
        document_rels.add(RELTYPE_STYLES, "styles.xml")

        package = DocxPackageWriter()
        package.add_part(PACKAGE_REL_PATH, package_rels.to_xml())
        package.add_part(DOCUMENT_XML_PATH, document_xml, CT_DOCUMENT)
        package.add_part(STYLES_XML_PATH, styles_xml, CT_STYLES)
        package.add_part(DOCUMENT_RELS_PATH, document_rels.to_xml())
        package.add_part(CORE_PROPS_PATH, _core_properties_xml(properties), CT_CORE_PROPS)
        package.add_part(APP_PROPS_PATH, _app_properties_xml(), CT_APP_PROPS)
        content = package.to_bytes()
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError, TypeError) as exc:
        raise SerializationError(f"Failed to write document package: {exc}") from exc

    LOGGER.debug("Serialized package: %d bytes", len(content))
    return content, DOCX_MIME_TYPE
