"""Tests for zip packaging of the WordprocessingML parts."""
import io
import unittest
import zipfile
from datetime import datetime, timedelta, timezone
from xml.etree import ElementTree as ET

from docx_forms.errors import SerializationError
from docx_forms.model.document_model import DOCX_MIME_TYPE
from docx_forms.model.elements import Paragraph, Section
from docx_forms.writer.package_writer import CoreProperties, serialize
from docx_forms.writer.rels_writer import RELTYPE_OFFICE_DOCUMENT, RELTYPE_STYLES, Relationships

from fixtures import read_part

CT = "{http://schemas.openxmlformats.org/package/2006/content-types}"
REL = "{http://schemas.openxmlformats.org/package/2006/relationships}"
DC = "{http://purl.org/dc/elements/1.1/}"
DCTERMS = "{http://purl.org/dc/terms/}"


class PackageWriterTest(unittest.TestCase):
    """Archive layout, manifests and metadata."""

    def setUp(self) -> None:
        section = Section(blocks=[Paragraph.of("东方明珠二期工程")])
        self.content, self.mime_type = serialize(
            section, CoreProperties(title="巡视记录", created=datetime(2025, 4, 18, 8, 0, 0))
        )

    def test_mime_type(self) -> None:
        self.assertEqual(self.mime_type, DOCX_MIME_TYPE)
        self.assertEqual(
            self.mime_type, "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
        )

    def test_parts_and_order(self) -> None:
        with zipfile.ZipFile(io.BytesIO(self.content)) as archive:
            self.assertIsNone(archive.testzip())
            names = archive.namelist()
        self.assertEqual(names[0], "[Content_Types].xml")
        for required in (
            "_rels/.rels",
            "word/document.xml",
            "word/styles.xml",
            "word/_rels/document.xml.rels",
            "docProps/core.xml",
            "docProps/app.xml",
        ):
            self.assertIn(required, names)

    def test_content_types_cover_parts(self) -> None:
        root = ET.fromstring(read_part(self.content, "[Content_Types].xml"))
        overrides = {o.get("PartName"): o.get("ContentType") for o in root.findall(f"{CT}Override")}
        self.assertEqual(
            overrides["/word/document.xml"],
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml",
        )
        self.assertIn("/word/styles.xml", overrides)
        defaults = {d.get("Extension") for d in root.findall(f"{CT}Default")}
        self.assertEqual(defaults, {"rels", "xml"})

    def test_relationships(self) -> None:
        package_rels = ET.fromstring(read_part(self.content, "_rels/.rels"))
        office = [r for r in package_rels.findall(f"{REL}Relationship") if r.get("Type") == RELTYPE_OFFICE_DOCUMENT]
        self.assertEqual(office[0].get("Target"), "word/document.xml")

        document_rels = ET.fromstring(read_part(self.content, "word/_rels/document.xml.rels"))
        self.assertEqual(document_rels.find(f"{REL}Relationship").get("Type"), RELTYPE_STYLES)

    def test_core_properties(self) -> None:
        root = ET.fromstring(read_part(self.content, "docProps/core.xml"))
        self.assertEqual(root.find(f"{DC}title").text, "巡视记录")
        self.assertEqual(root.find(f"{DCTERMS}created").text, "2025-04-18T08:00:00Z")

    def test_aware_timestamps_are_written_in_utc(self) -> None:
        created = datetime(2025, 4, 18, 16, 0, 0, tzinfo=timezone(timedelta(hours=8)))
        content, _ = serialize(Section(), CoreProperties(created=created))
        root = ET.fromstring(read_part(content, "docProps/core.xml"))
        self.assertEqual(root.find(f"{DCTERMS}created").text, "2025-04-18T08:00:00Z")

    def test_unicode_is_written_as_utf8(self) -> None:
        document = read_part(self.content, "word/document.xml")
        self.assertTrue(document.startswith(b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'))
        self.assertIn("东方明珠二期工程".encode("utf-8"), document)

    def test_output_is_byte_identical_for_identical_input(self) -> None:
        section = Section(blocks=[Paragraph.of("东方明珠二期工程")])
        again, _ = serialize(section, CoreProperties(title="巡视记录", created=datetime(2025, 4, 18, 8, 0, 0)))
        self.assertEqual(again, self.content)

    def test_empty_section_is_still_a_valid_package(self) -> None:
        content, _ = serialize(Section())
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            self.assertIn("word/document.xml", archive.namelist())

    def test_failures_are_reported_not_truncated(self) -> None:
        with self.assertRaises(SerializationError):
            serialize(Section(blocks=[Paragraph.of("ok"), 42]))


class RelationshipsTest(unittest.TestCase):
    """Sequential relationship ids."""

    def test_ids_are_sequential(self) -> None:
        rels = Relationships()
        self.assertEqual(rels.add(RELTYPE_STYLES, "styles.xml"), "rId1")
        self.assertEqual(rels.add(RELTYPE_OFFICE_DOCUMENT, "word/document.xml"), "rId2")
        self.assertEqual(len(rels), 2)
        root = ET.fromstring(rels.to_xml())
        self.assertEqual([r.get("Id") for r in root.findall(f"{REL}Relationship")], ["rId1", "rId2"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
