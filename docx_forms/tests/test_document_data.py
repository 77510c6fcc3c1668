"""Tests for payload coercion into the typed request model."""
import unittest
from datetime import date, datetime

from pydantic import ValidationError as PydanticValidationError

from docx_forms.model.document_data import DocumentData, Issue, IssueStatus, field_attribute


class IssueTest(unittest.TestCase):
    def test_wire_names_and_integer_ids(self) -> None:
        issue = Issue.model_validate(
            {"id": 17, "responsibleParty": "中建三局", "status": "整改中", "imageUrls": ["a.jpg"], "extra": 1}
        )
        self.assertEqual(issue.id, "17")
        self.assertEqual(issue.responsible_party, "中建三局")
        self.assertIs(issue.status, IssueStatus.IN_PROGRESS)
        self.assertEqual(issue.image_urls, ["a.jpg"])

    def test_unknown_status_is_rejected(self) -> None:
        with self.assertRaises(PydanticValidationError):
            Issue.model_validate({"status": "closed"})


class DocumentDataTest(unittest.TestCase):
    def test_timestamps_keep_the_calendar_date(self) -> None:
        data = DocumentData.model_validate(
            {"noticeDate": "2025-04-18T23:30:00", "inspectionDate": datetime(2025, 4, 19, 8, 0)}
        )
        self.assertEqual(data.notice_date, date(2025, 4, 18))
        self.assertEqual(data.inspection_date, date(2025, 4, 19))

    def test_get_field_accepts_wire_and_attribute_names(self) -> None:
        data = DocumentData(projectName="东方明珠二期工程")
        self.assertEqual(data.get_field("projectName"), "东方明珠二期工程")
        self.assertEqual(data.get_field("project_name"), "东方明珠二期工程")
        with self.assertRaises(KeyError):
            data.get_field("contractValue")

    def test_field_attribute(self) -> None:
        self.assertEqual(field_attribute("supervisorName"), "supervisor_name")
        self.assertIsNone(field_attribute("contractValue"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
