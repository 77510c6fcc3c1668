"""Tests for required-field validation."""
import itertools
import unittest
from datetime import date

from docx_forms.errors import ValidationError
from docx_forms.model.document_data import DocumentData, field_attribute
from docx_forms.templates.registry import TemplateId, get_template, list_templates
from docx_forms.templates.validator import coerce_document_data, validate

from fixtures import notice_payload, patrol_data


def complete_data(template_id: TemplateId) -> DocumentData:
    if template_id is TemplateId.PATROL_RECORD:
        return patrol_data()
    return DocumentData.model_validate(notice_payload())


class ValidatorTest(unittest.TestCase):
    """Missing-field detection and ordering."""

    def test_complete_data_is_valid_for_every_template(self) -> None:
        for descriptor in list_templates():
            result = validate(get_template(descriptor.id), complete_data(descriptor.id))
            self.assertTrue(result.is_valid, descriptor.id)
            self.assertEqual(result.missing_fields, ())

    def test_every_missing_subset_is_reported_in_declared_order(self) -> None:
        for descriptor in list_templates():
            template = get_template(descriptor.id)
            data = complete_data(descriptor.id)
            fields = template.required_fields
            for size in range(1, len(fields) + 1):
                for subset in itertools.combinations(fields, size):
                    blanked = data.model_copy(update={field_attribute(name): None for name in subset})
                    result = validate(template, blanked)
                    self.assertFalse(result.is_valid)
                    self.assertEqual(result.missing_fields, subset)

    def test_empty_string_counts_as_missing(self) -> None:
        template = get_template(TemplateId.SUPERVISION_NOTICE_1)
        data = DocumentData.model_validate({**notice_payload(), "subject": "", "recipientName": ""})
        self.assertEqual(validate(template, data).missing_fields, ("recipientName", "subject"))

    def test_whitespace_is_not_treated_as_empty(self) -> None:
        template = get_template(TemplateId.SUPERVISION_NOTICE_1)
        data = DocumentData.model_validate({**notice_payload(), "subject": " "})
        self.assertTrue(validate(template, data).is_valid)

    def test_issues_are_never_required(self) -> None:
        template = get_template(TemplateId.PATROL_RECORD)
        self.assertTrue(validate(template, patrol_data(issues=[])).is_valid)

    def test_raise_for_missing(self) -> None:
        template = get_template(TemplateId.PATROL_RECORD)
        result = validate(template, DocumentData())
        with self.assertRaises(ValidationError) as ctx:
            result.raise_for_missing()
        self.assertEqual(ctx.exception.missing_fields, list(template.required_fields))
        self.assertIn("inspectionLocation", str(ctx.exception))

    def test_coerce_accepts_json_shaped_payload(self) -> None:
        data = coerce_document_data({**notice_payload(), "noticeDate": "2025-04-18T08:00:00.000Z"})
        self.assertEqual(data.notice_date, date(2025, 4, 18))
        self.assertEqual(data.issues[0].description, "钢筋间距超标")

    def test_coerce_rejects_malformed_payload(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            coerce_document_data({"projectName": "x", "issues": "not-a-list"})
        self.assertEqual(ctx.exception.missing_fields, [])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
