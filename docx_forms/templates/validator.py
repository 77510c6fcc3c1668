"""Required-field checks run before any document tree is built."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from pydantic import ValidationError as PydanticValidationError

from docx_forms.errors import ValidationError
from docx_forms.model.document_data import DocumentData
from docx_forms.templates.registry import DocumentTemplate


@dataclass(frozen=True, slots=True)
class ValidationResult:
    is_valid: bool
    missing_fields: Tuple[str, ...] = ()

    def raise_for_missing(self) -> None:
        if not self.is_valid:
            raise ValidationError(self.missing_fields)


def is_missing(value: Any) -> bool:
    """Absent, null and empty strings are missing; dates and lists only need to be present."""
    return value is None or value == ""


def validate(template: DocumentTemplate, data: DocumentData) -> ValidationResult:
    """Check ``data`` against the template's required fields, in declared order."""
    missing = tuple(name for name in template.required_fields if is_missing(data.get_field(name)))
    return ValidationResult(is_valid=not missing, missing_fields=missing)


def coerce_document_data(payload: DocumentData | Mapping[str, Any]) -> DocumentData:
    """Accept a model instance or a JSON-shaped mapping from the issue source."""
    if isinstance(payload, DocumentData):
        return payload
    try:
        return DocumentData.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError([], f"Malformed document data: {exc}") from exc
