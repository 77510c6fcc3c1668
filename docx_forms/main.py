"""Entry-point for the form generation pipeline: validate, build, serialize."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from docx_forms.builder.context import BuildContext
from docx_forms.builder.issue_reports import (
    NOTICE_TITLE,
    REPORT_TITLE,
    build_inspection_report,
    build_issue_notice,
)
from docx_forms.errors import BuildError, DocumentGenerationError, ValidationError
from docx_forms.model.document_data import DocumentData, Issue
from docx_forms.model.document_model import GeneratedDocument, GenerationResult
from docx_forms.model.elements import Section
from docx_forms.templates.registry import TemplateId, get_template
from docx_forms.templates.validator import coerce_document_data, validate
from docx_forms.utils.logger import get_logger
from docx_forms.writer.package_writer import CoreProperties, serialize

LOGGER = get_logger(__name__)

FILENAME_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def suggested_filename(name: str, generated_at: datetime) -> str:
    """``<name>_<yyyyMMdd_HHmmss>.docx``"""
    return f"{name}_{generated_at.strftime(FILENAME_TIMESTAMP_FORMAT)}.docx"


def _package(name: str, section: Section, context: BuildContext) -> GeneratedDocument:
    if not isinstance(section, Section):
        raise BuildError(f"{name} builder returned {type(section).__name__}, expected Section")
    content, mime_type = serialize(section, CoreProperties(title=name, created=context.now))
    LOGGER.info("Generated %s: %d bytes", name, len(content))
    return GeneratedDocument(
        content=content,
        mime_type=mime_type,
        suggested_filename=suggested_filename(name, context.now),
    )


def _run(label: str, step: Callable[[], GeneratedDocument]) -> GenerationResult:
    try:
        document = step()
    except ValidationError as exc:
        LOGGER.warning("%s rejected: %s", label, exc)
        return GenerationResult(error=exc)
    except DocumentGenerationError as exc:
        LOGGER.error("%s failed: %s", label, exc)
        return GenerationResult(error=exc)
    return GenerationResult(document=document)


def generate(
    template_id: TemplateId | str,
    data: DocumentData | Mapping[str, Any],
    context: Optional[BuildContext] = None,
) -> GenerationResult:
    """Generate a form document from a registered template.

    The result carries either the package bytes with MIME type and suggested
    filename, or the typed failure (unknown template, missing fields, build or
    serialization fault). Nothing is retried.
    """
    context = context or BuildContext()

    def step() -> GeneratedDocument:
        template = get_template(template_id)
        LOGGER.info("Generating document with template %s", template.id.value)
        document_data = coerce_document_data(data)
        validate(template, document_data).raise_for_missing()
        return _package(template.name, template.build(document_data, context), context)

    return _run(f"Template {template_id}", step)


def _coerce_issue(issue: Issue | Mapping[str, Any]) -> Issue:
    if isinstance(issue, Issue):
        return issue
    try:
        return Issue.model_validate(issue)
    except PydanticValidationError as exc:
        raise ValidationError([], f"Malformed issue: {exc}") from exc


def generate_issue_notice(
    issue: Issue | Mapping[str, Any],
    document_id: str,
    issued_by: str,
    context: Optional[BuildContext] = None,
) -> GenerationResult:
    """Generate the single-issue construction notice."""
    context = context or BuildContext()

    def step() -> GeneratedDocument:
        section = build_issue_notice(_coerce_issue(issue), document_id, issued_by, context)
        return _package(NOTICE_TITLE, section, context)

    return _run("Issue notice", step)


def generate_inspection_report(
    issues: Sequence[Issue | Mapping[str, Any]],
    document_id: str,
    issued_by: str,
    conclusion: str = "",
    context: Optional[BuildContext] = None,
) -> GenerationResult:
    """Generate the multi-issue inspection record."""
    context = context or BuildContext()

    def step() -> GeneratedDocument:
        records = [_coerce_issue(issue) for issue in issues]
        section = build_inspection_report(records, document_id, issued_by, conclusion, context)
        return _package(REPORT_TITLE, section, context)

    return _run("Inspection report", step)
