"""Closed set of document templates available to the dashboard."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from docx_forms.builder.context import BuildContext
from docx_forms.builder.patrol_record import build_patrol_record
from docx_forms.builder.supervision_notice import build_supervision_notice, build_supervision_notice_alt
from docx_forms.errors import BuildError, TemplateNotFoundError
from docx_forms.model.document_data import DocumentData, field_attribute
from docx_forms.model.elements import Section
from docx_forms.utils.logger import get_logger
from docx_forms.writer.package_writer import CoreProperties, serialize

LOGGER = get_logger(__name__)

Builder = Callable[[DocumentData, BuildContext], Section]


class TemplateId(str, Enum):
    PATROL_RECORD = "patrol-record"
    SUPERVISION_NOTICE_1 = "supervision-notice-template1"
    SUPERVISION_NOTICE_2 = "supervision-notice-template2"


NOTICE_REQUIRED_FIELDS = (
    "projectName",
    "recipientName",
    "subject",
    "noticeContent",
    "supervisorName",
    "noticeDate",
)


@dataclass(frozen=True, slots=True)
class TemplateDescriptor:
    """What the template picker shows to the user."""

    id: TemplateId
    name: str
    description: str
    preview_image: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DocumentTemplate:
    """A named generation recipe with its required input fields."""

    id: TemplateId
    name: str
    description: str
    required_fields: Tuple[str, ...]
    builder: Optional[Builder]
    preview_image: Optional[str] = None

    def __post_init__(self) -> None:
        unknown = [name for name in self.required_fields if field_attribute(name) is None]
        if unknown:
            raise ValueError(f"Template {self.id.value} requires unknown fields: {', '.join(unknown)}")

    def descriptor(self) -> TemplateDescriptor:
        return TemplateDescriptor(
            id=self.id, name=self.name, description=self.description, preview_image=self.preview_image
        )

    def build(self, data: DocumentData, context: BuildContext) -> Section:
        """Run the template's builder; ``data`` must already be validated."""
        if self.builder is None:
            raise BuildError(f"Template {self.id.value} has no document builder")
        return self.builder(data, context)

    def generate(self, data: DocumentData, context: Optional[BuildContext] = None) -> bytes:
        """Build and serialize in one step, returning the package bytes."""
        context = context or BuildContext()
        content, _ = serialize(self.build(data, context), CoreProperties(title=self.name, created=context.now))
        return content


class TemplateRegistry:
    """Read-only lookup of templates by id, in presentation order."""

    def __init__(self, templates: List[DocumentTemplate]) -> None:
        self._templates: Dict[TemplateId, DocumentTemplate] = {t.id: t for t in templates}
        missing = [template_id.value for template_id in TemplateId if template_id not in self._templates]
        if missing:
            raise ValueError(f"Templates not registered: {', '.join(missing)}")

    def list(self) -> List[TemplateDescriptor]:
        return [template.descriptor() for template in self._templates.values()]

    def get(self, template_id: TemplateId | str) -> DocumentTemplate:
        try:
            key = TemplateId(template_id)
        except ValueError:
            LOGGER.warning("Rejected unknown template id %r", template_id)
            raise TemplateNotFoundError(template_id) from None
        return self._templates[key]


REGISTRY = TemplateRegistry(
    [
        DocumentTemplate(
            id=TemplateId.PATROL_RECORD,
            name="巡视记录",
            description="用于记录工程巡视情况的标准表格",
            required_fields=(
                "projectName",
                "inspectionLocation",
                "inspectionStartDate",
                "inspectionEndDate",
                "inspectorName",
            ),
            builder=build_patrol_record,
            preview_image="/document-templates/inspection-record.png",
        ),
        DocumentTemplate(
            id=TemplateId.SUPERVISION_NOTICE_1,
            name="监理通知单 (样式一)",
            description="用于向施工单位发出监理通知的标准表格",
            required_fields=NOTICE_REQUIRED_FIELDS,
            builder=build_supervision_notice,
            preview_image="/document-templates/supervision-notice-template1.png",
        ),
        DocumentTemplate(
            id=TemplateId.SUPERVISION_NOTICE_2,
            name="监理通知单 (样式二)",
            description="用于向施工单位发出监理通知的替代表格样式",
            required_fields=NOTICE_REQUIRED_FIELDS,
            builder=build_supervision_notice_alt,
            preview_image="/document-templates/supervision-notice-template2.png",
        ),
    ]
)


def list_templates() -> List[TemplateDescriptor]:
    """Return descriptors of all registered templates."""
    return REGISTRY.list()


def get_template(template_id: TemplateId | str) -> DocumentTemplate:
    """Return the template registered under ``template_id`` or raise ``TemplateNotFoundError``."""
    return REGISTRY.get(template_id)
