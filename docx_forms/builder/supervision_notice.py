"""Supervision notice (监理通知单) forms.

Both registered notice styles carry the same content; they differ only in the
preview artwork shown to the user, so style two delegates to style one.
"""
from __future__ import annotations

from docx_forms.builder import layout
from docx_forms.builder.context import BuildContext
from docx_forms.model.document_data import DocumentData
from docx_forms.model.elements import Paragraph, Section, Spacing, TextRun

TITLE = "监理通知单"
NUMBER_PREFIX = "GD-B-215"
FOOTNOTE = "注：本表一式三份，项目监理机构、建设单位、施工单位各一份。"

LABEL_SPACING = Spacing(before=200, after=100)
BODY_SPACING = Spacing(before=100, after=200)


def build_supervision_notice(data: DocumentData, context: BuildContext) -> Section:
    """Header table, addressee, subject, issue list, notice text and signature."""
    body = [
        Paragraph(
            runs=[TextRun(f"致：{data.recipient_name or ''}（施工项目经理部）", bold=True)],
            spacing=layout.TITLE_SPACING,
        ),
        Paragraph.of("事由：", spacing=LABEL_SPACING),
        Paragraph.of(data.subject or "", spacing=BODY_SPACING),
        Paragraph.of("内容：", spacing=LABEL_SPACING),
        *layout.issue_paragraphs(data.issues),
    ]
    if data.notice_content:
        body.append(Paragraph.of(data.notice_content, spacing=BODY_SPACING))

    signed_on = layout.signature_date(data.notice_date, context.now)
    signature = [
        layout.signature_line("项目监理机构（项目章）：", before=200),
        layout.signature_line(
            f"总监理工程师（代表）/专业监理工程师（签名）：{data.supervisor_name or ''}", before=100
        ),
        layout.signature_line(layout.format_date(signed_on), before=100),
    ]

    table = layout.form_table(
        [
            layout.row(
                layout.cell("工程项目名称:", 20),
                layout.cell(data.project_name or "", 50),
                layout.cell("编号:", 10),
                layout.cell(context.document_number(NUMBER_PREFIX), 20),
            ),
            layout.row(layout.cell(body, 100, column_span=4)),
            layout.row(layout.cell(signature, 100, column_span=4)),
        ]
    )

    return Section(blocks=[layout.title(data.notice_title or TITLE), table, layout.footnote(FOOTNOTE)])


def build_supervision_notice_alt(data: DocumentData, context: BuildContext) -> Section:
    # Presentation variant of the same content model.
    return build_supervision_notice(data, context)
