"""Patrol record (巡视记录) form."""
from __future__ import annotations

from docx_forms.builder import layout
from docx_forms.builder.context import BuildContext
from docx_forms.model.document_data import DocumentData
from docx_forms.model.elements import Paragraph, Section, TextRun

TITLE = "巡视记录"
NUMBER_PREFIX = "GD-B-214"
FOOTNOTE = "注：本表一式二份，项目监理机构和建设单位各一份。"

CHECKLIST = (
    "□1. 施工单位是否按工程设计文件、工程建设标准和施工规范进行施工和设计。（专项）施工方案施工。",
    "□2. 使用的工程材料、构配件和设备是否合格。",
    "□3. 施工场所作业人员、特别是施工现场管理人员及危险作业。",
    "□4. 特种作业人员是否持证上岗。",
)


def build_patrol_record(data: DocumentData, context: BuildContext) -> Section:
    """Lay out the patrol record: header table, period, checklist, findings, signature."""
    construction_unit = data.issues[0].responsible_party if data.issues else ""

    period = Paragraph(
        runs=[
            *layout.date_runs(data.inspection_start_date, suffix=" 日 至 "),
            *layout.date_runs(data.inspection_end_date),
        ]
    )

    checklist = [Paragraph(runs=[TextRun(item)]) for item in CHECKLIST]
    for number, item in enumerate(data.inspection_items or [], start=len(CHECKLIST) + 1):
        checklist.append(Paragraph(runs=[TextRun(f"□{number}. {item}")]))

    findings = [
        Paragraph.of("巡视发现的问题及整改情况:"),
        *layout.issue_paragraphs(data.issues),
        *layout.optional_paragraph(data.findings),
        *layout.optional_paragraph(data.improvement_suggestions, prefix="整改建议："),
    ]

    signed_on = layout.signature_date(data.inspection_date, context.now)
    signature = [
        layout.signature_line(f"巡视记录填写人（签名）：{data.inspector_name or ''}", before=200),
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
            layout.row(
                layout.cell("巡视的工程部位", 20),
                layout.cell(data.inspection_location or "", 30),
                layout.cell("施工单位", 20),
                layout.cell(construction_unit, 30),
            ),
            layout.row(
                layout.cell("巡视时间", 20),
                layout.cell([period], 80, column_span=3),
            ),
            layout.row(layout.cell([Paragraph.of("巡视内容:"), *checklist], 100, column_span=4)),
            layout.row(layout.cell(findings, 100, column_span=4)),
            layout.row(layout.cell(signature, 100, column_span=4)),
        ]
    )

    return Section(blocks=[layout.title(TITLE), table, layout.footnote(FOOTNOTE)])
