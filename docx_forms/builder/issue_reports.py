"""Documents produced straight from issue cards, outside the form templates."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from docx_forms.builder import layout
from docx_forms.builder.context import BuildContext
from docx_forms.model.document_data import Issue
from docx_forms.model.elements import (
    Alignment,
    BlockElement,
    Paragraph,
    Section,
    Spacing,
    Table,
    TableCell,
    TableRow,
    TextRun,
)

NOTICE_TITLE = "施工问题通知单"
REPORT_TITLE = "工程巡检记录"
SUPERVISION_COMPANY = "东方明珠监理公司"
REMEDIATION_TEXT = "请按照相关规范和标准要求进行整改，确保施工质量和安全。整改完成后，请及时通知监理进行复核验收。"
UNASSIGNED_PARTY = "未指定责任单位"

ISSUE_TABLE_COLUMNS = (("序号", 10), ("问题描述", 40), ("位置", 15), ("责任单位", 20), ("状态", 15))

_FIELD = Spacing(before=200, after=200)
_LABEL = Spacing(before=200, after=100)
_BODY = Spacing(before=100, after=200)
_LINE = Spacing(before=100, after=100)


def _short_date(value: datetime) -> str:
    return f"{value.year}/{value.month}/{value.day}"


def _timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return f"{_short_date(value)} {value:%H:%M:%S}"


def _bold_line(text: str, spacing: Spacing) -> Paragraph:
    return Paragraph(runs=[TextRun(text, bold=True)], spacing=spacing)


def _heading(text: str, level: int, spacing: Spacing) -> Paragraph:
    return Paragraph.of(text, heading_level=level, spacing=spacing)


def build_issue_notice(issue: Issue, document_id: str, issued_by: str, context: BuildContext) -> Section:
    """Single-issue construction notice."""
    blocks: List[BlockElement] = [
        layout.title(NOTICE_TITLE),
        layout.labelled("问题标题：", f"{issue.location} - 施工问题", _FIELD),
        layout.labelled("发现时间：", _timestamp(issue.record_timestamp), _FIELD),
        layout.labelled("问题位置：", issue.location, _FIELD),
        layout.labelled("责任单位：", issue.responsible_party, _FIELD),
        Paragraph.of("问题描述：", bold=True, spacing=_LABEL),
        Paragraph.of(issue.description, spacing=_BODY),
        Paragraph.of("整改措施：", bold=True, spacing=_LABEL),
        Paragraph.of(REMEDIATION_TEXT, spacing=_BODY),
        _bold_line(f"监理单位：{SUPERVISION_COMPANY}", Spacing(before=400, after=200)),
        _bold_line(f"监理工程师：{issued_by}", _FIELD),
        _bold_line(f"通知单编号：{document_id}", _FIELD),
        _bold_line(f"签发日期：{_short_date(context.now)}", _FIELD),
    ]
    return Section(blocks=blocks)


def group_by_party(issues: Sequence[Issue]) -> Dict[str, List[Issue]]:
    """Group issues by responsible party, keeping first-seen party order."""
    groups: Dict[str, List[Issue]] = {}
    for issue in issues:
        groups.setdefault(issue.responsible_party or UNASSIGNED_PARTY, []).append(issue)
    return groups


def _issue_table(issues: Sequence[Issue]) -> Table:
    header = TableRow(
        cells=[
            TableCell(content=[Paragraph.of(label, alignment=Alignment.CENTER)], width_pct=width)
            for label, width in ISSUE_TABLE_COLUMNS
        ]
    )
    rows = [header]
    for index, issue in enumerate(issues, start=1):
        values = (str(index), issue.description, issue.location, issue.responsible_party, issue.status.value)
        rows.append(
            TableRow(
                cells=[
                    TableCell(content=[Paragraph.of(value)], width_pct=width)
                    for value, (_, width) in zip(values, ISSUE_TABLE_COLUMNS)
                ]
            )
        )
    return Table(rows=rows, width_pct=100)


def _party_details(groups: Dict[str, List[Issue]]) -> List[Paragraph]:
    details: List[Paragraph] = []
    for party, party_issues in groups.items():
        details.append(
            _heading(f"{party} - 问题详情（{len(party_issues)}项）", 3, Spacing(before=300, after=200))
        )
        for index, issue in enumerate(party_issues, start=1):
            details.extend(
                [
                    Paragraph(
                        runs=[TextRun(f"问题 {index}：", bold=True), TextRun(issue.description)],
                        spacing=_LABEL,
                    ),
                    Paragraph.of(f"位置：{issue.location}", spacing=_LINE),
                    Paragraph.of(f"状态：{issue.status.value}", spacing=Spacing(before=100, after=200)),
                ]
            )
    return details


def build_inspection_report(
    issues: Sequence[Issue],
    document_id: str,
    issued_by: str,
    conclusion: str,
    context: BuildContext,
) -> Section:
    """Inspection record covering several issues, grouped by responsible party."""
    groups = group_by_party(issues)
    locations = list(dict.fromkeys(issue.location for issue in issues))
    today = _short_date(context.now)
    section_spacing = Spacing(before=300, after=200)

    blocks: List[BlockElement] = [
        Paragraph.of(
            REPORT_TITLE, heading_level=1, alignment=Alignment.CENTER, spacing=Spacing(before=200, after=300)
        ),
        layout.labelled("巡检记录编号：", document_id, _LABEL),
        layout.labelled("日期：", today, _BODY),
        _heading("巡检概况：", 2, _FIELD),
        layout.labelled("巡检人员：", issued_by, _LINE),
        layout.labelled("巡检区域：", ", ".join(locations), _LINE),
        layout.labelled("问题总数：", str(len(issues)), _LINE),
        layout.labelled("责任单位：", str(len(groups)), _BODY),
        _heading("问题清单：", 2, section_spacing),
        _issue_table(issues),
        _heading("问题详情：", 2, section_spacing),
        *_party_details(groups),
        _heading("巡检结论：", 2, section_spacing),
        Paragraph.of(
            conclusion or f"本次巡检共发现 {len(issues)} 项问题，请相关责任单位按要求及时整改。",
            spacing=Spacing(before=100, after=300),
        ),
        _bold_line(f"监理单位：{SUPERVISION_COMPANY}", Spacing(before=300, after=100)),
        _bold_line(f"监理工程师：{issued_by}", _LINE),
        _bold_line(f"日期：{today}", _LINE),
    ]
    return Section(blocks=blocks)
