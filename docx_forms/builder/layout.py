"""Layout primitives shared by the form builders."""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from docx_forms.errors import BuildError
from docx_forms.model.document_data import Issue
from docx_forms.model.elements import (
    Alignment,
    BlockElement,
    BorderSpec,
    Borders,
    Paragraph,
    Spacing,
    Table,
    TableCell,
    TableRow,
    TextRun,
)

FORM_BORDERS = Borders.all_sides(BorderSpec(style="single", size_pt=1.0, color="000000"))

TITLE_SPACING = Spacing(before=200, after=200)
ITEM_SPACING = Spacing(before=100, after=100)
FOOTNOTE_SPACING = Spacing(before=200)
FOOTNOTE_SIZE_PT = 9

YEAR_CONNECTOR = " 年 "
MONTH_CONNECTOR = " 月 "
DAY_CONNECTOR = " 日"

_WIDTH_TOLERANCE = 0.01


def split_date(value: Optional[date]) -> Tuple[str, str, str]:
    """Year, zero-padded month and day; empty strings when no date is given."""
    if value is None:
        return "", "", ""
    return str(value.year), f"{value.month:02d}", f"{value.day:02d}"


def date_runs(value: Optional[date], *, suffix: str = DAY_CONNECTOR) -> List[TextRun]:
    """Render a date as separate runs: ``2025``, `` 年 ``, ``04``, `` 月 ``, ``18``, `` 日``."""
    year, month, day = split_date(value)
    return [
        TextRun(year),
        TextRun(YEAR_CONNECTOR),
        TextRun(month),
        TextRun(MONTH_CONNECTOR),
        TextRun(day),
        TextRun(suffix),
    ]


def format_date(value: Optional[date]) -> str:
    year, month, day = split_date(value)
    return f"{year}{YEAR_CONNECTOR}{month}{MONTH_CONNECTOR}{day}{DAY_CONNECTOR}"


def signature_date(explicit: Optional[date], now: datetime) -> date:
    return explicit if explicit is not None else now.date()


def title(text: str) -> Paragraph:
    return Paragraph.of(text, heading_level=1, alignment=Alignment.CENTER, spacing=TITLE_SPACING)


def cell(content: Sequence[BlockElement] | str, width_pct: float, *, column_span: int = 1) -> TableCell:
    """Bordered form cell; plain strings become a single paragraph."""
    blocks = [Paragraph.of(content)] if isinstance(content, str) else list(content)
    return TableCell(content=blocks, width_pct=width_pct, column_span=column_span, borders=FORM_BORDERS)


def row(*cells: TableCell) -> TableRow:
    """Form row whose cell widths must add up to the full table width."""
    total = sum(c.width_pct or 0 for c in cells)
    if abs(total - 100) > _WIDTH_TOLERANCE:
        raise BuildError(f"Row cell widths add up to {total}%, expected 100%")
    return TableRow(cells=list(cells))


def form_table(rows: Iterable[TableRow]) -> Table:
    return Table(rows=list(rows), width_pct=100, borders=FORM_BORDERS)


def issue_paragraphs(issues: Sequence[Issue]) -> List[Paragraph]:
    """One ``"<n>. <description>"`` paragraph per issue, in input order."""
    return [
        Paragraph(runs=[TextRun(f"{index}. {issue.description}")], spacing=ITEM_SPACING)
        for index, issue in enumerate(issues, start=1)
    ]


def optional_paragraph(text: Optional[str], *, prefix: str = "") -> List[Paragraph]:
    if not text:
        return []
    return [Paragraph.of(f"{prefix}{text}")]


def signature_line(text: str, before: int) -> Paragraph:
    return Paragraph.of(text, alignment=Alignment.RIGHT, spacing=Spacing(before=before))


def footnote(text: str) -> Paragraph:
    return Paragraph.of(text, spacing=FOOTNOTE_SPACING, size_pt=FOOTNOTE_SIZE_PT)


def labelled(label: str, value: str, spacing: Spacing) -> Paragraph:
    """Bold label followed by a plain value in the same paragraph."""
    return Paragraph(runs=[TextRun(label, bold=True), TextRun(value)], spacing=spacing)
