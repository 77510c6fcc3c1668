"""Write a document tree as the body part, word/document.xml."""
from __future__ import annotations

from typing import List, Optional
from xml.etree import ElementTree as ET

from docx_forms.errors import SerializationError
from docx_forms.model.elements import (
    BlockElement,
    Borders,
    Paragraph,
    Section,
    SectionProperties,
    Table,
    TableCell,
    TableRow,
    TextRun,
)
from docx_forms.model.style_model import StylesCatalog, heading_style_id
from docx_forms.utils.logger import get_logger
from docx_forms.utils.units import percent_of, percent_to_fiftieths, points_to_eighths, points_to_half_points
from docx_forms.utils.xml_utils import XML_SPACE, find_illegal_character, qualify, to_xml_bytes, w_element

LOGGER = get_logger(__name__)


class DocumentWriter:
    """Transforms model elements into Word body XML, preserving node order."""

    def __init__(self, styles: StylesCatalog) -> None:
        self._styles = styles

    def write(self, section: Section) -> bytes:
        """Return the serialized document part for ``section``."""
        if not isinstance(section, Section):
            raise SerializationError(f"Expected a Section at the top of the tree, got {type(section).__name__}")
        root = ET.Element(qualify("w:document"))
        body = w_element(root, "body")
        text_width = section.properties.text_width
        for block in section.blocks:
            self._write_block(body, block, text_width)
        self._write_section_properties(body, section.properties)
        return to_xml_bytes(root)

    def _write_block(self, parent: ET.Element, block: BlockElement, available_width: int) -> None:
        if isinstance(block, Paragraph):
            self._write_paragraph(parent, block)
        elif isinstance(block, Table):
            self._write_table(parent, block, available_width)
        else:
            raise SerializationError(f"Unsupported block element: {type(block).__name__}")

    # ------------------------------------------------------------------
    # Paragraphs and runs
    def _write_paragraph(self, parent: ET.Element, paragraph: Paragraph) -> None:
        paragraph_el = w_element(parent, "p")
        self._write_paragraph_properties(paragraph_el, paragraph)
        for run in paragraph.runs:
            if not isinstance(run, TextRun):
                raise SerializationError(f"Unsupported inline element: {type(run).__name__}")
            self._write_run(paragraph_el, run, paragraph.size_pt)

    def _write_paragraph_properties(self, paragraph_el: ET.Element, paragraph: Paragraph) -> None:
        if paragraph.heading_level is None and paragraph.spacing is None and paragraph.alignment is None:
            return
        props = w_element(paragraph_el, "pPr")
        if paragraph.heading_level is not None:
            style_id = heading_style_id(paragraph.heading_level)
            if self._styles.get(style_id) is None:
                raise SerializationError(f"No style defined for heading level {paragraph.heading_level}")
            w_element(props, "pStyle", val=style_id)
        spacing = paragraph.spacing
        if spacing is not None and (spacing.before is not None or spacing.after is not None):
            spacing_el = w_element(props, "spacing")
            if spacing.before is not None:
                spacing_el.set(qualify("w:before"), str(spacing.before))
            if spacing.after is not None:
                spacing_el.set(qualify("w:after"), str(spacing.after))
        if paragraph.alignment is not None:
            w_element(props, "jc", val=paragraph.alignment.value)

    def _write_run(self, paragraph_el: ET.Element, run: TextRun, paragraph_size: Optional[float]) -> None:
        illegal = find_illegal_character(run.text)
        if illegal is not None:
            raise SerializationError(f"Text contains a character XML cannot carry: {illegal!r}")

        run_el = w_element(paragraph_el, "r")
        size_pt = run.size_pt if run.size_pt is not None else paragraph_size
        if run.bold or size_pt is not None:
            props = w_element(run_el, "rPr")
            if run.bold:
                w_element(props, "b")
                w_element(props, "bCs")
            if size_pt is not None:
                size = points_to_half_points(size_pt)
                w_element(props, "sz", val=size)
                w_element(props, "szCs", val=size)

        # Line breaks inside a run become w:br between text nodes.
        for index, line in enumerate(run.text.split("\n")):
            if index:
                w_element(run_el, "br")
            if line:
                text_el = w_element(run_el, "t")
                text_el.set(XML_SPACE, "preserve")
                text_el.text = line

    # ------------------------------------------------------------------
    # Tables
    def _write_table(self, parent: ET.Element, table: Table, available_width: int) -> None:
        if not table.rows:
            raise SerializationError("Tables need at least one row")
        for row in table.rows:
            if not isinstance(row, TableRow):
                raise SerializationError(f"Unsupported table row: {type(row).__name__}")
            if not row.cells:
                raise SerializationError("Table rows need at least one cell")
            for table_cell in row.cells:
                if not isinstance(table_cell, TableCell):
                    raise SerializationError(f"Unsupported table cell: {type(table_cell).__name__}")
        table_width = percent_of(available_width, table.width_pct)
        grid = self._grid_columns(table, table_width)
        LOGGER.debug("Table grid: %s twips", grid)

        table_el = w_element(parent, "tbl")
        props = w_element(table_el, "tblPr")
        w_element(props, "tblW", w=percent_to_fiftieths(table.width_pct), type="pct")
        if table.borders is not None:
            self._write_borders(props, "tblBorders", table.borders)

        grid_el = w_element(table_el, "tblGrid")
        for width in grid:
            w_element(grid_el, "gridCol", w=width)

        for row in table.rows:
            row_el = w_element(table_el, "tr")
            for table_cell in row.cells:
                self._write_cell(row_el, table_cell, table_width, len(grid))

    def _write_cell(self, row_el: ET.Element, table_cell: TableCell, table_width: int, columns: int) -> None:
        if table_cell.column_span < 1:
            raise SerializationError(f"Invalid column span {table_cell.column_span}")
        cell_el = w_element(row_el, "tc")
        props = w_element(cell_el, "tcPr")
        if table_cell.width_pct is not None:
            w_element(props, "tcW", w=percent_to_fiftieths(table_cell.width_pct), type="pct")
            cell_width = percent_of(table_width, table_cell.width_pct)
        else:
            w_element(props, "tcW", w=0, type="auto")
            cell_width = table_width * table_cell.column_span // columns
        if table_cell.column_span > 1:
            w_element(props, "gridSpan", val=table_cell.column_span)
        if table_cell.borders is not None:
            self._write_borders(props, "tcBorders", table_cell.borders)

        for block in table_cell.content:
            self._write_block(cell_el, block, cell_width)
        # A cell must end with a paragraph.
        if not table_cell.content or not isinstance(table_cell.content[-1], Paragraph):
            w_element(cell_el, "p")

    def _write_borders(self, props: ET.Element, tag: str, borders: Borders) -> None:
        borders_el = w_element(props, tag)
        for edge, spec in borders.edges():
            w_element(
                borders_el,
                edge,
                val=spec.style,
                sz=points_to_eighths(spec.size_pt),
                space=0,
                color=spec.color,
            )

    def _grid_columns(self, table: Table, table_width: int) -> List[int]:
        """Grid column widths in twips, taken from the first fully split row."""
        columns = max(row.grid_width for row in table.rows)
        if columns < 1:
            raise SerializationError("Tables need at least one cell")
        for row in table.rows:
            if len(row.cells) == columns and all(c.width_pct is not None for c in row.cells):
                return [percent_of(table_width, c.width_pct or 0) for c in row.cells]
        return self._even_split(table_width, columns)

    @staticmethod
    def _even_split(total: int, parts: int) -> List[int]:
        base, remainder = divmod(total, parts)
        return [base + (1 if index < remainder else 0) for index in range(parts)]

    # ------------------------------------------------------------------
    # Section properties
    def _write_section_properties(self, body: ET.Element, properties: SectionProperties) -> None:
        sect_pr = w_element(body, "sectPr")
        page_size = w_element(sect_pr, "pgSz", w=properties.page_width, h=properties.page_height)
        if properties.orientation != "portrait":
            page_size.set(qualify("w:orient"), properties.orientation)
        w_element(
            sect_pr,
            "pgMar",
            top=properties.margin_top,
            right=properties.margin_right,
            bottom=properties.margin_bottom,
            left=properties.margin_left,
            header=properties.margin_header,
            footer=properties.margin_footer,
            gutter=0,
        )
