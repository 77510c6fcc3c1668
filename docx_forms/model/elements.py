"""In-memory representation of a document before it is written to WordprocessingML."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Alignment(str, Enum):
    """Paragraph justification, values match ``w:jc``."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    BOTH = "both"


@dataclass(frozen=True, slots=True)
class Spacing:
    """Space before/after a paragraph, in twips."""

    before: Optional[int] = None
    after: Optional[int] = None


@dataclass(frozen=True, slots=True)
class BorderSpec:
    """A single border edge."""

    style: str = "single"
    size_pt: float = 1.0
    color: str = "000000"


@dataclass(frozen=True, slots=True)
class Borders:
    """Four-sided border set shared by tables and cells."""

    top: Optional[BorderSpec] = None
    bottom: Optional[BorderSpec] = None
    left: Optional[BorderSpec] = None
    right: Optional[BorderSpec] = None

    @classmethod
    def all_sides(cls, spec: BorderSpec) -> "Borders":
        return cls(top=spec, bottom=spec, left=spec, right=spec)

    def edges(self) -> List[tuple[str, BorderSpec]]:
        """Return the defined edges in schema order (top, left, bottom, right)."""
        ordered = (("top", self.top), ("left", self.left), ("bottom", self.bottom), ("right", self.right))
        return [(name, spec) for name, spec in ordered if spec is not None]


@dataclass(slots=True)
class TextRun:
    """Contiguous run of text sharing inline formatting."""

    text: str
    bold: bool = False
    size_pt: Optional[float] = None


@dataclass(slots=True)
class Paragraph:
    """Block element holding inline runs. A paragraph without runs is an empty block."""

    runs: List[TextRun] = field(default_factory=list)
    alignment: Optional[Alignment] = None
    spacing: Optional[Spacing] = None
    heading_level: Optional[int] = None
    size_pt: Optional[float] = None

    @classmethod
    def of(
        cls,
        text: str,
        *,
        bold: bool = False,
        alignment: Optional[Alignment] = None,
        spacing: Optional[Spacing] = None,
        heading_level: Optional[int] = None,
        size_pt: Optional[float] = None,
    ) -> "Paragraph":
        """Build a paragraph with a single implicit run."""
        return cls(
            runs=[TextRun(text=text, bold=bold)],
            alignment=alignment,
            spacing=spacing,
            heading_level=heading_level,
            size_pt=size_pt,
        )

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(slots=True)
class TableCell:
    """Single table cell container."""

    content: List["BlockElement"] = field(default_factory=list)
    width_pct: Optional[float] = None
    column_span: int = 1
    borders: Optional[Borders] = None


@dataclass(slots=True)
class TableRow:
    """Row with a sequence of cells."""

    cells: List[TableCell]

    @property
    def grid_width(self) -> int:
        """Number of grid columns the row occupies once spans are applied."""
        return sum(cell.column_span for cell in self.cells)


@dataclass(slots=True)
class Table:
    """Tabular block; width is a percentage of the text area."""

    rows: List[TableRow]
    width_pct: float = 100
    borders: Optional[Borders] = None


BlockElement = Paragraph | Table


@dataclass(frozen=True, slots=True)
class SectionProperties:
    """Page setup for a section, in twips. Defaults to A4 portrait."""

    page_width: int = 11906
    page_height: int = 16838
    margin_top: int = 1440
    margin_bottom: int = 1440
    margin_left: int = 1440
    margin_right: int = 1440
    margin_header: int = 708
    margin_footer: int = 708
    orientation: str = "portrait"

    @property
    def text_width(self) -> int:
        return self.page_width - self.margin_left - self.margin_right


@dataclass(slots=True)
class Section:
    """Top of the document tree: ordered block elements plus page setup."""

    blocks: List[BlockElement] = field(default_factory=list)
    properties: SectionProperties = field(default_factory=SectionProperties)
