"""Style model captures the Word style definitions written into styles.xml."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional


@dataclass(frozen=True, slots=True)
class DocumentDefaults:
    """Run defaults applied to every paragraph unless a style overrides them."""

    latin_font: str = "Times New Roman"
    east_asian_font: str = "宋体"
    size_pt: float = 10.5
    language: str = "en-US"
    east_asian_language: str = "zh-CN"


@dataclass(frozen=True, slots=True)
class StyleDefinition:
    """A paragraph style with the handful of properties the forms rely on."""

    style_id: str
    name: str
    style_type: str = "paragraph"
    based_on: Optional[str] = None
    next_style: Optional[str] = None
    is_default: bool = False
    is_primary: bool = False
    ui_priority: Optional[int] = None
    bold: bool = False
    size_pt: Optional[float] = None
    keep_next: bool = False
    spacing_before: Optional[int] = None
    spacing_after: Optional[int] = None
    outline_level: Optional[int] = None


class StylesCatalog:
    """Collection of style definitions keyed by identifier."""

    def __init__(self, styles: Iterable[StyleDefinition], defaults: Optional[DocumentDefaults] = None):
        self._styles: Dict[str, StyleDefinition] = {style.style_id: style for style in styles}
        self.defaults = defaults or DocumentDefaults()

    def get(self, style_id: Optional[str]) -> Optional[StyleDefinition]:
        """Return the style definition given its identifier."""
        if style_id is None:
            return None
        return self._styles.get(style_id)

    def all(self) -> Mapping[str, StyleDefinition]:
        """Return read-only view of the styles in definition order."""
        return dict(self._styles)


def heading_style_id(level: int) -> str:
    return f"Heading{level}"


def _heading(level: int, size_pt: float, before: int, after: int) -> StyleDefinition:
    return StyleDefinition(
        style_id=heading_style_id(level),
        name=f"heading {level}",
        based_on="Normal",
        next_style="Normal",
        is_primary=True,
        ui_priority=9,
        bold=True,
        size_pt=size_pt,
        keep_next=True,
        spacing_before=before,
        spacing_after=after,
        outline_level=level - 1,
    )


DEFAULT_STYLES = StylesCatalog(
    [
        StyleDefinition(style_id="Normal", name="Normal", is_default=True, is_primary=True),
        _heading(1, 22, 340, 330),
        _heading(2, 16, 260, 260),
        _heading(3, 14, 260, 260),
    ]
)
