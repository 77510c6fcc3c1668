"""Write a styles catalog as word/styles.xml."""
from __future__ import annotations

from xml.etree import ElementTree as ET

from docx_forms.model.style_model import DocumentDefaults, StyleDefinition, StylesCatalog
from docx_forms.utils.units import points_to_half_points
from docx_forms.utils.xml_utils import qualify, to_xml_bytes, w_element


class StylesWriter:
    """Produce the styles part from typed style definitions."""

    def __init__(self, catalog: StylesCatalog) -> None:
        self._catalog = catalog

    def write(self) -> bytes:
        root = ET.Element(qualify("w:styles"))
        self._write_defaults(root, self._catalog.defaults)
        for style in self._catalog.all().values():
            self._write_style(root, style)
        return to_xml_bytes(root)

    def _write_defaults(self, root: ET.Element, defaults: DocumentDefaults) -> None:
        doc_defaults = w_element(root, "docDefaults")
        run_props = w_element(w_element(doc_defaults, "rPrDefault"), "rPr")
        w_element(
            run_props,
            "rFonts",
            ascii=defaults.latin_font,
            hAnsi=defaults.latin_font,
            eastAsia=defaults.east_asian_font,
            cs=defaults.latin_font,
        )
        size = points_to_half_points(defaults.size_pt)
        w_element(run_props, "sz", val=size)
        w_element(run_props, "szCs", val=size)
        w_element(run_props, "lang", val=defaults.language, eastAsia=defaults.east_asian_language)
        w_element(w_element(doc_defaults, "pPrDefault"), "pPr")

    def _write_style(self, root: ET.Element, style: StyleDefinition) -> None:
        style_el = w_element(root, "style", type=style.style_type, styleId=style.style_id)
        if style.is_default:
            style_el.set(qualify("w:default"), "1")
        # Child order follows the CT_Style sequence.
        w_element(style_el, "name", val=style.name)
        if style.based_on:
            w_element(style_el, "basedOn", val=style.based_on)
        if style.next_style:
            w_element(style_el, "next", val=style.next_style)
        if style.ui_priority is not None:
            w_element(style_el, "uiPriority", val=style.ui_priority)
        if style.is_primary:
            w_element(style_el, "qFormat")

        if style.keep_next or style.spacing_before is not None or style.outline_level is not None:
            para_props = w_element(style_el, "pPr")
            if style.keep_next:
                w_element(para_props, "keepNext")
            if style.spacing_before is not None or style.spacing_after is not None:
                spacing = w_element(para_props, "spacing")
                if style.spacing_before is not None:
                    spacing.set(qualify("w:before"), str(style.spacing_before))
                if style.spacing_after is not None:
                    spacing.set(qualify("w:after"), str(style.spacing_after))
            if style.outline_level is not None:
                w_element(para_props, "outlineLvl", val=style.outline_level)

        if style.bold or style.size_pt is not None:
            run_props = w_element(style_el, "rPr")
            if style.bold:
                w_element(run_props, "b")
                w_element(run_props, "bCs")
            if style.size_pt is not None:
                size = points_to_half_points(style.size_pt)
                w_element(run_props, "sz", val=size)
                w_element(run_props, "szCs", val=size)
