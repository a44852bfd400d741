from __future__ import annotations

import io
import logging
import re

from docx import Document
from docx.enum.section import WD_ORIENT
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Mm, Pt, RGBColor
from docx.text.paragraph import Paragraph

from mdexport.domain.blocks import TextRun
from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.errors import SerializationError
from mdexport.domain.models import ExportFormat, ExportInput, ExportOptions
from mdexport.services.exporters.base import BaseExporter
from mdexport.services.parsing import parse_inline, parse_markdown, plain_text, render_blocks
from mdexport.services.theming.styles import Palette, resolve_palette

logger = logging.getLogger(__name__)

CODE_FONT = "Courier New"
PAGE_SIZES_MM = {"A4": (210, 297), "Letter": (215.9, 279.4), "A3": (297, 420)}

# (space before, space after) in points, by heading level
HEADING_SPACING = {1: (20, 10), 2: (15, 7.5), 3: (10, 5)}
MINOR_HEADING_SPACING = (7.5, 5)

# C0 controls other than tab, LF and CR are not allowed in XML text
_XML_ILLEGAL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def xml_safe(text: str) -> str:
    return _XML_ILLEGAL_RE.sub("", text)


def apply_page_setup(document, options: ExportOptions) -> None:
    section = document.sections[0]
    width, height = PAGE_SIZES_MM.get(options.page_size, PAGE_SIZES_MM["A4"])
    if options.orientation == "landscape":
        section.orientation = WD_ORIENT.LANDSCAPE
        width, height = height, width
    section.page_width = Mm(width)
    section.page_height = Mm(height)
    m = options.margins
    section.top_margin = Mm(m.top)
    section.right_margin = Mm(m.right)
    section.bottom_margin = Mm(m.bottom)
    section.left_margin = Mm(m.left)


def _border(paragraph: Paragraph, side: str, color: str) -> None:
    # Must run before spacing/indent are set: pBdr precedes them in w:pPr.
    p_pr = paragraph._p.get_or_add_pPr()
    p_bdr = OxmlElement("w:pBdr")
    edge = OxmlElement(f"w:{side}")
    edge.set(qn("w:val"), "single")
    edge.set(qn("w:sz"), "6")
    edge.set(qn("w:space"), "0")
    edge.set(qn("w:color"), color)
    p_bdr.append(edge)
    p_pr.append(p_bdr)


def _shade(run, fill: str) -> None:
    # w:shd sits after the font properties in w:rPr; call last.
    shd = OxmlElement("w:shd")
    shd.set(qn("w:val"), "clear")
    shd.set(qn("w:color"), "auto")
    shd.set(qn("w:fill"), fill)
    run._r.get_or_add_rPr().append(shd)


def _hyperlink(paragraph: Paragraph, url: str, text: str, color: str) -> None:
    r_id = paragraph.part.relate_to(xml_safe(url), RT.HYPERLINK, is_external=True)
    link = OxmlElement("w:hyperlink")
    link.set(qn("r:id"), r_id)

    run = OxmlElement("w:r")
    r_pr = OxmlElement("w:rPr")
    c = OxmlElement("w:color")
    c.set(qn("w:val"), color)
    r_pr.append(c)
    u = OxmlElement("w:u")
    u.set(qn("w:val"), "single")
    r_pr.append(u)
    run.append(r_pr)

    t = OxmlElement("w:t")
    t.set(qn("xml:space"), "preserve")
    t.text = xml_safe(text)
    run.append(t)

    link.append(run)
    paragraph._p.append(link)


class DocxSink:
    """Appends python-docx paragraphs/tables for each block."""

    def __init__(self, document, palette: Palette) -> None:
        self.doc = document
        self.palette = palette
        self._text = RGBColor.from_string(palette.hex("text"))
        self._accent = RGBColor.from_string(palette.hex("accent"))
        self._muted = RGBColor.from_string(palette.hex("muted"))

    # ---- helpers ----

    def _runs(self, paragraph: Paragraph, runs: list[TextRun], *, italic: bool = False, color=None) -> None:
        color = color or self._text
        for tr in runs:
            if tr.link:
                _hyperlink(paragraph, tr.link, tr.text, self.palette.hex("accent"))
                continue
            run = paragraph.add_run(xml_safe(tr.text))
            if tr.code:
                run.font.name = CODE_FONT
                run.font.color.rgb = self._accent
                _shade(run, self.palette.hex("code_background"))
                continue
            run.font.color.rgb = color
            if tr.bold:
                run.bold = True
            if tr.italic or tr.image or italic:
                run.italic = True

    # ---- IBlockSink ----

    def add_heading(self, level: int, runs: list[TextRun]) -> None:
        p = self.doc.add_heading(level=level)
        run = p.add_run(xml_safe(plain_text(runs)))
        run.font.color.rgb = self._accent if level == 1 else self._text
        before, after = HEADING_SPACING.get(level, MINOR_HEADING_SPACING)
        p.paragraph_format.space_before = Pt(before)
        p.paragraph_format.space_after = Pt(after)

    def add_paragraph(self, runs: list[TextRun]) -> None:
        p = self.doc.add_paragraph()
        self._runs(p, runs)
        p.paragraph_format.space_before = Pt(5)
        p.paragraph_format.space_after = Pt(5)

    def add_quote(self, runs: list[TextRun]) -> None:
        p = self.doc.add_paragraph()
        _border(p, "left", self.palette.hex("accent"))
        self._runs(p, runs, italic=True, color=self._muted)
        fmt = p.paragraph_format
        fmt.space_before = Pt(7.5)
        fmt.space_after = Pt(7.5)
        fmt.left_indent = Inches(0.5)

    def add_code(self, language: str, content: str) -> None:
        p = self.doc.add_paragraph()
        run = p.add_run(xml_safe(content))
        run.font.name = CODE_FONT
        run.font.size = Pt(10)
        run.font.color.rgb = self._text
        _shade(run, self.palette.hex("code_background"))
        fmt = p.paragraph_format
        fmt.space_before = Pt(7.5)
        fmt.space_after = Pt(7.5)
        fmt.left_indent = Inches(0.5)

    def add_list(self, items: list[list[TextRun]], ordered: bool) -> None:
        for n, item in enumerate(items, start=1):
            if ordered:
                # Explicit numbers restart at 1 for every list.
                p = self.doc.add_paragraph()
                num = p.add_run(f"{n}. ")
                num.font.color.rgb = self._accent
                p.paragraph_format.left_indent = Inches(0.5)
                p.paragraph_format.first_line_indent = Inches(-0.25)
            else:
                p = self.doc.add_paragraph(style="List Bullet")
            self._runs(p, item)
            p.paragraph_format.space_before = Pt(2.5)
            p.paragraph_format.space_after = Pt(2.5)

    def add_table(self, rows: list[list[str]]) -> None:
        cols = max((len(r) for r in rows), default=0)
        if not rows or cols == 0:
            return
        table = self.doc.add_table(rows=len(rows), cols=cols)
        table.style = "Table Grid"
        for i, row in enumerate(rows):
            for j, cell_text in enumerate(row):
                self._runs(table.cell(i, j).paragraphs[0], parse_inline(cell_text))

    def add_rule(self) -> None:
        p = self.doc.add_paragraph()
        _border(p, "bottom", "auto")
        p.paragraph_format.space_before = Pt(10)
        p.paragraph_format.space_after = Pt(10)

    def add_blank(self) -> None:
        pass


class DocxExporter(BaseExporter):
    format = ExportFormat.DOCX

    def build(self, content: ExportInput, cancel: CancellationToken | None) -> bytes:
        document = Document()
        apply_page_setup(document, content.options)
        sink = DocxSink(document, resolve_palette(content))
        render_blocks(parse_markdown(content.markdown), sink, cancel)

        buf = io.BytesIO()
        try:
            document.save(buf)
        except Exception as e:
            raise SerializationError(f"DOCX packaging failed: {e}") from e
        logger.debug("DOCX built: %d paragraphs, %d tables", len(document.paragraphs), len(document.tables))
        return buf.getvalue()
