from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.oxml.xmlchemy import OxmlElement
from pptx.util import Inches, Pt

from mdexport.domain.blocks import TextRun
from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.errors import SerializationError
from mdexport.domain.models import DocumentMetadata, ExportFormat, ExportInput
from mdexport.services.exporters.base import BaseExporter
from mdexport.services.parsing import parse_markdown, plain_text, render_blocks
from mdexport.services.theming.styles import Palette, resolve_palette
from mdexport.utils.constants import (
    DEFAULT_PRESENTATION_AUTHOR,
    DEFAULT_PRESENTATION_TITLE,
    DEFAULT_SLIDE_TITLE,
)

logger = logging.getLogger(__name__)

SLIDE_WIDTH = Inches(13.333)
SLIDE_HEIGHT = Inches(7.5)
BLANK_LAYOUT = 6
TITLE_FONT = "Arial"
CODE_FONT = "Courier New"
EMPTY_MESSAGE = "No content to display"
SUBJECT = "Exported from Markdown"


@dataclass(frozen=True)
class SlideItem:
    text: str
    code: bool = False


@dataclass
class SlideContent:
    title: str
    items: list[SlideItem] = field(default_factory=list)


class SlideCollector:
    """Block sink that cuts the document into slides at H1-H3."""

    def __init__(self, preamble_title: str) -> None:
        self.slides: list[SlideContent] = []
        self.section_count = 0
        self._preamble = SlideContent(preamble_title)

    def _current(self) -> SlideContent:
        return self.slides[-1] if self.slides else self._preamble

    def _bullet(self, runs: list[TextRun]) -> None:
        text = plain_text(runs).strip()
        if text:
            self._current().items.append(SlideItem(text))

    def add_heading(self, level: int, runs: list[TextRun]) -> None:
        if level > 3:
            self._bullet(runs)
            return
        if not self.slides and self._preamble.items:
            self.slides.append(self._preamble)
        self.slides.append(SlideContent(plain_text(runs).strip()))
        self.section_count += 1

    def add_paragraph(self, runs: list[TextRun]) -> None:
        self._bullet(runs)

    def add_quote(self, runs: list[TextRun]) -> None:
        self._bullet(runs)

    def add_code(self, language: str, content: str) -> None:
        if content.strip():
            self._current().items.append(SlideItem(content, code=True))

    def add_list(self, items: list[list[TextRun]], ordered: bool) -> None:
        for item in items:
            self._bullet(item)

    def add_table(self, rows: list[list[str]]) -> None:
        pass  # tables are not carried into slides

    def add_rule(self) -> None:
        pass

    def add_blank(self) -> None:
        pass


def build_slides(
    markdown: str, metadata: DocumentMetadata, cancel: CancellationToken | None = None
) -> list[SlideContent]:
    """
    Slide outline for a document.

    Blank input gives a single placeholder slide. A document without any
    H1-H3 heading becomes one slide listing its non-blank lines as written.
    """
    if not markdown.strip():
        return [SlideContent(DEFAULT_PRESENTATION_TITLE, [SlideItem(EMPTY_MESSAGE)])]

    collector = SlideCollector(metadata.title or DEFAULT_SLIDE_TITLE)
    render_blocks(parse_markdown(markdown), collector, cancel)
    if collector.section_count == 0:
        lines = [line.strip() for line in markdown.splitlines() if line.strip()]
        return [SlideContent(DEFAULT_SLIDE_TITLE, [SlideItem(line) for line in lines])]
    return collector.slides


def _set_bullet(paragraph) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    p_pr.set("marL", str(Inches(0.35)))
    p_pr.set("indent", str(-Inches(0.3)))
    bu = OxmlElement("a:buChar")
    bu.set("char", "•")
    p_pr.append(bu)


class PptxExporter(BaseExporter):
    format = ExportFormat.PPTX

    def build(self, content: ExportInput, cancel: CancellationToken | None) -> bytes:
        slides = build_slides(content.markdown, content.metadata, cancel)
        palette = resolve_palette(content)

        prs = Presentation()
        prs.slide_width = SLIDE_WIDTH
        prs.slide_height = SLIDE_HEIGHT
        props = prs.core_properties
        props.title = content.metadata.title or DEFAULT_PRESENTATION_TITLE
        props.author = content.metadata.author or DEFAULT_PRESENTATION_AUTHOR
        props.subject = SUBJECT

        for outline in slides:
            if cancel is not None:
                cancel.raise_if_cancelled()
            self._add_slide(prs, outline, palette)

        buf = io.BytesIO()
        try:
            prs.save(buf)
        except Exception as e:
            raise SerializationError(f"PPTX packaging failed: {e}") from e
        logger.debug("PPTX built: %d slide(s)", len(slides))
        return buf.getvalue()

    def _add_slide(self, prs, outline: SlideContent, palette: Palette) -> None:
        slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = RGBColor.from_string(palette.hex("background"))

        width = SLIDE_WIDTH - Inches(1)
        title_box = slide.shapes.add_textbox(Inches(0.5), Inches(0.4), width, Inches(1.2))
        title_frame = title_box.text_frame
        title_frame.word_wrap = True
        run = title_frame.paragraphs[0].add_run()
        run.text = outline.title
        run.font.name = TITLE_FONT
        run.font.size = Pt(36)
        run.font.bold = True
        run.font.color.rgb = RGBColor.from_string(palette.hex("accent"))

        if not outline.items:
            return
        body = slide.shapes.add_textbox(Inches(0.5), Inches(1.8), width, Inches(5.2)).text_frame
        body.word_wrap = True
        text_color = RGBColor.from_string(palette.hex("text"))
        for i, item in enumerate(outline.items):
            p = body.paragraphs[0] if i == 0 else body.add_paragraph()
            if not item.code:
                _set_bullet(p)
            for n, line in enumerate(item.text.split("\n")):
                if n:
                    p.add_line_break()
                run = p.add_run()
                run.text = line
                run.font.color.rgb = text_color
                if item.code:
                    run.font.name = CODE_FONT
                    run.font.size = Pt(14)
                else:
                    run.font.size = Pt(18)
