from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from reportlab.lib.pagesizes import A3, A4, landscape, letter
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from mdexport.domain.blocks import TextRun
from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.errors import ResourceLoadError, SerializationError
from mdexport.domain.models import ExportFormat, ExportInput, ExportOptions
from mdexport.services.exporters.base import BaseExporter
from mdexport.services.parsing import parse_inline, parse_markdown, plain_text, render_blocks
from mdexport.services.theming.styles import RGB, Palette, resolve_palette
from mdexport.utils.constants import DEFAULT_DOCUMENT_TITLE

logger = logging.getLogger(__name__)

PAGE_SIZES = {"A4": A4, "Letter": letter, "A3": A3}
HEADING_SIZES = {1: 28, 2: 22, 3: 18, 4: 15, 5: 13, 6: 12}
LINE_HEIGHT = 1.6
DEFAULT_MARGIN_MM = 20
DEFAULT_FONT_SIZE = 12
BLOCK_RESERVE = 50  # points left at the bottom before a block forces a new page
CODE_PADDING = 6
QUOTE_INDENT = 15
LIST_INDENT = 20

_TOKEN_RE = re.compile(r"\S+|\s+")

# text, font name, color, link target
Segment = tuple[str, str, RGB, "str | None"]


@dataclass(frozen=True)
class FontSet:
    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"
    italic: str = "Helvetica-Oblique"
    bold_italic: str = "Helvetica-BoldOblique"
    mono: str = "Courier"

    def pick(self, *, bold: bool = False, italic: bool = False) -> str:
        if bold and italic:
            return self.bold_italic
        if bold:
            return self.bold
        if italic:
            return self.italic
        return self.regular


def load_font_set(font_path: str | None) -> FontSet:
    """
    Standard Helvetica family, or a TrueType body font registered from `font_path`.
    A TrueType face has no separate bold/italic files here, so every style uses it.
    """
    if not font_path:
        return FontSet()
    name = f"MdExport-{Path(font_path).stem}"
    if name not in pdfmetrics.getRegisteredFontNames():
        try:
            pdfmetrics.registerFont(TTFont(name, font_path))
        except (OSError, TTFError) as e:
            raise ResourceLoadError(f"Cannot load PDF font {font_path}: {e}") from e
        logger.info("Registered PDF body font %s from %s", name, font_path)
    return FontSet(regular=name, bold=name, italic=name, bold_italic=name)


def page_geometry(options: ExportOptions) -> tuple[float, float, float]:
    """(page width, page height, margin) in points."""
    size = PAGE_SIZES.get(options.page_size, A4)
    if options.orientation == "landscape":
        size = landscape(size)
    margin_mm = options.margins.left or DEFAULT_MARGIN_MM
    return size[0], size[1], margin_mm * mm


def wrap_text(text: str, font: str, size: float, max_width: float) -> list[str]:
    """Greedy word wrap by glyph width. A single word wider than the line keeps its own line."""
    lines: list[str] = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and pdfmetrics.stringWidth(candidate, font, size) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


def wrap_segments(segments: list[Segment], size: float, max_width: float) -> list[list[Segment]]:
    """Word wrap for mixed-font runs; whitespace at line edges is dropped."""
    lines: list[list[Segment]] = [[]]
    width = 0.0
    for text, font, color, link in segments:
        for token in _TOKEN_RE.findall(text):
            w = pdfmetrics.stringWidth(token, font, size)
            if token.isspace():
                if not lines[-1]:
                    continue
            elif lines[-1] and width + w > max_width:
                _rstrip(lines[-1])
                lines.append([])
                width = 0.0
            lines[-1].append((token, font, color, link))
            width += w
    _rstrip(lines[-1])
    return [line for line in lines if line]


def _rstrip(line: list[Segment]) -> None:
    while line and line[-1][0].isspace():
        line.pop()


def _merge(line: list[Segment]) -> list[Segment]:
    out: list[Segment] = []
    for seg in line:
        if out and out[-1][1:] == seg[1:]:
            out[-1] = (out[-1][0] + seg[0], *seg[1:])
        else:
            out.append(seg)
    return out


class PdfPainter:
    """Lays blocks out top-down on a reportlab canvas, breaking pages as it goes."""

    def __init__(self, content: ExportInput, fonts: FontSet, palette: Palette) -> None:
        options = content.options
        self.fonts = fonts
        self.palette = palette
        self.paint_background = options.include_theme
        self.font_size = options.font_size if options.font_size > 0 else DEFAULT_FONT_SIZE
        self.line_height = self.font_size * LINE_HEIGHT
        self.page_w, self.page_h, self.margin = page_geometry(options)
        self.width = self.page_w - 2 * self.margin

        self._buf = io.BytesIO()
        self.c = canvas.Canvas(self._buf, pagesize=(self.page_w, self.page_h), invariant=1)
        self.c.setTitle(content.metadata.title or DEFAULT_DOCUMENT_TITLE)
        if content.metadata.author:
            self.c.setAuthor(content.metadata.author)
        self.pages = 1
        self._start_page()

    # ---- page handling ----

    def _start_page(self) -> None:
        if self.paint_background:
            self.c.setFillColorRGB(*self.palette.background)
            self.c.rect(0, 0, self.page_w, self.page_h, stroke=0, fill=1)
        self.y = self.page_h - self.margin

    def _new_page(self) -> None:
        self.c.showPage()
        self.pages += 1
        self._start_page()

    def _reserve_block(self) -> None:
        if self.y < self.margin + BLOCK_RESERVE:
            self._new_page()

    def _reserve_line(self, height: float) -> None:
        if self.y - height < self.margin:
            self._new_page()

    # ---- drawing helpers ----

    def _segments(self, runs: list[TextRun], *, italic: bool = False, color: RGB | None = None) -> list[Segment]:
        color = color or self.palette.text
        out: list[Segment] = []
        for r in runs:
            if r.code:
                out.append((r.text, self.fonts.mono, self.palette.accent, None))
            elif r.image:
                out.append((f"[Image: {r.text}]", self.fonts.italic, color, None))
            elif r.link:
                out.append((r.text, self.fonts.pick(bold=r.bold, italic=r.italic or italic), self.palette.accent, r.link))
            else:
                out.append((r.text, self.fonts.pick(bold=r.bold, italic=r.italic or italic), color, None))
        return out

    def _draw_line(self, x: float, line: list[Segment], size: float) -> None:
        for text, font, color, link in _merge(line):
            w = pdfmetrics.stringWidth(text, font, size)
            self.c.setFillColorRGB(*color)
            self.c.setFont(font, size)
            self.c.drawString(x, self.y, text)
            if link:
                self.c.setStrokeColorRGB(*color)
                self.c.setLineWidth(0.5)
                self.c.line(x, self.y - 1.5, x + w, self.y - 1.5)
                self.c.linkURL(link, (x, self.y - 2, x + w, self.y + size), relative=0)
            x += w

    def _draw_runs(self, runs: list[TextRun], x: float, width: float, **style) -> None:
        for line in wrap_segments(self._segments(runs, **style), self.font_size, width):
            self._reserve_line(self.line_height)
            self.y -= self.line_height
            self._draw_line(x, line, self.font_size)

    # ---- IBlockSink ----

    def add_heading(self, level: int, runs: list[TextRun]) -> None:
        self._reserve_block()
        size = HEADING_SIZES.get(level, self.font_size)
        color = self.palette.accent if level == 1 else self.palette.text
        self.y -= size * 0.4
        for text in wrap_text(plain_text(runs), self.fonts.bold, size, self.width):
            self._reserve_line(size * 1.2)
            self.y -= size * 1.2
            self._draw_line(self.margin, [(text, self.fonts.bold, color, None)], size)
        if level == 1:
            self.y -= 4
            self.c.setStrokeColorRGB(*self.palette.rule)
            self.c.setLineWidth(0.5)
            self.c.line(self.margin, self.y, self.margin + self.width, self.y)
        self.y -= size * 0.4

    def add_paragraph(self, runs: list[TextRun]) -> None:
        if not plain_text(runs).strip():
            return
        self._reserve_block()
        self._draw_runs(runs, self.margin, self.width)
        self.y -= self.font_size * 0.5

    def add_quote(self, runs: list[TextRun]) -> None:
        self._reserve_block()
        segments = self._segments(runs, italic=True, color=self.palette.muted)
        for line in wrap_segments(segments, self.font_size, self.width - QUOTE_INDENT):
            self._reserve_line(self.line_height)
            top = self.y
            self.y -= self.line_height
            self.c.setStrokeColorRGB(*self.palette.accent)
            self.c.setLineWidth(3)
            self.c.line(self.margin + 3, top, self.margin + 3, self.y - 3)
            self._draw_line(self.margin + QUOTE_INDENT, line, self.font_size)
        self.y -= self.font_size * 0.5

    def add_code(self, language: str, content: str) -> None:
        self._reserve_block()
        size = self.font_size * 0.85
        lh = size * 1.4
        inner = self.width - 2 * CODE_PADDING
        per_line = max(1, int(inner // pdfmetrics.stringWidth("M", self.fonts.mono, size)))
        lines: list[str] = []
        for raw in content.split("\n"):
            lines.extend([raw[i : i + per_line] for i in range(0, len(raw), per_line)] or [""])

        while lines:
            room = self.y - self.margin - 2 * CODE_PADDING
            at_top = self.y >= self.page_h - self.margin
            if room < lh and not at_top:
                self._new_page()
                continue
            take = max(1, int(room // lh))
            chunk, lines = lines[:take], lines[take:]
            box_h = len(chunk) * lh + 2 * CODE_PADDING
            self.c.setFillColorRGB(*self.palette.code_background)
            self.c.setStrokeColorRGB(*self.palette.border)
            self.c.setLineWidth(0.5)
            self.c.rect(self.margin, self.y - box_h, self.width, box_h, stroke=1, fill=1)
            self.y -= CODE_PADDING
            for text in chunk:
                self.y -= lh
                self._draw_line(self.margin + CODE_PADDING, [(text, self.fonts.mono, self.palette.text, None)], size)
            self.y -= CODE_PADDING
            if lines:
                self._new_page()
        self.y -= self.font_size * 0.5

    def add_list(self, items: list[list[TextRun]], ordered: bool) -> None:
        self._reserve_block()
        for n, item in enumerate(items, start=1):
            marker = f"{n}." if ordered else "•"
            lines = wrap_segments(self._segments(item), self.font_size, self.width - LIST_INDENT)
            for i, line in enumerate(lines or [[]]):
                self._reserve_line(self.line_height)
                self.y -= self.line_height
                if i == 0:
                    self._draw_line(self.margin + 5, [(marker, self.fonts.regular, self.palette.accent, None)], self.font_size)
                self._draw_line(self.margin + LIST_INDENT, line, self.font_size)
        self.y -= self.font_size * 0.5

    def add_table(self, rows: list[list[str]]) -> None:
        cols = max((len(r) for r in rows), default=0)
        if cols == 0:
            return
        self._reserve_block()
        col_w = self.width / cols
        row_h = self.line_height + 6
        for i, row in enumerate(rows):
            self._reserve_line(row_h)
            self.y -= row_h
            font = self.fonts.bold if i == 0 else self.fonts.regular
            for j in range(cols):
                x = self.margin + j * col_w
                self.c.setStrokeColorRGB(*self.palette.border)
                self.c.setFillColorRGB(*self.palette.code_background)
                self.c.setLineWidth(0.5)
                self.c.rect(x, self.y, col_w, row_h, stroke=1, fill=1 if i == 0 else 0)
                cell = plain_text(parse_inline(row[j])) if j < len(row) else ""
                first = wrap_text(cell, font, self.font_size, col_w - 8)[:1]
                if first:
                    self.c.setFillColorRGB(*self.palette.text)
                    self.c.setFont(font, self.font_size)
                    self.c.drawString(x + 4, self.y + (row_h - self.font_size) / 2 + 2, first[0])
        self.y -= self.font_size * 0.5

    def add_rule(self) -> None:
        self._reserve_line(self.font_size)
        self.y -= self.font_size * 0.5
        self.c.setStrokeColorRGB(*self.palette.rule)
        self.c.setLineWidth(0.5)
        self.c.line(self.margin, self.y, self.margin + self.width, self.y)
        self.y -= self.font_size * 0.5

    def add_blank(self) -> None:
        self.y -= self.font_size * 0.5

    def finish(self) -> bytes:
        try:
            self.c.save()
        except Exception as e:
            raise SerializationError(f"PDF serialization failed: {e}") from e
        return self._buf.getvalue()


class PdfExporter(BaseExporter):
    """
    Paginated PDF painted directly with reportlab.

    The restricted block parser drives layout; no HTML engine is involved, so
    output depends only on the input and the installed reportlab version.
    """

    format = ExportFormat.PDF

    def __init__(self, font_path: str | None = None) -> None:
        self._font_path = font_path

    def build(self, content: ExportInput, cancel: CancellationToken | None) -> bytes:
        painter = PdfPainter(content, load_font_set(self._font_path), resolve_palette(content))
        render_blocks(parse_markdown(content.markdown), painter, cancel)
        payload = painter.finish()
        logger.debug("PDF built: %d page(s)", painter.pages)
        return payload
