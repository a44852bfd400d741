from __future__ import annotations

from collections.abc import Iterable

from mdexport.domain.blocks import TextRun
from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.models import ExportFormat, ExportInput
from mdexport.services.exporters.base import BaseExporter
from mdexport.services.parsing import parse_inline, parse_markdown, render_blocks


def _text(runs: Iterable[TextRun]) -> str:
    return "".join(f"[Image: {r.text}]" if r.image else r.text for r in runs)


class PlainTextSink:
    """Collects output lines; headings are underlined, markers stripped."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def text(self) -> str:
        return "\n".join(self.lines)

    def add_heading(self, level: int, runs: list[TextRun]) -> None:
        title = _text(runs)
        if level == 1:
            block = [title.upper(), "=" * len(title)]
        elif level == 2:
            block = [title, "-" * len(title)]
        elif level == 3:
            block = [f"*** {title} ***"]
        elif level == 4:
            block = [f"** {title} **"]
        else:
            block = [title]
        self.lines.extend(["", *block, ""])

    def add_paragraph(self, runs: list[TextRun]) -> None:
        text = _text(runs)
        if text.strip():
            self.lines.append(text)

    def add_quote(self, runs: list[TextRun]) -> None:
        self.lines.append("  | " + _text(runs))

    def add_code(self, language: str, content: str) -> None:
        header = f"[Code Block ({language})]" if language else "[Code Block]"
        self.lines.extend(["", header, content, "[End Code Block]", ""])

    def add_list(self, items: list[list[TextRun]], ordered: bool) -> None:
        for n, item in enumerate(items, start=1):
            marker = f"{n}." if ordered else "•"
            self.lines.append(f"  {marker} {_text(item)}")

    def add_table(self, rows: list[list[str]]) -> None:
        for row in rows:
            self.lines.append("  " + "  |  ".join(_text(parse_inline(c)) for c in row))

    def add_rule(self) -> None:
        self.lines.extend(["", "---", ""])

    def add_blank(self) -> None:
        pass


class PlaintextExporter(BaseExporter):
    format = ExportFormat.PLAINTEXT

    def build(self, content: ExportInput, cancel: CancellationToken | None) -> bytes:
        sink = PlainTextSink()
        render_blocks(parse_markdown(content.markdown), sink, cancel)
        return sink.text().encode("utf-8")
