from __future__ import annotations

from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.models import ExportFormat, ExportInput
from mdexport.services.exporters.base import BaseExporter


class MarkdownExporter(BaseExporter):
    """Identity export: the source, UTF-8 encoded, byte for byte."""

    format = ExportFormat.MARKDOWN

    def build(self, content: ExportInput, cancel: CancellationToken | None) -> bytes:
        return content.markdown.encode("utf-8")
