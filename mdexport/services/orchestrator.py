from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.errors import UnsupportedFormatError
from mdexport.domain.interfaces import IExporterRegistry, IMarkdownRenderer
from mdexport.domain.models import ExportFormat, ExportInput, ExportResult, FormatInfo
from mdexport.services.exporters.base import ExporterRegistryInst, lazy_factory

logger = logging.getLogger(__name__)

_EXPORTERS = "mdexport.services.exporters"


def default_registry(
    renderer: IMarkdownRenderer | None = None, pdf_font_path: str | None = None
) -> ExporterRegistryInst:
    """Registry with the six built-in builders, each loaded on first use."""
    reg = ExporterRegistryInst()
    reg.register(ExportFormat.MARKDOWN, lazy_factory(f"{_EXPORTERS}.markdown_exporter", "MarkdownExporter"))
    reg.register(ExportFormat.PLAINTEXT, lazy_factory(f"{_EXPORTERS}.plaintext_exporter", "PlaintextExporter"))
    reg.register(ExportFormat.HTML, lazy_factory(f"{_EXPORTERS}.html_exporter", "HtmlExporter", renderer=renderer))
    reg.register(ExportFormat.PDF, lazy_factory(f"{_EXPORTERS}.pdf_exporter", "PdfExporter", font_path=pdf_font_path))
    reg.register(ExportFormat.DOCX, lazy_factory(f"{_EXPORTERS}.docx_exporter", "DocxExporter"))
    reg.register(ExportFormat.PPTX, lazy_factory(f"{_EXPORTERS}.pptx_exporter", "PptxExporter"))
    return reg


class ExportOrchestrator:
    """Single entry point: format token + input -> ExportResult."""

    def __init__(self, registry: IExporterRegistry | None = None) -> None:
        self._registry = registry or default_registry()

    def formats(self) -> Sequence[FormatInfo]:
        return self._registry.formats()

    def export(
        self,
        fmt: ExportFormat | str,
        content: ExportInput,
        *,
        cancel: CancellationToken | None = None,
    ) -> ExportResult:
        """
        Dispatch to the builder registered for `fmt`.

        Raises UnsupportedFormatError for unknown tokens, before any work is done.
        Builder failures propagate unchanged as ExportError subclasses.
        """
        resolved = ExportFormat.parse(fmt)
        try:
            exporter = self._registry.get(resolved)
        except KeyError:
            raise UnsupportedFormatError(fmt) from None

        logger.info("Exporting %s (%d chars)", resolved.value, len(content.markdown))
        result = exporter.export(content, cancel=cancel)
        logger.info(
            "Exported %s: %d bytes in %.1f ms", result.filename, result.size_bytes, result.duration_ms
        )
        return result

    async def export_async(
        self,
        fmt: ExportFormat | str,
        content: ExportInput,
        *,
        cancel: CancellationToken | None = None,
    ) -> ExportResult:
        """Same as export(), run on a worker thread."""
        return await asyncio.to_thread(self.export, fmt, content, cancel=cancel)
