from __future__ import annotations

import importlib
import logging
import time
from abc import abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.errors import ResourceLoadError
from mdexport.domain.interfaces import ExporterFactory, IExporter, IExporterRegistry
from mdexport.domain.models import ExportFormat, ExportInput, ExportResult, FormatInfo
from mdexport.utils.constants import DEFAULT_BASENAME

logger = logging.getLogger(__name__)

FORMAT_INFO: dict[ExportFormat, FormatInfo] = {
    ExportFormat.MARKDOWN: FormatInfo(
        ExportFormat.MARKDOWN,
        "Markdown",
        ".md",
        "text/markdown",
        supports_theme=False,
        supports_editing=True,
        supports_images=False,
    ),
    ExportFormat.PLAINTEXT: FormatInfo(
        ExportFormat.PLAINTEXT,
        "Plain Text",
        ".txt",
        "text/plain",
        supports_theme=False,
        supports_editing=True,
        supports_images=False,
    ),
    ExportFormat.HTML: FormatInfo(ExportFormat.HTML, "HTML", ".html", "text/html"),
    ExportFormat.PDF: FormatInfo(ExportFormat.PDF, "PDF", ".pdf", "application/pdf"),
    ExportFormat.DOCX: FormatInfo(
        ExportFormat.DOCX,
        "DOCX",
        ".docx",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ),
    ExportFormat.PPTX: FormatInfo(
        ExportFormat.PPTX,
        "PPTX",
        ".pptx",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ),
}


class BaseExporter(IExporter):
    """
    Template for builders: times the build and wraps the payload in an ExportResult.

    Subclasses set `format` and implement `build()`.
    """

    format: ExportFormat

    @property
    def label(self) -> str:  # type: ignore[override]
        return FORMAT_INFO[self.format].label

    @property
    def extension(self) -> str:  # type: ignore[override]
        return FORMAT_INFO[self.format].extension

    @property
    def mime_type(self) -> str:  # type: ignore[override]
        return FORMAT_INFO[self.format].mime_type

    @property
    def info(self) -> FormatInfo:
        return FORMAT_INFO[self.format]

    def export(
        self, content: ExportInput, *, cancel: CancellationToken | None = None
    ) -> ExportResult:
        start = time.perf_counter()
        if cancel is not None:
            cancel.raise_if_cancelled()
        payload = self.build(content, cancel)
        duration_ms = (time.perf_counter() - start) * 1000
        return ExportResult(
            payload=payload,
            filename=DEFAULT_BASENAME + self.extension,
            mime_type=self.mime_type,
            size_bytes=len(payload),
            duration_ms=duration_ms,
        )

    @abstractmethod
    def build(self, content: ExportInput, cancel: CancellationToken | None) -> bytes:
        raise NotImplementedError


def lazy_factory(module: str, class_name: str, **kwargs: Any) -> ExporterFactory:
    """
    Factory that imports `module` only when the format is first requested,
    so unused formats never load their document libraries.
    """

    def factory() -> IExporter:
        try:
            mod = importlib.import_module(module)
        except ImportError as e:
            raise ResourceLoadError(f"Cannot load exporter module {module}: {e}") from e
        return getattr(mod, class_name)(**kwargs)

    return factory


@dataclass
class ExporterRegistryInst(IExporterRegistry):
    """
    Instance-based registry of format -> builder factory (no globals, no side-effects).
    Builders are created on first use and reused; they hold no per-export state.
    """

    _factories: dict[ExportFormat, ExporterFactory] = field(default_factory=dict)
    _infos: dict[ExportFormat, FormatInfo] = field(default_factory=dict)
    _instances: dict[ExportFormat, IExporter] = field(default_factory=dict)

    def register(
        self, fmt: ExportFormat, factory: ExporterFactory, info: FormatInfo | None = None
    ) -> None:
        self._factories[fmt] = factory
        self._infos[fmt] = info or FORMAT_INFO[fmt]
        self._instances.pop(fmt, None)

    def register_instance(self, exporter: IExporter) -> None:
        self.register(exporter.format, lambda: exporter, exporter.info)
        self._instances[exporter.format] = exporter

    def get(self, fmt: ExportFormat) -> IExporter:
        """Raises KeyError for a format nobody registered."""
        exporter = self._instances.get(fmt)
        if exporter is None:
            factory = self._factories[fmt]
            logger.debug("Loading exporter for %s", fmt.value)
            exporter = factory()
            self._instances[fmt] = exporter
        return exporter

    def formats(self) -> Sequence[FormatInfo]:
        return list(self._infos.values())

    def __contains__(self, fmt: object) -> bool:
        return fmt in self._factories
