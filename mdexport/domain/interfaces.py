from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Protocol

from mdexport.domain.blocks import TextRun
from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.models import ExportFormat, ExportInput, ExportResult, FormatInfo


class IMarkdownRenderer(Protocol):
    """Full markdown pipeline: Markdown text to a sanitized HTML fragment."""

    def render(self, markdown_text: str, *, highlight: bool = True) -> str: ...


class IFileService(Protocol):
    """Read text files and write export payloads. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_bytes_atomic(self, path: Path, data: bytes) -> None: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_float(self, section: str, key: str, default: float | None = None) -> float | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    def get_version(self) -> str: ...


class IBlockSink(Protocol):
    """
    Receives the aggregated block stream of one document.

    Builders implement this instead of parsing markdown themselves; see
    `mdexport.services.parsing.render_blocks`.
    """

    def add_heading(self, level: int, runs: list[TextRun]) -> None: ...
    def add_paragraph(self, runs: list[TextRun]) -> None: ...
    def add_quote(self, runs: list[TextRun]) -> None: ...
    def add_code(self, language: str, content: str) -> None: ...
    def add_list(self, items: list[list[TextRun]], ordered: bool) -> None: ...
    def add_table(self, rows: list[list[str]]) -> None: ...
    def add_rule(self) -> None: ...
    def add_blank(self) -> None: ...


class IExporter(ABC):
    """Export strategy interface. One implementation per output format."""

    format: ExportFormat
    label: str  # e.g. "PDF"
    extension: str  # with leading dot, e.g. ".pdf"
    mime_type: str

    @property
    def info(self) -> FormatInfo:
        return FormatInfo(self.format, self.label, self.extension, self.mime_type)

    @abstractmethod
    def export(
        self, content: ExportInput, *, cancel: CancellationToken | None = None
    ) -> ExportResult:
        """Build the whole document; never returns a partial result."""
        raise NotImplementedError


ExporterFactory = Callable[[], IExporter]


class IExporterRegistry(ABC):
    @abstractmethod
    def register(self, fmt: ExportFormat, factory: ExporterFactory, info: FormatInfo) -> None: ...

    @abstractmethod
    def get(self, fmt: ExportFormat) -> IExporter: ...

    @abstractmethod
    def formats(self) -> Sequence[FormatInfo]: ...
