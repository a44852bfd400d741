"""Domain layer: interfaces, errors and simple models (dataclasses)."""

from .cancellation import CancellationToken
from .errors import (
    ExportCancelledError,
    ExportError,
    ResourceLoadError,
    SerializationError,
    UnsupportedFormatError,
)
from .interfaces import IBlockSink, IExporter, IExporterRegistry, IFileService, IMarkdownRenderer
from .models import (
    DocumentMetadata,
    ExportFormat,
    ExportInput,
    ExportOptions,
    ExportResult,
    Margins,
    ThemeTokens,
)

__all__ = [
    "CancellationToken",
    "DocumentMetadata",
    "ExportCancelledError",
    "ExportError",
    "ExportFormat",
    "ExportInput",
    "ExportOptions",
    "ExportResult",
    "IBlockSink",
    "IExporter",
    "IExporterRegistry",
    "IFileService",
    "IMarkdownRenderer",
    "Margins",
    "ResourceLoadError",
    "SerializationError",
    "ThemeTokens",
    "UnsupportedFormatError",
]
