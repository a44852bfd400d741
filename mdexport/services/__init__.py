"""Concrete service implementations and export strategies."""

from .file_service import FileService
from .html_sanitizer import HtmlSanitizer
from .markdown_renderer import MarkdownRenderer
from .orchestrator import ExportOrchestrator, default_registry

__all__ = ["ExportOrchestrator", "FileService", "HtmlSanitizer", "MarkdownRenderer", "default_registry"]
