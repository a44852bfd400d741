from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from mdexport.di.container import Container
from mdexport.domain.errors import ExportError
from mdexport.domain.models import DocumentMetadata, ExportInput
from mdexport.services.config import build_app_config
from mdexport.services.theming import get_theme, list_themes
from mdexport.utils.constants import APP_NAME
from mdexport.utils.log_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdexport", description=f"{APP_NAME}: export a Markdown file to another format"
    )
    parser.add_argument("input", nargs="?", type=Path, help="Markdown source file")
    parser.add_argument("-f", "--format", help="Target format (markdown, plaintext, html, pdf, docx, pptx)")
    parser.add_argument("-o", "--output", type=Path, help="Output path (default: document.<ext> beside the input)")
    parser.add_argument("--theme", choices=list_themes(), help="Built-in theme preset")
    parser.add_argument("--no-theme", action="store_true", help="Export without theme colors")
    parser.add_argument("--title", help="Document title")
    parser.add_argument("--author", help="Document author")
    parser.add_argument("--page-size", choices=("A4", "Letter", "A3"), help="Page size for PDF/DOCX")
    parser.add_argument("--landscape", action="store_true", help="Landscape orientation for PDF/DOCX")
    parser.add_argument("--font-size", type=float, help="Body font size in points")
    parser.add_argument("--config", type=Path, help="Explicit config.ini")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for INFO, -vv for DEBUG")
    parser.add_argument("--log-file", type=Path, help="Also write log records to this file")
    parser.add_argument("--list-formats", action="store_true", help="List export formats and exit")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    return parser


def _export_input(args: argparse.Namespace, container: Container, markdown: str) -> ExportInput:
    config = container.config
    options = config.export_options()
    if args.no_theme:
        options = replace(options, include_theme=False)
    if args.page_size:
        options = replace(options, page_size=args.page_size)
    if args.landscape:
        options = replace(options, orientation="landscape")
    if args.font_size:
        options = replace(options, font_size=args.font_size)

    theme = get_theme(args.theme) if args.theme else config.theme()
    metadata = DocumentMetadata(title=args.title, author=args.author)
    return ExportInput(markdown=markdown, theme=theme, options=options, metadata=metadata)


def run_app(argv: Sequence[str]) -> int:
    """
    Parses the command line, composes services via the DI container and runs
    one export. Returns the process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(list(argv[1:]))
    setup_logging(args.verbose, log_file=str(args.log_file) if args.log_file else None)

    container = Container.default(build_app_config(explicit_ini=args.config))

    if args.version:
        print(f"{APP_NAME} {container.config.get_version()}")
        return 0
    if args.list_formats:
        for info in container.orchestrator.formats():
            print(f"{info.format.value:<10} {info.extension:<6} {info.mime_type}")
        return 0
    if args.input is None or not args.format:
        parser.error("INPUT and --format are required")

    try:
        markdown = container.file_service.read_text(args.input)
        result = container.orchestrator.export(args.format, _export_input(args, container, markdown))
        target = args.output or args.input.parent / result.filename
        container.file_service.write_bytes_atomic(target, result.payload)
    except (ExportError, OSError) as e:
        logger.debug("Export failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Exported {target} ({result.size_bytes} bytes)")
    return 0
