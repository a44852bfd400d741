from __future__ import annotations

import html

from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.interfaces import IMarkdownRenderer
from mdexport.domain.models import ExportFormat, ExportInput
from mdexport.services.exporters.base import BaseExporter
from mdexport.services.markdown_renderer import MarkdownRenderer
from mdexport.services.theming import highlight_css, theme_to_css
from mdexport.utils.constants import DEFAULT_DOCUMENT_TITLE, HTML_TEMPLATE


class HtmlExporter(BaseExporter):
    """
    Standalone HTML document built from the full preview pipeline, not the
    restricted parser the other structured builders share.
    """

    format = ExportFormat.HTML

    def __init__(self, renderer: IMarkdownRenderer | None = None) -> None:
        self._renderer = renderer or MarkdownRenderer()

    def build(self, content: ExportInput, cancel: CancellationToken | None) -> bytes:
        options = content.options
        body = self._renderer.render(content.markdown, highlight=options.syntax_highlight)
        if cancel is not None:
            cancel.raise_if_cancelled()

        style = ""
        if options.include_theme:
            css = theme_to_css(content.theme)
            if options.syntax_highlight:
                css += "\n" + highlight_css(content.theme)
            style = f"<style>{css}</style>"

        title = content.metadata.title or DEFAULT_DOCUMENT_TITLE
        doc = HTML_TEMPLATE.format(title=html.escape(title), style=style, body=body)
        return doc.encode("utf-8")
