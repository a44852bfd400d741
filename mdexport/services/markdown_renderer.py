# mdexport/services/markdown_renderer.py
from __future__ import annotations

import markdown

from mdexport.domain.interfaces import IMarkdownRenderer
from mdexport.services.html_sanitizer import HtmlSanitizer


class MarkdownRenderer(IMarkdownRenderer):
    """
    Full Markdown -> sanitized HTML fragment, the same pipeline the live preview uses.

    Code blocks are highlighted by codehilite (Pygments, CSS classes) when
    `highlight` is set; math is wrapped by pymdownx.arithmatex so a JS-capable
    viewer can typeset it.
    """

    def __init__(self, sanitizer: HtmlSanitizer | None = None) -> None:
        self._sanitizer = sanitizer or HtmlSanitizer()

    def render(self, markdown_text: str, *, highlight: bool = True) -> str:
        exts = [
            "extra",
            "sane_lists",
            "toc",
            "pymdownx.arithmatex",
            "pymdownx.tilde",
        ]
        ext_cfg: dict[str, dict[str, object]] = {
            # 'generic=True' wraps math in <span class="arithmatex"> / <div class="arithmatex">
            "pymdownx.arithmatex": {"generic": True},
        }
        if highlight:
            exts.append("codehilite")
            # Class-based output: inline style attributes would not survive sanitizing.
            ext_cfg["codehilite"] = {"guess_lang": False, "noclasses": False, "css_class": "codehilite"}

        body = markdown.markdown(
            markdown_text,
            extensions=exts,
            extension_configs=ext_cfg,
            output_format="html5",
        )
        return self._sanitizer.sanitize(body)
