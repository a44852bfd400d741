from __future__ import annotations

from string import Template

from pygments.formatters import HtmlFormatter

from mdexport.domain.models import ThemeTokens
from mdexport.services.theming.styles import hex_to_rgb

# $-placeholders keep the CSS braces literal.
_THEME_CSS = Template(
    """
:root {
  --background: $ui_bg;
  --foreground: $ui_fg;
  --border: $ui_border;
  --accent: $accent;
  --editor-bg: $editor_bg;
  --editor-fg: $editor_fg;
  --preview-bg: $preview_bg;
  --preview-fg: $preview_fg;
}
.preview-content {
  font-family: $preview_font;
  font-size: ${preview_size}px;
  line-height: 1.75;
  color: $preview_fg;
  background-color: $preview_bg;
  padding: 2rem;
  max-width: 100%;
  overflow-wrap: break-word;
}
.preview-content h1 {
  font-size: 2.25em; font-weight: 700; margin-top: 0; margin-bottom: 0.8em;
  line-height: 1.2; color: $accent;
  border-bottom: 1px solid $ui_border; padding-bottom: 0.3em;
}
.preview-content h2 {
  font-size: 1.75em; font-weight: 600; margin-top: 1.6em; margin-bottom: 0.6em;
  line-height: 1.3; color: $preview_fg;
  border-bottom: 1px solid $ui_border; padding-bottom: 0.2em;
}
.preview-content h3 { font-size: 1.5em; font-weight: 600; margin-top: 1.4em; margin-bottom: 0.6em; color: $preview_fg; }
.preview-content h4 { font-size: 1.25em; font-weight: 600; margin-top: 1.2em; margin-bottom: 0.5em; color: $preview_fg; }
.preview-content h5 { font-size: 1.1em; font-weight: 600; margin-top: 1em; margin-bottom: 0.4em; color: $preview_fg; }
.preview-content h6 { font-size: 1em; font-weight: 600; margin-top: 1em; margin-bottom: 0.4em; color: $preview_fg; opacity: 0.8; }
.preview-content p { margin-top: 0; margin-bottom: 1.25em; }
.preview-content a { color: $accent; text-decoration: underline; text-underline-offset: 2px; }
.preview-content a:hover { text-decoration: none; }
.preview-content strong { font-weight: 600; color: $accent; }
.preview-content em { font-style: italic; }
.preview-content del { text-decoration: line-through; opacity: 0.7; }
.preview-content ul, .preview-content ol { margin-top: 0; margin-bottom: 1.25em; padding-left: 2em; }
.preview-content li { margin-top: 0.5em; margin-bottom: 0.5em; }
.preview-content ul li::marker { color: $accent; }
.preview-content ol li::marker { color: $accent; font-weight: 500; }
.preview-content blockquote {
  border-left: 4px solid $accent; margin: 1.5em 0; padding: 1em;
  font-style: italic; background: ${ui_bg}10; border-radius: 0 4px 4px 0;
}
.preview-content blockquote p { margin-bottom: 0; }
.preview-content hr { border: none; border-top: 2px solid $ui_border; margin: 2em 0; }
.preview-content code {
  font-family: $editor_font; font-size: 0.9em; background: ${ui_bg}40;
  padding: 0.2em 0.4em; border-radius: 4px; color: $accent;
}
.preview-content pre {
  font-family: $editor_font; background: $editor_bg; color: $editor_fg;
  padding: 1.25em; margin: 1.5em 0; border-radius: 8px; overflow-x: auto;
  border: 1px solid $ui_border; line-height: 1.5;
}
.preview-content pre code { background: transparent; padding: 0; border-radius: 0; color: inherit; font-size: inherit; }
.preview-content table { width: 100%; border-collapse: collapse; margin: 1.5em 0; }
.preview-content th, .preview-content td { padding: 0.75em 1em; text-align: left; border: 1px solid $ui_border; }
.preview-content th { font-weight: 600; background: ${ui_bg}40; }
.preview-content tr:nth-child(even) { background: ${ui_bg}20; }
.preview-content img { max-width: 100%; height: auto; border-radius: 8px; margin: 1.5em 0; }
.preview-content .codehilite { background: $editor_bg; border-radius: 8px; }
@media (max-width: 768px) {
  .preview-content { padding: 1rem; font-size: ${small_size}px; }
  .preview-content h1 { font-size: 1.75em; }
  .preview-content h2 { font-size: 1.5em; }
  .preview-content h3 { font-size: 1.25em; }
}
@media print {
  .preview-content { padding: 0; background: white; color: black; }
  .preview-content h1, .preview-content h2, .preview-content h3,
  .preview-content h4, .preview-content h5, .preview-content h6 { color: black; border-color: #ccc; }
  .preview-content pre { background: #f5f5f5; border-color: #ddd; }
  .preview-content code { background: #f5f5f5; color: #333; }
}
"""
)


def theme_to_css(theme: ThemeTokens) -> str:
    """Stylesheet for the `.preview-content` body of an exported HTML document."""
    ui, editor, preview = theme.ui, theme.editor, theme.preview
    return _THEME_CSS.substitute(
        ui_bg=ui.background,
        ui_fg=ui.foreground,
        ui_border=ui.border,
        accent=ui.accent,
        editor_bg=editor.background,
        editor_fg=editor.foreground,
        editor_font=editor.font_family,
        preview_bg=preview.background,
        preview_fg=preview.foreground,
        preview_font=preview.font_family,
        preview_size=preview.font_size,
        small_size=max(12, preview.font_size - 2),
    )


def is_dark(theme: ThemeTokens) -> bool:
    r, g, b = hex_to_rgb(theme.editor.background)
    return (0.2126 * r + 0.7152 * g + 0.0722 * b) < 0.5


def highlight_css(theme: ThemeTokens, css_class: str = "codehilite") -> str:
    """Pygments token colors for highlighted code blocks, picked by editor brightness."""
    style = "monokai" if is_dark(theme) else "default"
    return HtmlFormatter(style=style).get_style_defs(f".{css_class}")
