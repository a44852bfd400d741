import pytest

from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.errors import ExportCancelledError
from mdexport.domain.models import DocumentMetadata
from mdexport.services.exporters.html_exporter import HtmlExporter


class FakeRenderer:
    def __init__(self):
        self.calls = []

    def render(self, markdown_text, *, highlight=True):
        self.calls.append((markdown_text, highlight))
        return "<p>body</p>"


def test_html_exporter_wraps_fragment_in_document(make_input):
    result = HtmlExporter().export(make_input("# Hi\n\ntext"))
    html = result.payload.decode("utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>Untitled Document</title>" in html
    assert '<body class="preview-content">' in html
    assert "<h1" in html and "Hi</h1>" in html
    assert result.filename == "document.html"
    assert result.mime_type == "text/html"


def test_html_exporter_escapes_title(make_input):
    md = make_input("x", metadata=DocumentMetadata(title="<b>&</b>"))
    html = HtmlExporter(FakeRenderer()).export(md).payload.decode("utf-8")
    assert "<title>&lt;b&gt;&amp;&lt;/b&gt;</title>" in html


def test_html_exporter_inlines_theme_and_highlight_css(make_input):
    html = HtmlExporter(FakeRenderer()).export(make_input("x")).payload.decode("utf-8")
    assert "<style>" in html
    assert ".preview-content" in html
    assert ".codehilite .k" in html


def test_html_exporter_without_theme_has_no_style(make_input):
    html = HtmlExporter(FakeRenderer()).export(make_input("x", include_theme=False)).payload.decode("utf-8")
    assert "<style>" not in html


def test_html_exporter_passes_highlight_flag(make_input):
    renderer = FakeRenderer()
    html = HtmlExporter(renderer).export(make_input("x", syntax_highlight=False)).payload.decode("utf-8")
    assert renderer.calls == [("x", False)]
    assert ".codehilite .k" not in html


def test_html_exporter_honours_cancellation(make_input):
    token = CancellationToken()
    token.cancel()
    renderer = FakeRenderer()
    with pytest.raises(ExportCancelledError):
        HtmlExporter(renderer).export(make_input("x"), cancel=token)
    assert renderer.calls == []
