import io

import pytest
from docx import Document
from docx.enum.section import WD_ORIENT
from docx.opc.constants import RELATIONSHIP_TYPE as RT

from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.errors import ExportCancelledError
from mdexport.domain.models import Margins
from mdexport.services.exporters.docx_exporter import DocxExporter


def _open(result):
    return Document(io.BytesIO(result.payload))


def test_docx_structure(make_input, sample_md):
    result = DocxExporter().export(make_input(sample_md))
    assert result.filename == "document.docx"
    doc = _open(result)

    styled = [(p.style.name, p.text) for p in doc.paragraphs]
    assert ("Heading 1", "Title") in styled
    assert ("Heading 2", "Section") in styled
    assert ("List Bullet", "one") in styled
    assert ("List Bullet", "two") in styled

    texts = [p.text for p in doc.paragraphs]
    assert "1. first" in texts and "2. second" in texts
    assert "quoted text" in texts
    assert 'print("hi")' in texts

    assert len(doc.tables) == 1
    table = doc.tables[0]
    assert table.style.name == "Table Grid"
    assert table.cell(0, 0).text == "Name"
    assert table.cell(1, 1).text == "1"


def test_docx_links_are_hyperlink_relationships(make_input):
    doc = _open(DocxExporter().export(make_input("see [site](https://example.com)")))
    targets = [r.target_ref for r in doc.part.rels.values() if r.reltype == RT.HYPERLINK]
    assert targets == ["https://example.com"]


def test_docx_inline_styles(make_input):
    doc = _open(DocxExporter().export(make_input("a **b** *c* `d`")))
    runs = {r.text: r for r in doc.paragraphs[0].runs}
    assert runs["b"].bold is True
    assert runs["c"].italic is True
    assert runs["d"].font.name == "Courier New"


def test_docx_page_setup_from_options(make_input):
    content = make_input("x", page_size="A3", orientation="landscape", margins=Margins(5, 6, 7, 8))
    section = _open(DocxExporter().export(content)).sections[0]
    assert section.orientation == WD_ORIENT.LANDSCAPE
    assert section.page_width.mm == pytest.approx(420, abs=0.1)
    assert section.page_height.mm == pytest.approx(297, abs=0.1)
    assert section.top_margin.mm == pytest.approx(5, abs=0.1)
    assert section.left_margin.mm == pytest.approx(8, abs=0.1)


def test_docx_empty_document_opens(make_input):
    doc = _open(DocxExporter().export(make_input("")))
    assert all(not p.text for p in doc.paragraphs)


def test_docx_cancelled_export_raises(make_input):
    token = CancellationToken()
    token.cancel()
    with pytest.raises(ExportCancelledError):
        DocxExporter().export(make_input("# x"), cancel=token)


def test_docx_drops_xml_illegal_control_characters(make_input):
    md = "# head\x01ing\n\npage\x0cbreak **bo\x07ld**\n\n[li\x02nk](https://example.com)\n\n```\nco\x1bde\n```\n\n| a\x07 | b |\n|---|---|\n| 1 | 2 |"
    doc = _open(DocxExporter().export(make_input(md)))
    texts = [p.text for p in doc.paragraphs]
    assert "heading" in texts
    assert "pagebreak bold" in texts
    assert "code" in texts
    assert doc.tables[0].cell(0, 0).text == "a"
    body = doc.element.xml
    assert "\x07" not in body and "\x0c" not in body
