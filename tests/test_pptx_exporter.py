import io

from pptx import Presentation
from pptx.util import Inches

from mdexport.domain.models import DocumentMetadata
from mdexport.services.exporters.pptx_exporter import PptxExporter, SlideItem, build_slides


def _titles(slides):
    return [s.title for s in slides]


def test_slides_start_at_h1_to_h3(sample_md):
    slides = build_slides(sample_md, DocumentMetadata())
    assert _titles(slides) == ["Title", "Section"]
    assert [i.text for i in slides[1].items] == [
        "one",
        "two",
        "first",
        "second",
        "quoted text",
        'print("hi")',
    ]
    assert slides[1].items[-1].code is True


def test_minor_headings_become_bullets():
    slides = build_slides("# A\n#### small\ntext", DocumentMetadata())
    assert _titles(slides) == ["A"]
    assert [i.text for i in slides[0].items] == ["small", "text"]


def test_preamble_gets_leading_slide():
    slides = build_slides("intro\n# A\nx", DocumentMetadata())
    assert _titles(slides) == ["Document", "A"]
    assert slides[0].items == [SlideItem("intro")]

    titled = build_slides("intro\n# A", DocumentMetadata(title="Deck"))
    assert _titles(titled) == ["Deck", "A"]


def test_no_headings_falls_back_to_raw_lines():
    slides = build_slides("just **text**\n\n  more  \n", DocumentMetadata())
    assert _titles(slides) == ["Document"]
    assert [i.text for i in slides[0].items] == ["just **text**", "more"]


def test_blank_input_gives_placeholder_slide():
    slides = build_slides("  \n\n", DocumentMetadata())
    assert _titles(slides) == ["Markdown Presentation"]
    assert slides[0].items == [SlideItem("No content to display")]


def test_pptx_file_round_trip(make_input, sample_md):
    content = make_input(sample_md, metadata=DocumentMetadata(title="Deck", author="Ann"))
    result = PptxExporter().export(content)
    assert result.filename == "document.pptx"

    prs = Presentation(io.BytesIO(result.payload))
    assert prs.slide_width == Inches(13.333)
    assert prs.slide_height == Inches(7.5)
    assert len(prs.slides) == 2
    first = prs.slides[0]
    assert first.shapes[0].text_frame.text == "Title"
    assert prs.core_properties.title == "Deck"
    assert prs.core_properties.author == "Ann"
    assert prs.core_properties.subject == "Exported from Markdown"


def test_pptx_default_core_properties(make_input):
    prs = Presentation(io.BytesIO(PptxExporter().export(make_input("")).payload))
    assert len(prs.slides) == 1
    assert prs.core_properties.title == "Markdown Presentation"
    assert prs.core_properties.author == "Markdown Converter"
