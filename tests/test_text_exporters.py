from mdexport.services.exporters.markdown_exporter import MarkdownExporter
from mdexport.services.exporters.plaintext_exporter import PlaintextExporter


def test_markdown_export_is_identity(make_input, sample_md):
    result = MarkdownExporter().export(make_input(sample_md))
    assert result.payload == sample_md.encode("utf-8")
    assert result.filename == "document.md"
    assert result.mime_type == "text/markdown"


def test_markdown_export_is_idempotent(make_input):
    md = "# Café ☕\n\n- ünïcode\n"
    once = MarkdownExporter().export(make_input(md)).payload
    twice = MarkdownExporter().export(make_input(once.decode("utf-8"))).payload
    assert once == twice == md.encode("utf-8")


def test_plaintext_layout(make_input):
    md = "\n".join(
        [
            "# Hello",
            "Some **bold** text",
            "## Sub",
            "### Three",
            "#### Four",
            "##### Five",
            "> quote",
            "- a",
            "1. b",
            "| x | y |",
            "---",
            "```py",
            "code",
            "```",
            "![pic](p.png)",
        ]
    )
    expected = [
        "", "HELLO", "=====", "",
        "Some bold text",
        "", "Sub", "---", "",
        "", "*** Three ***", "",
        "", "** Four **", "",
        "", "Five", "",
        "  | quote",
        "  • a",
        "  1. b",
        "  x  |  y",
        "", "---", "",
        "", "[Code Block (py)]", "code", "[End Code Block]", "",
        "[Image: pic]",
    ]  # fmt: skip
    result = PlaintextExporter().export(make_input(md))
    assert result.payload.decode("utf-8") == "\n".join(expected)
    assert result.filename == "document.txt"


def test_plaintext_strips_inline_markers_and_drops_blank_lines(make_input):
    md = "A *b* `c` [d](http://x)\n\n\nnext"
    out = PlaintextExporter().export(make_input(md)).payload.decode("utf-8")
    assert out == "A b c d\nnext"
    for marker in ("*", "`", "](", "["):
        assert marker not in out


def test_plaintext_ordered_numbering_restarts_per_list(make_input):
    md = "1. a\n2. b\n\n5. c"
    out = PlaintextExporter().export(make_input(md)).payload.decode("utf-8")
    assert out.splitlines() == ["  1. a", "  2. b", "  1. c"]


def test_plaintext_untitled_code_block(make_input):
    out = PlaintextExporter().export(make_input("```\nx\n```")).payload.decode("utf-8")
    assert "[Code Block]" in out


def test_plaintext_example_sentence(make_input):
    out = PlaintextExporter().export(make_input("This is **bold** and `code`.")).payload
    assert out == b"This is bold and code."
