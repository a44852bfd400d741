from mdexport.domain.blocks import (
    Blank,
    BlockQuote,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListBlock,
    ListItem,
    Paragraph,
    Table,
    TableRow,
    TextRun,
)
from mdexport.services.parsing import (
    aggregate,
    classify,
    classify_line,
    parse_inline,
    parse_markdown,
    render_blocks,
    strip_inline,
)


# ---- classifier ----


def test_classify_line_kinds():
    assert classify_line("## Sub") == Heading(2, "Sub")
    assert classify_line("> note") == BlockQuote("note")
    assert classify_line("- a") == ListItem("a", ordered=False)
    assert classify_line("+ a") == ListItem("a", ordered=False)
    assert classify_line("12. b") == ListItem("b", ordered=True)
    assert classify_line("| a | b |") == TableRow(("a", "b"))
    assert classify_line("***") == HorizontalRule()
    assert classify_line("   ") == Blank()
    assert classify_line("plain text") == Paragraph("plain text")


def test_heading_needs_space_and_at_most_six_hashes():
    assert classify_line("#NoSpace") == Paragraph("#NoSpace")
    assert classify_line("####### seven") == Paragraph("####### seven")
    assert classify_line("###### six") == Heading(6, "six")


def test_table_separator_rows_are_dropped():
    assert classify_line("|---|---|") is None
    assert classify_line("| :--- | ---: |") is None
    blocks = classify("| a |\n|---|\n| b |")
    assert blocks == [TableRow(("a",)), TableRow(("b",))]


def test_fenced_code_is_opaque():
    md = "```js\n# not a heading\n- not a list\n```"
    assert classify(md) == [CodeBlock("js", "# not a heading\n- not a list")]


def test_tilde_fence_and_unterminated_fence_flushes():
    assert classify("~~~\nx") == [CodeBlock("", "x")]


def test_crlf_input_is_normalized():
    assert classify("# T\r\ntext\r\n") == [Heading(1, "T"), Paragraph("text"), Blank()]


# ---- aggregator ----


def test_list_items_aggregate_by_kind():
    blocks = aggregate(classify("- a\n- b\n1. c\n2. d\ntext\n- e"))
    assert blocks == [
        ListBlock(ordered=False, items=["a", "b"]),
        ListBlock(ordered=True, items=["c", "d"]),
        Paragraph("text"),
        ListBlock(ordered=False, items=["e"]),
    ]


def test_table_rows_aggregate_and_blank_splits():
    blocks = parse_markdown("| h1 | h2 |\n|----|----|\n| 1 | 2 |\n\n| x |")
    assert isinstance(blocks[0], Table)
    assert blocks[0].header == ["h1", "h2"]
    assert blocks[0].body == [["1", "2"]]
    assert blocks[0].column_count == 2
    assert blocks[1] == Blank()
    assert blocks[2] == Table(rows=[["x"]])


# ---- inline ----


def test_parse_inline_styles():
    runs = parse_inline("a **b** *c* `d` [e](http://x) ![f](g.png) __h__ _i_")
    styled = [r for r in runs if not r.plain]
    assert styled == [
        TextRun("b", bold=True),
        TextRun("c", italic=True),
        TextRun("d", code=True),
        TextRun("e", link="http://x"),
        TextRun("f", image="g.png"),
        TextRun("h", bold=True),
        TextRun("i", italic=True),
    ]


def test_bold_wins_over_italic_at_same_position():
    assert parse_inline("**x**") == [TextRun("x", bold=True)]


def test_earliest_marker_wins():
    assert parse_inline("`a *b*` c") == [TextRun("a *b*", code=True), TextRun(" c")]


def test_parse_inline_empty_and_unmatched():
    assert parse_inline("") == [TextRun("")]
    assert parse_inline("2 * 3 = 6") == [TextRun("2 * 3 = 6")]


def test_strip_inline_removes_markers():
    assert strip_inline("**Bold** and [link](u)") == "Bold and link"


# ---- render_blocks ----


class RecordingSink:
    def __init__(self):
        self.calls = []

    def add_heading(self, level, runs):
        self.calls.append(("heading", level, runs))

    def add_paragraph(self, runs):
        self.calls.append(("paragraph", runs))

    def add_quote(self, runs):
        self.calls.append(("quote", runs))

    def add_code(self, language, content):
        self.calls.append(("code", language, content))

    def add_list(self, items, ordered):
        self.calls.append(("list", items, ordered))

    def add_table(self, rows):
        self.calls.append(("table", rows))

    def add_rule(self):
        self.calls.append(("rule",))

    def add_blank(self):
        self.calls.append(("blank",))


def test_render_blocks_dispatches_in_order():
    sink = RecordingSink()
    render_blocks(parse_markdown("# **T**\n- a\n---\n```\nc\n```"), sink)
    assert [c[0] for c in sink.calls] == ["heading", "list", "rule", "code"]
    assert sink.calls[0] == ("heading", 1, [TextRun("T", bold=True)])
    assert sink.calls[1] == ("list", [[TextRun("a")]], False)


# ---- documented properties ----


def test_list_of_three_items_is_one_block():
    assert parse_markdown("- a\n- b\n- c") == [ListBlock(ordered=False, items=["a", "b", "c"])]


def test_table_separator_never_reaches_output():
    (table,) = parse_markdown("| A | B |\n|---|---|\n| 1 | 2 |")
    assert table.header == ["A", "B"]
    assert table.body == [["1", "2"]]


def test_bold_then_italic_runs():
    assert parse_inline("**bold** and *italic*") == [
        TextRun("bold", bold=True),
        TextRun(" and "),
        TextRun("italic", italic=True),
    ]


def test_nested_emphasis_is_not_interpreted():
    # no nesting: the earliest complete span wins, leftovers stay literal
    assert parse_inline("**bold *and italic***") == [
        TextRun("*"),
        TextRun("bold ", italic=True),
        TextRun("and italic***"),
    ]
