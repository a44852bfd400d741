# mdexport/services/parsing/classifier.py
from __future__ import annotations

import re

from mdexport.domain.blocks import (
    Blank,
    Block,
    BlockQuote,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListItem,
    Paragraph,
    TableRow,
)

FENCES = ("```", "~~~")

_HEADING_RE = re.compile(r"^(#{1,6}) ")
_UNORDERED_RE = re.compile(r"^[-*+] ")
_ORDERED_RE = re.compile(r"^\d+\.\s")
_TABLE_SEPARATOR_RE = re.compile(r"^[\s|:\-]+$")
_RULES = frozenset({"---", "***", "___"})


def classify(markdown: str) -> list[Block]:
    """
    Split markdown into typed line blocks, top to bottom, in one pass.

    Outside a fenced block the first matching rule wins: heading, quote,
    unordered item, ordered item, table row, rule, blank, paragraph.
    """
    blocks: list[Block] = []
    in_code = False
    language = ""
    code_lines: list[str] = []

    for raw in markdown.split("\n"):
        line = raw[:-1] if raw.endswith("\r") else raw

        if line.startswith(FENCES):
            if in_code:
                blocks.append(CodeBlock(language, "\n".join(code_lines)))
                in_code = False
            else:
                in_code = True
                language = line[3:].strip()
                code_lines = []
            continue

        if in_code:
            code_lines.append(line)
            continue

        block = classify_line(line)
        if block is not None:
            blocks.append(block)

    # unterminated fence: keep what was buffered
    if in_code:
        blocks.append(CodeBlock(language, "\n".join(code_lines)))

    return blocks


def classify_line(line: str) -> Block | None:
    """
    Classify a single line that is outside any fenced code block.

    Returns None for a table separator row (`|---|:--:|`), which is dropped.
    """
    m = _HEADING_RE.match(line)
    if m:
        level = len(m.group(1))
        return Heading(level, line[level + 1 :])

    if line.startswith("> "):
        return BlockQuote(line[2:])

    if _UNORDERED_RE.match(line):
        return ListItem(line[2:], ordered=False)

    m = _ORDERED_RE.match(line)
    if m:
        return ListItem(line[m.end() :], ordered=True)

    if line.startswith("|") and line.endswith("|"):
        if _TABLE_SEPARATOR_RE.match(line):
            return None
        return TableRow(split_cells(line))

    stripped = line.strip()
    if stripped in _RULES:
        return HorizontalRule()
    if not stripped:
        return Blank()
    return Paragraph(line)


def split_cells(line: str) -> tuple[str, ...]:
    """Cells of a pipe-table row; the leading/trailing pipe artifacts are dropped."""
    parts = line.split("|")
    return tuple(cell.strip() for cell in parts[1:-1])
