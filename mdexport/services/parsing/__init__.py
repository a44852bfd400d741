"""
Restricted markdown-subset parser shared by the structured builders.

classify() -> aggregate() -> render_blocks(sink); inline spans are parsed on
demand with parse_inline().
"""

from __future__ import annotations

from collections.abc import Iterable

from mdexport.domain.blocks import (
    AggregatedBlock,
    Blank,
    BlockQuote,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListBlock,
    Paragraph,
    Table,
)
from mdexport.domain.cancellation import CancellationToken
from mdexport.domain.interfaces import IBlockSink

from .aggregator import aggregate
from .classifier import classify, classify_line, split_cells
from .inline import parse_inline, plain_text, strip_inline


def parse_markdown(markdown: str) -> list[AggregatedBlock]:
    return aggregate(classify(markdown))


def render_blocks(
    blocks: Iterable[AggregatedBlock],
    sink: IBlockSink,
    cancel: CancellationToken | None = None,
) -> None:
    """Feed every block to the sink in order, checking `cancel` between blocks."""
    for block in blocks:
        if cancel is not None:
            cancel.raise_if_cancelled()

        if isinstance(block, Heading):
            sink.add_heading(block.level, parse_inline(block.text))
        elif isinstance(block, Paragraph):
            sink.add_paragraph(parse_inline(block.text))
        elif isinstance(block, BlockQuote):
            sink.add_quote(parse_inline(block.text))
        elif isinstance(block, CodeBlock):
            sink.add_code(block.language, block.content)
        elif isinstance(block, ListBlock):
            sink.add_list([parse_inline(item) for item in block.items], block.ordered)
        elif isinstance(block, Table):
            sink.add_table(block.rows)
        elif isinstance(block, HorizontalRule):
            sink.add_rule()
        elif isinstance(block, Blank):
            sink.add_blank()
        else:  # pragma: no cover - exhaustive over AggregatedBlock
            raise TypeError(f"Unknown block: {block!r}")


__all__ = [
    "aggregate",
    "classify",
    "classify_line",
    "parse_inline",
    "parse_markdown",
    "plain_text",
    "render_blocks",
    "split_cells",
    "strip_inline",
]
