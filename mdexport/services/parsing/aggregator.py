from __future__ import annotations

from collections.abc import Iterable

from mdexport.domain.blocks import AggregatedBlock, Block, ListBlock, ListItem, Table, TableRow


def aggregate(blocks: Iterable[Block]) -> list[AggregatedBlock]:
    """
    Merge runs of list items into ListBlocks and runs of table rows into Tables.

    A change of list kind (unordered <-> ordered) or any other block closes the
    open aggregate. Ordered numbering is left to the renderer (1-based position).
    """
    out: list[AggregatedBlock] = []
    current: ListBlock | Table | None = None

    for block in blocks:
        if isinstance(block, ListItem):
            if not (isinstance(current, ListBlock) and current.ordered == block.ordered):
                current = ListBlock(ordered=block.ordered)
                out.append(current)
            current.items.append(block.text)
        elif isinstance(block, TableRow):
            if not isinstance(current, Table):
                current = Table()
                out.append(current)
            current.rows.append(list(block.cells))
        else:
            current = None
            out.append(block)

    return out
