"""Intermediate document model shared by the PDF, DOCX, PPTX and plain-text builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class TextRun:
    """
    A span of inline text sharing one style.

    `code` suppresses bold/italic for its span. `image` holds the image source
    when the run came from `![alt](src)`; `text` is then the alt text.
    """

    text: str
    bold: bool = False
    italic: bool = False
    code: bool = False
    link: str | None = None
    image: str | None = None

    @property
    def plain(self) -> bool:
        return not (self.bold or self.italic or self.code or self.link or self.image)


# ---- classifier output ----


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class CodeBlock:
    language: str
    content: str


@dataclass(frozen=True)
class BlockQuote:
    text: str


@dataclass(frozen=True)
class ListItem:
    text: str
    ordered: bool = False


@dataclass(frozen=True)
class TableRow:
    cells: tuple[str, ...]


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class Blank:
    pass


Block = Union[Heading, Paragraph, CodeBlock, BlockQuote, ListItem, TableRow, HorizontalRule, Blank]


# ---- aggregator output ----


@dataclass
class ListBlock:
    ordered: bool
    items: list[str] = field(default_factory=list)


@dataclass
class Table:
    rows: list[list[str]] = field(default_factory=list)

    @property
    def header(self) -> list[str]:
        """First row encountered; no other header detection is done."""
        return self.rows[0] if self.rows else []

    @property
    def body(self) -> list[list[str]]:
        return self.rows[1:]

    @property
    def column_count(self) -> int:
        return max((len(r) for r in self.rows), default=0)


AggregatedBlock = Union[
    Heading, Paragraph, CodeBlock, BlockQuote, ListBlock, Table, HorizontalRule, Blank
]
