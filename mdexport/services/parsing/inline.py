from __future__ import annotations

import re
from collections.abc import Iterable

from mdexport.domain.blocks import TextRun

# Alternation order settles ties at the same index: bold before italic.
# Nested or overlapping markers are not supported; the first span wins.
_INLINE_RE = re.compile(
    r"\*\*(?P<bold>[^*]+)\*\*"
    r"|__(?P<bold_u>[^_]+)__"
    r"|\*(?P<italic>[^*]+)\*"
    r"|_(?P<italic_u>[^_]+)_"
    r"|`(?P<code>[^`]+)`"
    r"|!\[(?P<alt>[^\]]*)\]\((?P<src>[^)]+)\)"
    r"|\[(?P<label>[^\]]+)\]\((?P<href>[^)]+)\)"
)


def parse_inline(text: str) -> list[TextRun]:
    """Split text into styled runs, scanning for the earliest marker each time."""
    runs: list[TextRun] = []
    pos = 0
    for m in _INLINE_RE.finditer(text):
        if m.start() > pos:
            runs.append(TextRun(text[pos : m.start()]))
        runs.append(_run_for(m))
        pos = m.end()
    if pos < len(text):
        runs.append(TextRun(text[pos:]))
    return runs or [TextRun("")]


def _run_for(m: re.Match[str]) -> TextRun:
    g = m.groupdict()
    if g["bold"] is not None or g["bold_u"] is not None:
        return TextRun(g["bold"] if g["bold"] is not None else g["bold_u"], bold=True)
    if g["italic"] is not None or g["italic_u"] is not None:
        return TextRun(g["italic"] if g["italic"] is not None else g["italic_u"], italic=True)
    if g["code"] is not None:
        return TextRun(g["code"], code=True)
    if g["src"] is not None:
        return TextRun(g["alt"], image=g["src"])
    return TextRun(g["label"], link=g["href"])


def plain_text(runs: Iterable[TextRun]) -> str:
    """Run texts joined, i.e. the source with inline markers stripped."""
    return "".join(r.text for r in runs)


def strip_inline(text: str) -> str:
    return plain_text(parse_inline(text))
