"""Allow-list HTML sanitizer for rendered markdown."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Comment, Tag

logger = logging.getLogger(__name__)

ALLOWED_TAGS = frozenset(
    {
        "a", "abbr", "b", "blockquote", "br", "code", "dd", "del", "details", "div",
        "dl", "dt", "em", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "input",
        "kbd", "li", "mark", "ol", "p", "pre", "s", "span", "strong", "sub", "summary",
        "sup", "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
    }
)

# Elements dropped together with their content.
DROPPED_TAGS = frozenset({"script", "style", "iframe", "object", "embed", "noscript", "template"})

GLOBAL_ATTRS = frozenset({"class", "id"})
TAG_ATTRS: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title"}),
    "img": frozenset({"src", "alt", "title"}),
    "th": frozenset({"align"}),
    "td": frozenset({"align"}),
    "ol": frozenset({"start"}),
    "input": frozenset({"type", "checked", "disabled"}),
}
URL_ATTRS = frozenset({"href", "src"})
SAFE_SCHEMES = ("http:", "https:", "mailto:", "#", "/", "./", "../", "data:image/")


class HtmlSanitizer:
    """
    Strips markup outside an allow-list.

    Unknown tags are unwrapped (their text survives); script-like tags are
    removed with their content; attributes are limited to `class`/`id` plus a
    few per-tag ones; URLs with other schemes (e.g. `javascript:`) are dropped.
    """

    def sanitize(self, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")

        for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()

        for el in list(soup.find_all(True)):
            if not isinstance(el, Tag) or el.decomposed:
                continue
            name = el.name.lower()
            if name in DROPPED_TAGS:
                logger.debug("Dropping <%s> element", name)
                el.decompose()
            elif name not in ALLOWED_TAGS:
                el.unwrap()
            else:
                self._clean_attrs(el, name)

        return str(soup)

    def _clean_attrs(self, el: Tag, name: str) -> None:
        allowed = GLOBAL_ATTRS | TAG_ATTRS.get(name, frozenset())
        for attr in list(el.attrs):
            if attr not in allowed:
                del el.attrs[attr]
            elif attr in URL_ATTRS and not _is_safe_url(str(el.attrs[attr])):
                logger.debug("Dropping unsafe %s on <%s>", attr, name)
                del el.attrs[attr]


def _is_safe_url(url: str) -> bool:
    value = url.strip().lower()
    if ":" not in value.split("/", 1)[0]:
        return True  # relative
    return value.startswith(SAFE_SCHEMES)
