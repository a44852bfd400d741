from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from mdexport.domain.errors import UnsupportedFormatError

PageSize = Literal["A4", "Letter", "A3"]
Orientation = Literal["portrait", "landscape"]


class ExportFormat(str, Enum):
    MARKDOWN = "markdown"
    PLAINTEXT = "plaintext"
    HTML = "html"
    PDF = "pdf"
    DOCX = "docx"
    PPTX = "pptx"

    @classmethod
    def parse(cls, token: ExportFormat | str) -> ExportFormat:
        """Resolve a format token (value, short alias or enum member)."""
        if isinstance(token, cls):
            return token
        key = str(token).strip().lower()
        key = _FORMAT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedFormatError(token) from None


# Short tokens used by the editor's export menu.
_FORMAT_ALIASES = {"md": "markdown", "txt": "plaintext", "text": "plaintext"}


@dataclass(frozen=True)
class UiColors:
    background: str = "#09090b"
    foreground: str = "#fafafa"
    border: str = "#27272a"
    accent: str = "#2563eb"


@dataclass(frozen=True)
class EditorTokens:
    background: str = "#18181b"
    foreground: str = "#e4e4e7"
    font_size: int = 14
    font_family: str = "'Fira Code', monospace"


@dataclass(frozen=True)
class PreviewTokens:
    background: str = "#09090b"
    foreground: str = "#e4e4e7"
    font_family: str = "Inter, sans-serif"
    font_size: int = 16


@dataclass(frozen=True)
class ThemeTokens:
    """Color/font configuration applied to exported output. Read-only."""

    ui: UiColors = field(default_factory=UiColors)
    editor: EditorTokens = field(default_factory=EditorTokens)
    preview: PreviewTokens = field(default_factory=PreviewTokens)
    name: str = "Default Dark"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThemeTokens:
        """
        Build tokens from the nested mapping the editor stores, e.g.
        {"ui": {...}, "editor": {"fontSize": 14, ...}, "preview": {...}}.
        Missing keys keep their defaults; camelCase and snake_case are accepted.
        """
        ui = data.get("ui") or {}
        editor = data.get("editor") or {}
        preview = data.get("preview") or {}
        return cls(
            ui=UiColors(**_pick(ui, UiColors)),
            editor=EditorTokens(**_pick(editor, EditorTokens)),
            preview=PreviewTokens(**_pick(preview, PreviewTokens)),
            name=str(data.get("name", cls.name)),
        )


def _pick(raw: Mapping[str, Any], kind: type) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name in kind.__dataclass_fields__:
        camel = name.split("_")[0] + "".join(p.title() for p in name.split("_")[1:])
        if name in raw:
            out[name] = raw[name]
        elif camel in raw:
            out[name] = raw[camel]
    return out


@dataclass(frozen=True)
class Margins:
    """Page margins in millimetres."""

    top: float = 10
    right: float = 10
    bottom: float = 10
    left: float = 10


@dataclass(frozen=True)
class ExportOptions:
    include_theme: bool = True
    include_table_of_contents: bool = False  # reserved
    page_size: PageSize = "A4"
    orientation: Orientation = "portrait"
    margins: Margins = field(default_factory=Margins)
    font_size: float = 12
    header_footer: bool = False  # reserved
    embed_images: bool = True  # reserved
    syntax_highlight: bool = True


@dataclass(frozen=True)
class DocumentMetadata:
    title: str | None = None
    author: str | None = None
    date: str | None = None


@dataclass(frozen=True)
class ExportInput:
    """Everything a builder needs for one export call."""

    markdown: str
    theme: ThemeTokens = field(default_factory=ThemeTokens)
    options: ExportOptions = field(default_factory=ExportOptions)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    ast: Any = None  # accepted for API parity; no builder reads it


@dataclass(frozen=True)
class ExportResult:
    payload: bytes
    filename: str
    mime_type: str
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True)
class FormatInfo:
    """Static description of a builder, for menus and file dialogs."""

    format: ExportFormat
    label: str
    extension: str
    mime_type: str
    supports_theme: bool = True
    supports_editing: bool = False
    supports_images: bool = True
