"""Theme tokens -> per-format color primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from mdexport.domain.models import ExportInput, ThemeTokens

RGB = tuple[float, float, float]

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


def hex_to_rgb(value: str | None) -> RGB:
    """'#rrggbb' -> (r, g, b) in 0..1. Anything unparsable maps to black."""
    m = _HEX_RE.match((value or "").strip())
    if not m:
        return (0.0, 0.0, 0.0)
    return tuple(int(part, 16) / 255 for part in m.groups())  # type: ignore[return-value]


def rgb_to_hex(rgb: RGB) -> str:
    """(r, g, b) in 0..1 -> 'rrggbb' (no leading '#', as DOCX/PPTX expect)."""
    return "".join(f"{max(0, min(255, round(c * 255))):02x}" for c in rgb)


def scale_rgb(rgb: RGB, factor: float) -> RGB:
    r, g, b = rgb
    return (r * factor, g * factor, b * factor)


@dataclass(frozen=True)
class Palette:
    """Resolved colors for one export; each builder converts them to its own type."""

    accent: RGB
    text: RGB
    background: RGB
    code_background: RGB
    border: RGB

    @property
    def muted(self) -> RGB:
        return scale_rgb(self.text, 0.8)

    @property
    def rule(self) -> RGB:
        return scale_rgb(self.text, 0.5)

    def hex(self, name: str) -> str:
        """Color attribute/property by name as 'rrggbb'."""
        return rgb_to_hex(getattr(self, name))


# Used when the caller turns theming off: black text on white paper.
PLAIN_PALETTE = Palette(
    accent=(0.0, 0.0, 0.0),
    text=(0.0, 0.0, 0.0),
    background=(1.0, 1.0, 1.0),
    code_background=hex_to_rgb("#f4f6f8"),
    border=hex_to_rgb("#dddddd"),
)


def palette_from_theme(theme: ThemeTokens) -> Palette:
    return Palette(
        accent=hex_to_rgb(theme.ui.accent),
        text=hex_to_rgb(theme.preview.foreground),
        background=hex_to_rgb(theme.preview.background),
        code_background=hex_to_rgb(theme.editor.background),
        border=hex_to_rgb(theme.ui.border),
    )


def resolve_palette(content: ExportInput) -> Palette:
    if content.options.include_theme:
        return palette_from_theme(content.theme)
    return PLAIN_PALETTE
