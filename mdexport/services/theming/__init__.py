"""Theme presets and theme-to-style mapping (CSS, RGB triples, hex strings)."""

from .css import highlight_css, theme_to_css
from .presets import THEMES, get_theme, list_themes
from .styles import PLAIN_PALETTE, Palette, hex_to_rgb, resolve_palette, rgb_to_hex, scale_rgb

__all__ = [
    "PLAIN_PALETTE",
    "Palette",
    "THEMES",
    "get_theme",
    "hex_to_rgb",
    "highlight_css",
    "list_themes",
    "resolve_palette",
    "rgb_to_hex",
    "scale_rgb",
    "theme_to_css",
]
