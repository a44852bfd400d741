from __future__ import annotations

from mdexport.domain.models import EditorTokens, PreviewTokens, ThemeTokens, UiColors

DEFAULT_THEME_ID = "dark"


def _theme(
    name: str,
    ui: tuple[str, str, str, str],
    editor: tuple[str, str],
    preview: tuple[str, str],
) -> ThemeTokens:
    # ui = (background, foreground, border, accent)
    return ThemeTokens(
        name=name,
        ui=UiColors(*ui),
        editor=EditorTokens(background=editor[0], foreground=editor[1]),
        preview=PreviewTokens(background=preview[0], foreground=preview[1]),
    )


THEMES: dict[str, ThemeTokens] = {
    "dark": _theme(
        "Default Dark",
        ("#09090b", "#fafafa", "#27272a", "#2563eb"),
        ("#18181b", "#e4e4e7"),
        ("#09090b", "#e4e4e7"),
    ),
    "light": _theme(
        "Default Light",
        ("#ffffff", "#09090b", "#e4e4e7", "#2563eb"),
        ("#ffffff", "#18181b"),
        ("#ffffff", "#09090b"),
    ),
    "dracula": _theme(
        "Dracula",
        ("#282a36", "#f8f8f2", "#44475a", "#bd93f9"),
        ("#282a36", "#f8f8f2"),
        ("#282a36", "#f8f8f2"),
    ),
    "github-light": _theme(
        "GitHub Light",
        ("#ffffff", "#24292e", "#e1e4e8", "#0969da"),
        ("#f6f8fa", "#24292e"),
        ("#ffffff", "#24292e"),
    ),
    "github-dark": _theme(
        "GitHub Dark",
        ("#0d1117", "#c9d1d9", "#30363d", "#58a6ff"),
        ("#161b22", "#c9d1d9"),
        ("#0d1117", "#c9d1d9"),
    ),
    "nord": _theme(
        "Nord",
        ("#2e3440", "#eceff4", "#4c566a", "#81a1c1"),
        ("#3b4252", "#eceff4"),
        ("#2e3440", "#eceff4"),
    ),
    "one-dark-pro": _theme(
        "One Dark Pro",
        ("#282c34", "#abb2bf", "#3e4451", "#61afef"),
        ("#282c34", "#abb2bf"),
        ("#282c34", "#abb2bf"),
    ),
    "tokyo-night": _theme(
        "Tokyo Night",
        ("#1a1b26", "#a9b1d6", "#24283b", "#7aa2f7"),
        ("#24283b", "#a9b1d6"),
        ("#1a1b26", "#a9b1d6"),
    ),
}


def get_theme(theme_id: str | None) -> ThemeTokens:
    """Built-in theme by id; unknown ids fall back to the default dark theme."""
    return THEMES.get((theme_id or "").strip().lower(), THEMES[DEFAULT_THEME_ID])


def list_themes() -> list[str]:
    return list(THEMES)
