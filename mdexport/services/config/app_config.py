from __future__ import annotations

import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from mdexport.domain.interfaces import IAppConfig
from mdexport.domain.models import ExportOptions, Margins, ThemeTokens
from mdexport.services.config.ini_config_service import IniConfigService
from mdexport.services.theming.presets import get_theme

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)(?:[-+].*)?$", re.IGNORECASE)

_PAGE_SIZES = {"a4": "A4", "letter": "Letter", "a3": "A3"}


def _project_root_fallback() -> Path:
    """
    Best-effort project root resolution that also works in PyInstaller:
      - PyInstaller onefile/onedir uses sys._MEIPASS as bundle root
      - dev mode uses this file location to walk upward
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)

    # mdexport/services/config/app_config.py -> parents[3] = repository root
    return Path(__file__).resolve().parents[3]


def _read_version_file(version_path: Path) -> str | None:
    try:
        raw = version_path.read_text(encoding="utf-8").strip()
    except OSError:
        return None

    m = _VERSION_RE.match(raw)
    if not m:
        return None
    return m.group(1)


@dataclass(frozen=True)
class AppConfig(IAppConfig):
    """
    Adapter over IniConfigService: version lookup plus typed export defaults.

    Precedence for version:
      1) <project_root>/version file (semantic e.g. v1.0.5)
      2) ini_config_service.app_version() (fallback)
      3) "0.0.0"

    Recognized sections:
      [export] page_size, orientation, font_size, margin_top/right/bottom/left,
               include_theme, syntax_highlight
      [theme]  name
      [pdf]    font_path
    """

    ini: IniConfigService
    project_root: Path

    def get_version(self) -> str:
        v = _read_version_file(self.project_root / "version")
        if v:
            return v

        v2 = (self.ini.app_version() or "").strip()
        if v2:
            m = _VERSION_RE.match(v2)
            return m.group(1) if m else v2

        return "0.0.0"

    # ---- typed export settings ----

    def export_options(self) -> ExportOptions:
        base = ExportOptions()
        page_size = _PAGE_SIZES.get((self.get("export", "page_size") or "").strip().lower())
        orientation = (self.get("export", "orientation") or "").strip().lower()
        m = base.margins
        return ExportOptions(
            include_theme=self._bool("export", "include_theme", base.include_theme),
            page_size=page_size or base.page_size,  # type: ignore[arg-type]
            orientation=orientation if orientation in ("portrait", "landscape") else base.orientation,  # type: ignore[arg-type]
            margins=Margins(
                top=self._float("export", "margin_top", m.top),
                right=self._float("export", "margin_right", m.right),
                bottom=self._float("export", "margin_bottom", m.bottom),
                left=self._float("export", "margin_left", m.left),
            ),
            font_size=self._float("export", "font_size", base.font_size),
            syntax_highlight=self._bool("export", "syntax_highlight", base.syntax_highlight),
        )

    def theme_name(self) -> str | None:
        return self.get("theme", "name")

    def theme(self) -> ThemeTokens:
        return get_theme(self.theme_name())

    def pdf_font_path(self) -> Path | None:
        raw = (self.get("pdf", "font_path") or "").strip()
        return Path(raw).expanduser() if raw else None

    def _bool(self, section: str, key: str, default: bool) -> bool:
        v = self.get_bool(section, key, default)
        return default if v is None else v

    def _float(self, section: str, key: str, default: float) -> float:
        v = self.get_float(section, key, default)
        return default if v is None else v

    # ---- delegate IniConfigService methods (full surface) ----

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return self.ini.get(section, key, default)

    def get_int(self, section: str, key: str, default: int | None = None) -> int | None:
        return self.ini.get_int(section, key, default)

    def get_float(self, section: str, key: str, default: float | None = None) -> float | None:
        return self.ini.get_float(section, key, default)

    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None:
        return self.ini.get_bool(section, key, default)

    def as_dict(self) -> Mapping[str, Mapping[str, str]]:
        return self.ini.as_dict()

    def app_version(self) -> str:
        return self.ini.app_version()

    @property
    def loaded_from(self) -> Path | None:
        return self.ini.loaded_from


def build_app_config(
    *, explicit_ini: Path | None = None, project_root: Path | None = None
) -> AppConfig:
    root = project_root or _project_root_fallback()
    ini = IniConfigService(explicit_path=explicit_ini, project_root=root)
    return AppConfig(ini=ini, project_root=root)
