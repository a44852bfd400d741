from __future__ import annotations

from pathlib import Path

import pytest

from mdexport.domain.models import DocumentMetadata, ExportInput, ExportOptions, ThemeTokens
from mdexport.services.file_service import FileService
from mdexport.services.markdown_renderer import MarkdownRenderer

SAMPLE_MD = """# Title

Intro with **bold**, *italic*, `code` and a [link](https://example.com).

## Section

- one
- two

1. first
2. second

> quoted *text*

```python
print("hi")
```

| Name | Value |
|------|-------|
| a    | 1     |

---
"""


@pytest.fixture()
def sample_md() -> str:
    return SAMPLE_MD


@pytest.fixture()
def make_input():
    """Factory for ExportInput with overridable options/metadata."""

    def _make(
        markdown: str = SAMPLE_MD,
        *,
        theme: ThemeTokens | None = None,
        metadata: DocumentMetadata | None = None,
        **options,
    ) -> ExportInput:
        return ExportInput(
            markdown=markdown,
            theme=theme or ThemeTokens(),
            options=ExportOptions(**options),
            metadata=metadata or DocumentMetadata(),
        )

    return _make


@pytest.fixture()
def isolated_config_dir(monkeypatch, tmp_path: Path) -> Path:
    """Point the user config dir at an empty temp folder."""
    target = tmp_path / "usercfg"
    monkeypatch.setattr(
        "mdexport.services.config.ini_config_service.user_config_dir",
        lambda appname: str(target),
    )
    return target


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()
