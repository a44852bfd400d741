from __future__ import annotations

from mdexport.domain.interfaces import IFileService, IMarkdownRenderer
from mdexport.services.config import AppConfig, build_app_config
from mdexport.services.exporters.base import ExporterRegistryInst
from mdexport.services.file_service import FileService
from mdexport.services.markdown_renderer import MarkdownRenderer
from mdexport.services.orchestrator import ExportOrchestrator, default_registry


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Registers the built-in builders (lazily) in an instance registry
      - Hands out a ready ExportOrchestrator
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        renderer: IMarkdownRenderer | None = None,
        files: IFileService | None = None,
        registry: ExporterRegistryInst | None = None,
    ) -> None:
        self.config: AppConfig = config or build_app_config()
        self.renderer: IMarkdownRenderer = renderer or MarkdownRenderer()
        self.file_service: IFileService = files or FileService()

        if registry is None:
            font = self.config.pdf_font_path()
            registry = default_registry(
                renderer=self.renderer, pdf_font_path=str(font) if font else None
            )
        self.registry = registry
        self.orchestrator = ExportOrchestrator(self.registry)

    @staticmethod
    def default(config: AppConfig | None = None) -> Container:
        return Container(config=config)
