"""
Exporter strategies and registry.

Builder modules are not imported here; the registry loads each one the first
time its format is requested.
"""

from .base import FORMAT_INFO, BaseExporter, ExporterRegistryInst, lazy_factory

__all__ = ["FORMAT_INFO", "BaseExporter", "ExporterRegistryInst", "lazy_factory"]
