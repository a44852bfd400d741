from __future__ import annotations


class ExportError(Exception):
    """Base class for every failure raised by an export call."""


class UnsupportedFormatError(ExportError, ValueError):
    """The requested format token is not one of the registered formats."""

    def __init__(self, fmt: object) -> None:
        super().__init__(f"Unsupported export format: {fmt}")
        self.format = fmt


class ResourceLoadError(ExportError):
    """A builder dependency (library, font, ...) could not be loaded."""


class SerializationError(ExportError):
    """The underlying document packer failed to produce bytes."""


class ExportCancelledError(ExportError):
    """
    The caller cancelled the export before it finished.

    Kept distinct from the failure classes so callers can tell an aborted
    export from a failed one.
    """
