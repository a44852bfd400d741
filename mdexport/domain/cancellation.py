from __future__ import annotations

import threading

from mdexport.domain.errors import ExportCancelledError


class CancellationToken:
    """Cooperative cancel flag, checked by builders between blocks."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ExportCancelledError("Export cancelled")
