from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import QCoreApplication, QObject, QTimer, Signal, Slot
from PySide6.QtGui import QGuiApplication

from .models import PickResult, PreviewFrame


class QtFrameScheduler(QObject):
    """Display-cadence scheduler backed by a single-shot ``QTimer``.

    Behaves like ``requestAnimationFrame``: the timer keeps its original
    deadline while pointer samples keep arriving, and only the most recently
    requested callback runs when it fires.
    """

    def __init__(self, interval_ms: int = 16, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_frame)
        self._callback: Callable[[], None] | None = None
        self._token = 0

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def is_ticking(self) -> bool:
        return self._timer.isActive()

    def request(self, callback: Callable[[], None]) -> int:
        self._token += 1
        self._callback = callback
        if not self._timer.isActive():
            self._timer.start()
        return self._token

    def cancel(self, handle: Any) -> None:
        if handle == self._token:
            self._callback = None

    @Slot()
    def _on_frame(self) -> None:
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()


class QtObserverBridge(QObject):
    picked = Signal(object)
    preview_updated = Signal(object)

    def emit_pick(self, result: PickResult) -> None:
        self.picked.emit(result.to_payload())

    def emit_preview(self, frame: PreviewFrame) -> None:
        self.preview_updated.emit(frame.to_payload())


class QtClipboard:
    """Clipboard sink; raises when no GUI application owns a clipboard."""

    def __call__(self, text: str) -> None:
        app = QCoreApplication.instance()
        if not isinstance(app, QGuiApplication):
            raise RuntimeError("Clipboard requires a running QGuiApplication.")
        clipboard = QGuiApplication.clipboard()
        if clipboard is None:
            raise RuntimeError("Clipboard is not available.")
        clipboard.setText(text)
