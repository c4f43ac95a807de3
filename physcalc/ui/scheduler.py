"""Qt timer scheduler for the animation loop."""

from __future__ import annotations

import time
from typing import Callable

from PySide6.QtCore import QObject, QTimer


class QtScheduler:
    """Single-shot ``QTimer`` per queued frame, parented to a widget."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, callback: Callable[[], None]) -> QTimer:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        timer.timeout.connect(timer.deleteLater)
        timer.start(max(int(delay * 1000), 0))
        return timer

    def cancel(self, handle: QTimer) -> None:
        handle.stop()
        handle.deleteLater()
