"""Scheduler backed by the Qt event loop."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer


class QtScheduler:
    """Runs delayed callbacks on the UI thread with ``QTimer.singleShot``.

    Callbacks are bound to ``context`` so they are dropped if that object is
    destroyed before they fire.
    """

    def __init__(self, context: QObject) -> None:
        self._context = context

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        QTimer.singleShot(max(0, int(delay_seconds * 1000)), self._context, callback)
