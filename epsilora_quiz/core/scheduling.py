"""Scheduling seam between the quiz runtime and the event loop driving it."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class Scheduler(Protocol):
    """Runs a callback once, on the owning event loop, after a delay.

    The Qt application provides an implementation backed by
    ``QTimer.singleShot``; tests use a manually advanced clock. Callbacks are
    never cancelled: owners guard them with a generation counter instead.
    """

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        ...
