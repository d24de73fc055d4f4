"""Per-question countdown driven one second at a time by a scheduler."""

from __future__ import annotations

from collections.abc import Callable

from epsilora_quiz.core.scheduling import Scheduler

_TICK_SECONDS = 1.0


class CountdownTimer:
    """Counts down from ``duration_seconds`` and reports expiry exactly once per arm."""

    def __init__(
        self,
        scheduler: Scheduler,
        duration_seconds: int,
        on_expired: Callable[[], None],
        on_tick: Callable[[int], None] | None = None,
    ) -> None:
        if duration_seconds < 1:
            raise ValueError("Countdown duration must be at least one second.")
        self._scheduler = scheduler
        self._duration = duration_seconds
        self._on_expired = on_expired
        self._on_tick = on_tick
        self._remaining: int = duration_seconds
        self._active: bool = False
        self._fired: bool = False
        self._generation: int = 0

    @property
    def duration_seconds(self) -> int:
        return self._duration

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    def is_active(self) -> bool:
        return self._active

    def has_fired(self) -> bool:
        """True once the current arm ran down to zero."""
        return self._fired

    def start(self) -> None:
        """Arm the full duration, discarding any tick pending from a previous arm."""
        self._generation += 1
        self._remaining = self._duration
        self._active = True
        self._fired = False
        self._schedule_tick()

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        self._generation += 1

    def _schedule_tick(self) -> None:
        generation = self._generation
        self._scheduler.call_later(_TICK_SECONDS, lambda: self._tick(generation))

    def _tick(self, generation: int) -> None:
        if generation != self._generation or not self._active:
            return
        self._remaining = max(0, self._remaining - 1)
        if self._on_tick is not None:
            self._on_tick(self._remaining)
        if self._remaining > 0:
            self._schedule_tick()
            return
        self._active = False
        self._fired = True
        self._on_expired()
