from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable

import pytest

from epsilora_quiz.core.models import Question, SessionConfig, SessionContext


class ManualScheduler:
    """Scheduler whose clock only moves when a test calls :meth:`advance`."""

    def __init__(self) -> None:
        self.now: float = 0.0
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._sequence = itertools.count()

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self.now + delay_seconds, next(self._sequence), callback))

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            callback()
        self.now = target

    def pending(self) -> int:
        return len(self._queue)


def make_question(number: int, correct: str = "A") -> Question:
    return Question(
        text=f"Question {number}?",
        options=(f"Option {number}A", f"Option {number}B", f"Option {number}C", f"Option {number}D"),
        correct_answer_label=correct,
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def context() -> SessionContext:
    return SessionContext(course_id="course-1", course_name="Algebra", user_id="user-1", auth_token="token")


@pytest.fixture
def three_questions() -> tuple[Question, ...]:
    return (make_question(1, "A"), make_question(2, "B"), make_question(3, "C"))


@pytest.fixture
def three_question_config() -> SessionConfig:
    return SessionConfig(question_count=3, difficulty_label="Medium", seconds_per_question=30)
