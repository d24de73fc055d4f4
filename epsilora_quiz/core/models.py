"""Domain models for the quiz session runtime."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class SessionStatus(Enum):
    """Lifecycle of a single quiz session."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    COMPLETED = auto()


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question with exactly four options labelled A-D."""

    text: str
    options: tuple[str, ...]
    correct_answer_label: str


@dataclass(frozen=True, slots=True)
class QuestionState:
    """Read-only snapshot of the progress recorded for one question."""

    user_answer: str | None = None
    time_expired: bool = False
    viewed: bool = False
    time_left_at_entry: int = 0


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Parameters chosen by the caller when a session starts."""

    question_count: int
    difficulty_label: str
    seconds_per_question: int


@dataclass(frozen=True, slots=True)
class SessionContext:
    """Identity of the learner and course a session belongs to."""

    course_id: str
    course_name: str = ""
    user_id: str | None = None
    auth_token: str | None = None


@dataclass(frozen=True, slots=True)
class QuestionResult:
    """Outcome of a single question once the session is completed."""

    question: str
    options: tuple[str, ...]
    correct_answer_label: str
    user_answer: str | None
    is_correct: bool


@dataclass(frozen=True, slots=True)
class SessionResult:
    """Final score and per-question breakdown of a completed session."""

    score: int
    total_questions: int
    per_question: tuple[QuestionResult, ...]

    @property
    def percentage(self) -> float:
        if not self.total_questions:
            return 0.0
        return (self.score / self.total_questions) * 100
