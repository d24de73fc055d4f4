"""Wire shapes exchanged with the history service and the AI-assist view.

All payloads travel as camelCase JSON; Python code uses the snake_case field
names. Dump with ``model_dump(mode="json", by_alias=True)``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HistoryQuestion(CamelModel):
    """Per-question correctness stored with a quiz attempt."""

    question: str
    answer: str | None = None
    correct: bool


class HistoryRecord(CamelModel):
    """Quiz attempt posted to the history service after completion."""

    user_id: str | None = None
    course_id: str
    course_name: str = ""
    score: int = Field(ge=0)
    total_questions: int = Field(ge=1)
    correct_answers: int = Field(ge=0)
    difficulty: str
    time_spent: int = Field(ge=0, description="Milliseconds from start to completion.")
    time_per_question: int = Field(ge=1)
    date: datetime
    questions: list[HistoryQuestion] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_counts(self) -> HistoryRecord:
        if self.score > self.total_questions or self.correct_answers > self.total_questions:
            raise ValueError("score and correct answers cannot exceed the number of questions")
        return self


class HistoryEntry(HistoryRecord):
    """Stored quiz attempt as returned by the history service."""

    id: str
    created_at: datetime


class QuizStats(CamelModel):
    """Aggregate statistics over a learner's quiz attempts."""

    total_quizzes: int = 0
    average_score: float = 0.0
    latest_score: float = 0.0


class HistoryResponse(CamelModel):
    """Response body of the quiz-history endpoint."""

    history: list[HistoryEntry] = Field(default_factory=list)
    stats: QuizStats = Field(default_factory=QuizStats)
    total_quizzes: int = 0


class AssistOption(CamelModel):
    text: str
    label: str


class AssistQuestion(CamelModel):
    """One reviewed question in the AI-assist conversation seed."""

    question: str
    options: list[AssistOption]
    correct_answer: str
    user_answer: str | None = None
    is_correct: bool


class AssistPayload(CamelModel):
    """Completed quiz handed to the AI tutor so it can discuss each answer."""

    course_name: str
    difficulty: str
    score: int
    total_questions: int
    timestamp: datetime
    questions: list[AssistQuestion]


class GenerateQuizRequest(CamelModel):
    """Request body for the AI question generator."""

    course_id: str
    number_of_questions: int = Field(ge=1)
    difficulty: str
    time_per_question: int = Field(ge=1)
