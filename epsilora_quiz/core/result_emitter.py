"""Assembles the final result of a session and hands it to its consumers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from threading import Thread

from epsilora_quiz.constants.quiz_constants import OPTION_LABELS
from epsilora_quiz.core.ai_assist import AssistHandoffStore, QuizContext
from epsilora_quiz.core.models import (
    Question,
    QuestionResult,
    QuestionState,
    SessionConfig,
    SessionContext,
    SessionResult,
)
from epsilora_quiz.core.payloads import (
    AssistOption,
    AssistPayload,
    AssistQuestion,
    HistoryQuestion,
    HistoryRecord,
)
from epsilora_quiz.core.services.history_client import HistoryClient, TransientPersistenceError

logger = logging.getLogger(__name__)


def build_session_result(
    questions: Sequence[Question], states: Sequence[QuestionState]
) -> SessionResult:
    """Zip questions with their states; unanswered questions count as incorrect."""
    if len(questions) != len(states):
        raise ValueError("Every question needs exactly one state.")
    per_question = tuple(
        QuestionResult(
            question=question.text,
            options=question.options,
            correct_answer_label=question.correct_answer_label,
            user_answer=state.user_answer,
            is_correct=state.user_answer == question.correct_answer_label,
        )
        for question, state in zip(questions, states)
    )
    score = sum(1 for item in per_question if item.is_correct)
    return SessionResult(score=score, total_questions=len(per_question), per_question=per_question)


def build_history_record(
    result: SessionResult,
    context: SessionContext,
    config: SessionConfig,
    time_spent_ms: int,
    completed_at: datetime,
) -> HistoryRecord:
    return HistoryRecord(
        user_id=context.user_id,
        course_id=context.course_id,
        course_name=context.course_name,
        score=result.score,
        total_questions=result.total_questions,
        correct_answers=result.score,
        difficulty=config.difficulty_label,
        time_spent=max(0, time_spent_ms),
        time_per_question=config.seconds_per_question,
        date=completed_at,
        questions=[
            HistoryQuestion(question=item.question, answer=item.user_answer, correct=item.is_correct)
            for item in result.per_question
        ],
    )


def build_assist_payload(
    result: SessionResult,
    context: SessionContext,
    config: SessionConfig,
    completed_at: datetime,
) -> AssistPayload:
    return AssistPayload(
        course_name=context.course_name,
        difficulty=config.difficulty_label,
        score=result.score,
        total_questions=result.total_questions,
        timestamp=completed_at,
        questions=[
            AssistQuestion(
                question=item.question,
                options=[
                    AssistOption(text=text, label=label)
                    for label, text in zip(OPTION_LABELS, item.options)
                ],
                correct_answer=item.correct_answer_label,
                user_answer=item.user_answer,
                is_correct=item.is_correct,
            )
            for item in result.per_question
        ],
    )


def _run_in_background(task: Callable[[], None]) -> None:
    Thread(target=task, name="QuizResultPersistence", daemon=True).start()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResultEmitter:
    """Publishes a completed session to history, the AI tutor and shared context.

    History persistence is fire-and-forget: it runs through ``dispatch`` (a
    daemon thread by default) and failures only reach ``on_persistence_error``.
    The in-memory result stays the source of truth either way.
    """

    def __init__(
        self,
        history_client: HistoryClient | None = None,
        handoff_store: AssistHandoffStore | None = None,
        quiz_context: QuizContext | None = None,
        *,
        dispatch: Callable[[Callable[[], None]], None] = _run_in_background,
        on_persistence_error: Callable[[TransientPersistenceError], None] | None = None,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._history_client = history_client
        self._handoff_store = handoff_store
        self._quiz_context = quiz_context
        self._dispatch = dispatch
        self._on_persistence_error = on_persistence_error
        self._now = now

    def publish(
        self,
        result: SessionResult,
        context: SessionContext,
        config: SessionConfig,
        time_spent_ms: int,
    ) -> AssistPayload:
        completed_at = self._now()
        payload = build_assist_payload(result, context, config, completed_at)
        self.hand_off(payload)

        if self._history_client is None:
            return payload
        if not context.user_id:
            logger.warning("No user id for course %s; quiz result not saved to history.", context.course_id)
            return payload

        record = build_history_record(result, context, config, time_spent_ms, completed_at)
        self._dispatch(lambda: self._persist(record, context.auth_token))
        return payload

    def hand_off(self, payload: AssistPayload) -> None:
        """Make ``payload`` available to the AI tutor, in memory and on disk."""
        if self._quiz_context is not None:
            self._quiz_context.set(payload)
        if self._handoff_store is None:
            return
        try:
            self._handoff_store.save(payload)
        except OSError:
            logger.exception("Failed to write quiz hand-off to %s", self._handoff_store.path)

    def _persist(self, record: HistoryRecord, auth_token: str | None) -> None:
        try:
            self._history_client.save_result(record, auth_token=auth_token)
        except TransientPersistenceError as exc:
            logger.warning("Failed to save quiz result for course %s: %s", record.course_id, exc)
            if self._on_persistence_error is not None:
                self._on_persistence_error(exc)
            return
        logger.info(
            "Saved quiz result for course %s: %s/%s",
            record.course_id,
            record.score,
            record.total_questions,
        )
