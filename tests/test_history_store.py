from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from epsilora_quiz.core.payloads import HistoryRecord, QuizStats
from epsilora_quiz.core.services.history_store import HistoryStore


def _record(user_id="user-1", score=1, total=3) -> HistoryRecord:
    return HistoryRecord(
        user_id=user_id,
        course_id="course-1",
        score=score,
        total_questions=total,
        correct_answers=score,
        difficulty="Easy",
        time_spent=1000,
        time_per_question=30,
        date=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )


def test_add_assigns_identity():
    store = HistoryStore()
    first = store.add(_record())
    second = store.add(_record())
    assert first.id != second.id
    assert first.created_at.tzinfo is not None
    assert first.score == 1


def test_history_for_filters_by_user():
    store = HistoryStore()
    store.add(_record(score=1))
    store.add(_record(user_id="other"))
    store.add(_record(score=2))
    assert [entry.score for entry in store.history_for("user-1")] == [2, 1]


def test_stats_are_percentages():
    store = HistoryStore()
    store.add(_record(score=1, total=3))
    store.add(_record(score=3, total=3))
    stats = store.stats_for("user-1")
    assert stats.total_quizzes == 2
    assert stats.average_score == 66.7
    assert stats.latest_score == 100.0


def test_empty_stats_and_clear():
    store = HistoryStore()
    assert store.stats_for("user-1") == QuizStats()
    store.add(_record())
    store.clear()
    assert store.history_for("user-1") == []


def test_record_score_cannot_exceed_total():
    with pytest.raises(ValidationError):
        _record(score=4, total=3)
