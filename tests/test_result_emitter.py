from datetime import datetime, timezone

import pytest

from conftest import make_question
from epsilora_quiz.core.ai_assist import AssistHandoffStore, QuizContext
from epsilora_quiz.core.models import QuestionState, SessionContext
from epsilora_quiz.core.result_emitter import (
    ResultEmitter,
    build_assist_payload,
    build_history_record,
    build_session_result,
)
from epsilora_quiz.core.services.history_client import TransientPersistenceError

COMPLETED_AT = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)


class FakeHistoryClient:
    def __init__(self, error=None):
        self.saved = []
        self._error = error

    def save_result(self, record, auth_token=None):
        if self._error is not None:
            raise self._error
        self.saved.append((record, auth_token))


@pytest.fixture
def result(three_questions):
    states = (
        QuestionState(user_answer="A", viewed=True, time_left_at_entry=20),
        QuestionState(time_expired=True, viewed=True),
        QuestionState(user_answer="D", viewed=True, time_left_at_entry=5),
    )
    return build_session_result(three_questions, states)


def _emitter(tmp_path, client, errors=None, quiz_context=None):
    return ResultEmitter(
        history_client=client,
        handoff_store=AssistHandoffStore(tmp_path / "handoff" / "last_quiz.json"),
        quiz_context=quiz_context or QuizContext(),
        dispatch=lambda task: task(),
        on_persistence_error=errors.append if errors is not None else None,
        now=lambda: COMPLETED_AT,
    )


def test_build_session_result_counts_correct_answers(result):
    assert result.score == 1
    assert result.total_questions == 3
    assert result.per_question[1].user_answer is None
    assert not result.per_question[1].is_correct
    assert result.percentage == pytest.approx(100 / 3)


def test_build_session_result_requires_matching_states():
    with pytest.raises(ValueError):
        build_session_result((make_question(1),), ())


def test_history_record_shape(result, context, three_question_config):
    record = build_history_record(result, context, three_question_config, 45000, COMPLETED_AT)
    body = record.model_dump(mode="json", by_alias=True)
    assert body["userId"] == "user-1"
    assert body["courseId"] == "course-1"
    assert body["courseName"] == "Algebra"
    assert body["score"] == 1
    assert body["totalQuestions"] == 3
    assert body["correctAnswers"] == 1
    assert body["difficulty"] == "Medium"
    assert body["timeSpent"] == 45000
    assert body["timePerQuestion"] == 30
    assert body["questions"][1] == {"question": "Question 2?", "answer": None, "correct": False}


def test_assist_payload_shape(result, context, three_question_config):
    payload = build_assist_payload(result, context, three_question_config, COMPLETED_AT)
    body = payload.model_dump(mode="json", by_alias=True)
    assert body["courseName"] == "Algebra"
    assert body["totalQuestions"] == 3
    first = body["questions"][0]
    assert first["options"][1] == {"text": "Option 1B", "label": "B"}
    assert first["correctAnswer"] == "A"
    assert first["userAnswer"] == "A"
    assert first["isCorrect"] is True


def test_publish_saves_history_and_hands_off(tmp_path, result, context, three_question_config):
    client = FakeHistoryClient()
    quiz_context = QuizContext()
    emitter = _emitter(tmp_path, client, quiz_context=quiz_context)

    payload = emitter.publish(result, context, three_question_config, 45000)

    assert len(client.saved) == 1
    record, token = client.saved[0]
    assert token == "token"
    assert record.score == 1
    assert quiz_context.get() == payload
    assert AssistHandoffStore(tmp_path / "handoff" / "last_quiz.json").load() == payload


def test_publish_without_user_skips_history(tmp_path, result, three_question_config):
    client = FakeHistoryClient()
    emitter = _emitter(tmp_path, client)
    anonymous = SessionContext(course_id="course-1", course_name="Algebra")

    payload = emitter.publish(result, anonymous, three_question_config, 1000)

    assert client.saved == []
    assert payload.score == 1


def test_persistence_failure_is_reported(tmp_path, result, context, three_question_config):
    errors = []
    failure = TransientPersistenceError("POST /api/quiz/save-result failed")
    emitter = _emitter(tmp_path, FakeHistoryClient(error=failure), errors)

    payload = emitter.publish(result, context, three_question_config, 1000)

    assert errors == [failure]
    assert payload.total_questions == 3


def test_publish_without_history_client(tmp_path, result, context, three_question_config):
    emitter = _emitter(tmp_path, None)
    payload = emitter.publish(result, context, three_question_config, 1000)
    assert payload.timestamp == COMPLETED_AT
