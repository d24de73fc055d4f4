import pytest

from conftest import make_question
from epsilora_quiz.core.models import Question, SessionConfig, SessionStatus
from epsilora_quiz.core.question_set import ValidationError
from epsilora_quiz.core.session_controller import QuizSessionController

EXPIRY_DELAY = 2.0
SETTLE = 0.5


class RecordingEmitter:
    def __init__(self):
        self.published = []

    def publish(self, result, context, config, time_spent_ms):
        self.published.append((result, context, config, time_spent_ms))


@pytest.fixture
def emitter():
    return RecordingEmitter()


@pytest.fixture
def controller(context, scheduler, emitter):
    return QuizSessionController(
        context,
        scheduler,
        emitter,
        clock=lambda: scheduler.now,
        expiry_display_delay=EXPIRY_DELAY,
        transition_settle=SETTLE,
    )


@pytest.fixture
def started(controller, three_questions, three_question_config):
    assert controller.start(three_questions, three_question_config)
    return controller


def test_start_enters_first_question(started, three_questions):
    assert started.status is SessionStatus.IN_PROGRESS
    assert started.current_index == 0
    assert started.current_question == three_questions[0]
    assert started.time_left == 30
    assert started.can_select_answer()
    assert not started.can_advance()
    assert not started.can_retreat()


def test_start_rejects_missing_option(controller, three_question_config):
    broken = (make_question(1), Question("Q2?", ("a", "b", "c"), "A"), make_question(3))
    with pytest.raises(ValidationError):
        controller.start(broken, three_question_config)
    assert controller.status is SessionStatus.NOT_STARTED
    assert controller.question_states() == ()


def test_start_rejects_count_mismatch(controller, three_questions):
    config = SessionConfig(question_count=5, difficulty_label="Easy", seconds_per_question=30)
    with pytest.raises(ValidationError):
        controller.start(three_questions, config)
    assert controller.status is SessionStatus.NOT_STARTED


def test_start_twice_is_ignored(started, three_questions, three_question_config):
    assert not started.start(three_questions, three_question_config)


def test_select_answer_records_time_left(started, scheduler):
    scheduler.advance(4)
    assert started.select_answer("B")
    state = started.current_state
    assert state.user_answer == "B"
    assert state.viewed
    assert state.time_left_at_entry == 26


def test_answer_can_change_while_running(started):
    started.select_answer("B")
    started.select_answer("A")
    assert started.current_state.user_answer == "A"


def test_unknown_label_raises(started):
    with pytest.raises(ValueError):
        started.select_answer("E")


def test_advance_requires_an_answer(started):
    assert not started.advance()
    assert started.current_index == 0


def test_actions_before_start_are_ignored(controller):
    assert not controller.select_answer("A")
    assert not controller.advance()
    assert not controller.retreat()
    assert not controller.finish()


def test_double_advance_moves_once(started):
    started.select_answer("A")
    assert started.advance()
    assert not started.advance()
    assert started.current_index == 1
    assert started.is_transition_in_flight()


def test_transition_latch_releases_after_settle(started, scheduler):
    started.select_answer("A")
    started.advance()
    assert not started.retreat()

    scheduler.advance(SETTLE)

    assert not started.is_transition_in_flight()
    assert started.retreat()
    assert started.current_index == 0


def test_answer_accepted_while_transition_settles(started, scheduler):
    started.select_answer("A")
    started.advance()
    scheduler.advance(0.2)

    assert started.is_transition_in_flight()
    assert started.can_select_answer()
    assert started.select_answer("C")
    state = started.current_state
    assert state.user_answer == "C"
    assert state.viewed
    assert state.time_left_at_entry == 30
    assert not started.retreat()


def test_unviewed_question_rearms_after_going_back(started, scheduler):
    started.select_answer("A")
    started.advance()
    scheduler.advance(10)
    assert started.time_left == 20

    assert started.retreat()
    scheduler.advance(SETTLE)
    assert started.advance()

    assert started.current_index == 1
    assert not started.current_state.viewed
    assert started.time_left == 30
    assert started.can_select_answer()



def test_back_then_forward_keeps_answers_and_timers(started, scheduler):
    scheduler.advance(5)
    started.select_answer("A")
    started.advance()
    scheduler.advance(SETTLE)
    started.select_answer("D")
    scheduler.advance(3)

    started.retreat()
    scheduler.advance(SETTLE)
    first = started.current_state
    assert first.user_answer == "A"
    assert first.time_left_at_entry == 25
    assert started.time_left == 0
    assert not started.can_select_answer()
    assert not started.select_answer("B")

    # Frozen questions never expire, however long they stay on screen
    scheduler.advance(120)
    assert not started.current_state.time_expired
    assert started.current_index == 0

    started.advance()
    scheduler.advance(SETTLE)
    assert started.current_index == 1
    assert started.current_state.user_answer == "D"
    assert started.time_left == 0
    assert not started.select_answer("A")


def test_expiry_locks_question_and_moves_on(started, scheduler):
    scheduler.advance(30)

    assert started.current_index == 0
    assert started.current_state.time_expired
    assert started.current_state.time_left_at_entry == 0
    assert started.is_showing_expiry()
    assert started.is_transition_in_flight()
    assert not started.select_answer("A")
    assert not started.advance()

    scheduler.advance(EXPIRY_DELAY)

    assert started.current_index == 1
    assert not started.is_showing_expiry()
    assert not started.is_transition_in_flight()
    assert started.time_left == 30


def test_expired_answer_never_changes(started, scheduler):
    scheduler.advance(30 + EXPIRY_DELAY)
    started.retreat()
    scheduler.advance(SETTLE)
    assert started.current_index == 0
    assert not started.select_answer("A")
    assert started.question_states()[0].user_answer is None


def test_expiry_keeps_given_answer(started, scheduler):
    scheduler.advance(10)
    started.select_answer("A")
    scheduler.advance(20 + EXPIRY_DELAY)

    state = started.question_states()[0]
    assert state.time_expired
    assert state.user_answer == "A"
    assert state.time_left_at_entry == 20
    assert started.current_index == 1


def test_scenario_correct_expired_wrong(started, scheduler, emitter):
    # Q1 answered correctly
    started.select_answer("A")
    assert started.advance()
    scheduler.advance(SETTLE)

    # Q2 left unanswered until it expires
    scheduler.advance(30)
    scheduler.advance(EXPIRY_DELAY)
    assert started.current_index == 2

    # Q3 answered wrong, then finished
    started.select_answer("A")
    assert started.finish()

    result = started.result
    assert started.status is SessionStatus.COMPLETED
    assert result.total_questions == 3
    assert result.score == 1
    assert [item.is_correct for item in result.per_question] == [True, False, False]
    assert result.per_question[1].user_answer is None
    assert result.per_question[2].user_answer == "A"
    assert len(emitter.published) == 1


def test_finish_on_last_question_completes_directly(started, scheduler):
    for label in ("A", "B"):
        started.select_answer(label)
        started.advance()
        scheduler.advance(SETTLE)
    assert started.is_last_question()
    assert not started.finish()

    started.select_answer("C")
    assert started.can_finish()
    assert started.finish()
    assert started.status is SessionStatus.COMPLETED
    assert started.result.score == 3
    assert started.current_index == 3


def test_finish_before_last_question_is_ignored(started):
    started.select_answer("A")
    assert not started.finish()
    assert started.current_index == 0


def test_score_never_exceeds_total(started, scheduler):
    for label in ("A", "A", "A"):
        started.select_answer(label)
        started.advance()
        scheduler.advance(SETTLE)
    result = started.result
    assert result.score <= result.total_questions
    assert result.score == sum(1 for item in result.per_question if item.is_correct)


def test_expiry_on_last_question_completes(started, scheduler, emitter):
    scheduler.advance(3 * (30 + EXPIRY_DELAY))
    assert started.status is SessionStatus.COMPLETED
    assert started.result.score == 0
    assert started.result.total_questions == 3
    assert len(emitter.published) == 1


def test_completion_reports_time_spent(started, scheduler, emitter):
    scheduler.advance(7)
    for label in ("A", "B", "C"):
        started.select_answer(label)
        started.advance()
        scheduler.advance(SETTLE)
    assert started.time_spent_ms == 8000
    _, context, config, time_spent_ms = emitter.published[0]
    assert context.course_id == "course-1"
    assert config.seconds_per_question == 30
    assert time_spent_ms == 8000


def test_completion_listener_receives_result(started, scheduler):
    received = []
    started.add_completion_listener(received.append)
    for label in ("A", "B", "C"):
        started.select_answer(label)
        started.advance()
        scheduler.advance(SETTLE)
    assert received == [started.result]


def test_listeners_are_notified(started, scheduler):
    calls = []
    started.add_listener(lambda: calls.append(started.time_left))
    scheduler.advance(2)
    assert calls == [29, 28]


def test_dispose_drops_pending_callbacks(started, scheduler, emitter):
    scheduler.advance(30)
    started.dispose()
    scheduler.advance(60)

    assert started.current_index == 0
    assert started.status is SessionStatus.IN_PROGRESS
    assert not started.advance()
    assert not started.select_answer("A")
    assert emitter.published == []


def test_reset_returns_to_not_started(started, scheduler, three_questions, three_question_config):
    started.select_answer("A")
    started.reset()
    assert started.status is SessionStatus.NOT_STARTED
    assert started.result is None
    scheduler.advance(60)
    assert started.status is SessionStatus.NOT_STARTED

    assert started.start(three_questions, three_question_config)
    assert started.current_state.user_answer is None
