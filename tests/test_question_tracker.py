import pytest

from epsilora_quiz.core.question_tracker import QuestionStateTracker


def test_initial_states():
    tracker = QuestionStateTracker(2, seconds_per_question=30)
    assert len(tracker) == 2
    state = tracker.state_at(0)
    assert state.user_answer is None
    assert not state.time_expired
    assert not state.viewed
    assert state.time_left_at_entry == 30


def test_record_answer_marks_viewed_and_keeps_time_left():
    tracker = QuestionStateTracker(2, seconds_per_question=30)
    assert tracker.record_answer(0, "B", time_left=21)
    state = tracker.state_at(0)
    assert state.user_answer == "B"
    assert state.viewed
    assert state.time_left_at_entry == 21


def test_expired_question_rejects_answers():
    tracker = QuestionStateTracker(1, seconds_per_question=30)
    tracker.mark_expired(0)
    assert not tracker.record_answer(0, "A", time_left=0)
    state = tracker.state_at(0)
    assert state.user_answer is None
    assert state.time_expired
    assert state.viewed
    assert state.time_left_at_entry == 0


def test_expiry_keeps_existing_answer():
    tracker = QuestionStateTracker(1, seconds_per_question=30)
    tracker.record_answer(0, "C", time_left=12)
    tracker.mark_expired(0)
    state = tracker.state_at(0)
    assert state.user_answer == "C"
    assert state.time_left_at_entry == 12


def test_snapshot_is_detached():
    tracker = QuestionStateTracker(2, seconds_per_question=30)
    before = tracker.snapshot()
    tracker.record_answer(1, "D", time_left=3)
    assert before[1].user_answer is None
    assert tracker.snapshot()[1].user_answer == "D"


def test_out_of_range_index():
    tracker = QuestionStateTracker(1, seconds_per_question=30)
    with pytest.raises(IndexError):
        tracker.state_at(1)
    with pytest.raises(IndexError):
        tracker.record_answer(-1, "A", time_left=1)
