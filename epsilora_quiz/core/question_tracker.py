"""Per-question progress owned by the session controller."""

from __future__ import annotations

from dataclasses import dataclass

from epsilora_quiz.core.models import QuestionState


@dataclass(slots=True)
class _MutableQuestionState:
    user_answer: str | None
    time_expired: bool
    viewed: bool
    time_left_at_entry: int

    def freeze(self) -> QuestionState:
        return QuestionState(
            user_answer=self.user_answer,
            time_expired=self.time_expired,
            viewed=self.viewed,
            time_left_at_entry=self.time_left_at_entry,
        )


class QuestionStateTracker:
    """Records answers and expiry per question index.

    Only the session controller mutates the tracker. Readers always get
    :class:`QuestionState` snapshots, never the live records.
    """

    def __init__(self, question_count: int, seconds_per_question: int) -> None:
        self._states = [
            _MutableQuestionState(
                user_answer=None,
                time_expired=False,
                viewed=False,
                time_left_at_entry=seconds_per_question,
            )
            for _ in range(question_count)
        ]

    def __len__(self) -> int:
        return len(self._states)

    def record_answer(self, index: int, label: str, time_left: int) -> bool:
        """Store ``label`` for ``index``. Returns False once the question timed out."""
        state = self._state(index)
        if state.time_expired:
            return False
        state.user_answer = label
        state.viewed = True
        state.time_left_at_entry = time_left
        return True

    def mark_expired(self, index: int) -> None:
        state = self._state(index)
        state.time_expired = True
        state.viewed = True
        if state.user_answer is None:
            state.time_left_at_entry = 0

    def state_at(self, index: int) -> QuestionState:
        return self._state(index).freeze()

    def snapshot(self) -> tuple[QuestionState, ...]:
        return tuple(state.freeze() for state in self._states)

    def _state(self, index: int) -> _MutableQuestionState:
        if not 0 <= index < len(self._states):
            raise IndexError(f"Question index {index} out of range")
        return self._states[index]
