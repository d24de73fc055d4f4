"""State machine running one quiz session: navigation, countdown, scoring.

States move ``NOT_STARTED -> IN_PROGRESS -> COMPLETED``. While in progress a
cursor points at the current question. Every question gets its own countdown;
when it runs out the question is marked expired, the correct answer stays on
screen for a short delay and the session moves on by itself.

User transitions (advance, retreat, finish) and timer expiry share a single
in-flight latch; answering is not a transition and never waits on it. Whichever
trigger arrives first wins; duplicates arriving while the latch is held are
dropped, never queued. Events that arrive in a state that cannot accept them
(typically stale UI callbacks) are ignored and the method returns ``False``.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable, Iterable

from epsilora_quiz.constants.quiz_constants import (
    EXPIRY_DISPLAY_DELAY_SECONDS,
    OPTION_LABELS,
    TRANSITION_SETTLE_SECONDS,
)
from epsilora_quiz.core.countdown_timer import CountdownTimer
from epsilora_quiz.core.models import (
    Question,
    QuestionState,
    SessionConfig,
    SessionContext,
    SessionResult,
    SessionStatus,
)
from epsilora_quiz.core.question_set import ValidationError, validate_question_set
from epsilora_quiz.core.question_tracker import QuestionStateTracker
from epsilora_quiz.core.result_emitter import ResultEmitter, build_session_result
from epsilora_quiz.core.scheduling import Scheduler

logger = logging.getLogger(__name__)


class InvalidTransitionError(RuntimeError):
    """An event arrived in a state that cannot accept it."""


def _ignore_invalid_transitions(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except InvalidTransitionError as exc:
            logger.debug("Ignored %s: %s", method.__name__, exc)
            return False

    return wrapper


class QuizSessionController:
    """Owns the question states, the countdown and the cursor of a session."""

    def __init__(
        self,
        context: SessionContext,
        scheduler: Scheduler,
        emitter: ResultEmitter | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        expiry_display_delay: float = EXPIRY_DISPLAY_DELAY_SECONDS,
        transition_settle: float = TRANSITION_SETTLE_SECONDS,
    ) -> None:
        self._context = context
        self._scheduler = scheduler
        self._emitter = emitter
        self._clock = clock
        self._expiry_display_delay = expiry_display_delay
        self._transition_settle = transition_settle
        self._listeners: list[Callable[[], None]] = []
        self._completion_listeners: list[Callable[[SessionResult], None]] = []
        # Bumped by dispose(); callbacks scheduled before that become no-ops.
        self._generation: int = 0
        self._clear_session()

    def _clear_session(self) -> None:
        self._status = SessionStatus.NOT_STARTED
        self._questions: tuple[Question, ...] = ()
        self._config: SessionConfig | None = None
        self._tracker: QuestionStateTracker | None = None
        self._timer: CountdownTimer | None = None
        self._current_index: int = 0
        self._in_flight: bool = False
        self._latch_token: int = 0
        self._expired_index: int | None = None
        self._disposed: bool = False
        self._started_at: float | None = None
        self._time_spent_ms: int = 0
        self._result: SessionResult | None = None

    # --- Listeners ---

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` after every state change."""
        self._listeners.append(callback)

    def add_completion_listener(self, callback: Callable[[SessionResult], None]) -> None:
        self._completion_listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # --- Read access ---

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def config(self) -> SessionConfig | None:
        return self._config

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> Question | None:
        if self._status is not SessionStatus.IN_PROGRESS:
            return None
        return self._questions[self._current_index]

    @property
    def current_state(self) -> QuestionState | None:
        if self._status is not SessionStatus.IN_PROGRESS or self._tracker is None:
            return None
        return self._tracker.state_at(self._current_index)

    def question_states(self) -> tuple[QuestionState, ...]:
        if self._tracker is None:
            return ()
        return self._tracker.snapshot()

    @property
    def time_left(self) -> int:
        """Seconds shown for the current question; frozen questions show zero."""
        if self._timer is None or not self._timer.is_active():
            return 0
        return self._timer.remaining_seconds

    @property
    def result(self) -> SessionResult | None:
        return self._result

    @property
    def time_spent_ms(self) -> int:
        return self._time_spent_ms

    def is_last_question(self) -> bool:
        return self._status is SessionStatus.IN_PROGRESS and self._current_index == len(self._questions) - 1

    def is_transition_in_flight(self) -> bool:
        return self._in_flight

    def is_showing_expiry(self) -> bool:
        """True during the pause between a timeout and the automatic move on."""
        return self._expired_index is not None

    def can_select_answer(self) -> bool:
        return self._check(self._check_can_select)

    def can_advance(self) -> bool:
        return self._check(self._check_can_advance)

    def can_retreat(self) -> bool:
        return self._check(self._check_can_retreat)

    def can_finish(self) -> bool:
        return self.is_last_question() and self.can_advance()

    # --- Transitions ---

    def start(self, questions: Iterable[Question], config: SessionConfig) -> bool:
        """Validate ``questions`` and begin the session.

        Raises ``ValidationError`` for a malformed set; the session then stays
        ``NOT_STARTED``.
        """
        if self._status is not SessionStatus.NOT_STARTED:
            logger.debug("Ignored start: session is %s", self._status.name)
            return False

        accepted = validate_question_set(questions)
        if config.question_count != len(accepted):
            raise ValidationError(
                f"Expected {config.question_count} questions, received {len(accepted)}."
            )
        if config.seconds_per_question < 1:
            raise ValidationError("Each question needs at least one second.")

        self._questions = accepted
        self._config = config
        self._tracker = QuestionStateTracker(len(accepted), config.seconds_per_question)
        self._timer = CountdownTimer(
            self._scheduler,
            config.seconds_per_question,
            on_expired=self._handle_timer_expired,
            on_tick=self._handle_timer_tick,
        )
        self._current_index = 0
        self._started_at = self._clock()
        self._status = SessionStatus.IN_PROGRESS
        self._timer.start()
        logger.info(
            "Started quiz for course %s: %s questions, %s, %ss per question",
            self._context.course_id,
            config.question_count,
            config.difficulty_label,
            config.seconds_per_question,
        )
        self._notify()
        return True

    @_ignore_invalid_transitions
    def select_answer(self, label: str) -> bool:
        if label not in OPTION_LABELS:
            raise ValueError(f"Unknown answer label {label!r}.")
        self._check_can_select()
        recorded = self._tracker.record_answer(
            self._current_index, label, self._timer.remaining_seconds
        )
        if not recorded:
            raise InvalidTransitionError("question is locked after its time expired")
        self._notify()
        return True

    @_ignore_invalid_transitions
    def advance(self) -> bool:
        self._check_can_advance()
        self._acquire_latch(release_after=self._transition_settle)
        self._timer.stop()
        if self._current_index == len(self._questions) - 1:
            self._complete()
        else:
            self._enter_question(self._current_index + 1)
        self._notify()
        return True

    @_ignore_invalid_transitions
    def finish(self) -> bool:
        if not self.is_last_question():
            raise InvalidTransitionError("finish is only available on the last question")
        return self.advance()

    @_ignore_invalid_transitions
    def retreat(self) -> bool:
        self._check_can_retreat()
        self._acquire_latch(release_after=self._transition_settle)
        self._timer.stop()
        self._current_index -= 1
        self._notify()
        return True

    def dispose(self) -> None:
        """Stop the countdown and drop every pending callback of this session."""
        self._generation += 1
        if self._timer is not None:
            self._timer.stop()
        self._in_flight = False
        self._expired_index = None
        if self._status is SessionStatus.IN_PROGRESS:
            self._disposed = True
            logger.info("Quiz for course %s abandoned", self._context.course_id)

    def reset(self) -> None:
        self.dispose()
        self._clear_session()
        self._notify()

    # --- Internals ---

    def _enter_question(self, index: int) -> None:
        self._current_index = index
        if not self._tracker.state_at(index).viewed:
            self._timer.start()

    def _complete(self) -> None:
        self._timer.stop()
        self._status = SessionStatus.COMPLETED
        self._current_index = len(self._questions)
        elapsed = self._clock() - self._started_at
        self._time_spent_ms = int(elapsed * 1000)
        self._result = build_session_result(self._questions, self._tracker.snapshot())
        logger.info(
            "Completed quiz for course %s: %s/%s",
            self._context.course_id,
            self._result.score,
            self._result.total_questions,
        )
        if self._emitter is not None:
            self._emitter.publish(self._result, self._context, self._config, self._time_spent_ms)
        for callback in list(self._completion_listeners):
            callback(self._result)

    def _handle_timer_tick(self, _remaining: int) -> None:
        self._notify()

    def _handle_timer_expired(self) -> None:
        if self._status is not SessionStatus.IN_PROGRESS or self._disposed:
            return
        index = self._current_index
        self._tracker.mark_expired(index)
        self._expired_index = index
        token = self._acquire_latch()
        generation = self._generation
        logger.debug("Question %s timed out", index + 1)
        self._scheduler.call_later(
            self._expiry_display_delay,
            lambda: self._finish_expiry(generation, token, index),
        )
        self._notify()

    def _finish_expiry(self, generation: int, token: int, index: int) -> None:
        if generation != self._generation or self._status is not SessionStatus.IN_PROGRESS:
            return
        self._expired_index = None
        self._release_latch(token)
        if index == len(self._questions) - 1:
            self._complete()
        else:
            self._enter_question(index + 1)
        self._notify()

    def _acquire_latch(self, release_after: float | None = None) -> int:
        self._in_flight = True
        self._latch_token += 1
        token = self._latch_token
        if release_after is not None:
            generation = self._generation
            self._scheduler.call_later(
                release_after, lambda: self._release_latch(token, generation)
            )
        return token

    def _release_latch(self, token: int, generation: int | None = None) -> None:
        if generation is not None and generation != self._generation:
            return
        if token != self._latch_token or not self._in_flight:
            return
        self._in_flight = False
        self._notify()

    def _check(self, guard: Callable[[], None]) -> bool:
        try:
            guard()
        except InvalidTransitionError:
            return False
        return True

    def _require_active(self) -> None:
        if self._status is not SessionStatus.IN_PROGRESS:
            raise InvalidTransitionError(f"session is {self._status.name}")
        if self._disposed:
            raise InvalidTransitionError("session was disposed")

    def _require_idle(self) -> None:
        if self._in_flight:
            raise InvalidTransitionError("a transition is already in flight")

    def _check_can_select(self) -> None:
        # Answering is not a transition, so the in-flight latch does not apply
        self._require_active()
        if self._tracker.state_at(self._current_index).time_expired:
            raise InvalidTransitionError("question is locked after its time expired")
        if not self._timer.is_active() or self._timer.has_fired():
            raise InvalidTransitionError("question is no longer running")

    def _check_can_advance(self) -> None:
        self._require_active()
        self._require_idle()
        if not self._tracker.state_at(self._current_index).viewed:
            raise InvalidTransitionError("current question has no answer yet")

    def _check_can_retreat(self) -> None:
        self._require_active()
        self._require_idle()
        if self._current_index == 0:
            raise InvalidTransitionError("already at the first question")
