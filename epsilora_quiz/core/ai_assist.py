"""Hand-off of completed quizzes to the AI tutor view."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError as PayloadValidationError

from epsilora_quiz.core.payloads import AssistPayload

logger = logging.getLogger(__name__)

DEFAULT_HANDOFF_PATH = Path.home() / ".epsilora_quiz" / "last_quiz.json"

_RESULT_MESSAGES = (
    (90, "Excellent! You've mastered this topic!"),
    (80, "Great job! You have a strong understanding!"),
    (70, "Good work! Keep practicing to improve further."),
    (60, "Not bad! A bit more study will help."),
)
_FALLBACK_MESSAGE = "You might want to review this topic and try again."


class QuizContext:
    """In-memory holder of the latest completed quiz shared between views."""

    def __init__(self) -> None:
        self._payload: AssistPayload | None = None

    def get(self) -> AssistPayload | None:
        return self._payload

    def set(self, payload: AssistPayload | None) -> None:
        self._payload = payload

    def clear(self) -> None:
        self._payload = None


class AssistHandoffStore:
    """Durable copy of the latest completed quiz, kept as a JSON file."""

    def __init__(self, path: Path = DEFAULT_HANDOFF_PATH) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def save(self, payload: AssistPayload) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            payload.model_dump_json(by_alias=True, indent=2),
            encoding="utf-8",
        )

    def load(self) -> AssistPayload | None:
        """Return the stored quiz, or None when nothing usable is on disk."""
        if not self._path.exists():
            return None
        try:
            return AssistPayload.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, PayloadValidationError) as exc:
            logger.warning("Ignoring unreadable quiz hand-off at %s: %s", self._path, exc)
            return None

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


def result_message(score: int, total: int) -> str:
    percentage = (score / total) * 100 if total else 0.0
    for threshold, message in _RESULT_MESSAGES:
        if percentage >= threshold:
            return message
    return _FALLBACK_MESSAGE


def build_review_markdown(payload: AssistPayload) -> str:
    """Render the conversation seed the AI tutor opens with.

    Incorrect and unanswered items list "Your Answer" next to "Correct Answer"
    so the tutor can refer to both.
    """
    lines = [
        "# Quiz Review",
        "",
        f"## Course: {payload.course_name or 'Unknown Course'}",
        "",
        f"**Difficulty:** {payload.difficulty}  ",
        f"**Score:** {payload.score}/{payload.total_questions}",
        "",
        "## Questions",
        "",
    ]
    for number, item in enumerate(payload.questions, start=1):
        mark = "✅" if item.is_correct else "❌"
        lines += [f"### Question {number} {mark}", "", f"**{item.question}**", "", "**Options:**", ""]
        for option in item.options:
            prefix = ""
            if option.label == item.correct_answer:
                prefix = "✅ "
            elif option.label == item.user_answer:
                prefix = "❌ "
            lines += [f"{prefix}{option.label}. {option.text}", ""]
        if not item.is_correct:
            lines += [
                f"**Your Answer:** {item.user_answer or 'Not answered'}",
                "",
                f"**Correct Answer:** {item.correct_answer}",
                "",
            ]
        lines += ["---", ""]

    lines += [
        "How can I help you understand these questions better? Feel free to ask about:",
        "",
        "- Specific questions you'd like explained",
        "- Concepts you want to review",
        "- Similar practice questions",
        "- Study strategies for improvement",
    ]
    return "\n".join(lines)
