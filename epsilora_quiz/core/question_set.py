"""Acceptance gate for question sets produced outside the runtime.

Questions reach a session from two places: the AI generator, which answers with
free text that should contain a JSON array, and plain-text question banks (see
``quiz_importer``). Both paths end in :func:`validate_question_set`, which
rejects the whole set on the first structural problem. Nothing here tries to
repair an individual question; a bad set means the caller asks for a new one.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from typing import Any

from epsilora_quiz.constants.quiz_constants import OPTION_LABELS
from epsilora_quiz.core.models import Question

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


class ValidationError(ValueError):
    """Raised when a question set is malformed and cannot start a session."""


def validate_question_set(questions: Iterable[Question]) -> tuple[Question, ...]:
    """Return the questions as an immutable tuple or raise ``ValidationError``."""
    accepted = tuple(questions)
    if not accepted:
        raise ValidationError("Question set is empty.")
    for index, question in enumerate(accepted):
        _validate_question(index, question)
    return accepted


def parse_generated_questions(raw: str | list[Any]) -> tuple[Question, ...]:
    """Turn a generator response into a validated question set.

    ``raw`` is either the response text or an already-decoded JSON array of
    ``{"question", "options", "correctAnswer"}`` objects.
    """
    payload = _decode_json_array(raw) if isinstance(raw, str) else raw
    if not isinstance(payload, list):
        raise ValidationError("Invalid quiz format: expected an array of questions.")
    if not payload:
        raise ValidationError("No questions were generated.")
    return validate_question_set(
        question_from_mapping(entry, index) for index, entry in enumerate(payload)
    )


def question_from_mapping(entry: Any, index: int = 0) -> Question:
    """Build a :class:`Question` from one decoded generator entry."""
    if not isinstance(entry, Mapping):
        raise ValidationError(f"Question {index + 1} is not an object.")

    text = entry.get("question")
    options = entry.get("options")
    correct = entry.get("correctAnswer")
    if not isinstance(text, str) or not isinstance(options, list) or not isinstance(correct, str):
        raise ValidationError(f"Invalid question format at index {index}.")
    if not all(isinstance(option, str) for option in options):
        raise ValidationError(f"Options of question {index + 1} must be strings.")

    return Question(
        text=text.strip(),
        options=tuple(option.strip() for option in options),
        correct_answer_label=correct.strip().upper(),
    )


def _validate_question(index: int, question: Question) -> None:
    number = index + 1
    if not isinstance(question.text, str) or not question.text.strip():
        raise ValidationError(f"Question {number} has no text.")
    if len(question.options) != len(OPTION_LABELS):
        raise ValidationError(
            f"Question {number} must have exactly {len(OPTION_LABELS)} options, "
            f"got {len(question.options)}."
        )
    if any(not isinstance(option, str) or not option.strip() for option in question.options):
        raise ValidationError(f"Question {number} has an empty option.")
    if question.correct_answer_label not in OPTION_LABELS:
        raise ValidationError(
            f"Question {number} has invalid correct answer {question.correct_answer_label!r}; "
            f"expected one of {', '.join(OPTION_LABELS)}."
        )


def _decode_json_array(text: str) -> Any:
    candidates = [text.strip()]
    fenced = _FENCED_BLOCK.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())
    start, end = text.find("["), text.rfind("]")
    if 0 <= start < end:
        candidates.append(text[start : end + 1])

    last_error: json.JSONDecodeError | None = None
    for candidate in candidates:
        try:
            # strict=False lets raw newlines inside generated strings through
            return json.loads(candidate, strict=False)
        except json.JSONDecodeError as exc:
            last_error = exc
    raise ValidationError("Failed to parse quiz data.") from last_error
