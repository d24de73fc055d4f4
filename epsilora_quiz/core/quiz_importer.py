"""Question banks stored as plain text.

One block per question; blocks are separated by a blank line or a `---` line.
Each block holds a `Q:` line (Markdown and LaTeX allowed, continuation lines
append to the question), the options `A:` to `D:` and a `CORRECT:` label:

    Q: What is $2 + 2$?
    A: 3
    B: 4
    C: 5
    D: 22
    CORRECT: B

A question bank stands in for the AI generator when working offline. Loaded
questions pass the same acceptance gate as generated ones, so each block needs
its CORRECT line.
"""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass
from pathlib import Path

from epsilora_quiz.constants.quiz_constants import OPTION_LABELS
from epsilora_quiz.core.models import Question
from epsilora_quiz.core.question_set import ValidationError, validate_question_set

_MARKER = re.compile(r"^(Q|A|B|C|D|CORRECT)\s*:\s*(.*)$", re.IGNORECASE)
_QUESTION = "Q"
_CORRECT = "CORRECT"


class QuizImportError(ValidationError):
    """Raised when a question bank cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Questions read from one question bank file."""

    source_path: Path
    questions: tuple[Question, ...]


def load_questions_from_file(file_path: Path) -> ImportedQuiz:
    questions = parse_quiz_text(file_path.read_text(encoding="utf-8"))
    if not questions:
        raise QuizImportError("Question bank did not contain any questions.")
    return ImportedQuiz(source_path=file_path, questions=validate_question_set(questions))


def parse_quiz_text(text: str) -> list[Question]:
    """Split ``text`` into blocks and parse each one into a question."""
    lines = (line.strip() for line in text.splitlines())
    blocks = [
        list(group)
        for is_separator, group in itertools.groupby(lines, key=lambda line: not line or line == "---")
        if not is_separator
    ]
    return [_parse_block(number, block) for number, block in enumerate(blocks, start=1)]


def _parse_block(number: int, lines: list[str]) -> Question:
    sections: dict[str, list[str]] = {}
    current: str | None = None
    for line in lines:
        match = _MARKER.match(line)
        if match:
            current = match.group(1).upper()
            sections[current] = [match.group(2).strip()]
        elif current in (_QUESTION, *OPTION_LABELS):
            sections[current].append(line)
        else:
            raise QuizImportError(f"Question {number}: unexpected text '{line}'.")

    question_text = "\n".join(sections.get(_QUESTION, [])).strip()
    if not question_text:
        raise QuizImportError(f"Question {number}: question text missing (Q: ...).")
    if any(label not in sections for label in OPTION_LABELS):
        raise QuizImportError(f"Question {number}: each question needs exactly four options (A-D).")
    if _CORRECT not in sections:
        raise QuizImportError(f"Question {number}: missing CORRECT answer.")
    correct = sections[_CORRECT][0].upper()
    if correct not in OPTION_LABELS:
        raise QuizImportError(f"Question {number}: CORRECT must be one of A, B, C, or D.")

    return Question(
        text=question_text,
        options=tuple("\n".join(sections[label]).strip() for label in OPTION_LABELS),
        correct_answer_label=correct,
    )
