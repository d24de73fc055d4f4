import pytest

from epsilora_quiz.core.question_set import ValidationError
from epsilora_quiz.core.quiz_importer import (
    QuizImportError,
    load_questions_from_file,
    parse_quiz_text,
)

BANK = """\
Q: What is $2 + 2$?
A: 3
B: 4
C: 5
D: 22
CORRECT: B

---
Q: Which number is prime?
It is the only odd one here.
A: 4
B: 6
C: 7
D: 8
correct: c
"""


def test_parse_blocks():
    questions = parse_quiz_text(BANK)
    assert len(questions) == 2
    assert questions[0].options == ("3", "4", "5", "22")
    assert questions[0].correct_answer_label == "B"
    assert questions[1].text == "Which number is prime?\nIt is the only odd one here."
    assert questions[1].correct_answer_label == "C"


def test_missing_correct_line_is_rejected():
    with pytest.raises(QuizImportError, match="CORRECT"):
        parse_quiz_text("Q: Q?\nA: 1\nB: 2\nC: 3\nD: 4\n")


def test_missing_option_is_rejected():
    with pytest.raises(QuizImportError, match="four options"):
        parse_quiz_text("Q: Q?\nA: 1\nB: 2\nC: 3\nCORRECT: A\n")


def test_stray_text_is_rejected():
    with pytest.raises(QuizImportError):
        parse_quiz_text("Hello\nQ: Q?\nA: 1\nB: 2\nC: 3\nD: 4\nCORRECT: A\n")


def test_load_from_file(tmp_path):
    path = tmp_path / "bank.txt"
    path.write_text(BANK, encoding="utf-8")
    imported = load_questions_from_file(path)
    assert imported.source_path == path
    assert len(imported.questions) == 2


def test_empty_file_is_rejected(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("\n\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_questions_from_file(path)
