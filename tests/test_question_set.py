import json

import pytest

from epsilora_quiz.core.models import Question
from epsilora_quiz.core.question_set import (
    ValidationError,
    parse_generated_questions,
    question_from_mapping,
    validate_question_set,
)

GENERATED = [
    {
        "question": "  What is $2 + 2$? ",
        "options": ["3", " 4 ", "5", "22"],
        "correctAnswer": "b",
    },
    {
        "question": "Which is prime?",
        "options": ["4", "6", "7", "9"],
        "correctAnswer": "C",
    },
]


def test_validate_accepts_well_formed_set():
    question = Question("Q?", ("a", "b", "c", "d"), "D")
    assert validate_question_set([question]) == (question,)


def test_validate_rejects_empty_set():
    with pytest.raises(ValidationError):
        validate_question_set([])


@pytest.mark.parametrize(
    "question",
    [
        Question("", ("a", "b", "c", "d"), "A"),
        Question("Q?", ("a", "b", "c"), "A"),
        Question("Q?", ("a", "b", "c", "d", "e"), "A"),
        Question("Q?", ("a", " ", "c", "d"), "A"),
        Question("Q?", ("a", "b", "c", "d"), "E"),
    ],
)
def test_validate_rejects_malformed_question(question):
    with pytest.raises(ValidationError):
        validate_question_set([Question("Fine?", ("a", "b", "c", "d"), "A"), question])


def test_parse_plain_json_array():
    questions = parse_generated_questions(json.dumps(GENERATED))
    assert len(questions) == 2
    assert questions[0].text == "What is $2 + 2$?"
    assert questions[0].options == ("3", "4", "5", "22")
    assert questions[0].correct_answer_label == "B"


def test_parse_fenced_response():
    text = "Here is your quiz:\n```json\n" + json.dumps(GENERATED, indent=2) + "\n```\nGood luck!"
    assert len(parse_generated_questions(text)) == 2


def test_parse_leading_prose():
    text = "Sure! " + json.dumps(GENERATED) + " Let me know if you need more."
    assert parse_generated_questions(text)[1].correct_answer_label == "C"


def test_parse_accepts_decoded_list():
    assert len(parse_generated_questions(GENERATED)) == 2


def test_parse_rejects_garbage():
    with pytest.raises(ValidationError, match="Failed to parse quiz data"):
        parse_generated_questions("I could not generate a quiz.")


def test_parse_rejects_non_array():
    with pytest.raises(ValidationError):
        parse_generated_questions('{"question": "Q?"}')


def test_parse_rejects_empty_array():
    with pytest.raises(ValidationError, match="No questions"):
        parse_generated_questions("[]")


def test_parse_rejects_whole_set_for_one_bad_entry():
    broken = GENERATED + [{"question": "Q?", "options": ["a", "b", "c"], "correctAnswer": "A"}]
    with pytest.raises(ValidationError):
        parse_generated_questions(broken)


def test_question_from_mapping_requires_fields():
    with pytest.raises(ValidationError):
        question_from_mapping({"question": "Q?", "options": ["a", "b", "c", "d"]})
    with pytest.raises(ValidationError):
        question_from_mapping("not an object")
