"""Question rendering utilities for displaying quiz questions."""

from __future__ import annotations

from epsilora_quiz.constants.quiz_constants import OPTION_LABELS
from epsilora_quiz.core.markdown_math_renderer import renderer
from epsilora_quiz.core.models import Question


def option_css_class(label: str, correct_label: str, selected_label: str | None, reveal: bool) -> str:
    """Pick the highlight for one option.

    Before the answer is revealed only the learner's pick is highlighted.
    Once revealed the correct option turns green and a wrong pick turns red.
    """
    if reveal:
        if label == correct_label:
            return "correct"
        if label == selected_label:
            return "incorrect"
        return ""
    return "selected" if label == selected_label else ""


def render_question_html(
    question: Question,
    selected_label: str | None = None,
    reveal: bool = False,
    font_size: int = 14,
) -> str:
    """Render a quiz question with its options as HTML.

    Args:
        question: The question to show (text and options support Markdown and LaTeX)
        selected_label: Option currently chosen by the learner, if any
        reveal: Whether the correct answer may be shown
        font_size: Font size in points for the question text

    Returns:
        HTML string ready for display in QWebEngineView
    """
    parts = [renderer.render_fragment(question.text or "(No question text)")]
    for label, option in zip(OPTION_LABELS, question.options):
        css_class = option_css_class(label, question.correct_answer_label, selected_label, reveal)
        parts.append(renderer.render_option(label, option, css_class))
    return renderer.wrap_with_mathjax("\n".join(parts), font_size=font_size)


def render_review_html(markdown: str, font_size: int = 12) -> str:
    """Render the review summary shown on the results screen."""
    return renderer.render_full_document(markdown, font_size=font_size)
