"""Qt UI components for the quiz application."""

from .dialog_helpers import (
    confirm_abandon_quiz,
    show_error,
    show_info,
    show_warning,
)
from .question_renderer import render_question_html, render_review_html
from .quiz_window import QuizWindow

__all__ = [
    "QuizWindow",
    "confirm_abandon_quiz",
    "show_error",
    "show_info",
    "show_warning",
    "render_question_html",
    "render_review_html",
]
