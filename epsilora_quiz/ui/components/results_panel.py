"""Component showing the outcome of a completed quiz."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from epsilora_quiz.constants.ui_constants import (
    RESULTS_AI_HELP_BUTTON,
    RESULTS_SCORE_TEMPLATE,
    RESULTS_TRY_AGAIN_BUTTON,
)
from epsilora_quiz.core.ai_assist import result_message
from epsilora_quiz.core.models import SessionResult
from epsilora_quiz.styling.color_palette import ColorPalette, Theme
from epsilora_quiz.styling.styles import Styles
from epsilora_quiz.ui.question_renderer import render_review_html


class ResultsPanel(QWidget):
    """UI component for the score, the per-question breakdown and the AI review."""

    def __init__(
        self,
        on_try_again: Callable[[], None],
        on_ai_help: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_try_again = on_try_again
        self.on_ai_help = on_ai_help
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.score_label)

        self.message_label = QLabel("", self)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label)

        self.question_list = QListWidget(self)
        layout.addWidget(self.question_list, stretch=1)

        self.review_view = QWebEngineView(self)
        self.review_view.setVisible(False)
        layout.addWidget(self.review_view, stretch=2)

        button_row = QHBoxLayout()
        self.try_again_button = QPushButton(RESULTS_TRY_AGAIN_BUTTON, self)
        self.try_again_button.clicked.connect(self.on_try_again)
        button_row.addWidget(self.try_again_button)

        self.ai_help_button = QPushButton(RESULTS_AI_HELP_BUTTON, self)
        self.ai_help_button.setStyleSheet(Styles.get_primary_button_style())
        self.ai_help_button.clicked.connect(self.on_ai_help)
        button_row.addWidget(self.ai_help_button)
        layout.addLayout(button_row)

    def show_result(self, result: SessionResult) -> None:
        self.score_label.setText(
            RESULTS_SCORE_TEMPLATE.format(
                score=result.score,
                total=result.total_questions,
                percentage=result.percentage,
            )
        )
        self.message_label.setText(result_message(result.score, result.total_questions))
        self.review_view.setVisible(False)

        self.question_list.clear()
        for number, item in enumerate(result.per_question, start=1):
            answer = item.user_answer or "Not answered"
            text = f"{number}. {item.question}\n   Your answer: {answer} | Correct answer: {item.correct_answer_label}"
            row = QListWidgetItem(("✅ " if item.is_correct else "❌ ") + text)
            palette_color = (
                ColorPalette.OPTION_CORRECT_TEXT if item.is_correct else ColorPalette.OPTION_INCORRECT_TEXT
            )
            row.setForeground(QColor(palette_color.get(Theme.LIGHT)))
            self.question_list.addItem(row)

    def show_review(self, markdown: str) -> None:
        self.review_view.setHtml(render_review_html(markdown))
        self.review_view.setVisible(True)
