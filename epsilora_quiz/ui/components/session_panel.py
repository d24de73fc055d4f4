"""Component for answering a running quiz session."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from epsilora_quiz.constants.quiz_constants import (
    OPTION_LABELS,
    TIME_CRITICAL_SECONDS,
    TIME_WARNING_SECONDS,
)
from epsilora_quiz.constants.ui_constants import (
    SESSION_ABANDON_BUTTON,
    SESSION_FINISH_BUTTON,
    SESSION_NEXT_BUTTON,
    SESSION_PREV_BUTTON,
    SESSION_PROGRESS_TEMPLATE,
    SESSION_TIME_UP_MESSAGE,
)
from epsilora_quiz.core.models import SessionStatus
from epsilora_quiz.core.session_controller import QuizSessionController
from epsilora_quiz.styling.styles import Styles
from epsilora_quiz.ui.question_renderer import render_question_html


class SessionPanel(QWidget):
    """UI component showing the current question, its countdown and navigation."""

    def __init__(
        self,
        on_abandon: Callable[[], None],
        font_size: int = 14,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_abandon = on_abandon
        self._font_size = font_size
        self._controller: QuizSessionController | None = None
        # (index, selected, reveal) of the page currently loaded in the view
        self._rendered_key: tuple[int, str | None, bool] | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        self.progress_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.progress_label)
        header_row.addStretch()

        self.time_label = QLabel("", self)
        self.time_label.setAlignment(Qt.AlignCenter)
        header_row.addWidget(self.time_label)
        layout.addLayout(header_row)

        self.time_progress = QProgressBar(self)
        self.time_progress.setRange(0, 1000)
        self.time_progress.setTextVisible(False)
        layout.addWidget(self.time_progress)

        self.expiry_label = QLabel(SESSION_TIME_UP_MESSAGE, self)
        self.expiry_label.setAlignment(Qt.AlignCenter)
        self.expiry_label.setVisible(False)
        layout.addWidget(self.expiry_label)

        self.question_view = QWebEngineView(self)
        layout.addWidget(self.question_view, stretch=1)

        option_row = QHBoxLayout()
        self.option_buttons: dict[str, QPushButton] = {}
        for label in OPTION_LABELS:
            button = QPushButton(label, self)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, value=label: self._handle_select(value))
            option_row.addWidget(button)
            self.option_buttons[label] = button
        layout.addLayout(option_row)

        nav_row = QHBoxLayout()
        self.abandon_button = QPushButton(SESSION_ABANDON_BUTTON, self)
        self.abandon_button.clicked.connect(self.on_abandon)
        nav_row.addWidget(self.abandon_button)
        nav_row.addStretch()

        self.prev_button = QPushButton(SESSION_PREV_BUTTON, self)
        self.prev_button.clicked.connect(self._handle_retreat)
        nav_row.addWidget(self.prev_button)

        self.next_button = QPushButton(SESSION_NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_advance)
        nav_row.addWidget(self.next_button)

        self.finish_button = QPushButton(SESSION_FINISH_BUTTON, self)
        self.finish_button.setStyleSheet(Styles.get_primary_button_style())
        self.finish_button.clicked.connect(self._handle_finish)
        nav_row.addWidget(self.finish_button)
        layout.addLayout(nav_row)

    def bind(self, controller: QuizSessionController) -> None:
        """Follow ``controller``; the previous one, if any, is no longer drawn."""
        self._controller = controller
        self._rendered_key = None
        controller.add_listener(lambda: self._refresh_if_bound(controller))
        self.refresh()

    def _refresh_if_bound(self, controller: QuizSessionController) -> None:
        if controller is self._controller:
            self.refresh()

    # --- User input ---

    def _handle_select(self, label: str) -> None:
        if self._controller is not None:
            self._controller.select_answer(label)
        # A rejected click must not leave the button toggled
        self.refresh()

    def _handle_advance(self) -> None:
        if self._controller is not None:
            self._controller.advance()

    def _handle_retreat(self) -> None:
        if self._controller is not None:
            self._controller.retreat()

    def _handle_finish(self) -> None:
        if self._controller is not None:
            self._controller.finish()

    # --- Drawing ---

    def refresh(self) -> None:
        controller = self._controller
        if controller is None or controller.status is not SessionStatus.IN_PROGRESS:
            return
        question = controller.current_question
        state = controller.current_state
        time_left = controller.time_left
        # Expired and revisited questions both show the correct answer
        reveal = state.time_expired or time_left == 0

        key = (controller.current_index, state.user_answer, reveal)
        if key != self._rendered_key:
            self.question_view.setHtml(
                render_question_html(question, state.user_answer, reveal, self._font_size)
            )
            self._rendered_key = key

        self.progress_label.setText(
            SESSION_PROGRESS_TEMPLATE.format(
                number=controller.current_index + 1, total=controller.question_count
            )
        )
        self._update_countdown(time_left, controller.config.seconds_per_question)
        self.expiry_label.setVisible(controller.is_showing_expiry())

        can_select = controller.can_select_answer()
        for label, button in self.option_buttons.items():
            button.setChecked(label == state.user_answer)
            button.setEnabled(can_select)

        last = controller.is_last_question()
        self.prev_button.setEnabled(controller.can_retreat())
        self.next_button.setVisible(not last)
        self.next_button.setEnabled(controller.can_advance())
        self.finish_button.setVisible(last)
        self.finish_button.setEnabled(controller.can_finish())

    def _update_countdown(self, time_left: int, total_seconds: int) -> None:
        self.time_label.setText(f"{time_left}s")
        self.time_label.setStyleSheet(
            Styles.get_timer_style(time_left, TIME_WARNING_SECONDS, TIME_CRITICAL_SECONDS)
        )
        fraction = 0.0 if total_seconds <= 0 else max(0.0, min(1.0, time_left / total_seconds))
        self.time_progress.setValue(int(fraction * 1000))
