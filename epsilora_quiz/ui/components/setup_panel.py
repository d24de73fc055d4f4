"""Component for choosing a course and the quiz parameters."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from epsilora_quiz.constants.quiz_constants import (
    DEFAULT_DIFFICULTY,
    DEFAULT_QUESTION_COUNT,
    DEFAULT_SECONDS_PER_QUESTION,
    DIFFICULTY_LEVELS,
    MAX_QUESTION_COUNT,
    MAX_SECONDS_PER_QUESTION,
)
from epsilora_quiz.constants.ui_constants import (
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    NO_COURSE_MESSAGE,
    SETUP_COURSE_ID_PLACEHOLDER,
    SETUP_COURSE_NAME_PLACEHOLDER,
    SETUP_DIFFICULTY_LABEL,
    SETUP_EMPTY_HISTORY,
    SETUP_GENERATE_BUTTON,
    SETUP_IMPORT_BUTTON,
    SETUP_QUESTION_COUNT_LABEL,
    SETUP_REFRESH_HISTORY_BUTTON,
    SETUP_SECONDS_LABEL,
    SETUP_STATS_TEMPLATE,
    SETUP_STATS_UNAVAILABLE,
    SETUP_USER_ID_PLACEHOLDER,
)
from epsilora_quiz.core.models import Question, SessionConfig, SessionContext
from epsilora_quiz.core.question_set import ValidationError
from epsilora_quiz.core.quiz_importer import load_questions_from_file
from epsilora_quiz.core.services.generator_client import GeneratorClient
from epsilora_quiz.core.services.history_client import HistoryClient, TransientPersistenceError
from epsilora_quiz.styling.styles import Styles
from epsilora_quiz.ui.dialog_helpers import show_error, show_warning

QuizReadyCallback = Callable[[tuple[Question, ...], SessionContext, SessionConfig], None]


class SetupPanel(QWidget):
    """UI component for picking a course, the quiz parameters and a question source."""

    # Emitted from the generation thread; Qt queues delivery onto the UI thread
    generation_succeeded = Signal(object, object)
    generation_failed = Signal(object)

    def __init__(
        self,
        generator_client: GeneratorClient,
        history_client: HistoryClient | None,
        on_quiz_ready: QuizReadyCallback,
        user_id: str | None = None,
        auth_token: str | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.generator_client = generator_client
        self.history_client = history_client
        self.on_quiz_ready = on_quiz_ready
        self._auth_token = auth_token

        self._build_ui()
        self.generation_succeeded.connect(self._finish_generation)
        self.generation_failed.connect(self._show_generation_error)
        if user_id:
            self.user_id_input.setText(user_id)

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        form = QFormLayout()
        self.course_id_input = QLineEdit(self)
        self.course_id_input.setPlaceholderText(SETUP_COURSE_ID_PLACEHOLDER)
        form.addRow(self.course_id_input)

        self.course_name_input = QLineEdit(self)
        self.course_name_input.setPlaceholderText(SETUP_COURSE_NAME_PLACEHOLDER)
        form.addRow(self.course_name_input)

        self.user_id_input = QLineEdit(self)
        self.user_id_input.setPlaceholderText(SETUP_USER_ID_PLACEHOLDER)
        self.user_id_input.editingFinished.connect(self.refresh_history)
        form.addRow(self.user_id_input)

        self.question_count_spinbox = QSpinBox(self)
        self.question_count_spinbox.setRange(1, MAX_QUESTION_COUNT)
        self.question_count_spinbox.setValue(DEFAULT_QUESTION_COUNT)
        form.addRow(SETUP_QUESTION_COUNT_LABEL, self.question_count_spinbox)

        self.difficulty_combo = QComboBox(self)
        self.difficulty_combo.addItems(DIFFICULTY_LEVELS)
        self.difficulty_combo.setCurrentText(DEFAULT_DIFFICULTY)
        form.addRow(SETUP_DIFFICULTY_LABEL, self.difficulty_combo)

        self.seconds_spinbox = QSpinBox(self)
        self.seconds_spinbox.setRange(1, MAX_SECONDS_PER_QUESTION)
        self.seconds_spinbox.setSingleStep(5)
        self.seconds_spinbox.setSuffix(" s")
        self.seconds_spinbox.setValue(DEFAULT_SECONDS_PER_QUESTION)
        form.addRow(SETUP_SECONDS_LABEL, self.seconds_spinbox)

        layout.addLayout(form)

        action_row = QHBoxLayout()
        self.generate_button = QPushButton(SETUP_GENERATE_BUTTON, self)
        self.generate_button.setStyleSheet(Styles.get_primary_button_style())
        self.generate_button.clicked.connect(self._handle_generate)
        action_row.addWidget(self.generate_button)

        self.import_button = QPushButton(SETUP_IMPORT_BUTTON, self)
        self.import_button.clicked.connect(self._handle_import)
        action_row.addWidget(self.import_button)
        layout.addLayout(action_row)

        history_row = QHBoxLayout()
        self.stats_label = QLabel(SETUP_STATS_UNAVAILABLE, self)
        self.stats_label.setWordWrap(True)
        history_row.addWidget(self.stats_label, stretch=1)

        self.refresh_button = QPushButton(SETUP_REFRESH_HISTORY_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh_history)
        self.refresh_button.setEnabled(self.history_client is not None)
        history_row.addWidget(self.refresh_button)
        layout.addLayout(history_row)

        self.history_list = QListWidget(self)
        layout.addWidget(self.history_list, stretch=1)

    # --- Session inputs ---

    def current_context(self) -> SessionContext | None:
        course_id = self.course_id_input.text().strip()
        if not course_id:
            return None
        return SessionContext(
            course_id=course_id,
            course_name=self.course_name_input.text().strip() or course_id,
            user_id=self.user_id_input.text().strip() or None,
            auth_token=self._auth_token,
        )

    def current_config(self, question_count: int | None = None) -> SessionConfig:
        return SessionConfig(
            question_count=question_count or self.question_count_spinbox.value(),
            difficulty_label=self.difficulty_combo.currentText(),
            seconds_per_question=self.seconds_spinbox.value(),
        )

    def _handle_generate(self) -> None:
        context = self.current_context()
        if context is None:
            show_warning(self, "No course", NO_COURSE_MESSAGE)
            return
        config = self.current_config()

        self._set_busy(True)
        self.generator_client.generate_in_background(
            context.course_id,
            config,
            on_done=lambda questions: self.generation_succeeded.emit(questions, context),
            on_error=self.generation_failed.emit,
            auth_token=context.auth_token,
        )

    def _finish_generation(self, questions: tuple[Question, ...], context: SessionContext) -> None:
        self._set_busy(False)
        self.on_quiz_ready(questions, context, self.current_config(len(questions)))

    def _show_generation_error(self, error: Exception) -> None:
        self._set_busy(False)
        if isinstance(error, ValidationError):
            show_error(self, "Quiz rejected", f"{error}\n\nPlease try generating the quiz again.")
        else:
            show_error(self, "Generation failed", str(error))

    def _set_busy(self, busy: bool) -> None:
        self.generate_button.setEnabled(not busy)
        self.import_button.setEnabled(not busy)
        if busy:
            QApplication.setOverrideCursor(Qt.WaitCursor)
        else:
            QApplication.restoreOverrideCursor()

    def _handle_import(self) -> None:
        context = self.current_context()
        if context is None:
            show_warning(self, "No course", NO_COURSE_MESSAGE)
            return

        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            imported = load_questions_from_file(Path(file_path))
        except (OSError, ValidationError) as exc:
            show_error(self, "Import failed", str(exc))
            return

        self.on_quiz_ready(imported.questions, context, self.current_config(len(imported.questions)))

    # --- History ---

    def refresh_history(self) -> None:
        self.history_list.clear()
        user_id = self.user_id_input.text().strip()
        if self.history_client is None or not user_id:
            self.stats_label.setText(SETUP_STATS_UNAVAILABLE)
            return

        try:
            response = self.history_client.fetch_history(user_id, auth_token=self._auth_token)
        except TransientPersistenceError:
            self.stats_label.setText(SETUP_STATS_UNAVAILABLE)
            return

        stats = response.stats
        self.stats_label.setText(
            SETUP_STATS_TEMPLATE.format(
                total=stats.total_quizzes,
                average=stats.average_score,
                latest=stats.latest_score,
            )
        )
        if not response.history:
            self.history_list.addItem(SETUP_EMPTY_HISTORY)
            return
        for entry in response.history:
            self.history_list.addItem(
                f"{entry.date:%Y-%m-%d %H:%M}  {entry.course_name or entry.course_id}  "
                f"{entry.score}/{entry.total_questions}  ({entry.difficulty})"
            )
