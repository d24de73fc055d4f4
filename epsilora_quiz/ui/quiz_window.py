"""Qt main window switching between quiz setup, live session and results."""

from __future__ import annotations

import logging
from enum import Enum, auto

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from epsilora_quiz.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from epsilora_quiz.constants.ui_constants import (
    PERSISTENCE_FAILED_MESSAGE,
    RESULTS_HANDOFF_SAVED_MESSAGE,
    RESULTS_NO_REVIEW_MESSAGE,
    STATUS_MESSAGE_TIMEOUT_MS,
    WINDOW_TITLE,
)
from epsilora_quiz.core.ai_assist import AssistHandoffStore, QuizContext, build_review_markdown
from epsilora_quiz.core.models import (
    Question,
    SessionConfig,
    SessionContext,
    SessionResult,
    SessionStatus,
)
from epsilora_quiz.core.question_set import ValidationError
from epsilora_quiz.core.result_emitter import ResultEmitter
from epsilora_quiz.core.services.generator_client import GeneratorClient
from epsilora_quiz.core.services.history_client import HistoryClient, TransientPersistenceError
from epsilora_quiz.core.session_controller import QuizSessionController
from epsilora_quiz.styling.styles import Styles
from epsilora_quiz.ui.components.results_panel import ResultsPanel
from epsilora_quiz.ui.components.session_panel import SessionPanel
from epsilora_quiz.ui.components.setup_panel import SetupPanel
from epsilora_quiz.ui.dialog_helpers import confirm_abandon_quiz, show_error, show_info, show_warning
from epsilora_quiz.ui.qt_scheduler import QtScheduler

logger = logging.getLogger(__name__)


class QuizMode(Enum):
    """High-level UI mode of the quiz window."""

    SETUP = auto()
    SESSION = auto()
    RESULTS = auto()


class QuizWindow(QMainWindow):
    """Main Qt window orchestrating setup, the running session and the results."""

    # Emitted from the persistence worker thread; delivered queued on the UI thread.
    persistence_failed = Signal(str)

    def __init__(
        self,
        generator_client: GeneratorClient,
        history_client: HistoryClient | None = None,
        handoff_store: AssistHandoffStore | None = None,
        quiz_context: QuizContext | None = None,
        user_id: str | None = None,
        auth_token: str | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.history_client = history_client
        self.handoff_store = handoff_store
        self.quiz_context = quiz_context or QuizContext()
        self.scheduler = QtScheduler(self)
        self.emitter = ResultEmitter(
            history_client=history_client,
            handoff_store=handoff_store,
            quiz_context=self.quiz_context,
            on_persistence_error=self._report_persistence_error,
        )
        self.controller: QuizSessionController | None = None
        self._mode = QuizMode.SETUP

        self.persistence_failed.connect(self._show_persistence_error)

        self._build_ui(generator_client, user_id, auth_token)
        self.setStyleSheet(Styles.get_main_window_style())
        self.setup_panel.refresh_history()

    def _build_ui(
        self,
        generator_client: GeneratorClient,
        user_id: str | None,
        auth_token: str | None,
    ) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)
        root_layout.addLayout(button_row)

        self.mode_stack = QStackedWidget(self)
        self.setup_panel = SetupPanel(
            generator_client,
            self.history_client,
            on_quiz_ready=self._start_session,
            user_id=user_id,
            auth_token=auth_token,
            parent=self,
        )
        self.session_panel = SessionPanel(on_abandon=self._handle_abandon, parent=self)
        self.results_panel = ResultsPanel(
            on_try_again=self._handle_try_again,
            on_ai_help=self._handle_ai_help,
            parent=self,
        )
        self.mode_stack.addWidget(self.setup_panel)
        self.mode_stack.addWidget(self.session_panel)
        self.mode_stack.addWidget(self.results_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(QuizMode.SETUP)

    def _set_mode(self, mode: QuizMode) -> None:
        self._mode = mode
        index_map = {
            QuizMode.SETUP: 0,
            QuizMode.SESSION: 1,
            QuizMode.RESULTS: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    # --- Session lifecycle ---

    def _start_session(
        self,
        questions: tuple[Question, ...],
        context: SessionContext,
        config: SessionConfig,
    ) -> None:
        self._dispose_controller()
        controller = QuizSessionController(context, self.scheduler, self.emitter)
        controller.add_completion_listener(self._handle_completed)
        try:
            controller.start(questions, config)
        except ValidationError as exc:
            logger.warning("Quiz for course %s rejected: %s", context.course_id, exc)
            show_error(self, "Quiz rejected", str(exc))
            return

        self.controller = controller
        self.session_panel.bind(controller)
        self._set_mode(QuizMode.SESSION)

    def _handle_completed(self, result: SessionResult) -> None:
        self.results_panel.show_result(result)
        self._set_mode(QuizMode.RESULTS)

    def _handle_abandon(self) -> None:
        if self.controller is None or self.controller.status is not SessionStatus.IN_PROGRESS:
            return
        if not confirm_abandon_quiz(self):
            return
        self._dispose_controller()
        self._set_mode(QuizMode.SETUP)

    def _handle_try_again(self) -> None:
        self._dispose_controller()
        self.quiz_context.clear()
        self.setup_panel.refresh_history()
        self._set_mode(QuizMode.SETUP)

    def _dispose_controller(self) -> None:
        if self.controller is not None:
            self.controller.reset()
            self.controller = None

    # --- AI tutor hand-off ---

    def _handle_ai_help(self) -> None:
        payload = self.quiz_context.get()
        if payload is None and self.handoff_store is not None:
            payload = self.handoff_store.load()
        if payload is None:
            show_warning(self, "No quiz", RESULTS_NO_REVIEW_MESSAGE)
            return
        self.emitter.hand_off(payload)
        self.results_panel.show_review(build_review_markdown(payload))
        self.statusBar().showMessage(RESULTS_HANDOFF_SAVED_MESSAGE, STATUS_MESSAGE_TIMEOUT_MS)

    # --- Persistence feedback ---

    def _report_persistence_error(self, error: TransientPersistenceError) -> None:
        self.persistence_failed.emit(str(error))

    def _show_persistence_error(self, message: str) -> None:
        self.statusBar().showMessage(
            PERSISTENCE_FAILED_MESSAGE.format(error=message), STATUS_MESSAGE_TIMEOUT_MS
        )

    # --- About / help ---

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event) -> None:  # noqa: N802
        self._dispose_controller()
        super().closeEvent(event)
