"""Application entry point for Epsilora Quiz."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from epsilora_quiz.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_AUTH_TOKEN,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_USER_ID,
    SERVE_LOCAL_HISTORY,
)
from epsilora_quiz.core.ai_assist import AssistHandoffStore, QuizContext
from epsilora_quiz.core.services.generator_client import GeneratorClient
from epsilora_quiz.core.services.history_client import HistoryClient
from epsilora_quiz.core.services.history_store import HistoryStore
from epsilora_quiz.server.api_server import start_api_server
from epsilora_quiz.ui.quiz_window import QuizWindow
from epsilora_quiz.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, start the history service, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting Epsilora Quiz…")

    if SERVE_LOCAL_HISTORY:
        start_api_server(HistoryStore(), host=DEFAULT_HOST, port=DEFAULT_PORT)
        logger.info("Quiz history service listening on http://%s:%s", DEFAULT_HOST, DEFAULT_PORT)
    logger.info("Using quiz API at %s", DEFAULT_API_BASE_URL)

    app = QApplication(sys.argv)
    window = QuizWindow(
        generator_client=GeneratorClient(DEFAULT_API_BASE_URL),
        history_client=HistoryClient(DEFAULT_API_BASE_URL, auth_token=DEFAULT_AUTH_TOKEN),
        handoff_store=AssistHandoffStore(),
        quiz_context=QuizContext(),
        user_id=DEFAULT_USER_ID,
        auth_token=DEFAULT_AUTH_TOKEN,
    )
    window.resize(960, 720)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
