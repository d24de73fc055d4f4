"""FastAPI server exposing the quiz history endpoints."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Depends, FastAPI, Query
import uvicorn

from epsilora_quiz.constants.about import APP_NAME, APP_VERSION
from epsilora_quiz.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    HISTORY_PATH_TEMPLATE,
    SAVE_RESULT_PATH,
    STATS_PATH,
)
from epsilora_quiz.core.payloads import HistoryRecord, HistoryResponse, QuizStats
from epsilora_quiz.core.services.history_store import HistoryStore

logger = logging.getLogger(__name__)


def _get_history_store_dependency(history_store: HistoryStore):
    def dependency() -> HistoryStore:
        return history_store

    return dependency


def create_api_app(history_store: HistoryStore) -> FastAPI:
    """Create a FastAPI application wired to the provided history store."""
    app = FastAPI(title=f"{APP_NAME} History API", version=APP_VERSION)
    store_dep = _get_history_store_dependency(history_store)

    @app.post(SAVE_RESULT_PATH, status_code=201)
    def save_result(
        record: HistoryRecord,
        store: HistoryStore = Depends(store_dep),
    ) -> dict[str, str]:
        entry = store.add(record)
        logger.info(
            "Stored quiz result %s for user %s: %s/%s",
            entry.id,
            entry.user_id,
            entry.score,
            entry.total_questions,
        )
        return {"id": entry.id, "createdAt": entry.created_at.isoformat()}

    @app.get(
        HISTORY_PATH_TEMPLATE,
        response_model=HistoryResponse,
        response_model_by_alias=True,
    )
    def get_history(user_id: str, store: HistoryStore = Depends(store_dep)) -> HistoryResponse:
        history = store.history_for(user_id)
        return HistoryResponse(
            history=history,
            stats=store.stats_for(user_id),
            total_quizzes=len(history),
        )

    @app.get(STATS_PATH, response_model=QuizStats, response_model_by_alias=True)
    def get_stats(
        user_id: str | None = Query(default=None, alias="userId"),
        store: HistoryStore = Depends(store_dep),
    ) -> QuizStats:
        return store.stats_for(user_id)

    return app


def start_api_server(
    history_store: HistoryStore,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(history_store)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizHistoryServer", daemon=True)
    thread.start()
    return thread
