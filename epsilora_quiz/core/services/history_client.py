"""HTTP client for the quiz history service."""

from __future__ import annotations

import logging

import requests
from pydantic import ValidationError as PayloadValidationError

from epsilora_quiz.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    HISTORY_PATH_TEMPLATE,
    REQUEST_TIMEOUT_SECONDS,
    SAVE_RESULT_PATH,
    STATS_PATH,
)
from epsilora_quiz.core.payloads import HistoryRecord, HistoryResponse, QuizStats

logger = logging.getLogger(__name__)


class TransientPersistenceError(Exception):
    """Raised when the history service cannot be reached or refuses a request."""


class HistoryClient:
    """Talks to the ``/api/quiz`` routes of the history service."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        auth_token: str | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth_token = auth_token
        self._timeout = timeout
        self._session = session or requests.Session()

    def save_result(self, record: HistoryRecord, auth_token: str | None = None) -> None:
        self._request(
            "POST",
            SAVE_RESULT_PATH,
            auth_token=auth_token,
            json=record.model_dump(mode="json", by_alias=True),
        )

    def fetch_history(self, user_id: str, auth_token: str | None = None) -> HistoryResponse:
        response = self._request(
            "GET", HISTORY_PATH_TEMPLATE.format(user_id=user_id), auth_token=auth_token
        )
        return self._parse(HistoryResponse, response)

    def fetch_stats(self, user_id: str | None = None, auth_token: str | None = None) -> QuizStats:
        params = {"userId": user_id} if user_id else None
        response = self._request("GET", STATS_PATH, auth_token=auth_token, params=params)
        return self._parse(QuizStats, response)

    def _request(
        self, method: str, path: str, auth_token: str | None = None, **kwargs
    ) -> requests.Response:
        url = f"{self._base_url}{path}"
        headers = {"Content-Type": "application/json"}
        token = auth_token or self._auth_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            response = self._session.request(
                method, url, headers=headers, timeout=self._timeout, **kwargs
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise TransientPersistenceError(
                f"{method} {path} failed with status {exc.response.status_code}"
            ) from exc
        except requests.RequestException as exc:
            raise TransientPersistenceError(f"{method} {path} failed: {exc}") from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _parse(model, response: requests.Response):
        try:
            return model.model_validate(response.json())
        except (ValueError, PayloadValidationError) as exc:
            raise TransientPersistenceError(f"Unexpected response from history service: {exc}") from exc
