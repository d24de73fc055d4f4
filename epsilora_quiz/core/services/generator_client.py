"""Client for the AI question generator endpoint."""

from __future__ import annotations

import logging
from collections.abc import Callable
from threading import Thread

import requests

from epsilora_quiz.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    GENERATE_QUIZ_PATH,
    GENERATOR_TIMEOUT_SECONDS,
)
from epsilora_quiz.core.models import Question, SessionConfig
from epsilora_quiz.core.payloads import GenerateQuizRequest
from epsilora_quiz.core.question_set import ValidationError, parse_generated_questions

logger = logging.getLogger(__name__)


class GeneratorError(Exception):
    """Raised when the generator cannot be reached or answers with an error."""


class GeneratorClient:
    """Requests a question set for a course and runs it through the acceptance gate."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = GENERATOR_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def generate(
        self, course_id: str, config: SessionConfig, auth_token: str | None = None
    ) -> tuple[Question, ...]:
        """Return validated questions; raises ``ValidationError`` on a malformed set."""
        body = GenerateQuizRequest(
            course_id=course_id,
            number_of_questions=config.question_count,
            difficulty=config.difficulty_label,
            time_per_question=config.seconds_per_question,
        )
        headers = {"Content-Type": "application/json"}
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        try:
            response = self._session.post(
                f"{self._base_url}{GENERATE_QUIZ_PATH}",
                json=body.model_dump(by_alias=True),
                headers=headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            message = _error_message(exc.response) or f"status {exc.response.status_code}"
            raise GeneratorError(f"Failed to generate quiz: {message}") from exc
        except requests.RequestException as exc:
            raise GeneratorError(f"Failed to generate quiz: {exc}") from exc

        logger.info(
            "Generated quiz for course %s (%s questions, %s)",
            course_id,
            config.question_count,
            config.difficulty_label,
        )
        return parse_generated_questions(response.text)

    def generate_in_background(
        self,
        course_id: str,
        config: SessionConfig,
        on_done: Callable[[tuple[Question, ...]], None],
        on_error: Callable[[Exception], None],
        auth_token: str | None = None,
    ) -> Thread:
        """Run ``generate`` on a daemon thread. Exactly one callback fires, on that thread."""

        def task() -> None:
            try:
                questions = self.generate(course_id, config, auth_token=auth_token)
            except (GeneratorError, ValidationError) as exc:
                logger.warning("Quiz generation for course %s failed: %s", course_id, exc)
                on_error(exc)
                return
            on_done(questions)

        worker = Thread(target=task, name="QuizGeneration", daemon=True)
        worker.start()
        return worker


def _error_message(response: requests.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("detail")
        return str(message) if message else None
    return None
