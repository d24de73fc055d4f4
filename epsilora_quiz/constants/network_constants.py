"""Network configuration constants for the quiz application."""

import os

DEFAULT_HOST: str = os.environ.get("EPSILORA_HOST", "127.0.0.1")
DEFAULT_PORT: int = int(os.environ.get("EPSILORA_PORT", "8000"))
DEFAULT_API_BASE_URL: str = os.environ.get(
    "EPSILORA_API_URL", f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"
)
REQUEST_TIMEOUT_SECONDS: float = 10.0
GENERATOR_TIMEOUT_SECONDS: float = 60.0

SAVE_RESULT_PATH: str = "/api/quiz/save-result"
HISTORY_PATH_TEMPLATE: str = "/api/quiz-history/{user_id}"
STATS_PATH: str = "/api/quiz/stats"
GENERATE_QUIZ_PATH: str = "/api/generate-quiz"

# Learner identity forwarded with every request; authentication itself happens elsewhere.
DEFAULT_USER_ID: str | None = os.environ.get("EPSILORA_USER_ID") or None
DEFAULT_AUTH_TOKEN: str | None = os.environ.get("EPSILORA_AUTH_TOKEN") or None
# Run the bundled in-memory history service next to the desktop app.
SERVE_LOCAL_HISTORY: bool = os.environ.get("EPSILORA_SERVE_HISTORY", "1") not in ("0", "false", "no")
