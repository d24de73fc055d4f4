"""Quiz-related constants shared across UI and core layers."""

OPTION_LABELS: tuple[str, ...] = ("A", "B", "C", "D")
DIFFICULTY_LEVELS: tuple[str, ...] = ("Easy", "Medium", "Hard")

DEFAULT_QUESTION_COUNT: int = 5
DEFAULT_DIFFICULTY: str = "Medium"
DEFAULT_SECONDS_PER_QUESTION: int = 30
MAX_QUESTION_COUNT: int = 50
MAX_SECONDS_PER_QUESTION: int = 600

EXPIRY_DISPLAY_DELAY_SECONDS: float = 2.0
TRANSITION_SETTLE_SECONDS: float = 0.5

TIME_WARNING_SECONDS: int = 10
TIME_CRITICAL_SECONDS: int = 5
