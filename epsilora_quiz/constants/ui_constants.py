"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Epsilora Quiz"
STATUS_MESSAGE_TIMEOUT_MS: int = 8000

SETUP_COURSE_ID_PLACEHOLDER: str = "Course id"
SETUP_COURSE_NAME_PLACEHOLDER: str = "Course name"
SETUP_USER_ID_PLACEHOLDER: str = "User id (needed to keep a history)"
SETUP_QUESTION_COUNT_LABEL: str = "Questions:"
SETUP_DIFFICULTY_LABEL: str = "Difficulty:"
SETUP_SECONDS_LABEL: str = "Seconds per question:"
SETUP_GENERATE_BUTTON: str = "Generate Quiz"
SETUP_IMPORT_BUTTON: str = "Load Question Bank"
SETUP_REFRESH_HISTORY_BUTTON: str = "Refresh History"
SETUP_STATS_TEMPLATE: str = "Quizzes taken: {total} | Average score: {average:.0f}% | Latest: {latest:.0f}%"
SETUP_STATS_UNAVAILABLE: str = "Quiz statistics unavailable."
SETUP_EMPTY_HISTORY: str = "No quizzes taken yet."

SESSION_PREV_BUTTON: str = "Previous"
SESSION_NEXT_BUTTON: str = "Next"
SESSION_FINISH_BUTTON: str = "Finish Quiz"
SESSION_ABANDON_BUTTON: str = "Abandon Quiz"
SESSION_PROGRESS_TEMPLATE: str = "Question {number} of {total}"
SESSION_TIME_UP_MESSAGE: str = "Time is up! Moving on…"
SESSION_ABANDON_CONFIRM: str = "Abandon this quiz? Your answers will not be saved."

RESULTS_TRY_AGAIN_BUTTON: str = "Try Again"
RESULTS_AI_HELP_BUTTON: str = "Get AI Help"
RESULTS_SCORE_TEMPLATE: str = "Score: {score} / {total} ({percentage:.0f}%)"
RESULTS_HANDOFF_SAVED_MESSAGE: str = "Quiz review saved for the AI tutor."
RESULTS_NO_REVIEW_MESSAGE: str = "No completed quiz is available for review."

IMPORT_DIALOG_TITLE: str = "Select question bank"
IMPORT_FILE_FILTER: str = "Question banks (*.txt);;All files (*.*)"

NO_COURSE_MESSAGE: str = "Please enter a course first."
PERSISTENCE_FAILED_MESSAGE: str = "Could not save the quiz result to your history: {error}"
