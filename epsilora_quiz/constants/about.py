"""Static metadata describing Epsilora Quiz."""

APP_NAME = "Epsilora Quiz"
APP_VERSION = "0.2"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Epsilora Quiz runs timed, AI-generated multiple-choice quizzes for your courses, "
    "keeps a history of your attempts and prepares a review you can discuss with the AI tutor."
)

HELP_TEXT = (
    "Pick a course, the number of questions, a difficulty and the seconds allowed per question, "
    "then generate a quiz or load a question bank from a .txt file:\n\n"
    "Q: What is $30^o$ in radians?\n"
    "A: \\frac{\\pi}{2}\nB: \\frac{\\pi}{6}\nC: \\frac{\\pi}{2}\nD: \\frac{\\pi}{3}\n"
    "CORRECT: B\n\n"
    "Each question runs on its own countdown. When time runs out the correct answer is shown "
    "for two seconds and the quiz moves on. Going back shows earlier questions read-only."
)
