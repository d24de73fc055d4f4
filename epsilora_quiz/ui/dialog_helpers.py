"""Message boxes used by the quiz window and its panels."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget

from epsilora_quiz.constants.ui_constants import SESSION_ABANDON_CONFIRM


def confirm_abandon_quiz(parent: QWidget) -> bool:
    """Ask before dropping a running quiz; True when the learner confirms."""
    answer = QMessageBox.question(
        parent,
        "Abandon Quiz",
        SESSION_ABANDON_CONFIRM,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return answer == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
