"""In-memory store of quiz attempts backing the history service."""

from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from uuid import uuid4

from epsilora_quiz.core.payloads import HistoryEntry, HistoryRecord, QuizStats


class HistoryStore:
    """Keeps quiz attempts per user and derives their statistics.

    Shared between uvicorn worker threads, so every access goes through a lock.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: list[HistoryEntry] = []

    def add(self, record: HistoryRecord) -> HistoryEntry:
        entry = HistoryEntry(
            **record.model_dump(),
            id=uuid4().hex,
            created_at=datetime.now(timezone.utc),
        )
        with self._lock:
            self._entries.append(entry)
        return entry

    def history_for(self, user_id: str) -> list[HistoryEntry]:
        """Return the user's attempts, newest first."""
        with self._lock:
            entries = [entry for entry in self._entries if entry.user_id == user_id]
        return entries[::-1]

    def stats_for(self, user_id: str | None = None) -> QuizStats:
        with self._lock:
            entries = [
                entry for entry in self._entries if user_id is None or entry.user_id == user_id
            ]
        if not entries:
            return QuizStats()
        percentages = [_percentage(entry) for entry in entries]
        latest = entries[-1]
        return QuizStats(
            total_quizzes=len(entries),
            average_score=round(sum(percentages) / len(percentages), 1),
            latest_score=round(_percentage(latest), 1),
        )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def _percentage(entry: HistoryEntry) -> float:
    return (entry.score / entry.total_questions) * 100
