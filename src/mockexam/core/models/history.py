from __future__ import annotations

import msgspec

from mockexam.core.models.enums import QuizMode


class GroupScore(msgspec.Struct):
    correct: int = 0
    total: int = 0


class QuestionResult(msgspec.Struct, frozen=True, rename="camel"):
    question_id: str
    correct: bool
    answered: bool


class HistoryRecord(msgspec.Struct, frozen=True, rename="camel"):
    """Summary of one completed session, appended to the history log."""

    session_id: str
    mode: QuizMode
    domain_id: str
    section: str
    started_at: int
    completed_at: int
    duration_seconds: int
    total_questions: int
    answered_total: int
    correct_total: int
    points: int
    passed: bool
    domain_scores: dict[str, GroupScore] = msgspec.field(default_factory=dict)
    section_scores: dict[str, GroupScore] = msgspec.field(default_factory=dict)
    question_results: list[QuestionResult] = msgspec.field(default_factory=list)


class History(msgspec.Struct):
    version: int = 1
    sessions: list[HistoryRecord] = msgspec.field(default_factory=list)


class WeakArea(msgspec.Struct, frozen=True, rename="camel"):
    question_id: str
    attempts: int
    miss_count: int

    @property
    def miss_rate(self) -> float:
        return self.miss_count / self.attempts if self.attempts else 0.0


class TrendPoint(msgspec.Struct, frozen=True):
    date: int
    score: int
    passed: bool
    mode: QuizMode


class DomainPerformance(msgspec.Struct, frozen=True):
    domain_id: str
    name: str
    correct: int
    total: int
    percentage: float
