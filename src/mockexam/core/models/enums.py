from __future__ import annotations

from enum import StrEnum


class QuizMode(StrEnum):
    REVIEW = "review"
    TIMED = "timed"


class CompletionReason(StrEnum):
    SUBMITTED = "submitted"
    TIME_EXPIRED = "time_expired"


class IssueSeverity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
