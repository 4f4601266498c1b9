"""Domain models for mockexam."""

from mockexam.core.models.enums import CompletionReason, IssueSeverity, QuizMode
from mockexam.core.models.history import History, HistoryRecord
from mockexam.core.models.question import ALL, Question, QuestionBank, QuestionBankDocument
from mockexam.core.models.session import ScoreResult, Session, StoredState

__all__ = [
    "ALL",
    "CompletionReason",
    "History",
    "HistoryRecord",
    "IssueSeverity",
    "Question",
    "QuestionBank",
    "QuestionBankDocument",
    "QuizMode",
    "ScoreResult",
    "Session",
    "StoredState",
]
