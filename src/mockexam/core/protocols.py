from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from mockexam.core.config import ExamConfig
from mockexam.core.models.history import History, HistoryRecord
from mockexam.core.models.question import QuestionBank
from mockexam.core.models.session import StoredState
from mockexam.core.validator import ValidationIssue


@runtime_checkable
class KeyValueStore(Protocol):
    """Synchronous, always-available key-value storage (browser localStorage shape)."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...

    def remove(self, key: str) -> None: ...


@runtime_checkable
class StateStorage(Protocol):
    """Protocol for persisting the single current session."""

    def load_state(self) -> StoredState | None: ...

    def save_state(self, state: StoredState) -> None: ...


@runtime_checkable
class HistoryStorage(Protocol):
    """Protocol for the log of completed sessions."""

    def load(self) -> History: ...

    def append(self, record: HistoryRecord) -> bool: ...


@runtime_checkable
class QuestionLoader(Protocol):
    """Protocol for loading question banks from various sources."""

    def load(self, path: Path) -> QuestionBank: ...

    def validate(self, path: Path) -> list[ValidationIssue]: ...


@runtime_checkable
class Reporter(Protocol):
    """Protocol for generating result reports from sessions."""

    def generate(self, state: StoredState, bank: QuestionBank, config: ExamConfig) -> bytes: ...

    @property
    def content_type(self) -> str: ...

    @property
    def file_extension(self) -> str: ...
