from __future__ import annotations

from abc import ABC, abstractmethod

from mockexam.core.config import ExamConfig
from mockexam.core.models.question import QuestionBank
from mockexam.core.models.session import StoredState


class ReporterBase(ABC):
    @property
    @abstractmethod
    def content_type(self) -> str: ...

    @property
    @abstractmethod
    def file_extension(self) -> str: ...

    @abstractmethod
    def generate(self, state: StoredState, bank: QuestionBank, config: ExamConfig) -> bytes: ...
