from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator
from pydantic.alias_generators import to_camel

ALL = "ALL"


class QuestionResource(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str
    url: str


class Question(BaseModel):
    """A single exam question as shipped in the question bank file."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    domain_id: str
    domain: str
    section: str
    question: str
    choices: list[str] = Field(min_length=2)
    answer: int | list[int]
    explanation: str
    choice_explanations: dict[str, str] | None = None
    resources: list[QuestionResource] = Field(default_factory=list)
    related_concepts: list[str] = Field(default_factory=list)
    exam_tips: str | None = None
    difficulty: str | None = None

    @model_validator(mode="after")
    def _check_answer(self) -> Question:
        indices = [self.answer] if isinstance(self.answer, int) else list(self.answer)
        if not indices:
            raise ValueError("answer must name at least one choice")
        if len(set(indices)) != len(indices):
            raise ValueError("answer contains duplicate choice indices")
        for index in indices:
            if not 0 <= index < len(self.choices):
                raise ValueError(
                    f"answer index {index} is out of range for {len(self.choices)} choices"
                )
        return self

    @property
    def is_multi_select(self) -> bool:
        return isinstance(self.answer, list)

    @property
    def correct_indices(self) -> frozenset[int]:
        if isinstance(self.answer, int):
            return frozenset((self.answer,))
        return frozenset(self.answer)


class QuestionBankDocument(RootModel[list[Question]]):
    @model_validator(mode="after")
    def _check_unique_ids(self) -> QuestionBankDocument:
        seen: set[str] = set()
        for question in self.root:
            if question.id in seen:
                raise ValueError(f"duplicate question id: {question.id}")
            seen.add(question.id)
        return self

    @classmethod
    def from_raw(cls, raw: Any) -> QuestionBankDocument:
        return cls.model_validate(raw)


class QuestionBank:
    """Read-only view over the ordered question list with id lookup."""

    def __init__(self, questions: Sequence[Question]) -> None:
        self._questions = tuple(questions)
        self._by_id = {question.id: question for question in self._questions}
        if len(self._by_id) != len(self._questions):
            raise ValueError("Question ids must be unique.")

    @classmethod
    def from_document(cls, document: QuestionBankDocument) -> QuestionBank:
        return cls(document.root)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._by_id

    @property
    def ids(self) -> list[str]:
        return [question.id for question in self._questions]

    def get(self, question_id: str) -> Question | None:
        return self._by_id.get(question_id)

    def filter(self, domain_id: str = ALL, section: str = ALL) -> list[Question]:
        questions = list(self._questions)
        if domain_id != ALL:
            questions = [q for q in questions if q.domain_id == domain_id]
        if section != ALL:
            questions = [q for q in questions if q.section == section]
        return questions

    def domains(self) -> list[tuple[str, str]]:
        """Return ``(domain_id, domain)`` pairs in first-appearance order."""
        seen: dict[str, str] = {}
        for question in self._questions:
            seen.setdefault(question.domain_id, question.domain)
        return list(seen.items())

    def domain_name(self, domain_id: str) -> str:
        for question in self._questions:
            if question.domain_id == domain_id:
                return question.domain
        return domain_id

    def sections(self, domain_id: str = ALL) -> list[str]:
        seen: dict[str, None] = {}
        for question in self.filter(domain_id=domain_id):
            seen.setdefault(question.section, None)
        return list(seen)
