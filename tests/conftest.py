from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import msgspec
import pytest

from mockexam.adapters.storage.history_store import HistoryStore
from mockexam.adapters.storage.kv_store import MemoryKeyValueStore
from mockexam.adapters.storage.session_store import SessionStore
from mockexam.core.config import ExamConfig
from mockexam.core.engine import QuizEngine
from mockexam.core.models.question import QuestionBank, QuestionBankDocument

DOMAINS = [
    ("secure", "Design Secure Architectures", ["1.1", "1.2"]),
    ("resilient", "Design Resilient Architectures", ["2.1", "2.2"]),
    ("performant", "Design High-Performing Architectures", ["3.1"]),
    ("cost", "Design Cost-Optimized Architectures", ["4.1"]),
]

START_MS = 1_735_142_400_000


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Automatically add markers based on test location.

    - tests/unit/ -> @pytest.mark.unit
    - tests/integration/ -> @pytest.mark.integration
    - tests/e2e/ -> @pytest.mark.e2e
    """
    for item in items:
        path = str(item.fspath)
        existing_markers = {m.name for m in item.iter_markers()}

        if "/unit/" in path and "unit" not in existing_markers:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path and "integration" not in existing_markers:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in path and "e2e" not in existing_markers:
            item.add_marker(pytest.mark.e2e)


def build_question(
    index: int, domain_id: str, domain: str, section: str, multi: bool = False
) -> dict[str, object]:
    answer: int | list[int] = [0, 2] if multi else index % 4
    correct = set(answer) if isinstance(answer, list) else {answer}
    explanations = {}
    for choice in range(4):
        if choice in correct:
            explanations[str(choice)] = (
                f"✅ Option {choice} is correct because it provides the required behavior."
            )
        else:
            explanations[str(choice)] = f"❌ Option {choice} does not meet the requirement."
    return {
        "id": f"q-{index:03d}",
        "domainId": domain_id,
        "domain": domain,
        "section": section,
        "question": f"Question {index}?",
        "choices": [f"Choice {index}-{choice}" for choice in range(4)],
        "answer": answer,
        "explanation": f"Explanation for question {index}.",
        "choiceExplanations": explanations,
    }


def build_bank_data(count: int = 70) -> list[dict[str, object]]:
    slots = [
        (domain_id, name, section)
        for domain_id, name, sections in DOMAINS
        for section in sections
    ]
    questions = []
    for index in range(count):
        domain_id, name, section = slots[index % len(slots)]
        questions.append(build_question(index, domain_id, name, section, multi=index % 10 == 9))
    return questions


class FakeClock:
    """Millisecond clock the tests move by hand."""

    def __init__(self, start_ms: int = START_MS) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


@pytest.fixture
def question_factory() -> Callable[..., dict[str, object]]:
    return build_question


@pytest.fixture
def bank_data() -> list[dict[str, object]]:
    return build_bank_data()


@pytest.fixture
def question_bank(bank_data) -> QuestionBank:
    return QuestionBank.from_document(QuestionBankDocument.from_raw(bank_data))


@pytest.fixture
def small_bank() -> QuestionBank:
    return QuestionBank.from_document(QuestionBankDocument.from_raw(build_bank_data(20)))


@pytest.fixture
def bank_file(tmp_path: Path, bank_data) -> Path:
    path = tmp_path / "questions.json"
    path.write_bytes(msgspec.json.encode(bank_data))
    return path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> ExamConfig:
    return ExamConfig()


@pytest.fixture
def memory_kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def session_store(memory_kv, config) -> SessionStore:
    return SessionStore(memory_kv, config)


@pytest.fixture
def history_store(memory_kv, config) -> HistoryStore:
    return HistoryStore(memory_kv, max_sessions=config.max_history_sessions)


@pytest.fixture
def make_engine(
    question_bank, session_store, history_store, config, clock
) -> Callable[..., QuizEngine]:
    def _create(bank: QuestionBank | None = None, **overrides) -> QuizEngine:
        options = {
            "storage": session_store,
            "history": history_store,
            "config": config,
            "clock": clock,
        }
        options.update(overrides)
        return QuizEngine(bank or question_bank, **options)

    return _create
