from __future__ import annotations

from typing import Any

import msgspec

from mockexam.core.models.enums import CompletionReason, QuizMode

Selection = int | list[int]


class Session(msgspec.Struct, rename="camel"):
    """Quiz session state - mutated in place by QuizEngine, persisted whole.

    Field names are stored in camelCase so the JSON matches the browser
    application's saved state. ``seed`` and ``question_ids`` never change
    after creation; ``scored_ids`` is a cache of a pure function of both and
    is rebuilt from them when the stored copy is unusable.
    """

    mode: QuizMode
    domain_id: str
    section: str
    seed: str
    question_ids: list[str]
    version: int = 1
    answers: dict[str, Selection] = msgspec.field(default_factory=dict)
    flagged_questions: list[str] = msgspec.field(default_factory=list)
    current_index: int = 0
    created_at_ms: int = 0
    completed: bool = False
    started_at_ms: int | None = None
    duration_sec: int | None = None
    scored_ids: set[str] | None = None
    completed_at_ms: int | None = None
    completion_reason: CompletionReason | None = None

    @property
    def is_timed(self) -> bool:
        return self.mode == QuizMode.TIMED

    @property
    def results_sealed(self) -> bool:
        """Timed exams keep correctness and scored ids hidden until completion."""
        return self.is_timed and not self.completed

    @property
    def current_question_id(self) -> str | None:
        if not self.question_ids:
            return None
        return self.question_ids[self.current_index]


class StoredState(msgspec.Struct, rename="camel"):
    """Envelope kept under the current-session storage key."""

    session_key: str
    session: Session


class ScoreResult(msgspec.Struct, frozen=True, rename="camel"):
    mode: QuizMode
    answered_total: int
    correct_total: int
    total_questions: int
    points: int
    total_points: int
    passed: bool
    answered_scored: int | None = None
    correct_scored: int | None = None


_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder()


def encode_state(state: StoredState) -> bytes:
    return _encoder.encode(state)


def decode_raw(data: bytes) -> Any:
    """Decode stored JSON without applying the session schema."""
    return _decoder.decode(data)


def convert_state(raw: Any) -> StoredState:
    return msgspec.convert(raw, StoredState)
