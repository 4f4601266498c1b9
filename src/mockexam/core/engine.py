from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog

from mockexam.core.config import ExamConfig
from mockexam.core.errors import ConfigurationError
from mockexam.core.history import build_record
from mockexam.core.models.enums import CompletionReason, QuizMode
from mockexam.core.models.question import Question, QuestionBank
from mockexam.core.models.session import ScoreResult, Selection, Session, StoredState
from mockexam.core.normalize import derive_scored_ids
from mockexam.core.protocols import HistoryStorage, StateStorage
from mockexam.core.rng import pick_subset, shuffle
from mockexam.core.scoring import compute_score
from mockexam.core.state import (
    PauseState,
    SessionFilters,
    pause_session,
    remaining_seconds,
    resume_session,
)
from mockexam.core.utils import clamp_index, now_ms

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TIMED_SELECTION_SUFFIX = "::timedSelection"
REVIEW_SELECTION_SUFFIX = "::reviewSelection"


def _selection_for(question: Question, choice: int | Iterable[int]) -> Selection | None:
    """Normalize a user choice, or None when it names an invalid index."""
    if isinstance(choice, bool):
        return None
    if isinstance(choice, int):
        indices = [choice]
    else:
        indices = sorted(set(choice))
        if not indices or any(isinstance(index, bool) for index in indices):
            return None
    if any(not 0 <= index < len(question.choices) for index in indices):
        return None
    if question.is_multi_select:
        return indices
    if len(indices) != 1:
        return None
    return indices[0]


class QuizEngine:
    """Owns the current quiz session and every transition applied to it.

    Each effective mutation is persisted immediately through the state
    storage. Mutations that cannot apply (completed session, unknown
    question, out-of-range choice, active pause) return False and leave the
    session untouched. Pause state lives on the engine instance only.
    """

    def __init__(
        self,
        bank: QuestionBank,
        storage: StateStorage,
        history: HistoryStorage | None = None,
        config: ExamConfig | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._bank = bank
        self._storage = storage
        self._history = history
        self._config = config or ExamConfig()
        self._clock = clock
        self._state: StoredState | None = None
        self._pause: PauseState | None = None

    @property
    def bank(self) -> QuestionBank:
        return self._bank

    @property
    def config(self) -> ExamConfig:
        return self._config

    @property
    def state(self) -> StoredState:
        if self._state is None:
            raise RuntimeError("No active session.")
        return self._state

    @property
    def has_session(self) -> bool:
        return self._state is not None

    @property
    def session(self) -> Session:
        return self.state.session

    @property
    def pause_state(self) -> PauseState | None:
        return self._pause

    @property
    def is_paused(self) -> bool:
        return self._pause is not None

    @property
    def is_complete(self) -> bool:
        return self.session.completed

    def load(self) -> StoredState | None:
        """Adopt whatever session the storage holds, completed or not."""
        self._state = self._storage.load_state()
        self._pause = None
        if self._state is not None:
            log.debug(
                "session_loaded",
                session_key=self._state.session_key,
                completed=self._state.session.completed,
            )
        return self._state

    def create_session(self, filters: SessionFilters, force_fresh: bool = False) -> StoredState:
        filters = SessionFilters.create(filters.mode, filters.domain_id, filters.section)
        key = filters.session_key
        existing = self._storage.load_state()

        if (
            not force_fresh
            and existing is not None
            and existing.session_key == key
            and not existing.session.completed
        ):
            self._state = existing
            self._pause = None
            log.info(
                "session_resumed",
                session_key=key,
                answered=len(existing.session.answers),
                total=len(existing.session.question_ids),
            )
            return existing

        created_at = self._clock()
        seed_ms = created_at
        seed = f"{key}::{seed_ms}"
        while existing is not None and existing.session.seed == seed:
            seed_ms += 1
            seed = f"{key}::{seed_ms}"

        if filters.mode == QuizMode.TIMED:
            pool = self._bank.ids
            exam_size = self._config.exam_total_questions
            if len(pool) < exam_size:
                raise ConfigurationError(
                    f"Timed mode requires at least {exam_size} questions (currently: {len(pool)})."
                )
            if len(pool) > exam_size:
                pool = pick_subset(pool, exam_size, seed + TIMED_SELECTION_SUFFIX)
        else:
            pool = [q.id for q in self._bank.filter(filters.domain_id, filters.section)]
            limit = self._config.review_max_questions
            if len(pool) > limit:
                pool = pick_subset(pool, limit, seed + REVIEW_SELECTION_SUFFIX)

        if not pool:
            raise ConfigurationError("No questions match your filters.")
        question_ids = shuffle(pool, seed)

        session = Session(
            mode=filters.mode,
            domain_id=filters.domain_id,
            section=filters.section,
            seed=seed,
            question_ids=question_ids,
            created_at_ms=created_at,
        )
        if filters.mode == QuizMode.TIMED:
            session.started_at_ms = created_at
            session.duration_sec = self._config.exam_duration_sec
            session.scored_ids = derive_scored_ids(
                question_ids, seed, self._config.exam_scored_questions
            )

        self._state = StoredState(session_key=key, session=session)
        self._pause = None
        self.save()
        log.info(
            "session_created",
            session_key=key,
            mode=filters.mode.value,
            total_questions=len(question_ids),
            forced=force_fresh,
        )
        return self._state

    def save(self) -> None:
        self._storage.save_state(self.state)
        log.debug("session_saved", session_key=self.state.session_key)

    def current_question(self) -> Question | None:
        question_id = self.session.current_question_id
        if question_id is None:
            return None
        return self._bank.get(question_id)

    def question_at(self, index: int) -> Question | None:
        ids = self.session.question_ids
        if not 0 <= index < len(ids):
            return None
        return self._bank.get(ids[index])

    def is_answered(self, question_id: str) -> bool:
        return question_id in self.session.answers

    def is_flagged(self, question_id: str) -> bool:
        return question_id in self.session.flagged_questions

    def is_revealed(self, question_id: str) -> bool:
        """Review mode reveals once answered; timed mode only after completion."""
        if self.session.is_timed:
            return self.session.completed
        return self.is_answered(question_id)

    def remaining_seconds(self) -> int | None:
        return remaining_seconds(self.session, self._clock(), self._pause)

    def _can_mutate(self) -> bool:
        return self._state is not None and not self.session.completed and self._pause is None

    def select_answer(self, question_id: str, choice: int | Iterable[int]) -> bool:
        if not self._can_mutate() or question_id not in self.session.question_ids:
            return False
        question = self._bank.get(question_id)
        if question is None:
            return False
        selection = _selection_for(question, choice)
        if selection is None:
            log.debug("answer_rejected", question_id=question_id, choice=str(choice))
            return False
        self.session.answers[question_id] = selection
        self.save()
        log.debug("answer_selected", question_id=question_id, choice=selection)
        return True

    def toggle_flag(self, question_id: str | None = None) -> bool:
        if not self._can_mutate():
            return False
        if question_id is None:
            question_id = self.session.current_question_id
        if question_id is None or question_id not in self.session.question_ids:
            return False
        flagged = self.session.flagged_questions
        if question_id in flagged:
            flagged.remove(question_id)
            log.debug("question_unflagged", question_id=question_id)
        else:
            flagged.append(question_id)
            log.debug("question_flagged", question_id=question_id)
        self.save()
        return True

    def navigate(self, index: int) -> int:
        session = self.session
        target = clamp_index(index, len(session.question_ids))
        if target != session.current_index:
            session.current_index = target
            self.save()
        return target

    def step(self, delta: int) -> int:
        return self.navigate(self.session.current_index + delta)

    def pause(self) -> PauseState | None:
        session = self.session
        if not session.is_timed or session.completed or self._pause is not None:
            return None
        self._pause = pause_session(session, self._clock())
        if self._pause is not None:
            log.info("session_paused", frozen_time=self._pause.frozen_time)
        return self._pause

    def resume(self) -> bool:
        if self._pause is None:
            return False
        paused_for = resume_session(self.session, self._pause, self._clock())
        self._pause = None
        self.save()
        log.info("session_unpaused", paused_seconds=paused_for // 1000)
        return True

    def toggle_pause(self) -> bool:
        """Pause or resume; returns True when the session is paused afterwards."""
        if self._pause is not None:
            self.resume()
            return False
        return self.pause() is not None

    def complete(self, reason: CompletionReason = CompletionReason.SUBMITTED) -> bool:
        session = self.session
        if session.completed:
            return False
        completed_at = self._clock()
        session.completed = True
        session.completed_at_ms = completed_at
        session.completion_reason = reason
        self._pause = None
        self.save()
        score = self.score()
        log.info(
            "session_completed",
            session_key=self.state.session_key,
            reason=reason.value,
            points=score.points,
            total_points=score.total_points,
            passed=score.passed,
        )
        if self._history is not None:
            record = build_record(session, self._bank, self._config, completed_at)
            if self._history.append(record):
                log.debug("history_recorded", record_id=record.session_id)
        return True

    def tick(self) -> bool:
        """Complete the session if its countdown has run out.

        Safe to call at any cadence; returns True only on the call that
        performed the transition.
        """
        if self._state is None or self.session.completed or not self.session.is_timed:
            return False
        remaining = self.remaining_seconds()
        if remaining is None or remaining > 0:
            return False
        return self.complete(CompletionReason.TIME_EXPIRED)

    def score(self) -> ScoreResult:
        return compute_score(self.session, self._bank, self._config)
