from __future__ import annotations

import attrs

from mockexam.core.models.enums import QuizMode
from mockexam.core.models.question import ALL
from mockexam.core.models.session import Session
from mockexam.core.utils import normalize_mode, session_key_for


@attrs.frozen(slots=True)
class SessionFilters:
    """User-selected filters; timed mode always covers the whole bank."""

    mode: QuizMode = QuizMode.REVIEW
    domain_id: str = ALL
    section: str = ALL

    @classmethod
    def create(cls, mode: object, domain_id: str = ALL, section: str = ALL) -> SessionFilters:
        normalized = normalize_mode(mode)
        if normalized == QuizMode.TIMED:
            return cls(mode=normalized, domain_id=ALL, section=ALL)
        return cls(mode=normalized, domain_id=domain_id or ALL, section=section or ALL)

    @property
    def session_key(self) -> str:
        return session_key_for(self.mode, self.domain_id, self.section)


@attrs.frozen(slots=True)
class PauseState:
    """Process-local pause marker. Never persisted with the session.

    ``frozen_time`` is the remaining-seconds snapshot shown while paused.
    """

    paused_at_ms: int
    frozen_time: int


def remaining_seconds(session: Session, now_ms: int, pause: PauseState | None = None) -> int | None:
    """Seconds left on a timed session, recomputed from absolute timestamps.

    Returns None for sessions without a countdown. May be negative once the
    deadline has passed.
    """
    if session.started_at_ms is None or session.duration_sec is None:
        return None
    if pause is not None:
        return pause.frozen_time
    elapsed = (now_ms - session.started_at_ms) // 1000
    return session.duration_sec - elapsed


def pause_session(session: Session, now_ms: int) -> PauseState | None:
    frozen = remaining_seconds(session, now_ms)
    if frozen is None:
        return None
    return PauseState(paused_at_ms=now_ms, frozen_time=frozen)


def resume_session(session: Session, pause: PauseState, now_ms: int) -> int:
    """Shift the start anchor past the paused interval; returns the pause length in ms."""
    paused_for = max(0, now_ms - pause.paused_at_ms)
    if session.started_at_ms is not None:
        session.started_at_ms += paused_for
    return paused_for
