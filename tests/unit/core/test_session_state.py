from __future__ import annotations

from mockexam.core.models.enums import QuizMode
from mockexam.core.models.session import Session
from mockexam.core.state import (
    SessionFilters,
    pause_session,
    remaining_seconds,
    resume_session,
)

T = 1_000_000


def _timed_session() -> Session:
    return Session(
        mode=QuizMode.TIMED,
        domain_id="ALL",
        section="ALL",
        seed="timed::ALL::ALL::1",
        question_ids=["a", "b"],
        started_at_ms=T,
        duration_sec=7800,
    )


def test_filters_force_all_for_timed_mode():
    filters = SessionFilters.create("timed", "secure", "1.1")
    assert filters.mode == QuizMode.TIMED
    assert filters.domain_id == "ALL"
    assert filters.section == "ALL"
    assert filters.session_key == "timed::ALL::ALL"


def test_filters_default_unknown_modes_to_review():
    filters = SessionFilters.create("practice", "secure", "")
    assert filters.mode == QuizMode.REVIEW
    assert filters.session_key == "review::secure::ALL"
    assert SessionFilters.create(None).mode == QuizMode.REVIEW


def test_remaining_seconds_uses_absolute_timestamps():
    session = _timed_session()
    assert remaining_seconds(session, T) == 7800
    assert remaining_seconds(session, T + 1_999) == 7799
    assert remaining_seconds(session, T + 7_900_000) == -100


def test_remaining_seconds_is_none_without_countdown():
    session = Session(
        mode=QuizMode.REVIEW, domain_id="ALL", section="ALL", seed="s", question_ids=[]
    )
    assert remaining_seconds(session, T) is None
    assert pause_session(session, T) is None


def test_pause_resume_excludes_paused_interval():
    session = _timed_session()
    pause = pause_session(session, T + 100_000)
    assert pause is not None
    assert pause.frozen_time == 7700
    assert remaining_seconds(session, T + 350_000, pause) == 7700

    paused_for = resume_session(session, pause, T + 400_000)
    assert paused_for == 300_000
    assert session.started_at_ms == T + 300_000
    assert remaining_seconds(session, T + 500_000) == 7600
