from __future__ import annotations

from mockexam.core.config import ExamConfig
from mockexam.core.models.enums import QuizMode
from mockexam.core.models.history import (
    DomainPerformance,
    GroupScore,
    History,
    HistoryRecord,
    QuestionResult,
    TrendPoint,
    WeakArea,
)
from mockexam.core.models.question import QuestionBank
from mockexam.core.models.session import Session
from mockexam.core.scoring import compute_score, is_correct, round_half_up


def group_scores(
    session: Session, bank: QuestionBank
) -> tuple[dict[str, GroupScore], dict[str, GroupScore]]:
    """Per-domain and per-section correct/total counts for a session."""
    by_domain: dict[str, GroupScore] = {}
    by_section: dict[str, GroupScore] = {}
    for question_id in session.question_ids:
        question = bank.get(question_id)
        if question is None:
            continue
        correct = is_correct(question, session.answers.get(question_id))
        for key, groups in ((question.domain_id, by_domain), (question.section, by_section)):
            score = groups.setdefault(key, GroupScore())
            score.total += 1
            if correct:
                score.correct += 1
    return by_domain, by_section


def build_record(
    session: Session, bank: QuestionBank, config: ExamConfig, completed_at_ms: int
) -> HistoryRecord:
    score = compute_score(session, bank, config)
    started_at = session.started_at_ms or session.created_at_ms
    domain_scores, section_scores = group_scores(session, bank)
    question_results = []
    for question_id in session.question_ids:
        question = bank.get(question_id)
        if question is None:
            continue
        selection = session.answers.get(question_id)
        question_results.append(
            QuestionResult(
                question_id=question_id,
                correct=is_correct(question, selection),
                answered=selection is not None,
            )
        )
    return HistoryRecord(
        session_id=f"{session.mode.value}-{started_at}",
        mode=session.mode,
        domain_id=session.domain_id,
        section=session.section,
        started_at=started_at,
        completed_at=completed_at_ms,
        duration_seconds=max(0, (completed_at_ms - started_at) // 1000),
        total_questions=score.total_questions,
        answered_total=score.answered_total,
        correct_total=score.correct_total,
        points=score.points,
        passed=score.passed,
        domain_scores=domain_scores,
        section_scores=section_scores,
        question_results=question_results,
    )


def append_record(history: History, record: HistoryRecord, max_sessions: int) -> bool:
    """Append unless already recorded, keeping only the newest ``max_sessions``."""
    if any(existing.session_id == record.session_id for existing in history.sessions):
        return False
    history.sessions.append(record)
    if len(history.sessions) > max_sessions:
        history.sessions = history.sessions[-max_sessions:]
    return True


def analyze_weak_areas(history: History, limit: int = 10) -> list[WeakArea]:
    """Questions answered wrong at least once, most-missed first."""
    attempts: dict[str, int] = {}
    misses: dict[str, int] = {}
    for record in history.sessions:
        for result in record.question_results:
            attempts.setdefault(result.question_id, 0)
            misses.setdefault(result.question_id, 0)
            if result.answered:
                attempts[result.question_id] += 1
                if not result.correct:
                    misses[result.question_id] += 1
    weak = [
        WeakArea(question_id=question_id, attempts=count, miss_count=misses[question_id])
        for question_id, count in attempts.items()
        if count > 0 and misses[question_id] > 0
    ]
    weak.sort(key=lambda area: (-area.miss_count, -area.miss_rate))
    return weak[:limit]


def score_trend(history: History, mode: QuizMode | None = None) -> list[TrendPoint]:
    records = history.sessions
    if mode is not None:
        records = [record for record in records if record.mode == mode]
    points = [
        TrendPoint(
            date=record.completed_at,
            score=record.points,
            passed=record.passed,
            mode=record.mode,
        )
        for record in records
    ]
    points.sort(key=lambda point: point.date)
    return points


def domain_performance(history: History, bank: QuestionBank) -> list[DomainPerformance]:
    totals: dict[str, GroupScore] = {}
    for record in history.sessions:
        for domain_id, score in record.domain_scores.items():
            aggregate = totals.setdefault(domain_id, GroupScore())
            aggregate.correct += score.correct
            aggregate.total += score.total
    performance = []
    for domain_id, score in totals.items():
        percentage = round_half_up(score.correct / score.total * 1000) / 10 if score.total else 0.0
        performance.append(
            DomainPerformance(
                domain_id=domain_id,
                name=bank.domain_name(domain_id),
                correct=score.correct,
                total=score.total,
                percentage=percentage,
            )
        )
    return performance
