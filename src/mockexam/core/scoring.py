from __future__ import annotations

import math
from collections.abc import Iterable

from mockexam.core.config import ExamConfig
from mockexam.core.models.enums import QuizMode
from mockexam.core.models.question import Question, QuestionBank
from mockexam.core.models.session import ScoreResult, Selection, Session


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def selection_indices(selection: Selection | Iterable[int]) -> frozenset[int]:
    if isinstance(selection, int):
        return frozenset((selection,))
    return frozenset(selection)


def is_correct(question: Question, selection: Selection | None) -> bool:
    """Exact match for single-answer questions, set equality for multi-select."""
    if selection is None:
        return False
    return selection_indices(selection) == question.correct_indices


def compute_score(session: Session, bank: QuestionBank, config: ExamConfig) -> ScoreResult:
    """Score a session.

    Timed sessions count only the scored subset, at a fixed number of points
    per question. Review sessions scale correct answers across every question
    in the session, unanswered ones counting as incorrect.
    """
    answered_total = 0
    correct_total = 0
    answered_scored = 0
    correct_scored = 0
    scored_ids = session.scored_ids or set()

    for question_id in session.question_ids:
        question = bank.get(question_id)
        selection = session.answers.get(question_id)
        answered = selection is not None and question is not None
        correct = answered and question is not None and is_correct(question, selection)
        if answered:
            answered_total += 1
        if correct:
            correct_total += 1
        if session.is_timed and question_id in scored_ids:
            if answered:
                answered_scored += 1
            if correct:
                correct_scored += 1

    total_questions = len(session.question_ids)

    if session.is_timed:
        points = correct_scored * config.points_per_scored_question
        return ScoreResult(
            mode=QuizMode.TIMED,
            answered_total=answered_total,
            correct_total=correct_total,
            total_questions=total_questions,
            points=points,
            total_points=config.timed_total_points,
            passed=points >= config.passing_score,
            answered_scored=answered_scored,
            correct_scored=correct_scored,
        )

    points = 0
    if total_questions:
        points = round_half_up(correct_total / total_questions * config.total_points_scale)
    return ScoreResult(
        mode=QuizMode.REVIEW,
        answered_total=answered_total,
        correct_total=correct_total,
        total_questions=total_questions,
        points=points,
        total_points=config.total_points_scale,
        passed=points >= config.passing_score,
    )
