from __future__ import annotations

from collections.abc import Iterable

from mockexam.core.models.question import Question, QuestionBank
from mockexam.core.models.session import Session
from mockexam.core.scoring import is_correct, selection_indices


def choice_text(question: Question, indices: Iterable[int]) -> str:
    return "; ".join(question.choices[index] for index in sorted(indices))


def answer_status(question: Question, session: Session) -> str:
    selection = session.answers.get(question.id)
    if selection is None:
        return "unanswered"
    return "correct" if is_correct(question, selection) else "incorrect"


def build_review_rows(session: Session, bank: QuestionBank) -> list[dict[str, object]]:
    """One row per question in session order.

    While a timed exam is running, correctness, answer keys, explanations and
    scored membership are left as ``None``.
    """
    rows: list[dict[str, object]] = []
    sealed = session.results_sealed
    scored_ids = session.scored_ids or set()
    for position, question_id in enumerate(session.question_ids, start=1):
        question = bank.get(question_id)
        if question is None:
            continue
        selection = session.answers.get(question_id)
        row: dict[str, object] = {
            "number": position,
            "id": question_id,
            "domain": question.domain,
            "section": question.section,
            "question": question.question,
            "answered": selection is not None,
            "your_answer": (
                choice_text(question, selection_indices(selection))
                if selection is not None
                else None
            ),
            "flagged": question_id in session.flagged_questions,
            "status": None,
            "correct_answer": None,
            "explanation": None,
            "scored": None,
        }
        if not sealed:
            row["status"] = answer_status(question, session)
            row["correct_answer"] = choice_text(question, question.correct_indices)
            row["explanation"] = question.explanation
            row["scored"] = question_id in scored_ids if session.is_timed else True
        rows.append(row)
    return rows
