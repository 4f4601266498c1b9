from __future__ import annotations

from mockexam.adapters.reporters.base import ReporterBase
from mockexam.adapters.reporters.utils import build_review_rows
from mockexam.core.config import ExamConfig
from mockexam.core.history import group_scores
from mockexam.core.models.question import QuestionBank
from mockexam.core.models.session import Session, StoredState
from mockexam.core.scoring import compute_score

_STATUS_LABELS = {
    "correct": "Correct",
    "incorrect": "Incorrect",
    "unanswered": "Unanswered",
}


def _escape_cell(value: str) -> str:
    escaped = value.replace("|", "\\|")
    escaped = escaped.replace("\r\n", "\n").replace("\r", "\n")
    return escaped.replace("\n", "<br>")


class MarkdownReporter(ReporterBase):
    content_type = "text/markdown"
    file_extension = "md"

    def generate(self, state: StoredState, bank: QuestionBank, config: ExamConfig) -> bytes:
        session = state.session
        status = "Completed" if session.completed else "In progress"
        lines = [
            f"# Exam results ({session.mode.value})",
            "",
            f"Session: {state.session_key}",
            f"Status: {status}",
            f"Domain: {session.domain_id}",
            f"Section: {session.section}",
            "",
            "## Score",
            "",
        ]
        if session.results_sealed:
            answered = len(session.answers)
            lines.append(f"- Answered: {answered}/{len(session.question_ids)}")
            lines.append("- Score is shown once the exam is submitted.")
        else:
            lines.extend(self._score_lines(session, bank, config))

        rows = build_review_rows(session, bank)
        flagged = [row for row in rows if row["flagged"]]
        if flagged:
            numbers = ", ".join(f"Q{row['number']}" for row in flagged)
            lines.extend(["", f"Flagged for review: {numbers}"])

        lines.extend(["", "## Review", ""])
        for row in rows:
            if row["status"] is None:
                label = "Answered" if row["answered"] else "Unanswered"
            else:
                label = _STATUS_LABELS[str(row["status"])]
            lines.append(f"### Q{row['number']} - {row['section']} - {label}")
            lines.append("")
            lines.append(str(row["question"]))
            lines.append("")
            lines.append(f"- Your answer: {row['your_answer'] or '-'}")
            if row["correct_answer"] is not None:
                lines.append(f"- Correct answer: {row['correct_answer']}")
                lines.append(f"- Explanation: {row['explanation']}")
            lines.append("")
        return "\n".join(lines).encode("utf-8")

    @staticmethod
    def _score_lines(session: Session, bank: QuestionBank, config: ExamConfig) -> list[str]:
        score = compute_score(session, bank, config)
        verdict = "PASSED" if score.passed else "FAILED"
        lines = [
            f"- Final score: {score.points}/{score.total_points} ({verdict})",
            f"- Answered: {score.answered_total}/{score.total_questions}",
            f"- Correct: {score.correct_total}/{score.total_questions}",
        ]
        if score.correct_scored is not None:
            scored_total = len(session.scored_ids or ())
            lines.append(f"- Scored questions correct: {score.correct_scored}/{scored_total}")

        domain_scores, _ = group_scores(session, bank)
        if domain_scores:
            lines.extend(["", "## Domains", ""])
            lines.extend(["| Domain | Correct | Total |", "| --- | --- | --- |"])
            for domain_id, group in domain_scores.items():
                name = _escape_cell(bank.domain_name(domain_id))
                lines.append(f"| {name} | {group.correct} | {group.total} |")
        return lines
