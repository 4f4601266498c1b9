"""Heuristic checks for per-choice explanations in a question bank."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

import attrs

from mockexam.core.models.enums import IssueSeverity
from mockexam.core.models.question import Question

CORRECT_MARK = "✅"
WRONG_MARK = "❌"
MIN_EXPLANATION_LENGTH = 20
MAX_EXPLANATION_LENGTH = 300
POSITIVE_WORDS = ("correct", "provides", "enables", "allows", "best", "ideal", "appropriate")
NO_DIFFICULTY = "Unspecified"


@attrs.frozen(slots=True)
class ExplanationIssue:
    kind: str
    severity: IssueSeverity
    message: str


@attrs.frozen(slots=True)
class QuestionAudit:
    question: Question
    issues: tuple[ExplanationIssue, ...]

    @property
    def has_high_severity(self) -> bool:
        return any(issue.severity == IssueSeverity.HIGH for issue in self.issues)


@attrs.frozen(slots=True)
class AuditSummary:
    total: int
    with_explanations: int
    with_issues: int
    by_kind: dict[str, int]
    by_severity: dict[IssueSeverity, int]
    by_difficulty: dict[str, int]
    flagged: tuple[QuestionAudit, ...]

    @property
    def high_priority(self) -> tuple[QuestionAudit, ...]:
        return tuple(audit for audit in self.flagged if audit.has_high_severity)


def audit_question(question: Question) -> list[ExplanationIssue]:
    explanations = question.choice_explanations
    if explanations is None:
        return [
            ExplanationIssue("missing", IssueSeverity.HIGH, "Missing choiceExplanations field")
        ]

    issues: list[ExplanationIssue] = []
    correct = question.correct_indices

    for index, choice in enumerate(question.choices):
        if not explanations.get(str(index)):
            issues.append(
                ExplanationIssue(
                    "incomplete",
                    IssueSeverity.HIGH,
                    f'Missing explanation for choice {index}: "{choice}"',
                )
            )

    for index in range(len(question.choices)):
        text = explanations.get(str(index))
        if not text:
            continue
        if index in correct and CORRECT_MARK not in text:
            issues.append(
                ExplanationIssue(
                    "marking",
                    IssueSeverity.MEDIUM,
                    f"Correct answer (choice {index}) not marked with {CORRECT_MARK}",
                )
            )
        if index not in correct and WRONG_MARK not in text:
            issues.append(
                ExplanationIssue(
                    "marking",
                    IssueSeverity.MEDIUM,
                    f"Wrong answer (choice {index}) not marked with {WRONG_MARK}",
                )
            )

    for key, text in explanations.items():
        if len(text) < MIN_EXPLANATION_LENGTH:
            issues.append(
                ExplanationIssue(
                    "quality",
                    IssueSeverity.LOW,
                    f"Explanation for choice {key} is very short ({len(text)} chars)",
                )
            )
        elif len(text) > MAX_EXPLANATION_LENGTH:
            issues.append(
                ExplanationIssue(
                    "quality",
                    IssueSeverity.LOW,
                    f"Explanation for choice {key} is very long ({len(text)} chars)",
                )
            )

    for index in sorted(correct):
        text = (explanations.get(str(index)) or "").lower()
        if not any(word in text for word in POSITIVE_WORDS):
            issues.append(
                ExplanationIssue(
                    "quality",
                    IssueSeverity.MEDIUM,
                    f"Correct answer explanation (choice {index}) should explain why it is correct",
                )
            )
    return issues


def audit_bank(questions: Iterable[Question]) -> AuditSummary:
    total = 0
    with_explanations = 0
    by_kind: Counter[str] = Counter()
    by_severity: Counter[IssueSeverity] = Counter()
    by_difficulty: Counter[str] = Counter()
    flagged: list[QuestionAudit] = []
    for question in questions:
        total += 1
        by_difficulty[question.difficulty or NO_DIFFICULTY] += 1
        if question.choice_explanations is not None:
            with_explanations += 1
        issues = audit_question(question)
        if not issues:
            continue
        flagged.append(QuestionAudit(question=question, issues=tuple(issues)))
        for issue in issues:
            by_kind[issue.kind] += 1
            by_severity[issue.severity] += 1
    return AuditSummary(
        total=total,
        with_explanations=with_explanations,
        with_issues=len(flagged),
        by_kind=dict(by_kind.most_common()),
        by_severity={severity: by_severity.get(severity, 0) for severity in IssueSeverity},
        by_difficulty=dict(by_difficulty.most_common()),
        flagged=tuple(flagged),
    )


@attrs.frozen(slots=True)
class ReviewSample:
    """Questions picked for a manual read-through of their explanations."""

    hard: int
    medium: int
    easy: int
    multi_answer: int
    questions: tuple[Question, ...]


def review_sample(
    questions: Iterable[Question],
    hard: int = 10,
    medium: int = 5,
    easy: int = 5,
    multi_answer: int = 5,
) -> ReviewSample:
    """Take the first questions of each difficulty plus some multi-answer ones.

    A question that lands in more than one group is kept once, at its first
    position.
    """
    pool = list(questions)

    def first(predicate, count: int) -> list[Question]:
        return [question for question in pool if predicate(question)][:count]

    groups = [
        first(lambda q: q.difficulty == "Hard", hard),
        first(lambda q: q.difficulty == "Medium", medium),
        first(lambda q: q.difficulty == "Easy", easy),
        first(lambda q: q.is_multi_select, multi_answer),
    ]
    unique: dict[str, Question] = {}
    for group in groups:
        for question in group:
            unique.setdefault(question.id, question)
    return ReviewSample(
        hard=len(groups[0]),
        medium=len(groups[1]),
        easy=len(groups[2]),
        multi_answer=len(groups[3]),
        questions=tuple(unique.values()),
    )
