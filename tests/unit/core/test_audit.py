from __future__ import annotations

from mockexam.core.audit import NO_DIFFICULTY, audit_bank, audit_question, review_sample
from mockexam.core.models.enums import IssueSeverity
from mockexam.core.models.question import Question


def _question(question_factory, **changes) -> Question:
    data = question_factory(1, "secure", "Design Secure Architectures", "1.1")
    data.update(changes)
    return Question.model_validate(data)


def test_well_formed_explanations_have_no_issues(question_factory):
    assert audit_question(_question(question_factory)) == []


def test_missing_explanations_are_high_severity(question_factory):
    data = question_factory(1, "secure", "Secure", "1.1")
    del data["choiceExplanations"]
    issues = audit_question(Question.model_validate(data))
    assert [(issue.kind, issue.severity) for issue in issues] == [
        ("missing", IssueSeverity.HIGH)
    ]


def test_incomplete_marking_and_quality_issues(question_factory):
    question = _question(
        question_factory,
        choiceExplanations={
            "0": "❌ Option 0 does not meet the requirement.",
            "1": "Option 1 fits, it is the answer to this question.",
            "2": "❌ No.",
        },
    )
    issues = audit_question(question)
    kinds = [(issue.kind, issue.severity) for issue in issues]
    assert ("incomplete", IssueSeverity.HIGH) in kinds
    assert ("marking", IssueSeverity.MEDIUM) in kinds
    assert ("quality", IssueSeverity.LOW) in kinds
    assert ("quality", IssueSeverity.MEDIUM) in kinds
    assert any("choice 3" in issue.message for issue in issues if issue.kind == "incomplete")


def test_long_explanations_are_flagged(question_factory):
    explanations = {
        "0": "❌ " + "x" * 400,
        "1": "✅ Correct because it provides durability.",
        "2": "❌ Option 2 does not meet the requirement.",
        "3": "❌ Option 3 does not meet the requirement.",
    }
    issues = audit_question(_question(question_factory, choiceExplanations=explanations))
    assert [issue.kind for issue in issues] == ["quality"]
    assert "very long" in issues[0].message


def test_audit_bank_summarizes(question_bank, question_factory):
    data = question_factory(500, "cost", "Cost", "4.1")
    del data["choiceExplanations"]
    questions = [*question_bank, Question.model_validate(data)]
    summary = audit_bank(questions)
    assert summary.total == 71
    assert summary.with_explanations == 70
    assert summary.with_issues == 1
    assert summary.by_kind == {"missing": 1}
    assert summary.by_severity[IssueSeverity.HIGH] == 1
    assert summary.by_severity[IssueSeverity.LOW] == 0
    assert [audit.question.id for audit in summary.high_priority] == ["q-500"]


def _graded(question_factory, index: int, difficulty: str | None, multi: bool = False):
    data = question_factory(index, "secure", "Secure", "1.1", multi=multi)
    if difficulty is not None:
        data["difficulty"] = difficulty
    return Question.model_validate(data)


def test_audit_bank_counts_difficulties(question_factory):
    questions = [
        _graded(question_factory, 0, "Hard"),
        _graded(question_factory, 1, "Easy"),
        _graded(question_factory, 2, "Hard"),
        _graded(question_factory, 3, None),
    ]
    summary = audit_bank(questions)
    assert summary.by_difficulty == {"Hard": 2, "Easy": 1, NO_DIFFICULTY: 1}


def test_review_sample_takes_first_of_each_group_without_duplicates(question_factory):
    questions = [_graded(question_factory, index, "Hard") for index in range(12)]
    questions += [_graded(question_factory, 20 + index, "Medium") for index in range(6)]
    questions += [_graded(question_factory, 30, "Easy")]
    questions += [
        _graded(question_factory, 40, "Hard", multi=True),
        _graded(question_factory, 41, None, multi=True),
    ]
    questions.insert(0, _graded(question_factory, 50, "Easy", multi=True))

    sample = review_sample(questions)
    assert (sample.hard, sample.medium, sample.easy, sample.multi_answer) == (10, 5, 2, 3)
    ids = [question.id for question in sample.questions]
    assert len(ids) == len(set(ids))
    assert ids[:10] == [f"q-{index:03d}" for index in range(10)]
    assert ids[10:15] == [f"q-{20 + index:03d}" for index in range(5)]
    assert ids[15:] == ["q-050", "q-030", "q-040", "q-041"]


def test_review_sample_respects_group_sizes(question_factory):
    questions = [_graded(question_factory, index, "Hard") for index in range(4)]
    sample = review_sample(questions, hard=2, multi_answer=0)
    assert [question.id for question in sample.questions] == ["q-000", "q-001"]
