from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mockexam.core.engine import QuizEngine
from mockexam.core.models.history import DomainPerformance, History, TrendPoint, WeakArea
from mockexam.core.models.question import Question, QuestionBank
from mockexam.core.models.session import ScoreResult, Session
from mockexam.core.scoring import is_correct, selection_indices


def format_clock(total_sec: int) -> str:
    seconds = max(0, total_sec)
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def render_timer(engine: QuizEngine, console: Console) -> None:
    remaining = engine.remaining_seconds()
    if remaining is None:
        return
    style = "yellow" if 0 < remaining < 300 else "bold"
    suffix = " (paused)" if engine.is_paused else ""
    console.print(f"[{style}]Time left: {format_clock(remaining)}{suffix}[/{style}]")


def _render_reveal(question: Question, session: Session, console: Console) -> None:
    selection = session.answers.get(question.id)
    correct_text = "; ".join(question.choices[index] for index in sorted(question.correct_indices))
    if selection is None:
        console.print("[red]Unanswered[/red]")
    elif is_correct(question, selection):
        console.print("[green]Correct[/green]")
    else:
        console.print("[red]Incorrect[/red]")
    console.print(f"Correct answer: {escape(correct_text)}")
    console.print(escape(question.explanation))
    if question.choice_explanations:
        for index in range(len(question.choices)):
            text = question.choice_explanations.get(str(index))
            if text:
                console.print(f"[dim]{index + 1}. {escape(text)}[/dim]")
    if question.exam_tips:
        console.print(f"[cyan]Exam tip:[/cyan] {escape(question.exam_tips)}")
    if question.related_concepts:
        console.print(f"[dim]Related: {', '.join(question.related_concepts)}[/dim]")
    for resource in question.resources:
        console.print(f"[dim]{resource.title}: {resource.url}[/dim]")


def render_question(engine: QuizEngine, console: Console) -> None:
    session = engine.session
    question = engine.current_question()
    total = len(session.question_ids)
    console.print()
    render_timer(engine, console)
    if question is None:
        console.print(f"[red]Question {session.current_question_id} is not in the bank.[/red]")
        return
    flag = " [yellow](flagged)[/yellow]" if engine.is_flagged(question.id) else ""
    hint = " [dim](select all that apply)[/dim]" if question.is_multi_select else ""
    console.print(
        f"[bold]Q{session.current_index + 1}/{total}[/bold] [dim]{question.section} - "
        f"{question.domain}[/dim]{flag}"
    )
    console.print(f"{escape(question.question)}{hint}")

    selection = session.answers.get(question.id)
    selected = selection_indices(selection) if selection is not None else frozenset()
    revealed = engine.is_revealed(question.id)
    for index, choice in enumerate(question.choices):
        marker = ">" if index in selected else " "
        style = ""
        if revealed and index in question.correct_indices:
            style = "green"
        elif revealed and index in selected:
            style = "red"
        line = f"{marker} {index + 1}. {escape(choice)}"
        console.print(f"[{style}]{line}[/{style}]" if style else line)
    if revealed:
        _render_reveal(question, session, console)


def render_score(score: ScoreResult, session: Session, console: Console) -> None:
    verdict = "[green]PASSED[/green]" if score.passed else "[red]FAILED[/red]"
    table = Table(title="Exam Result")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Score", f"{score.points}/{score.total_points}")
    table.add_row("Result", verdict)
    table.add_row("Answered", f"{score.answered_total}/{score.total_questions}")
    table.add_row("Correct", f"{score.correct_total}/{score.total_questions}")
    if score.correct_scored is not None:
        table.add_row("Scored correct", f"{score.correct_scored}/{len(session.scored_ids or ())}")
    console.print(table)
    if session.flagged_questions:
        numbers = [
            f"Q{session.question_ids.index(question_id) + 1}"
            for question_id in session.flagged_questions
            if question_id in session.question_ids
        ]
        console.print(f"[yellow]Flagged for review: {' '.join(numbers)}[/yellow]")


def render_status(engine: QuizEngine, console: Console) -> None:
    session = engine.session
    state = "completed" if session.completed else "in progress"
    table = Table(title="Current Session")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Session", engine.state.session_key)
    table.add_row("Mode", session.mode.value)
    table.add_row("Status", state)
    table.add_row("Question", f"{session.current_index + 1}/{len(session.question_ids)}")
    table.add_row("Answered", f"{len(session.answers)}/{len(session.question_ids)}")
    table.add_row("Flagged", str(len(session.flagged_questions)))
    remaining = engine.remaining_seconds()
    if remaining is not None and not session.completed:
        table.add_row("Time left", format_clock(remaining))
    console.print(table)


def render_history(history: History, console: Console) -> None:
    table = Table(title="Session History")
    table.add_column("Session")
    table.add_column("Mode")
    table.add_column("Questions", justify="right")
    table.add_column("Correct", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Result")
    for record in history.sessions:
        table.add_row(
            record.session_id,
            record.mode.value,
            str(record.total_questions),
            str(record.correct_total),
            str(record.points),
            "passed" if record.passed else "failed",
        )
    console.print(table)


def render_trend(points: list[TrendPoint], console: Console) -> None:
    if not points:
        return
    scores = " -> ".join(str(point.score) for point in points)
    console.print(f"[bold]Score trend:[/bold] {scores}")


def render_domain_performance(performance: list[DomainPerformance], console: Console) -> None:
    table = Table(title="Domain Performance")
    table.add_column("Domain")
    table.add_column("Correct", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("%", justify="right")
    for entry in performance:
        table.add_row(entry.name, str(entry.correct), str(entry.total), f"{entry.percentage:.1f}")
    console.print(table)


def render_weak_areas(weak: list[WeakArea], bank: QuestionBank, console: Console) -> None:
    table = Table(title="Most Missed Questions")
    table.add_column("Question")
    table.add_column("Missed", justify="right")
    table.add_column("Attempts", justify="right")
    table.add_column("Prompt")
    for area in weak:
        question = bank.get(area.question_id)
        prompt = question.question if question else "-"
        table.add_row(area.question_id, str(area.miss_count), str(area.attempts), prompt)
    console.print(table)
