from __future__ import annotations

from pathlib import Path

import msgspec
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mockexam.cli.runtime import load_bank_or_exit
from mockexam.core.audit import AuditSummary, ReviewSample, audit_bank, review_sample
from mockexam.core.utils import atomic_write_bytes


def _flagged_payload(summary: AuditSummary) -> list[dict[str, object]]:
    return [
        {
            "id": audit.question.id,
            "domain": audit.question.domain,
            "section": audit.question.section,
            "question": audit.question.question,
            "issues": [
                {"type": issue.kind, "severity": issue.severity.value, "message": issue.message}
                for issue in audit.issues
            ],
        }
        for audit in summary.flagged
    ]


def _render_summary(summary: AuditSummary, console: Console, limit: int) -> None:
    table = Table(title="Explanation Audit")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    table.add_row("Questions", str(summary.total))
    table.add_row("With choice explanations", str(summary.with_explanations))
    table.add_row("With issues", str(summary.with_issues))
    for kind, count in summary.by_kind.items():
        table.add_row(f"Issue: {kind}", str(count))
    for severity, count in summary.by_severity.items():
        table.add_row(f"Severity: {severity.value}", str(count))
    for difficulty, count in summary.by_difficulty.items():
        table.add_row(f"Difficulty: {escape(difficulty)}", str(count))
    console.print(table)

    for audit in summary.high_priority[:limit]:
        console.print(f"[red]{audit.question.id}[/red] {escape(audit.question.question)}")
        for issue in audit.issues:
            console.print(f"  - ({issue.severity.value}) {escape(issue.message)}")
    hidden = len(summary.high_priority) - limit
    if hidden > 0:
        console.print(f"[dim]... and {hidden} more high-priority questions[/dim]")


def _write_json(path: Path, payload: object, console: Console, what: str) -> None:
    encoded = msgspec.json.format(msgspec.json.encode(payload), indent=2)
    try:
        atomic_write_bytes(path, encoded)
    except OSError as exc:
        console.print(f"[red]Failed to write {what}: {exc}[/red]")
        raise typer.Exit(code=1) from exc


def _write_sample(sample: ReviewSample, path: Path, console: Console) -> None:
    payload = [
        question.model_dump(mode="json", by_alias=True, exclude_none=True)
        for question in sample.questions
    ]
    _write_json(path, payload, console, "review sample")
    console.print(
        f"[green]Review sample of {len(sample.questions)} questions written to {path}[/green]"
    )
    console.print(
        f"  {sample.hard} hard, {sample.medium} medium, {sample.easy} easy, "
        f"{sample.multi_answer} multi-answer"
    )


def audit_command(
    bank_path: Path, output_path: Path | None, limit: int, sample_path: Path | None = None
) -> None:
    console = Console()
    bank = load_bank_or_exit(bank_path, console)
    summary = audit_bank(bank)
    _render_summary(summary, console, limit)

    if output_path is not None:
        _write_json(output_path, _flagged_payload(summary), console, "audit results")
        console.print(f"[green]Flagged questions written to {output_path}[/green]")
    if sample_path is not None:
        _write_sample(review_sample(bank), sample_path, console)

    if summary.high_priority:
        console.print(
            f"[red]{len(summary.high_priority)} question(s) have high-severity issues.[/red]"
        )
        raise typer.Exit(code=1)
    console.print("[green]No high-severity explanation issues found.[/green]")
