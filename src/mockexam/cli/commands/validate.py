from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from mockexam.adapters.loaders.bank_loader import QuestionBankLoader


def validate_command(bank_path: Path) -> None:
    console = Console()
    loader = QuestionBankLoader()
    try:
        issues = loader.validate(bank_path)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Failed to read question bank: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    if issues:
        console.print("[red]Question bank validation failed:[/red]")
        for issue in issues:
            location = issue.path or "questions"
            console.print(f"- {location}: {issue.message}")
        raise typer.Exit(code=1)
    console.print("[green]Question bank is valid.[/green]")
