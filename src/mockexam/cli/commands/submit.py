from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from mockexam.cli.runtime import AppContext, build_engine
from mockexam.cli.ui.tables import render_score


def submit_command(app_ctx: AppContext, bank_path: Path) -> None:
    console = Console()
    engine = build_engine(app_ctx, bank_path, console)
    if engine.load() is None:
        console.print("[red]No saved session to submit.[/red]")
        raise typer.Exit(code=1)
    if engine.tick():
        console.print("[red]Time ran out. The exam was submitted automatically.[/red]")
    elif not engine.complete():
        console.print("[yellow]Session is already completed.[/yellow]")
    render_score(engine.score(), engine.session, console)
