from __future__ import annotations

from pathlib import Path

from rich.console import Console

from mockexam.cli.runtime import AppContext, build_engine
from mockexam.cli.ui.tables import render_score, render_status


def status_command(app_ctx: AppContext, bank_path: Path) -> None:
    console = Console()
    engine = build_engine(app_ctx, bank_path, console)
    if engine.load() is None:
        console.print("[yellow]No saved session.[/yellow]")
        return
    if engine.tick():
        console.print("[red]Time ran out. The exam was submitted automatically.[/red]")
    render_status(engine, console)
    if engine.is_complete:
        render_score(engine.score(), engine.session, console)
