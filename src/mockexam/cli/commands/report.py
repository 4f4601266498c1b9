from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from mockexam.adapters.reporters.json import JsonReporter
from mockexam.adapters.reporters.markdown import MarkdownReporter
from mockexam.cli.runtime import AppContext, build_engine
from mockexam.core.utils import atomic_write_bytes

_REPORTERS: dict[str, type[JsonReporter] | type[MarkdownReporter]] = {
    "json": JsonReporter,
    "md": MarkdownReporter,
    "markdown": MarkdownReporter,
}


def report_command(
    app_ctx: AppContext,
    bank_path: Path,
    format: str,
    output_path: Path | None,
    overwrite: bool,
) -> None:
    console = Console()
    reporter_cls = _REPORTERS.get(format.lower())
    if reporter_cls is None:
        valid_formats = ", ".join(sorted(_REPORTERS.keys()))
        console.print(f"[red]Unsupported format: {format}. Use one of: {valid_formats}.[/red]")
        raise typer.Exit(code=1)

    engine = build_engine(app_ctx, bank_path, console)
    state = engine.load()
    if state is None:
        console.print("[red]No saved session to report on.[/red]")
        raise typer.Exit(code=1)
    engine.tick()
    content = reporter_cls().generate(state, engine.bank, engine.config)

    if output_path is None:
        typer.echo(content.decode("utf-8"))
        return
    if output_path.exists():
        if output_path.is_dir():
            console.print("[red]Output path is a directory.[/red]")
            raise typer.Exit(code=1)
        if not overwrite:
            console.print("[red]Output file already exists. Use --overwrite to replace.[/red]")
            raise typer.Exit(code=1)
    if not output_path.parent.exists() or not output_path.parent.is_dir():
        console.print("[red]Output directory does not exist.[/red]")
        raise typer.Exit(code=1)
    try:
        atomic_write_bytes(output_path, content)
    except OSError as exc:
        console.print(f"[red]Failed to write report: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Report written to {output_path}[/green]")
