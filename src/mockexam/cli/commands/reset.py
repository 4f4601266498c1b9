from __future__ import annotations

import typer
from rich.console import Console

from mockexam.cli.runtime import AppContext, load_config_or_exit, open_stores


def reset_command(app_ctx: AppContext, all_data: bool) -> None:
    console = Console()
    config = load_config_or_exit(app_ctx, console)
    _, session_store, _ = open_stores(app_ctx, config, console)
    try:
        if all_data:
            session_store.clear_all()
        else:
            session_store.clear_state()
    except OSError as exc:
        console.print(f"[red]Failed to clear saved data: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    if all_data:
        console.print("[green]Cleared the saved session and history.[/green]")
    else:
        console.print("[green]Cleared the saved session.[/green]")
