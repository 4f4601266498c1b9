from __future__ import annotations

from pathlib import Path

from rich.console import Console

from mockexam.cli.runtime import AppContext, load_bank_or_exit, load_config_or_exit, open_stores
from mockexam.cli.ui.tables import (
    render_domain_performance,
    render_history,
    render_trend,
    render_weak_areas,
)
from mockexam.core.history import analyze_weak_areas, domain_performance, score_trend
from mockexam.core.utils import normalize_mode


def history_command(app_ctx: AppContext, bank_path: Path, mode: str | None, limit: int) -> None:
    console = Console()
    config = load_config_or_exit(app_ctx, console)
    bank = load_bank_or_exit(bank_path, console)
    _, _, history_store = open_stores(app_ctx, config, console)
    history = history_store.load()
    if not history.sessions:
        console.print("[yellow]No completed sessions yet.[/yellow]")
        return

    render_history(history, console)
    render_trend(score_trend(history, normalize_mode(mode) if mode else None), console)
    render_domain_performance(domain_performance(history, bank), console)
    weak = analyze_weak_areas(history, limit=limit)
    if weak:
        render_weak_areas(weak, bank, console)
