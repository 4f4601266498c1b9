from __future__ import annotations

import platform

from rich.console import Console

from mockexam import __version__
from mockexam.cli.runtime import AppContext, load_config_or_exit


def info_command(app_ctx: AppContext) -> None:
    console = Console()
    config = load_config_or_exit(app_ctx, console)

    console.print(f"[bold]mockexam version:[/bold] {__version__}")
    console.print(f"[bold]Python:[/bold] {platform.python_version()}")
    console.print(f"[bold]Data directory:[/bold] {app_ctx.resolved_data_dir()}")
    console.print(
        f"[bold]Timed exam:[/bold] {config.exam_total_questions} questions, "
        f"{config.exam_scored_questions} scored, {config.exam_duration_sec // 60} minutes"
    )
    console.print(
        f"[bold]Passing score:[/bold] {config.passing_score}/{config.total_points_scale}"
    )
