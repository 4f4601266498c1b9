"""CLI app with deferred heavy imports."""

from pathlib import Path

import typer

app = typer.Typer(
    name="mockexam",
    help="mockexam - Practice certification exams in the terminal",
    no_args_is_help=True,
    add_completion=False,
)

BANK_ARGUMENT = typer.Argument(..., exists=True, readable=True, help="Question bank file")


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Path | None = typer.Option(
        None, "--data-dir", help="Override the directory holding session data"
    ),
    config: Path | None = typer.Option(
        None, "--config", exists=True, readable=True, help="Exam settings YAML file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    from mockexam.cli.runtime import AppContext
    from mockexam.logging import configure_logging

    configure_logging(verbose=verbose)
    ctx.obj = AppContext(data_dir=data_dir, config_path=config, verbose=verbose)


@app.command()
def start(
    ctx: typer.Context,
    bank: Path = BANK_ARGUMENT,
    mode: str = typer.Option("review", "--mode", "-m", help="review or timed"),
    domain: str = typer.Option("ALL", "--domain", "-d", help="Domain ID (review mode)"),
    section: str = typer.Option("ALL", "--section", "-s", help="Section name (review mode)"),
    fresh: bool = typer.Option(False, "--fresh", help="Start over instead of resuming"),
) -> None:
    from mockexam.cli.commands.start import start_command
    from mockexam.cli.runtime import get_app_context

    start_command(
        app_ctx=get_app_context(ctx),
        bank_path=bank,
        mode=mode,
        domain=domain,
        section=section,
        fresh=fresh,
    )


@app.command()
def status(ctx: typer.Context, bank: Path = BANK_ARGUMENT) -> None:
    from mockexam.cli.commands.status import status_command
    from mockexam.cli.runtime import get_app_context

    status_command(app_ctx=get_app_context(ctx), bank_path=bank)


@app.command()
def submit(ctx: typer.Context, bank: Path = BANK_ARGUMENT) -> None:
    from mockexam.cli.commands.submit import submit_command
    from mockexam.cli.runtime import get_app_context

    submit_command(app_ctx=get_app_context(ctx), bank_path=bank)


@app.command()
def report(
    ctx: typer.Context,
    bank: Path = BANK_ARGUMENT,
    format: str = typer.Option("md", "--format", "-f"),
    output: Path | None = typer.Option(None, "--output", "-o"),
    overwrite: bool = typer.Option(False, "--overwrite"),
) -> None:
    from mockexam.cli.commands.report import report_command
    from mockexam.cli.runtime import get_app_context

    report_command(
        app_ctx=get_app_context(ctx),
        bank_path=bank,
        format=format,
        output_path=output,
        overwrite=overwrite,
    )


@app.command()
def history(
    ctx: typer.Context,
    bank: Path = BANK_ARGUMENT,
    mode: str | None = typer.Option(None, "--mode", "-m", help="Only chart review or timed"),
    limit: int = typer.Option(10, "--limit", min=1, help="Most-missed questions to show"),
) -> None:
    from mockexam.cli.commands.history import history_command
    from mockexam.cli.runtime import get_app_context

    history_command(app_ctx=get_app_context(ctx), bank_path=bank, mode=mode, limit=limit)


@app.command()
def audit(
    bank: Path = BANK_ARGUMENT,
    output: Path | None = typer.Option(None, "--output", "-o", help="Write flagged questions"),
    limit: int = typer.Option(10, "--limit", min=1, help="High-priority questions to list"),
    sample: Path | None = typer.Option(
        None, "--sample", help="Write a difficulty-balanced sample for manual review"
    ),
) -> None:
    from mockexam.cli.commands.audit import audit_command

    audit_command(bank_path=bank, output_path=output, limit=limit, sample_path=sample)


@app.command()
def validate(bank: Path = BANK_ARGUMENT) -> None:
    from mockexam.cli.commands.validate import validate_command

    validate_command(bank_path=bank)


@app.command()
def domains(bank: Path = BANK_ARGUMENT) -> None:
    from mockexam.cli.commands.domains import domains_command

    domains_command(bank_path=bank)


@app.command()
def reset(
    ctx: typer.Context,
    all_data: bool = typer.Option(False, "--all", help="Also clear the session history"),
) -> None:
    from mockexam.cli.commands.reset import reset_command
    from mockexam.cli.runtime import get_app_context

    reset_command(app_ctx=get_app_context(ctx), all_data=all_data)


@app.command()
def info(ctx: typer.Context) -> None:
    from mockexam.cli.commands.info import info_command
    from mockexam.cli.runtime import get_app_context

    info_command(app_ctx=get_app_context(ctx))
