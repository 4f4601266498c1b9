from __future__ import annotations

from pathlib import Path

import structlog
import typer
from rich.console import Console

from mockexam.cli.runtime import AppContext, build_engine
from mockexam.cli.ui.prompts import Command, ask_command, confirm_submit, wait_while_paused
from mockexam.cli.ui.tables import render_question, render_score
from mockexam.core.engine import QuizEngine
from mockexam.core.errors import ConfigurationError
from mockexam.core.models.enums import CompletionReason
from mockexam.core.models.question import ALL
from mockexam.core.state import SessionFilters

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def _handle_answer(engine: QuizEngine, command: Command, console: Console) -> None:
    question = engine.current_question()
    if question is None:
        console.print("[red]This question is no longer in the bank.[/red]")
        return
    if not engine.select_answer(question.id, list(command.choices)):
        expected = "one or more choices" if question.is_multi_select else "exactly one choice"
        console.print(
            f"[red]Invalid answer. Pick {expected} between 1 and {len(question.choices)}.[/red]"
        )
        return
    session = engine.session
    if session.is_timed and session.current_index < len(session.question_ids) - 1:
        engine.step(1)


def _handle_pause(engine: QuizEngine, console: Console) -> None:
    if engine.pause() is None:
        console.print("[yellow]Only timed sessions can be paused.[/yellow]")
        return
    wait_while_paused(console)
    engine.resume()


def _dispatch(engine: QuizEngine, command: Command, console: Console) -> None:
    session = engine.session
    if command.kind == "answer":
        _handle_answer(engine, command, console)
    elif command.kind == "next":
        if session.current_index >= len(session.question_ids) - 1:
            console.print("[yellow]Last question. Use submit (s) to finish.[/yellow]")
        else:
            engine.step(1)
    elif command.kind == "back":
        engine.step(-1)
    elif command.kind == "jump" and command.target is not None:
        engine.navigate(command.target)
    elif command.kind == "flag":
        engine.toggle_flag()
    elif command.kind == "pause":
        _handle_pause(engine, console)
    elif command.kind == "submit":
        unanswered = len(session.question_ids) - len(session.answers)
        if confirm_submit(console, unanswered):
            engine.complete()
    elif command.kind == "quit":
        console.print("[yellow]Progress saved. Run start again to resume.[/yellow]")
        raise typer.Exit(0)


def start_command(
    app_ctx: AppContext,
    bank_path: Path,
    mode: str,
    domain: str,
    section: str,
    fresh: bool,
) -> None:
    console = Console()
    log.debug("start_command", bank=str(bank_path), mode=mode, fresh=fresh)
    engine = build_engine(app_ctx, bank_path, console)
    filters = SessionFilters.create(mode, domain or ALL, section or ALL)
    previous = engine.load()
    try:
        state = engine.create_session(filters, force_fresh=fresh)
    except ConfigurationError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        console.print(f"[red]Failed to save session: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    session = state.session
    total = len(session.question_ids)
    if previous is not None and previous.session.seed == session.seed:
        console.print(
            f"[yellow]Resuming {state.session_key} "
            f"({len(session.answers)}/{total} answered)[/yellow]"
        )
    else:
        console.print(f"[green]Started {session.mode.value} session: {total} questions.[/green]")

    try:
        while not engine.is_complete:
            if engine.tick():
                break
            render_question(engine, console)
            command = ask_command(console)
            if engine.tick():
                break
            _dispatch(engine, command, console)
    except (KeyboardInterrupt, EOFError):
        answered = len(engine.session.answers)
        console.print(
            f"\n[yellow]Interrupted. Session saved with {answered}/{total} answered.[/yellow]"
        )
        raise typer.Exit(0) from None

    if engine.session.completion_reason == CompletionReason.TIME_EXPIRED:
        console.print("[red]Time is up. The exam was submitted automatically.[/red]")
    render_score(engine.score(), engine.session, console)
