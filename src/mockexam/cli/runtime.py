from __future__ import annotations

from pathlib import Path

import attrs
import structlog
import typer
from rich.console import Console

from mockexam.adapters.loaders.bank_loader import QuestionBankLoader
from mockexam.adapters.storage.history_store import HistoryStore
from mockexam.adapters.storage.kv_store import FileKeyValueStore
from mockexam.adapters.storage.session_store import SessionStore
from mockexam.core.config import ExamConfig, default_data_dir, load_config
from mockexam.core.engine import QuizEngine
from mockexam.core.models.question import QuestionBank

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@attrs.frozen(slots=True)
class AppContext:
    """Options shared by every command, collected by the app callback."""

    data_dir: Path | None = None
    config_path: Path | None = None
    verbose: bool = False

    def resolved_data_dir(self) -> Path:
        return self.data_dir or default_data_dir()


def get_app_context(ctx: typer.Context) -> AppContext:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, AppContext) else AppContext()


def load_config_or_exit(app_ctx: AppContext, console: Console) -> ExamConfig:
    try:
        return load_config(app_ctx.config_path)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


def load_bank_or_exit(bank_path: Path, console: Console) -> QuestionBank:
    loader = QuestionBankLoader()
    try:
        bank = loader.load(bank_path)
    except (OSError, ValueError) as exc:
        log.error("bank_load_failed", path=str(bank_path), error=str(exc))
        console.print(f"[red]Failed to load question bank: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    log.debug("bank_loaded", path=str(bank_path), questions=len(bank))
    return bank


def open_stores(
    app_ctx: AppContext, config: ExamConfig, console: Console
) -> tuple[FileKeyValueStore, SessionStore, HistoryStore]:
    try:
        kv = FileKeyValueStore(app_ctx.resolved_data_dir())
    except OSError as exc:
        console.print(f"[red]Data directory is not usable: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    return (
        kv,
        SessionStore(kv, config),
        HistoryStore(kv, max_sessions=config.max_history_sessions),
    )


def build_engine(app_ctx: AppContext, bank_path: Path, console: Console) -> QuizEngine:
    config = load_config_or_exit(app_ctx, console)
    bank = load_bank_or_exit(bank_path, console)
    _, session_store, history_store = open_stores(app_ctx, config, console)
    return QuizEngine(bank=bank, storage=session_store, history=history_store, config=config)
