"""E2E test fixtures and utilities.

These tests exercise complete CLI workflows as a user would experience them.
Interactive prompts are replaced by scripted commands.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import msgspec
import pytest
from typer.testing import CliRunner

from mockexam.cli import runtime as runtime_module
from mockexam.cli.commands import start as start_module
from mockexam.cli.ui.prompts import Command
from mockexam.core.engine import QuizEngine

ScriptStep = Command | Callable[[], Command]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Typer CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def fixed_clock(monkeypatch: pytest.MonkeyPatch, clock):
    """Route every engine the CLI builds through the test clock."""
    monkeypatch.setattr(runtime_module, "QuizEngine", functools.partial(QuizEngine, clock=clock))
    return clock


@pytest.fixture
def script_prompts(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Replace the interactive prompts of ``start`` with a fixed script."""

    def _install(steps: Iterable[ScriptStep], confirm: bool = True, on_pause=None) -> None:
        remaining = iter(steps)

        def fake_ask(console) -> Command:
            step = next(remaining)
            return step() if callable(step) else step

        monkeypatch.setattr(start_module, "ask_command", fake_ask)
        monkeypatch.setattr(start_module, "confirm_submit", lambda console, unanswered: confirm)
        monkeypatch.setattr(
            start_module, "wait_while_paused", lambda console: on_pause() if on_pause else None
        )

    return _install


@pytest.fixture
def read_state(data_dir: Path) -> Callable[[], dict[str, Any]]:
    def _read() -> dict[str, Any]:
        return msgspec.json.decode((data_dir / "mockexam_state_v1.json").read_bytes())

    return _read


@pytest.fixture
def read_history(data_dir: Path) -> Callable[[], dict[str, Any]]:
    def _read() -> dict[str, Any]:
        return msgspec.json.decode((data_dir / "mockexam_history_v1.json").read_bytes())

    return _read
