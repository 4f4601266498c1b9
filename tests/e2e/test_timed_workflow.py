"""E2E tests for timed exams: countdown, pause and automatic submission."""

from __future__ import annotations

import pytest

from mockexam.cli.app import app
from mockexam.cli.ui.prompts import Command


def _invoke(cli_runner, data_dir, bank_file, command, *extra):
    return cli_runner.invoke(
        app, ["--data-dir", str(data_dir), command, str(bank_file), *extra]
    )


@pytest.mark.e2e
class TestTimedWorkflow:
    def test_answering_advances_and_submit_scores(
        self, cli_runner, data_dir, bank_file, fixed_clock, script_prompts, read_state
    ):
        script_prompts(
            [
                Command(kind="answer", choices=(0,)),
                Command(kind="answer", choices=(1,)),
                Command(kind="submit"),
            ]
        )
        result = _invoke(cli_runner, data_dir, bank_file, "start", "--mode", "timed")
        assert result.exit_code == 0, result.output
        assert "Started timed session: 65 questions." in result.output
        assert "Time left: 02:10:00" in result.output

        session = read_state()["session"]
        assert session["currentIndex"] == 2
        assert len(session["answers"]) == 2
        assert len(session["scoredIds"]) == 50
        assert session["startedAtMs"] == fixed_clock.now
        assert session["durationSec"] == 7800

    def test_expiry_while_waiting_submits_automatically(
        self, cli_runner, data_dir, bank_file, fixed_clock, script_prompts, read_state
    ):
        def wait_too_long() -> Command:
            fixed_clock.advance(7800)
            return Command(kind="next")

        script_prompts([wait_too_long])
        result = _invoke(cli_runner, data_dir, bank_file, "start", "--mode", "timed")
        assert result.exit_code == 0, result.output
        assert "Time is up." in result.output
        session = read_state()["session"]
        assert session["completed"] is True
        assert session["completionReason"] == "time_expired"
        assert session["currentIndex"] == 0

    def test_status_expires_stale_session(
        self, cli_runner, data_dir, bank_file, fixed_clock, script_prompts, read_history
    ):
        script_prompts([Command(kind="quit")])
        _invoke(cli_runner, data_dir, bank_file, "start", "--mode", "timed")

        fixed_clock.advance(600)
        status = _invoke(cli_runner, data_dir, bank_file, "status")
        assert status.exit_code == 0, status.output
        assert "in progress" in status.output
        assert "02:00:00" in status.output

        fixed_clock.advance(8000)
        expired = _invoke(cli_runner, data_dir, bank_file, "status")
        assert expired.exit_code == 0, expired.output
        assert "Time ran out." in expired.output
        assert read_history()["sessions"][0]["mode"] == "timed"

        submit = _invoke(cli_runner, data_dir, bank_file, "submit")
        assert submit.exit_code == 0
        assert "already completed" in submit.output

    def test_pause_excludes_time_from_countdown(
        self, cli_runner, data_dir, bank_file, fixed_clock, script_prompts, read_state
    ):
        started = fixed_clock.now

        def leave_for_lunch() -> None:
            fixed_clock.advance(1800)

        def after_pause() -> Command:
            fixed_clock.advance(60)
            return Command(kind="quit")

        script_prompts([Command(kind="pause"), after_pause], on_pause=leave_for_lunch)
        result = _invoke(cli_runner, data_dir, bank_file, "start", "--mode", "timed")
        assert result.exit_code == 0, result.output
        assert read_state()["session"]["startedAtMs"] == started + 1_800_000

        status = _invoke(cli_runner, data_dir, bank_file, "status")
        assert "02:09:00" in status.output

    def test_pause_in_review_mode_is_rejected(
        self, cli_runner, data_dir, bank_file, script_prompts
    ):
        script_prompts([Command(kind="pause"), Command(kind="quit")])
        result = _invoke(cli_runner, data_dir, bank_file, "start")
        assert result.exit_code == 0, result.output
        assert "Only timed sessions can be paused." in result.output

    def test_submit_command_completes_session(
        self, cli_runner, data_dir, bank_file, fixed_clock, script_prompts, read_state
    ):
        script_prompts([Command(kind="quit")])
        _invoke(cli_runner, data_dir, bank_file, "start", "--mode", "timed")
        result = _invoke(cli_runner, data_dir, bank_file, "submit")
        assert result.exit_code == 0, result.output
        assert "FAILED" in result.output
        assert read_state()["session"]["completionReason"] == "submitted"
