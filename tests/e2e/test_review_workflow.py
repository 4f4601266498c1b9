"""E2E tests for review-mode sessions driven through the CLI."""

from __future__ import annotations

import pytest

from mockexam.cli.app import app
from mockexam.cli.ui.prompts import Command


def _start(cli_runner, data_dir, bank_file, *extra):
    return cli_runner.invoke(
        app,
        [
            "--data-dir",
            str(data_dir),
            "start",
            str(bank_file),
            "--domain",
            "secure",
            "--section",
            "1.1",
            *extra,
        ],
    )


@pytest.mark.e2e
class TestReviewWorkflow:
    def test_answer_flag_navigate_and_submit(
        self, cli_runner, data_dir, bank_file, script_prompts, read_state, read_history
    ):
        script_prompts(
            [
                Command(kind="answer", choices=(0,)),
                Command(kind="flag"),
                Command(kind="next"),
                Command(kind="jump", target=5),
                Command(kind="answer", choices=(7,)),
                Command(kind="answer", choices=(1,)),
                Command(kind="back"),
                Command(kind="submit"),
            ]
        )
        result = _start(cli_runner, data_dir, bank_file)
        assert result.exit_code == 0, result.output
        assert "Started review session: 12 questions." in result.output
        assert "Invalid answer." in result.output
        assert "Exam Result" in result.output

        state = read_state()
        session = state["session"]
        assert state["sessionKey"] == "review::secure::1.1"
        assert session["completed"] is True
        assert session["completionReason"] == "submitted"
        assert session["currentIndex"] == 4
        assert len(session["answers"]) == 2
        assert session["flaggedQuestions"] == [session["questionIds"][0]]
        assert session["scoredIds"] is None

        history = read_history()
        assert len(history["sessions"]) == 1
        assert history["sessions"][0]["mode"] == "review"

    def test_quit_then_resume(self, cli_runner, data_dir, bank_file, script_prompts, read_state):
        script_prompts([Command(kind="answer", choices=(0,)), Command(kind="quit")])
        first = _start(cli_runner, data_dir, bank_file)
        assert first.exit_code == 0, first.output
        assert "Progress saved." in first.output
        seed = read_state()["session"]["seed"]

        script_prompts([Command(kind="submit")])
        second = _start(cli_runner, data_dir, bank_file)
        assert second.exit_code == 0, second.output
        assert "Resuming review::secure::1.1 (1/12 answered)" in second.output
        assert read_state()["session"]["seed"] == seed

    def test_fresh_discards_progress(
        self, cli_runner, data_dir, bank_file, script_prompts, read_state
    ):
        script_prompts([Command(kind="answer", choices=(0,)), Command(kind="quit")])
        _start(cli_runner, data_dir, bank_file)
        seed = read_state()["session"]["seed"]

        script_prompts([Command(kind="quit")])
        result = _start(cli_runner, data_dir, bank_file, "--fresh")
        assert result.exit_code == 0, result.output
        state = read_state()["session"]
        assert state["seed"] != seed
        assert state["answers"] == {}

    def test_declined_submit_keeps_session_open(
        self, cli_runner, data_dir, bank_file, script_prompts, read_state
    ):
        script_prompts([Command(kind="submit"), Command(kind="quit")], confirm=False)
        result = _start(cli_runner, data_dir, bank_file)
        assert result.exit_code == 0, result.output
        assert read_state()["session"]["completed"] is False

    def test_interrupt_saves_progress(
        self, cli_runner, data_dir, bank_file, script_prompts, read_state
    ):
        def interrupt() -> Command:
            raise KeyboardInterrupt

        script_prompts([Command(kind="answer", choices=(0,)), interrupt])
        result = _start(cli_runner, data_dir, bank_file)
        assert result.exit_code == 0, result.output
        assert "Interrupted. Session saved with 1/12 answered." in result.output
        assert len(read_state()["session"]["answers"]) == 1

    def test_report_after_completion(
        self, cli_runner, data_dir, bank_file, script_prompts, tmp_path
    ):
        script_prompts([Command(kind="answer", choices=(0,)), Command(kind="submit")])
        _start(cli_runner, data_dir, bank_file)

        markdown = cli_runner.invoke(app, ["--data-dir", str(data_dir), "report", str(bank_file)])
        assert markdown.exit_code == 0, markdown.output
        assert "# Exam results (review)" in markdown.output

        output = tmp_path / "report.json"
        args = ["--data-dir", str(data_dir), "report", str(bank_file), "-f", "json", "-o"]
        written = cli_runner.invoke(app, [*args, str(output)])
        assert written.exit_code == 0, written.output
        assert output.exists()

        again = cli_runner.invoke(app, [*args, str(output)])
        assert again.exit_code == 1
        assert "--overwrite" in again.output

        history = cli_runner.invoke(app, ["--data-dir", str(data_dir), "history", str(bank_file)])
        assert history.exit_code == 0, history.output
        assert "Session History" in history.output
        assert "Domain Performance" in history.output
