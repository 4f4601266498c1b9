from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError


class ExamConfig(BaseModel):
    """Exam shape and scoring constants.

    Defaults mirror the AWS Solutions Architect Associate exam: 65 questions
    of which 50 are scored, 130 minutes, 20 points per scored question and a
    720/1000 passing score.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    exam_total_questions: int = Field(default=65, gt=0)
    exam_scored_questions: int = Field(default=50, gt=0)
    exam_duration_sec: int = Field(default=130 * 60, gt=0)
    review_max_questions: int = Field(default=50, gt=0)
    points_per_scored_question: int = Field(default=20, gt=0)
    passing_score: int = Field(default=720, ge=0)
    total_points_scale: int = Field(default=1000, gt=0)
    max_history_sessions: int = Field(default=50, gt=0)

    @model_validator(mode="after")
    def _check_scored_count(self) -> ExamConfig:
        if self.exam_scored_questions > self.exam_total_questions:
            raise ValueError("exam_scored_questions cannot exceed exam_total_questions")
        return self

    @property
    def timed_total_points(self) -> int:
        return self.exam_scored_questions * self.points_per_scored_question


def load_config(path: Path | None) -> ExamConfig:
    """Load exam settings from a YAML mapping, or return the defaults."""
    if path is None:
        return ExamConfig()
    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.load(handle)
    except (OSError, YAMLError) as exc:
        raise ValueError(f"Failed to read config file: {exc}") from exc
    if data is None:
        return ExamConfig()
    if not isinstance(data, dict):
        raise ValueError("Config file must be a mapping at the top level.")
    try:
        return ExamConfig.model_validate(data)
    except ValidationError as exc:
        issues = []
        for error in exc.errors():
            path_str = ".".join(str(part) for part in error.get("loc", ())) or "config"
            issues.append(f"{path_str}: {error.get('msg', '')}")
        raise ValueError(f"Invalid config: {'; '.join(issues)}") from exc


def default_data_dir() -> Path:
    env_override = os.environ.get("MOCKEXAM_DATA_DIR")
    if env_override:
        return Path(env_override)
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "mockexam"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "mockexam"
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "mockexam"
    return Path.home() / ".local" / "share" / "mockexam"
