from __future__ import annotations

from pathlib import Path
from typing import Any

import msgspec
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from mockexam.core.models.question import QuestionBank, QuestionBankDocument
from mockexam.core.validator import ValidationIssue, validate_payload

_YAML_SUFFIXES = {".yaml", ".yml"}
_JSON_SUFFIXES = {".json"}


class QuestionBankLoader:
    """Loads a question bank from a JSON array or a YAML list of questions."""

    def __init__(self) -> None:
        self._yaml = YAML(typ="safe")

    def _parse(self, path: Path) -> Any:
        suffix = path.suffix.lower()
        data = path.read_bytes()
        if suffix in _JSON_SUFFIXES:
            try:
                return msgspec.json.decode(data)
            except msgspec.DecodeError as exc:
                raise ValueError(f"Invalid JSON: {exc}") from exc
        if suffix in _YAML_SUFFIXES:
            try:
                return self._yaml.load(data.decode("utf-8"))
            except (YAMLError, UnicodeDecodeError) as exc:
                raise ValueError(f"Invalid YAML: {exc}") from exc
        raise ValueError("Question bank must be a .json, .yaml or .yml file.")

    def _validate_raw(self, raw: Any) -> list[ValidationIssue]:
        issues = validate_payload(raw)
        if issues:
            return issues
        try:
            QuestionBankDocument.from_raw(raw)
        except ValidationError as exc:
            for error in exc.errors():
                path_str = ".".join(str(part) for part in error.get("loc", ()))
                issues.append(ValidationIssue(path=path_str, message=error.get("msg", "")))
        return issues

    def validate(self, path: Path) -> list[ValidationIssue]:
        return self._validate_raw(self._parse(path))

    def load(self, path: Path) -> QuestionBank:
        raw = self._parse(path)
        issues = self._validate_raw(raw)
        if issues:
            formatted = "; ".join(f"{issue.path}: {issue.message}" for issue in issues)
            raise ValueError(f"Question bank validation failed: {formatted}")
        return QuestionBank.from_document(QuestionBankDocument.from_raw(raw))
