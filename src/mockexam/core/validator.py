from __future__ import annotations

from dataclasses import dataclass

import fastjsonschema  # type: ignore[import-untyped]
from fastjsonschema import JsonSchemaException


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str


_INDEX = {"type": "integer", "minimum": 0}

QUESTION_BANK_SCHEMA: dict[str, object] = {
    "type": "array",
    "minItems": 1,
    "items": {
        "type": "object",
        "required": [
            "id",
            "domainId",
            "domain",
            "section",
            "question",
            "choices",
            "answer",
            "explanation",
        ],
        "additionalProperties": False,
        "properties": {
            "id": {"type": "string", "minLength": 1},
            "domainId": {"type": "string"},
            "domain": {"type": "string"},
            "section": {"type": "string"},
            "question": {"type": "string"},
            "choices": {"type": "array", "minItems": 2, "items": {"type": "string"}},
            "answer": {
                "oneOf": [
                    _INDEX,
                    {"type": "array", "minItems": 1, "items": _INDEX},
                ]
            },
            "explanation": {"type": "string"},
            "choiceExplanations": {
                "type": "object",
                "additionalProperties": {"type": "string"},
            },
            "resources": {
                "type": "array",
                "items": {
                    "type": "object",
                    "required": ["title", "url"],
                    "additionalProperties": False,
                    "properties": {
                        "title": {"type": "string"},
                        "url": {"type": "string"},
                    },
                },
            },
            "relatedConcepts": {"type": "array", "items": {"type": "string"}},
            "examTips": {"type": "string"},
            "difficulty": {"type": "string"},
        },
    },
}

_validator = fastjsonschema.compile(QUESTION_BANK_SCHEMA)


def validate_payload(payload: object) -> list[ValidationIssue]:
    try:
        _validator(payload)
    except JsonSchemaException as exc:
        path = ".".join(str(part) for part in exc.path) if exc.path else ""
        return [ValidationIssue(path=path, message=exc.message)]
    return []
