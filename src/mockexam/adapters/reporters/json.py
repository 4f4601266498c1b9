from __future__ import annotations

import msgspec

from mockexam.adapters.reporters.base import ReporterBase
from mockexam.adapters.reporters.utils import build_review_rows
from mockexam.core.config import ExamConfig
from mockexam.core.history import group_scores
from mockexam.core.models.question import QuestionBank
from mockexam.core.models.session import StoredState
from mockexam.core.scoring import compute_score


class JsonReporter(ReporterBase):
    content_type = "application/json"
    file_extension = "json"

    def __init__(self) -> None:
        self._encoder = msgspec.json.Encoder(order="deterministic")

    def generate(self, state: StoredState, bank: QuestionBank, config: ExamConfig) -> bytes:
        session = state.session
        session_data = msgspec.to_builtins(session, order="deterministic")
        payload: dict[str, object] = {
            "sessionKey": state.session_key,
            "session": session_data,
            "score": None,
            "domainScores": {},
            "sectionScores": {},
            "questions": build_review_rows(session, bank),
        }
        if session.results_sealed:
            session_data.pop("scoredIds", None)
        else:
            domain_scores, section_scores = group_scores(session, bank)
            payload["score"] = compute_score(session, bank, config)
            payload["domainScores"] = domain_scores
            payload["sectionScores"] = section_scores
        return self._encoder.encode(payload)
