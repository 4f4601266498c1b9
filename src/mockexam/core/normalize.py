"""Storage-boundary repair of persisted session state.

Everything read back from the store passes through here before it becomes a
typed ``StoredState``. Legacy values are migrated, derivable fields that went
missing are rebuilt from the seed, and anything unrecoverable is reported as
"no session" rather than raised.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import msgspec
import structlog

from mockexam.core.models.enums import QuizMode
from mockexam.core.models.session import StoredState, convert_state
from mockexam.core.rng import pick_subset
from mockexam.core.utils import clamp_index, migrate_session_key, normalize_mode

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

SCORED_SEED_SUFFIX = "::scored"


def derive_scored_ids(question_ids: list[str], seed: str, scored_count: int) -> set[str]:
    return set(pick_subset(question_ids, scored_count, seed + SCORED_SEED_SUFFIX))


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_selection(value: Any) -> bool:
    if isinstance(value, list):
        return bool(value) and all(_is_index(entry) for entry in value)
    return _is_index(value)


def normalize_for_runtime(raw: Any, scored_count: int) -> StoredState | None:
    if not isinstance(raw, Mapping):
        return None
    session_key = raw.get("sessionKey")
    session = raw.get("session")
    if not isinstance(session_key, str) or not isinstance(session, Mapping):
        log.warning("stored_state_missing_fields")
        return None

    session = dict(session)
    mode = normalize_mode(session.get("mode"))
    if session.get("mode") != mode.value:
        log.info("session_mode_migrated", stored=session.get("mode"), mode=mode.value)
    session["mode"] = mode.value
    session_key = migrate_session_key(session_key)

    question_ids = session.get("questionIds")
    seed = session.get("seed")
    if not isinstance(question_ids, list) or not isinstance(seed, str):
        log.warning("stored_session_unrecoverable", reason="missing question ids or seed")
        return None
    if not question_ids or not all(isinstance(entry, str) for entry in question_ids):
        log.warning("stored_session_unrecoverable", reason="empty or malformed question ids")
        return None

    answers = session.get("answers")
    if not isinstance(answers, Mapping):
        answers = {}
    session["answers"] = {
        question_id: selection
        for question_id, selection in answers.items()
        if isinstance(question_id, str) and _is_selection(selection)
    }
    if len(session["answers"]) != len(answers):
        log.info("stored_answers_dropped", dropped=len(answers) - len(session["answers"]))
    flagged = session.get("flaggedQuestions")
    if not isinstance(flagged, list):
        session["flaggedQuestions"] = []
    else:
        session["flaggedQuestions"] = list(dict.fromkeys(q for q in flagged if isinstance(q, str)))
    current_index = session.get("currentIndex")
    if not isinstance(current_index, int) or isinstance(current_index, bool):
        current_index = 0
    session["currentIndex"] = clamp_index(current_index, len(question_ids))

    if mode == QuizMode.TIMED:
        scored = session.get("scoredIds")
        if isinstance(scored, list) and all(isinstance(entry, str) for entry in scored):
            session["scoredIds"] = list(dict.fromkeys(scored))
        else:
            log.warning("scored_ids_rebuilt", seed=seed)
            session["scoredIds"] = sorted(derive_scored_ids(question_ids, seed, scored_count))
    else:
        session["scoredIds"] = None

    try:
        return convert_state({"sessionKey": session_key, "session": session})
    except msgspec.ValidationError as exc:
        log.warning("stored_session_invalid", error=str(exc))
        return None
