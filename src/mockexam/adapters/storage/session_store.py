from __future__ import annotations

import structlog
from msgspec import DecodeError

from mockexam.adapters.storage.history_store import HISTORY_KEY
from mockexam.core.config import ExamConfig
from mockexam.core.models.session import StoredState, decode_raw, encode_state
from mockexam.core.normalize import normalize_for_runtime
from mockexam.core.protocols import KeyValueStore

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

STATE_KEY = "mockexam_state_v1"


class SessionStore:
    """Keeps the single current session under one key, overwritten on save.

    Unreadable or malformed data is logged and reported as no session.
    """

    def __init__(self, kv: KeyValueStore, config: ExamConfig | None = None) -> None:
        self._kv = kv
        self._config = config or ExamConfig()

    def load_state(self) -> StoredState | None:
        try:
            data = self._kv.get(STATE_KEY)
        except OSError as exc:
            log.error("state_load_failed", error=str(exc))
            return None
        if not data:
            log.debug("state_missing")
            return None
        try:
            raw = decode_raw(data)
        except (DecodeError, ValueError) as exc:
            log.warning("state_corrupt", error=str(exc))
            return None
        return normalize_for_runtime(raw, self._config.exam_scored_questions)

    def save_state(self, state: StoredState) -> None:
        self._kv.set(STATE_KEY, encode_state(state))

    def clear_state(self) -> None:
        self._kv.remove(STATE_KEY)
        log.info("state_cleared")

    def clear_all(self) -> None:
        self._kv.remove(STATE_KEY)
        self._kv.remove(HISTORY_KEY)
        log.info("all_data_cleared")
