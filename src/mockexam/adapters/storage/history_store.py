from __future__ import annotations

import msgspec
import structlog
from msgspec import DecodeError

from mockexam.core.history import append_record
from mockexam.core.models.history import History, HistoryRecord
from mockexam.core.protocols import KeyValueStore

log: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

HISTORY_KEY = "mockexam_history_v1"


class HistoryStore:
    def __init__(self, kv: KeyValueStore, max_sessions: int = 50) -> None:
        self._kv = kv
        self._max_sessions = max_sessions
        self._encoder = msgspec.json.Encoder()
        self._decoder = msgspec.json.Decoder(History)

    def load(self) -> History:
        try:
            data = self._kv.get(HISTORY_KEY)
        except OSError as exc:
            log.error("history_load_failed", error=str(exc))
            return History()
        if not data:
            return History()
        try:
            history = self._decoder.decode(data)
        except (DecodeError, ValueError, TypeError) as exc:
            log.warning("history_invalid", error=str(exc))
            return History()
        if history.version < 1:
            log.warning("history_invalid", error="unsupported version")
            return History()
        return history

    def save(self, history: History) -> None:
        self._kv.set(HISTORY_KEY, self._encoder.encode(history))

    def append(self, record: HistoryRecord) -> bool:
        """Record a completed session; returns False for an already-recorded one."""
        history = self.load()
        if not append_record(history, record, self._max_sessions):
            log.info("history_duplicate_skipped", record_id=record.session_id)
            return False
        self.save(history)
        return True
