from __future__ import annotations

import contextlib
import os
import re
import tempfile
import time
from pathlib import Path

from mockexam.core.models.enums import QuizMode

TIMED_SESSION_KEY = "timed::ALL::ALL"
_LEGACY_KEY_PREFIX = re.compile(r"^practice::", re.IGNORECASE)


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def normalize_mode(mode: object) -> QuizMode:
    """Map any stored or user-supplied mode to review/timed.

    ``"practice"`` is the legacy name of review mode and, like any unknown
    value, maps to review.
    """
    if isinstance(mode, str) and mode.strip().lower() == QuizMode.TIMED.value:
        return QuizMode.TIMED
    return QuizMode.REVIEW


def session_key_for(mode: object, domain_id: str, section: str) -> str:
    if normalize_mode(mode) == QuizMode.TIMED:
        return TIMED_SESSION_KEY
    return f"review::{domain_id}::{section}"


def migrate_session_key(key: str) -> str:
    return _LEGACY_KEY_PREFIX.sub("review::", key)


def clamp_index(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


def atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_path = tempfile.mkstemp(dir=str(path.parent))
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        Path(temp_path).replace(path)
    finally:
        if os.path.exists(temp_path):
            with contextlib.suppress(OSError):
                os.unlink(temp_path)
