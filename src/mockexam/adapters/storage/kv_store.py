from __future__ import annotations

import re
from pathlib import Path

from mockexam.core.utils import atomic_write_bytes

_KEY_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


class FileKeyValueStore:
    """One JSON file per key under ``base_dir``; writes are atomic."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.fullmatch(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._base_dir / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def set(self, key: str, value: bytes) -> None:
        atomic_write_bytes(self._path_for(key), value)

    def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


class MemoryKeyValueStore:
    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
