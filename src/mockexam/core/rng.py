"""Deterministic pseudo-randomness derived from string seeds.

Question order and scored-subset membership must come out identical after a
reload, so every draw is a pure function of a seed string. The hash and the
generator reproduce the browser implementation bit for bit (FNV-1a over
UTF-16 code units feeding Mulberry32), so sessions persisted by either
implementation stay interchangeable.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _utf16_units(value: str) -> Iterator[int]:
    data = value.encode("utf-16-le", "surrogatepass")
    for index in range(0, len(data), 2):
        yield data[index] | (data[index + 1] << 8)


def seed_from_string(value: str) -> int:
    """Hash a string to an unsigned 32-bit seed (FNV-1a)."""
    digest = _FNV_OFFSET_BASIS
    for unit in _utf16_units(value):
        digest ^= unit
        digest = (digest * _FNV_PRIME) & _MASK32
    return digest


class Mulberry32:
    """32-bit mix-and-scramble generator with a single word of state."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK32

    @property
    def state(self) -> int:
        return self._state

    def next_float(self) -> float:
        self._state = (self._state + _MULBERRY_INCREMENT) & _MASK32
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & _MASK32
        t ^= (t + (((t ^ (t >> 7)) * (t | 61)) & _MASK32)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_POW_32


def shuffle(items: Sequence[T], seed: str) -> list[T]:
    """Return a seeded Fisher-Yates permutation of ``items``.

    The input is never modified.
    """
    result = list(items)
    rng = Mulberry32(seed_from_string(seed))
    for i in range(len(result) - 1, 0, -1):
        j = int(rng.next_float() * (i + 1))
        result[i], result[j] = result[j], result[i]
    return result


def pick_subset(items: Sequence[T], count: int, seed: str) -> list[T]:
    """Return ``count`` items chosen by a seeded shuffle (all of them if fewer)."""
    if count <= 0:
        return []
    return shuffle(items, seed)[: min(count, len(items))]
