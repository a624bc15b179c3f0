"""History tables for move ordering and the partial sort used to order scored moves."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, MutableSequence, Tuple, Union

__all__ = [
    "BUTTERFLY_HISTORY_LIMIT",
    "CAPTURE_HISTORY_LIMIT",
    "CONTINUATION_HISTORY_LIMIT",
    "CORRECTION_HISTORY_LIMIT",
    "CORRECTION_HISTORY_SIZE",
    "PAWN_HISTORY_LIMIT",
    "PAWN_HISTORY_SIZE",
    "ScoredMove",
    "Stats",
    "apply_bonus",
    "partial_insertion_sort",
    "pawn_structure_index",
]

PAWN_HISTORY_SIZE = 512  # must be a power of 2
CORRECTION_HISTORY_SIZE = 16384  # must be a power of 2
CORRECTION_HISTORY_LIMIT = 1024

BUTTERFLY_HISTORY_LIMIT = 7183
CAPTURE_HISTORY_LIMIT = 10692
CONTINUATION_HISTORY_LIMIT = 29952
PAWN_HISTORY_LIMIT = 8192

Index = Union[int, Tuple[int, ...]]


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def apply_bonus(entry: int, bonus: int, limit: int) -> int:
    """Return entry moved by a bonus clamped to [-limit, limit], with gravity.

    The larger the entry already is, the less a bonus in the same direction
    moves it, so an entry starting within [-limit, limit] stays there.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    clamped = max(-limit, min(limit, bonus))
    return entry + clamped - _tdiv(entry * abs(clamped), limit)


def pawn_structure_index(pawn_key: int, correction: bool = False) -> int:
    """Index of a pawn structure in the pawn or correction history."""
    size = CORRECTION_HISTORY_SIZE if correction else PAWN_HISTORY_SIZE
    return pawn_key & (size - 1)


class Stats:
    """Fixed-shape table of small signed integers updated with bounded bonuses."""

    def __init__(self, shape: Iterable[int], limit: int, bits: int = 16) -> None:
        self.shape: Tuple[int, ...] = tuple(shape)
        if not self.shape or any(n <= 0 for n in self.shape):
            raise ValueError(f"invalid shape: {self.shape!r}")
        if bits <= 1:
            raise ValueError("bits must be at least 2")
        if limit < 0 or limit > (1 << (bits - 1)) - 1:
            raise ValueError(f"limit {limit} does not fit in {bits} signed bits")
        self.limit = limit
        self.bits = bits
        self._values: List[int] = [0] * math.prod(self.shape)

    def __len__(self) -> int:
        return self.shape[0]

    def _wrap(self, value: int) -> int:
        half = 1 << (self.bits - 1)
        return ((value + half) % (half << 1)) - half

    def _offset(self, index: Index) -> int:
        key = (index,) if isinstance(index, int) else tuple(index)
        if len(key) != len(self.shape):
            raise IndexError(
                f"expected {len(self.shape)} indices, got {len(key)}"
            )
        offset = 0
        for i, n in zip(key, self.shape):
            if not 0 <= i < n:
                raise IndexError(f"index {i} out of range for dimension of size {n}")
            offset = offset * n + i
        return offset

    def __getitem__(self, index: Index) -> int:
        return self._values[self._offset(index)]

    def __setitem__(self, index: Index, value: int) -> None:
        self._values[self._offset(index)] = self._wrap(value)

    def update(self, index: Index, bonus: int) -> int:
        """Apply a bonus to one entry and return its new value."""
        offset = self._offset(index)
        value = self._wrap(apply_bonus(self._values[offset], bonus, self.limit))
        self._values[offset] = value
        return value

    def fill(self, value: int) -> None:
        """Set every entry to value."""
        wrapped = self._wrap(value)
        self._values = [wrapped] * len(self._values)


@dataclass
class ScoredMove:
    """A move together with its ordering score."""

    move: int
    value: int = 0

    def __lt__(self, other: "ScoredMove") -> bool:
        return self.value < other.value


def partial_insertion_sort(moves: MutableSequence[ScoredMove], limit: int) -> None:
    """Sort in place, descending, the moves scoring at least limit to the front.

    The order of moves below the limit is left unspecified.
    """
    sorted_end = 0
    for p in range(1, len(moves)):
        if moves[p].value >= limit:
            tmp = moves[p]
            sorted_end += 1
            moves[p] = moves[sorted_end]
            q = sorted_end
            while q != 0 and moves[q - 1].value < tmp.value:
                moves[q] = moves[q - 1]
                q -= 1
            moves[q] = tmp