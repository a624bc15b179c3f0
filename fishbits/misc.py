"""Assorted helpers: engine identification, debug statistics, a fast PRNG
and small string, path and arithmetic utilities."""

from __future__ import annotations

import datetime
import math
import os
import re
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TextIO, TypeVar

T = TypeVar("T")

VERSION = "17"
PROGRAM_NAME = "Fishbits"

MAX_DEBUG_SLOTS = 32

_MASK64 = (1 << 64) - 1
_SIZE_T_MAX = _MASK64
_C_WHITESPACE = frozenset(" \t\n\v\f\r")
_ULL_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")


def engine_info(to_uci: bool = False) -> str:
    """Return the full name and version of the engine."""
    parts = [f"{PROGRAM_NAME} {VERSION}"]
    if VERSION == "dev":
        parts.append("-" + datetime.date.today().strftime("%Y%m%d") + "-nogit")
    parts.append("\nid author " if to_uci else " by ")
    parts.append(f"the {PROGRAM_NAME} developers (see AUTHORS file)")
    return "".join(parts)


class Prng:
    """xorshift64* pseudo-random number generator with a 64-bit state."""

    _MULTIPLIER = 2685821657736338717

    def __init__(self, seed: int) -> None:
        seed &= _MASK64
        if not seed:
            raise ValueError("PRNG seed must be non-zero")
        self._state = seed

    def rand64(self) -> int:
        """Advance the state and return the next 64-bit output."""
        s = self._state
        s ^= s >> 12
        s ^= (s << 25) & _MASK64
        s ^= s >> 27
        self._state = s
        return (s * self._MULTIPLIER) & _MASK64

    def rand(self, bits: int = 64) -> int:
        """Return the next output truncated to the given number of bits."""
        return self.rand64() & ((1 << bits) - 1)

    def sparse_rand(self, bits: int = 64) -> int:
        """Return a number with about one bit in eight set."""
        return (self.rand64() & self.rand64() & self.rand64()) & ((1 << bits) - 1)


def _fmt(x: float) -> str:
    return f"{x:g}"


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0 else math.nan


def _div(num: float, den: float) -> float:
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num)
    return num / den


@dataclass
class _Extremes:
    count: int = 0
    minimum: Optional[int] = None
    maximum: Optional[int] = None


@dataclass
class DebugStats:
    """Run-time statistics collected in numbered slots for debugging."""

    slots: int = MAX_DEBUG_SLOTS
    _hit: List[List[int]] = field(init=False, repr=False)
    _mean: List[List[int]] = field(init=False, repr=False)
    _stdev: List[List[int]] = field(init=False, repr=False)
    _correl: List[List[int]] = field(init=False, repr=False)
    _extremes: List[_Extremes] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._hit = [[0, 0] for _ in range(self.slots)]
        self._mean = [[0, 0] for _ in range(self.slots)]
        self._stdev = [[0, 0, 0] for _ in range(self.slots)]
        self._correl = [[0] * 6 for _ in range(self.slots)]
        self._extremes = [_Extremes() for _ in range(self.slots)]

    def _check(self, slot: int) -> None:
        if not 0 <= slot < self.slots:
            raise IndexError(f"debug slot {slot} out of range")

    def hit_on(self, cond: bool, slot: int = 0) -> None:
        self._check(slot)
        entry = self._hit[slot]
        entry[0] += 1
        if cond:
            entry[1] += 1

    def mean_of(self, value: int, slot: int = 0) -> None:
        self._check(slot)
        entry = self._mean[slot]
        entry[0] += 1
        entry[1] += value

    def stdev_of(self, value: int, slot: int = 0) -> None:
        self._check(slot)
        entry = self._stdev[slot]
        entry[0] += 1
        entry[1] += value
        entry[2] += value * value

    def extremes_of(self, value: int, slot: int = 0) -> None:
        self._check(slot)
        entry = self._extremes[slot]
        entry.count += 1
        if entry.maximum is None or value > entry.maximum:
            entry.maximum = value
        if entry.minimum is None or value < entry.minimum:
            entry.minimum = value

    def correl_of(self, value1: int, value2: int, slot: int = 0) -> None:
        self._check(slot)
        entry = self._correl[slot]
        entry[0] += 1
        entry[1] += value1
        entry[2] += value1 * value1
        entry[3] += value2
        entry[4] += value2 * value2
        entry[5] += value1 * value2

    def report(self) -> List[str]:
        """Return one line per used slot, grouped by statistic kind."""
        lines: List[str] = []

        for i, (n, hits) in enumerate(self._hit):
            if n:
                lines.append(
                    f"Hit #{i}: Total {n} Hits {hits} Hit Rate (%) {_fmt(100.0 * hits / n)}"
                )

        for i, (n, total) in enumerate(self._mean):
            if n:
                lines.append(f"Mean #{i}: Total {n} Mean {_fmt(total / n)}")

        for i, (n, s1, s2) in enumerate(self._stdev):
            if n:
                r = _sqrt(s2 / n - (s1 / n) ** 2)
                lines.append(f"Stdev #{i}: Total {n} Stdev {_fmt(r)}")

        for i, ext in enumerate(self._extremes):
            if ext.count:
                lines.append(
                    f"Extremity #{i}: Total {ext.count} Min {ext.minimum} Max {ext.maximum}"
                )

        for i, (n, x, xx, y, yy, xy) in enumerate(self._correl):
            if n:
                ex, ey = x / n, y / n
                num = xy / n - ex * ey
                den = _sqrt(xx / n - ex * ex) * _sqrt(yy / n - ey * ey)
                r = _div(num, den)
                lines.append(f"Correl. #{i}: Total {n} Coefficient {_fmt(r)}")

        return lines

    def print_report(self, stream: Optional[TextIO] = None) -> None:
        """Write the report to the given stream, standard error by default."""
        out = sys.stderr if stream is None else stream
        for line in self.report():
            out.write(line + "\n")


def now() -> int:
    """Monotonic time in milliseconds."""
    return time.monotonic_ns() // 1_000_000


def split(s: str, delimiter: str) -> List[str]:
    """Split on every occurrence of delimiter; an empty string yields no parts."""
    if not s:
        return []
    if not delimiter:
        raise ValueError("empty delimiter")
    return s.split(delimiter)


def str_to_size_t(s: str) -> int:
    """Parse a leading unsigned decimal number the way a C library would."""
    match = _ULL_PREFIX.match(s)
    if match is None:
        raise ValueError(f"invalid number: {s!r}")
    sign, digits = match.groups()
    value = int(digits)
    if value > _MASK64:
        raise ValueError(f"number out of range: {s!r}")
    if sign == "-":
        value = (-value) & _MASK64
    if value > _SIZE_T_MAX:
        raise ValueError(f"number out of range: {s!r}")
    return value


def read_file_to_string(path: str) -> Optional[bytes]:
    """Return the file's bytes, or None if it cannot be opened."""
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError:
        return None


def remove_whitespace(s: str) -> str:
    """Return s without any whitespace characters."""
    return "".join(c for c in s if c not in _C_WHITESPACE)


def is_whitespace(s: str) -> bool:
    """True if s is made only of whitespace (or is empty)."""
    return all(c in _C_WHITESPACE for c in s)


def mul_hi64(a: int, b: int) -> int:
    """High 64 bits of the 128-bit product of two 64-bit numbers."""
    return ((a & _MASK64) * (b & _MASK64)) >> 64


def get_working_directory() -> str:
    """Current working directory, or an empty string if it is unavailable."""
    try:
        return os.getcwd()
    except OSError:
        return ""


def get_binary_directory(argv0: str) -> str:
    """Directory holding the program named by argv0, with a trailing separator."""
    separator = "\\" if os.name == "nt" else "/"
    working_directory = get_working_directory()

    pos = max(argv0.rfind("\\"), argv0.rfind("/"))
    binary_directory = "." + separator if pos < 0 else argv0[: pos + 1]

    if binary_directory.startswith("." + separator):
        binary_directory = working_directory + binary_directory[1:]

    return binary_directory


def move_to_front(items: List[T], pred: Callable[[T], bool]) -> None:
    """Move the first item matching pred to the front, keeping the others in order."""
    for i, item in enumerate(items):
        if pred(item):
            items.insert(0, items.pop(i))
            return