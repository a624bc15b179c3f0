"""64-bit bitboards: square helpers, shifts, bit scans and precomputed
attack tables built with "fancy" magic bitboards."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Sequence

from fishbits.misc import Prng

MASK64 = (1 << 64) - 1
SQUARE_NB = 64
PIECE_TYPE_NB = 8
COLOR_NB = 2

FILE_A_BB = 0x0101010101010101
FILE_B_BB = FILE_A_BB << 1
FILE_C_BB = FILE_A_BB << 2
FILE_D_BB = FILE_A_BB << 3
FILE_E_BB = FILE_A_BB << 4
FILE_F_BB = FILE_A_BB << 5
FILE_G_BB = FILE_A_BB << 6
FILE_H_BB = FILE_A_BB << 7

RANK_1_BB = 0xFF
RANK_2_BB = RANK_1_BB << (8 * 1)
RANK_3_BB = RANK_1_BB << (8 * 2)
RANK_4_BB = RANK_1_BB << (8 * 3)
RANK_5_BB = RANK_1_BB << (8 * 4)
RANK_6_BB = RANK_1_BB << (8 * 5)
RANK_7_BB = RANK_1_BB << (8 * 6)
RANK_8_BB = RANK_1_BB << (8 * 7)

_SEPARATOR = "+---+---+---+---+---+---+---+---+\n"

# PRNG seeds, one per rank, that find the magics quickly on 64-bit indexing.
_MAGIC_SEEDS = (728, 10316, 55013, 32803, 12281, 15100, 16645, 255)


class Color(IntEnum):
    WHITE = 0
    BLACK = 1


class PieceType(IntEnum):
    NO_PIECE_TYPE = 0
    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class Direction(IntEnum):
    NORTH = 8
    EAST = 1
    SOUTH = -8
    WEST = -1
    NORTH_EAST = 9
    SOUTH_EAST = -7
    SOUTH_WEST = -9
    NORTH_WEST = 7


_ROOK_STEPS = ((0, 1), (0, -1), (1, 0), (-1, 0))
_BISHOP_STEPS = ((1, 1), (1, -1), (-1, -1), (-1, 1))


def _check_square(sq: int) -> None:
    if not 0 <= sq < SQUARE_NB:
        raise ValueError(f"square {sq} out of range")


def make_square(f: int, r: int) -> int:
    """Square index of file f and rank r (both 0..7)."""
    return (r << 3) + f


def file_of(sq: int) -> int:
    return sq & 7


def rank_of(sq: int) -> int:
    return sq >> 3


def square_bb(sq: int) -> int:
    """Bitboard with only the given square set."""
    _check_square(sq)
    return 1 << sq


def rank_bb(r: int) -> int:
    return RANK_1_BB << (8 * r)


def file_bb(f: int) -> int:
    return FILE_A_BB << f


def shift(b: int, direction: int) -> int:
    """Move every bit of b one step (or two, for double north/south) in a direction."""
    d = int(direction)
    if d == Direction.NORTH:
        return (b << 8) & MASK64
    if d == Direction.SOUTH:
        return b >> 8
    if d == 2 * Direction.NORTH:
        return (b << 16) & MASK64
    if d == 2 * Direction.SOUTH:
        return b >> 16
    if d == Direction.EAST:
        return ((b & ~FILE_H_BB) << 1) & MASK64
    if d == Direction.WEST:
        return (b & ~FILE_A_BB) >> 1
    if d == Direction.NORTH_EAST:
        return ((b & ~FILE_H_BB) << 9) & MASK64
    if d == Direction.NORTH_WEST:
        return ((b & ~FILE_A_BB) << 7) & MASK64
    if d == Direction.SOUTH_EAST:
        return (b & ~FILE_H_BB) >> 7
    if d == Direction.SOUTH_WEST:
        return (b & ~FILE_A_BB) >> 9
    return 0


def pawn_attacks_bb(color: Color, b: int) -> int:
    """Squares attacked by pawns of the given color standing on b."""
    if color == Color.WHITE:
        return shift(b, Direction.NORTH_WEST) | shift(b, Direction.NORTH_EAST)
    return shift(b, Direction.SOUTH_WEST) | shift(b, Direction.SOUTH_EAST)


def more_than_one(b: int) -> bool:
    return bool(b & (b - 1))


def popcount(b: int) -> int:
    return bin(b & MASK64).count("1")


def lsb(b: int) -> int:
    """Least significant set square of a non-empty bitboard."""
    if not b:
        raise ValueError("empty bitboard")
    return (b & -b).bit_length() - 1


def msb(b: int) -> int:
    """Most significant set square of a non-empty bitboard."""
    if not b:
        raise ValueError("empty bitboard")
    return (b & MASK64).bit_length() - 1


def least_significant_square_bb(b: int) -> int:
    if not b:
        raise ValueError("empty bitboard")
    return b & -b


def iter_squares(b: int) -> Iterator[int]:
    """Yield the set squares of b from least to most significant."""
    b &= MASK64
    while b:
        yield (b & -b).bit_length() - 1
        b &= b - 1


def file_distance(s1: int, s2: int) -> int:
    return abs(file_of(s1) - file_of(s2))


def rank_distance(s1: int, s2: int) -> int:
    return abs(rank_of(s1) - rank_of(s2))


def distance(s1: int, s2: int) -> int:
    """Number of king steps between two squares."""
    return max(file_distance(s1, s2), rank_distance(s1, s2))


def edge_distance(f: int) -> int:
    return min(f, 7 - f)


def _safe_destination(sq: int, step: int) -> int:
    to = sq + step
    if 0 <= to < SQUARE_NB and distance(sq, to) <= 2:
        return 1 << to
    return 0


def sliding_attack(pt: PieceType, sq: int, occupied: int) -> int:
    """Rook or bishop attacks from sq, stopping at the first occupied square."""
    if pt == PieceType.ROOK:
        steps = _ROOK_STEPS
    elif pt == PieceType.BISHOP:
        steps = _BISHOP_STEPS
    else:
        raise ValueError(f"not a sliding piece type: {pt!r}")
    _check_square(sq)

    attacks = 0
    f0, r0 = file_of(sq), rank_of(sq)
    for df, dr in steps:
        f, r = f0 + df, r0 + dr
        while 0 <= f < 8 and 0 <= r < 8:
            s = (r << 3) + f
            attacks |= 1 << s
            if (occupied >> s) & 1:
                break
            f += df
            r += dr
    return attacks


def pretty(b: int) -> str:
    """ASCII drawing of a bitboard, rank 8 at the top."""
    parts = [_SEPARATOR]
    for r in range(7, -1, -1):
        for f in range(8):
            parts.append("| X " if (b >> make_square(f, r)) & 1 else "|   ")
        parts.append(f"| {1 + r}\n{_SEPARATOR}")
    parts.append("  a   b   c   d   e   f   g   h\n")
    return "".join(parts)


@dataclass
class Magic:
    """Magic bitboard data for one square of one sliding piece type."""

    mask: int
    magic: int = 0
    shift: int = 64
    attacks: List[int] = field(default_factory=list, repr=False)

    def index(self, occupied: int) -> int:
        return (((occupied & self.mask) * self.magic) & MASK64) >> self.shift


def _init_magics(pt: PieceType) -> List[Magic]:
    magics: List[Magic] = []
    epoch = [0] * 4096
    cnt = 0

    for s in range(SQUARE_NB):
        edges = ((RANK_1_BB | RANK_8_BB) & ~rank_bb(rank_of(s))) | (
            (FILE_A_BB | FILE_H_BB) & ~file_bb(file_of(s))
        )
        mask = sliding_attack(pt, s, 0) & ~edges & MASK64
        m = Magic(mask=mask, shift=64 - popcount(mask))

        occupancy: List[int] = []
        reference: List[int] = []
        b = 0
        while True:
            occupancy.append(b)
            reference.append(sliding_attack(pt, s, b))
            b = (b - mask) & mask
            if not b:
                break

        m.attacks = [0] * len(occupancy)
        rng = Prng(_MAGIC_SEEDS[rank_of(s)])

        while True:
            m.magic = 0
            while popcount(((m.magic * mask) & MASK64) >> 56) < 6:
                m.magic = rng.sparse_rand()

            cnt += 1
            found = True
            for occ, ref in zip(occupancy, reference):
                idx = m.index(occ)
                if epoch[idx] < cnt:
                    epoch[idx] = cnt
                    m.attacks[idx] = ref
                elif m.attacks[idx] != ref:
                    found = False
                    break
            if found:
                break

        magics.append(m)
    return magics


class BitboardTables:
    """Precomputed attack, line and between tables for every square."""

    def __init__(self) -> None:
        self.rook_magics: List[Magic] = _init_magics(PieceType.ROOK)
        self.bishop_magics: List[Magic] = _init_magics(PieceType.BISHOP)

        self._pseudo = [[0] * SQUARE_NB for _ in range(PIECE_TYPE_NB)]
        self._pawn = [[0] * SQUARE_NB for _ in range(COLOR_NB)]
        self._line = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]
        self._between = [[0] * SQUARE_NB for _ in range(SQUARE_NB)]

        for s1 in range(SQUARE_NB):
            bb1 = 1 << s1
            self._pawn[Color.WHITE][s1] = pawn_attacks_bb(Color.WHITE, bb1)
            self._pawn[Color.BLACK][s1] = pawn_attacks_bb(Color.BLACK, bb1)

            for step in (-9, -8, -7, -1, 1, 7, 8, 9):
                self._pseudo[PieceType.KING][s1] |= _safe_destination(s1, step)
            for step in (-17, -15, -10, -6, 6, 10, 15, 17):
                self._pseudo[PieceType.KNIGHT][s1] |= _safe_destination(s1, step)

            bishop = self.attacks(PieceType.BISHOP, s1, 0)
            rook = self.attacks(PieceType.ROOK, s1, 0)
            self._pseudo[PieceType.BISHOP][s1] = bishop
            self._pseudo[PieceType.ROOK][s1] = rook
            self._pseudo[PieceType.QUEEN][s1] = bishop | rook

            for pt in (PieceType.BISHOP, PieceType.ROOK):
                for s2 in range(SQUARE_NB):
                    bb2 = 1 << s2
                    if self._pseudo[pt][s1] & bb2:
                        self._line[s1][s2] = (
                            self.attacks(pt, s1, 0) & self.attacks(pt, s2, 0)
                        ) | bb1 | bb2
                        self._between[s1][s2] = self.attacks(pt, s1, bb2) & self.attacks(
                            pt, s2, bb1
                        )
                    self._between[s1][s2] |= bb2

    def pseudo_attacks(self, pt: PieceType, sq: int) -> int:
        """Attacks of a non-pawn piece on an empty board."""
        if pt == PieceType.PAWN or not 0 < pt < PIECE_TYPE_NB:
            raise ValueError(f"no pseudo attacks for {pt!r}")
        _check_square(sq)
        return self._pseudo[pt][sq]

    def attacks(self, pt: PieceType, sq: int, occupied: int) -> int:
        """Attacks of a non-pawn piece given the occupied squares."""
        _check_square(sq)
        if pt == PieceType.BISHOP:
            m = self.bishop_magics[sq]
            return m.attacks[m.index(occupied)]
        if pt == PieceType.ROOK:
            m = self.rook_magics[sq]
            return m.attacks[m.index(occupied)]
        if pt == PieceType.QUEEN:
            return self.attacks(PieceType.BISHOP, sq, occupied) | self.attacks(
                PieceType.ROOK, sq, occupied
            )
        return self.pseudo_attacks(pt, sq)

    def pawn_attacks(self, color: Color, sq: int) -> int:
        _check_square(sq)
        return self._pawn[color][sq]

    def line(self, s1: int, s2: int) -> int:
        """Full edge-to-edge line through both squares, or 0 if not aligned."""
        _check_square(s1)
        _check_square(s2)
        return self._line[s1][s2]

    def between(self, s1: int, s2: int) -> int:
        """Squares after s1 up to and including s2; just s2 if not aligned."""
        _check_square(s1)
        _check_square(s2)
        return self._between[s1][s2]

    def aligned(self, s1: int, s2: int, s3: int) -> bool:
        return bool(self.line(s1, s2) & square_bb(s3))


@functools.lru_cache(maxsize=None)
def get_tables() -> BitboardTables:
    """Shared, lazily built attack tables."""
    return BitboardTables()


def squares(names: Sequence[str]) -> int:
    """Bitboard of squares given by names such as "e4"."""
    b = 0
    for name in names:
        if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
            raise ValueError(f"bad square name: {name!r}")
        b |= 1 << make_square(ord(name[0]) - ord("a"), int(name[1]) - 1)
    return b