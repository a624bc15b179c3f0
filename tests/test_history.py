import random

import pytest

from fishbits.history import (
    BUTTERFLY_HISTORY_LIMIT,
    CORRECTION_HISTORY_SIZE,
    PAWN_HISTORY_SIZE,
    ScoredMove,
    Stats,
    apply_bonus,
    partial_insertion_sort,
    pawn_structure_index,
)


def test_apply_bonus_small_bonus_from_zero():
    assert apply_bonus(0, 100, BUTTERFLY_HISTORY_LIMIT) == 100


def test_apply_bonus_clamps_to_limit():
    assert apply_bonus(0, 10**6, BUTTERFLY_HISTORY_LIMIT) == BUTTERFLY_HISTORY_LIMIT
    assert apply_bonus(0, -(10**6), BUTTERFLY_HISTORY_LIMIT) == -BUTTERFLY_HISTORY_LIMIT


def test_apply_bonus_saturated_entry_stays():
    assert apply_bonus(BUTTERFLY_HISTORY_LIMIT, 500, BUTTERFLY_HISTORY_LIMIT) == BUTTERFLY_HISTORY_LIMIT


def test_apply_bonus_truncates_toward_zero():
    assert apply_bonus(-1, 1, 2) == 0


def test_apply_bonus_stays_in_range():
    rng = random.Random(7)
    limit = 1024
    entry = 0
    for _ in range(2000):
        entry = apply_bonus(entry, rng.randint(-5000, 5000), limit)
        assert -limit <= entry <= limit


def test_apply_bonus_rejects_zero_limit():
    with pytest.raises(ValueError):
        apply_bonus(0, 1, 0)


def test_pawn_structure_index():
    assert pawn_structure_index(PAWN_HISTORY_SIZE + 1) == 1
    assert pawn_structure_index(CORRECTION_HISTORY_SIZE + 3, correction=True) == 3
    for key in (0, 12345, 2**63 + 99, 2**64 - 1):
        assert 0 <= pawn_structure_index(key) < PAWN_HISTORY_SIZE
        assert 0 <= pawn_structure_index(key, True) < CORRECTION_HISTORY_SIZE


def test_stats_set_and_get():
    table = Stats((2, 4), BUTTERFLY_HISTORY_LIMIT)
    assert table[1, 3] == 0
    table[1, 3] = -42
    assert table[1, 3] == -42
    assert table[0, 3] == 0
    assert len(table) == 2


def test_stats_one_dimensional_int_index():
    table = Stats((5,), 100)
    table[2] = 7
    assert table[2] == 7
    assert table[(2,)] == 7


def test_stats_wraps_to_int16():
    table = Stats((1,), 100)
    table[0] = 32768
    assert table[0] == -32768


def test_stats_update_matches_apply_bonus():
    table = Stats((3, 3), 1024)
    table[1, 1] = 300
    expected = apply_bonus(300, 800, 1024)
    assert table.update((1, 1), 800) == expected
    assert table[1, 1] == expected


def test_stats_fill():
    table = Stats((2, 3, 4), 1024)
    table.fill(-5)
    assert all(table[a, b, c] == -5 for a in range(2) for b in range(3) for c in range(4))


def test_stats_index_errors():
    table = Stats((2, 4), 100)
    table[1, 3] = 9
    with pytest.raises(IndexError):
        table[2, 0]
    with pytest.raises(IndexError):
        table[0]
    with pytest.raises(IndexError):
        table[0, -1] = 1
    values = [table[a, b] for a in range(2) for b in range(4)]
    assert values == [0, 0, 0, 0, 0, 0, 0, 9]


def test_stats_limit_must_fit():
    with pytest.raises(ValueError):
        Stats((2,), 40000)


def test_stats_update_with_unused_limit():
    table = Stats((2,), 0)
    with pytest.raises(ValueError):
        table.update(0, 10)


def test_scored_move_ordering():
    moves = [ScoredMove(1, 5), ScoredMove(2, -3), ScoredMove(3, 9)]
    assert [m.move for m in sorted(moves)] == [2, 1, 3]
    assert max(moves).move == 3


def _values(moves):
    return [m.value for m in moves]


def test_partial_sort_full_descending():
    rng = random.Random(3)
    moves = [ScoredMove(i, rng.randint(-1000, 1000)) for i in range(40)]
    before = sorted(_values(moves))
    partial_insertion_sort(moves, -(10**9))
    assert _values(moves) == sorted(before, reverse=True)


def test_partial_sort_prefix_above_limit():
    rng = random.Random(11)
    moves = [ScoredMove(i, rng.randint(-1000, 1000)) for i in range(50)]
    original = sorted((m.move, m.value) for m in moves)
    limit = 200
    partial_insertion_sort(moves, limit)
    high = sorted((v for v in _values(moves) if v >= limit), reverse=True)
    assert _values(moves)[: len(high)] == high
    assert sorted((m.move, m.value) for m in moves) == original


def test_partial_sort_empty_and_single():
    empty = []
    partial_insertion_sort(empty, 0)
    assert empty == []
    one = [ScoredMove(1, 4)]
    partial_insertion_sort(one, 0)
    assert one == [ScoredMove(1, 4)]