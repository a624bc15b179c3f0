# fishbits

Building blocks for a chess engine, in pure Python with no dependencies.

## Modules

- `fishbits.bitboard` works with 64-bit bitboards on the 8x8 board, where square
  `a1` is 0 and `h8` is 63.
  - Square and line helpers: `make_square`, `file_of`, `rank_of`, `square_bb`,
    `rank_bb` and `file_bb`. `squares(["e4", "d5"])` builds a bitboard from square
    names.
  - Bit operations: `shift(b, direction)`, `pawn_attacks_bb`, `more_than_one`,
    `popcount`, `lsb`, `msb`, `least_significant_square_bb` and `iter_squares`.
    `lsb`, `msb` and `least_significant_square_bb` raise `ValueError` on an empty
    bitboard.
  - Distances: `distance`, `file_distance`, `rank_distance` and `edge_distance`.
  - `sliding_attack(pt, sq, occupied)` computes rook or bishop rays directly.
    `pretty(b)` draws a bitboard as ASCII with rank 8 at the top.
  - `get_tables()` builds the attack tables once, using magic bitboards, and
    caches them. It returns a `BitboardTables` object with these methods:
    `attacks(pt, sq, occupied)`, `pseudo_attacks(pt, sq)`, `pawn_attacks(color, sq)`,
    `line(s1, s2)`, `between(s1, s2)` and `aligned(s1, s2, s3)`.
    Each square's `Magic` entries are in `rook_magics` and `bishop_magics`.
  - The `Color`, `PieceType` and `Direction` enums are defined here.
- `fishbits.misc` holds general utilities.
  - `Prng` is a xorshift64* generator, with methods `rand64`, `rand(bits)` and
    `sparse_rand(bits)`.
  - `DebugStats` counts run-time statistics in numbered slots, with `hit_on`,
    `mean_of`, `stdev_of`, `extremes_of` and `correl_of`. `report()` returns the
    summary lines and `print_report(stream)` writes them to standard error by
    default.
  - String helpers: `split`, `remove_whitespace`, `is_whitespace` and
    `str_to_size_t`.
  - Other helpers: `mul_hi64`, `now` (monotonic milliseconds),
    `read_file_to_string` (returns bytes, or `None`), `get_working_directory`,
    `get_binary_directory` and `move_to_front`.
  - `engine_info(to_uci)` returns the engine's name line.
- `fishbits.benchmark`: `setup_bench(current_fen, args)` returns the list of UCI
  commands for a bench run.
  - The arguments are hash MB, threads, limit, position source and limit type.
    The defaults are `16 1 13 default depth`.
  - The position source is `default` for the built-in `DEFAULTS` positions,
    `current` for the given FEN, or a file path with one FEN per line.
  - An unreadable file raises `BenchError`.
- `fishbits.history` supports move ordering.
  - `Stats` is a fixed-shape table indexed by tuples. It is updated with
    `update(index, bonus)`, which applies the gravity formula in `apply_bonus`.
  - The module also provides `partial_insertion_sort` over `ScoredMove` items and
    `pawn_structure_index`.

## Examples

```python
from fishbits.bitboard import PieceType, get_tables, make_square, popcount, pretty, square_bb

tables = get_tables()
d4 = make_square(3, 3)
rook = tables.attacks(PieceType.ROOK, d4, square_bb(make_square(3, 5)))
print(popcount(rook))
print(pretty(rook))
```

```python
from fishbits.benchmark import setup_bench

commands = setup_bench("8/8/8/8/8/6k1/6p1/6K1 w - - 0 1", ["64", "1", "10", "current", "depth"])
```

```python
from fishbits.history import Stats

table = Stats((2, 64 * 64), limit=7183)
table.update((0, 100), 500)
```

## What it does not do

This package has no position representation, move generation, search,
evaluation or UCI command loop, and it installs no command. `setup_bench` only
builds the command list; nothing in the package runs those commands.

## Tests

```
pip install -e .[test]
pytest
```