"""Chess engine building blocks: bitboards and attack tables, history statistics, bench command lists and utilities."""

__version__ = "0.1.0"
__all__ = ["bitboard", "misc", "benchmark", "history"]