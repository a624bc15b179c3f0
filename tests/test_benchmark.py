import pytest

from fishbits.benchmark import DEFAULTS, BenchError, setup_bench

START = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def test_defaults_header():
    cmds = setup_bench(START, "")
    assert cmds[:3] == [
        "setoption name Threads value 1",
        "setoption name Hash value 16",
        "ucinewgame",
    ]


def test_default_limit_is_depth_13():
    cmds = setup_bench(START)
    assert "go depth 13" in cmds
    assert all(c == "go depth 13" for c in cmds if c.startswith("go"))


def test_default_positions_structure():
    cmds = setup_bench(START, [])
    body = cmds[3:]
    n_set = sum("setoption" in f for f in DEFAULTS)
    n_pos = len(DEFAULTS) - n_set
    assert len(body) == n_set + 2 * n_pos
    positions = [c[len("position fen "):] for c in body if c.startswith("position fen ")]
    assert positions == [f for f in DEFAULTS if "setoption" not in f]


def test_setoption_lines_passed_through():
    cmds = setup_bench(START)
    assert cmds[3] == "setoption name UCI_Chess960 value false"
    assert cmds[-1] == "setoption name UCI_Chess960 value false"
    assert "setoption name UCI_Chess960 value true" in cmds


def test_each_position_followed_by_go():
    cmds = setup_bench(START, "64 4 100000 default nodes")
    for i, c in enumerate(cmds):
        if c.startswith("position fen"):
            assert cmds[i + 1] == "go nodes 100000"


def test_current_position_movetime():
    fen = "8/8/8/8/8/6k1/6p1/6K1 w - -"
    cmds = setup_bench(fen, "64 4 5000 current movetime")
    assert cmds == [
        "setoption name Threads value 4",
        "setoption name Hash value 64",
        "ucinewgame",
        f"position fen {fen}",
        "go movetime 5000",
    ]


def test_eval_limit_type():
    cmds = setup_bench(START, ["16", "1", "5", "current", "eval"])
    assert cmds[-1] == "eval"
    assert cmds[-2] == f"position fen {START}"


def test_token_list_and_string_agree():
    assert setup_bench(START, "32 2 7 current perft") == setup_bench(
        START, ["32", "2", "7", "current", "perft"]
    )


def test_file_positions(tmp_path):
    path = tmp_path / "fens.txt"
    path.write_text(
        "8/8/8/8/8/6k1/6p1/6K1 w - -\n\nsetoption name UCI_Chess960 value true\n"
        "7k/7P/6K1/8/3B4/8/8/8 b - -\n",
        encoding="utf-8",
    )
    cmds = setup_bench(START, f"16 1 5 {path} perft")
    assert cmds[3:] == [
        "position fen 8/8/8/8/8/6k1/6p1/6K1 w - -",
        "go perft 5",
        "setoption name UCI_Chess960 value true",
        "position fen 7k/7P/6K1/8/3B4/8/8/8 b - -",
        "go perft 5",
    ]


def test_missing_file_raises(tmp_path):
    missing = tmp_path / "absent.fen"
    with pytest.raises(BenchError, match="Unable to open file"):
        setup_bench(START, f"16 1 5 {missing} perft")