"""Command-line replay of move lists."""

import pytest

from Go_Territory_Engine import main as cli_main
from Go_Territory_Engine.utils.cli import parse_move_list


def test_parse_move_list():
    assert parse_move_list("4,4 4,3  3,3") == [(4, 4), (4, 3), (3, 3)]
    assert parse_move_list("") == []
    with pytest.raises(ValueError):
        parse_move_list("4-4")


def test_replay_prints_board_and_scores(tmp_path, capsys):
    code = cli_main.main([
        "--settings", str(tmp_path / "none.yaml"),
        "--board-size", "9",
        "--moves", "1,0 0,0 0,1",
        "--territory",
        "--influence",
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "Move 3: B (0, 1) captured 1" in out
    assert "Score: Black 80, White 6.5" in out
    assert "Black's move at (0, 1)" in out


def test_rejected_moves_set_exit_code(tmp_path, capsys):
    code = cli_main.main(["--settings", str(tmp_path / "none.yaml"), "--board-size", "9", "--moves", "4,4 4,4"])
    out = capsys.readouterr().out
    assert code == 1
    assert "Rejected: White - Cell already occupied at (4, 4)" in out


def test_undo_flag(tmp_path, capsys):
    code = cli_main.main(["--settings", str(tmp_path / "none.yaml"), "--board-size", "9", "--moves", "4,4 4,3", "--undo", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Undo move 2" in out
    assert "White to move (move 1)" in out


def test_bad_move_text_is_usage_error(tmp_path, capsys):
    code = cli_main.main(["--settings", str(tmp_path / "none.yaml"), "--moves", "a,b"])
    assert code == 2
    assert "Error:" in capsys.readouterr().err
