"""Capture, suicide, and simple-ko rules; referee check order."""

import pytest

from Go_Territory_Engine.Board import Board, Position, StoneColor
from Go_Territory_Engine.engine import connectivity, go_rules, referee
from Go_Territory_Engine.engine.errors import InternalInvariantViolation, InvalidMove, MoveError

B = StoneColor.BLACK
W = StoneColor.WHITE


def board9(*rows):
    rows = [r.replace(" ", "").ljust(9, ".") for r in rows]
    rows += ["." * 9] * (9 - len(rows))
    return Board.from_rows(rows)


def ko_shape():
    # Black to play (2,1) and take the white stone at (1,1).
    return board9(
        ". X O",
        "X O . O",
        ". X O",
    )


def test_single_capture_without_ko():
    b = board9("O X")
    outcome = go_rules.execute_move(b, Position(0, 1), B)
    assert outcome.captured == (Position(0, 0),)
    assert outcome.ko_position is None
    assert b.get(Position(0, 0)) == StoneColor.EMPTY


def test_capture_of_two_groups_in_one_move():
    b = board9(
        "O X",
        ".",
        "O X",
        "X",
    )
    outcome = go_rules.execute_move(b, Position(0, 1), B)
    assert sorted(outcome.captured) == [Position(0, 0), Position(0, 2)]
    assert outcome.ko_position is None
    go_rules.assert_capture_clean(b)


def test_ko_is_detected_after_single_stone_recapture_shape():
    b = ko_shape()
    outcome = go_rules.execute_move(b, Position(2, 1), B)
    assert outcome.captured == (Position(1, 1),)
    assert outcome.ko_position == Position(1, 1)
    assert connectivity.liberty_count(b, Position(2, 1)) == 1


def test_referee_rejects_ko_recapture():
    b = ko_shape()
    ko = go_rules.execute_move(b, Position(2, 1), B).ko_position
    with pytest.raises(InvalidMove) as exc:
        referee.check_move(b, Position(1, 1), W, ko)
    assert exc.value.reason is MoveError.KO
    # Without the ko constraint the recapture is a legal capturing move.
    assert referee.is_legal(b, Position(1, 1), W, None)


def test_suicide_rejected_and_board_untouched():
    b = board9(
        ". X O",
        "O O",
    )
    before = b.clone()
    assert go_rules.is_suicide(b, Position(0, 0), B)
    with pytest.raises(InvalidMove) as exc:
        referee.check_move(b, Position(0, 0), B)
    assert exc.value.reason is MoveError.SUICIDE
    assert b == before


def test_zero_liberty_move_that_captures_is_allowed():
    b = ko_shape()
    # (2,1) is surrounded by white on all sides but takes (1,1).
    assert go_rules.is_suicide(b, Position(2, 1), B) is False
    assert referee.check_move(b, Position(2, 1), B) is True
    assert [g.stones for g in go_rules.would_capture(b, Position(2, 1), B)] == [{Position(1, 1)}]


def test_check_order_bounds_occupancy_ko_suicide():
    b = ko_shape()
    cases = [
        (Position(9, 0), None, MoveError.OUT_OF_BOUNDS),
        (Position(-1, 3), None, MoveError.OUT_OF_BOUNDS),
        (Position(1, 0), Position(1, 0), MoveError.OCCUPIED),
        (Position(2, 1), Position(2, 1), MoveError.KO),
    ]
    for pos, ko, reason in cases:
        with pytest.raises(InvalidMove) as exc:
            referee.check_move(b, pos, B, ko)
        assert exc.value.reason is reason

    # Ko is reported before suicide.
    suicide_board = board9(". X O", "O O")
    with pytest.raises(InvalidMove) as exc:
        referee.check_move(suicide_board, Position(0, 0), B, Position(0, 0))
    assert exc.value.reason is MoveError.KO


def test_invalid_move_is_value_error():
    err = InvalidMove(MoveError.OCCUPIED, Position(1, 2))
    assert isinstance(err, ValueError)
    assert "(1, 2)" in str(err)


def test_legality_checks_are_repeatable_and_pure():
    b = ko_shape()
    before = b.clone()
    first = {p: referee.is_legal(b, p, W) for p in b.positions()}
    second = {p: referee.is_legal(b, p, W) for p in b.positions()}
    assert first == second
    assert b == before
    assert first[Position(1, 0)] is False
    assert first[Position(2, 1)] is True


def test_executor_rolls_back_when_move_leaves_group_dead():
    b = board9(
        ". X O",
        "O O",
    )
    before = b.clone()
    # Bypassing the referee: the executor must refuse and leave the board as it was.
    with pytest.raises(InternalInvariantViolation):
        go_rules.execute_move(b, Position(0, 0), B)
    assert b == before


def test_undo_move_restores_captures():
    b = ko_shape()
    before = b.clone()
    outcome = go_rules.execute_move(b, Position(2, 1), B)
    move = go_rules.Move(Position(2, 1), B, outcome.captured, 1)
    go_rules.undo_move(b, move)
    assert b == before


def test_undo_move_against_wrong_board_raises():
    b = Board(9)
    move = go_rules.Move(Position(4, 4), B, (), 1)
    with pytest.raises(InternalInvariantViolation):
        go_rules.undo_move(b, move)


def test_legal_moves_excludes_ko_point():
    b = ko_shape()
    ko = go_rules.execute_move(b, Position(2, 1), B).ko_position
    moves = referee.legal_moves(b, W, ko)
    assert Position(1, 1) not in moves
    assert Position(0, 0) not in moves  # suicide for White
    assert Position(8, 8) in moves
    assert moves == sorted(moves)
