"""Move validation in fixed order: bounds, occupancy, ko, suicide."""

from Go_Territory_Engine.Board import Board, Position, StoneColor
from Go_Territory_Engine.engine import go_rules
from Go_Territory_Engine.engine.errors import InvalidMove, MoveError


def check_move(board: Board, pos: Position, color: StoneColor, ko_position=None):
    """
    Validate a move against bounds, occupancy, the ko point, and suicide.
    Raises InvalidMove on the first failing check; never mutates the board.
    """
    if not board.in_bounds(pos.x, pos.y):
        raise InvalidMove(MoveError.OUT_OF_BOUNDS, pos)
    if not board.is_empty(pos):
        raise InvalidMove(MoveError.OCCUPIED, pos)
    if ko_position is not None and pos == ko_position:
        raise InvalidMove(MoveError.KO, pos)
    if go_rules.is_suicide(board, pos, StoneColor(color)):
        raise InvalidMove(MoveError.SUICIDE, pos)
    return True


def is_legal(board: Board, pos: Position, color: StoneColor, ko_position=None) -> bool:
    try:
        return check_move(board, pos, color, ko_position)
    except InvalidMove:
        return False


def legal_moves(board: Board, color: StoneColor, ko_position=None):
    """All legal positions for `color`, row-major."""
    return [p for p in board.positions() if is_legal(board, p, color, ko_position)]
