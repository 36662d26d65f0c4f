"""Go rule enforcement: capture, suicide, simple ko, and move reversal."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass

from Go_Territory_Engine.Board import Board, Position, StoneColor
from Go_Territory_Engine.engine import connectivity
from Go_Territory_Engine.engine.errors import InternalInvariantViolation

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Move:
    position: Position
    color: StoneColor
    captured: tuple
    move_number: int


@dataclass(frozen=True)
class MoveOutcome:
    captured: tuple
    ko_position: Position | None


@contextmanager
def simulate(board: Board, pos: Position, color: StoneColor):
    """Temporarily place a stone; the cell is restored even if the block raises."""
    original = board.get(pos)
    board.set(pos, color)
    try:
        yield
    finally:
        board.set(pos, original)


def _enemy_groups_without_liberties(board: Board, pos: Position, color: StoneColor):
    """Distinct enemy groups next to `pos` that have no liberties (stone assumed placed)."""
    enemy = color.opponent()
    seen = set()
    dead = []
    for n in board.neighbors(pos):
        if board.get(n) != enemy or n in seen:
            continue
        group = connectivity.group_at(board, n)
        seen.update(group.stones)
        if group.is_captured:
            dead.append(group)
    return dead


def would_capture(board: Board, pos: Position, color: StoneColor):
    """Enemy groups that a stone of `color` at `pos` would capture. Board is left unchanged."""
    with simulate(board, pos, color):
        return _enemy_groups_without_liberties(board, pos, color)


def is_suicide(board: Board, pos: Position, color: StoneColor) -> bool:
    """True if the stone would have no liberties and capture nothing."""
    with simulate(board, pos, color):
        # Capturing takes precedence over the mover's own liberties.
        if _enemy_groups_without_liberties(board, pos, color):
            return False
        return connectivity.liberty_count(board, pos) == 0


def execute_move(board: Board, pos: Position, color: StoneColor) -> MoveOutcome:
    """Place a stone that already passed the referee, remove captures, derive ko.

    All writes happen inside one board transaction: either the whole move
    lands or the board is left untouched.
    """
    color = StoneColor(color)
    with board.transaction():
        board.set(pos, color)

        captured = []
        for group in _enemy_groups_without_liberties(board, pos, color):
            for stone in sorted(group.stones):
                board.set(stone, StoneColor.EMPTY)
                captured.append(stone)

        if connectivity.liberty_count(board, pos) == 0:
            raise InternalInvariantViolation(
                f"{color.name} group at {tuple(pos)} left with no liberties after move"
            )

        ko_position = None
        if len(captured) == 1:
            # Simple ko: the opponent retaking the single stone would capture the mover back.
            with simulate(board, captured[0], color.opponent()):
                if connectivity.liberty_count(board, pos) == 0:
                    ko_position = captured[0]

    if captured:
        LOGGER.debug("%s at %s captured %d stone(s)", color.name, tuple(pos), len(captured))
    return MoveOutcome(captured=tuple(captured), ko_position=ko_position)


def undo_move(board: Board, move: Move) -> None:
    """Reverse a recorded move: lift the stone, put captured stones back."""
    if board.get(move.position) != move.color:
        raise InternalInvariantViolation(
            f"Cannot undo move {move.move_number}: {tuple(move.position)} does not hold {move.color.name}"
        )
    restored = move.color.opponent()
    with board.transaction():
        board.set(move.position, StoneColor.EMPTY)
        for stone in move.captured:
            board.set(stone, restored)


def assert_capture_clean(board: Board) -> None:
    """Raise if any group on the board is standing with zero liberties."""
    dead = connectivity.find_captured(board)
    if dead:
        where = ", ".join(f"{g.color.name}@{tuple(g.anchor)}" for g in dead)
        raise InternalInvariantViolation(f"Zero-liberty groups on board: {where}")
