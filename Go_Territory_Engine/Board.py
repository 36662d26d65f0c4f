"""Board state container: stone colours, positions, and journaled cell writes."""

from __future__ import annotations

import operator
from contextlib import contextmanager
from enum import IntEnum
from functools import total_ordering

from Go_Territory_Engine.engine.errors import ConfigurationError
from Go_Territory_Engine.utils import zobrist

SUPPORTED_SIZES = (9, 13, 19)

_ZOBRIST_SEED = 0x60B0A2D
_ZOBRIST_TABLES: dict[int, list] = {}


class StoneColor(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    def opponent(self) -> "StoneColor":
        if self is StoneColor.EMPTY:
            raise ValueError("EMPTY has no opponent")
        return StoneColor.WHITE if self is StoneColor.BLACK else StoneColor.BLACK


# Territory ownership reuses the stone colours; EMPTY doubles as "nobody owns it".
NEUTRAL = StoneColor.EMPTY

_SYMBOLS = {StoneColor.EMPTY: ".", StoneColor.BLACK: "X", StoneColor.WHITE: "O"}
_FROM_SYMBOL = {v: k for k, v in _SYMBOLS.items()}


@total_ordering
class Position:
    """Board coordinate (x = column, y = row). Ordered row-major."""

    __slots__ = ("x", "y")

    def __init__(self, x: int, y: int):
        object.__setattr__(self, "x", operator.index(x))
        object.__setattr__(self, "y", operator.index(y))

    def __setattr__(self, name, value):
        raise AttributeError("Position is immutable")

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other):
        if isinstance(other, Position):
            return self.x == other.x and self.y == other.y
        return NotImplemented

    def __lt__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return (self.y, self.x) < (other.y, other.x)

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Position({self.x}, {self.y})"

    def index(self, size: int) -> int:
        return self.y * size + self.x

    @classmethod
    def from_index(cls, index: int, size: int) -> "Position":
        return cls(index % size, index // size)


def _zobrist_table(size):
    table = _ZOBRIST_TABLES.get(size)
    if table is None:
        table = zobrist.zobrist_init(size, seed=_ZOBRIST_SEED + size)
        _ZOBRIST_TABLES[size] = table
    return table


class Board:
    def __init__(self, size=19):
        if size not in SUPPORTED_SIZES:
            raise ConfigurationError(f"Board size must be one of {SUPPORTED_SIZES}, got {size!r}")
        self.size = size
        self.cells = [[StoneColor.EMPTY] * size for _ in range(size)]
        self._table = _zobrist_table(size)
        self.hash_key = 0
        # Bumped on every effective write, including rollbacks.
        self.version = 0
        self._journal = None

    @classmethod
    def from_rows(cls, rows):
        """Build a board from ASCII rows ('.' empty, 'X' black, 'O' white), top row first."""
        rows = [r.replace(" ", "") for r in rows]
        board = cls(len(rows))
        for y, row in enumerate(rows):
            if len(row) != board.size:
                raise ConfigurationError(f"Row {y} has {len(row)} cells, expected {board.size}")
            for x, ch in enumerate(row):
                if ch not in _FROM_SYMBOL:
                    raise ConfigurationError(f"Unknown board symbol {ch!r}")
                if ch != ".":
                    board.set(Position(x, y), _FROM_SYMBOL[ch])
        return board

    def in_bounds(self, x, y):
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, pos: Position) -> StoneColor:
        if not self.in_bounds(pos.x, pos.y):
            raise ValueError(f"Position {tuple(pos)} is off a {self.size}x{self.size} board")
        return self.cells[pos.y][pos.x]

    def is_empty(self, pos: Position) -> bool:
        return self.in_bounds(pos.x, pos.y) and self.cells[pos.y][pos.x] == StoneColor.EMPTY

    def set(self, pos: Position, color: StoneColor) -> None:
        """Write one cell. Only the move executor and test fixtures call this."""
        if not self.in_bounds(pos.x, pos.y):
            raise ValueError(f"Position {tuple(pos)} is off a {self.size}x{self.size} board")
        color = StoneColor(color)
        old = self.cells[pos.y][pos.x]
        if old == color:
            return
        if self._journal is not None:
            self._journal.append((pos, old))
        idx = pos.y * self.size + pos.x
        self.hash_key ^= zobrist.stone_key(self._table, idx, old)
        self.hash_key ^= zobrist.stone_key(self._table, idx, color)
        self.cells[pos.y][pos.x] = color
        self.version += 1

    def neighbors(self, pos: Position) -> list[Position]:
        x, y = pos.x, pos.y
        out = []
        if x > 0:
            out.append(Position(x - 1, y))
        if x < self.size - 1:
            out.append(Position(x + 1, y))
        if y > 0:
            out.append(Position(x, y - 1))
        if y < self.size - 1:
            out.append(Position(x, y + 1))
        return out

    def positions(self):
        """Every position in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                yield Position(x, y)

    def stones(self):
        """Yield (position, colour) for every occupied cell, row-major."""
        for y, row in enumerate(self.cells):
            for x, v in enumerate(row):
                if v != StoneColor.EMPTY:
                    yield Position(x, y), v

    @contextmanager
    def transaction(self):
        """Journal writes made inside the block and undo them if it raises."""
        if self._journal is not None:
            # Nested: the outer transaction already journals everything.
            yield
            return
        self._journal = []
        try:
            yield
        except BaseException:
            journal, self._journal = self._journal, None
            for pos, old in reversed(journal):
                self.set(pos, old)
            raise
        else:
            self._journal = None

    def clone(self):
        new_board = Board(self.size)
        new_board.cells = [row[:] for row in self.cells]
        new_board.hash_key = self.hash_key
        new_board.version = self.version
        return new_board

    def snapshot(self):
        """Immutable copy of the cells, safe to hand to collaborators."""
        return tuple(tuple(row) for row in self.cells)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.hash_key == other.hash_key and self.cells == other.cells

    __hash__ = None

    def __str__(self):
        return "\n".join(" ".join(_SYMBOLS[v] for v in row) for row in self.cells)
