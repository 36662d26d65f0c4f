"""Connected groups and liberties (4-adjacency), computed iteratively."""

from __future__ import annotations

from dataclasses import dataclass

from Go_Territory_Engine.Board import Board, Position, StoneColor


@dataclass(frozen=True)
class Group:
    stones: frozenset
    color: StoneColor
    liberties: frozenset

    @property
    def liberty_count(self) -> int:
        return len(self.liberties)

    @property
    def in_atari(self) -> bool:
        return len(self.liberties) == 1

    @property
    def is_captured(self) -> bool:
        return not self.liberties

    @property
    def anchor(self) -> Position:
        """Smallest stone in row-major order; stable identity for the group."""
        return min(self.stones)

    def __contains__(self, pos):
        return pos in self.stones

    def __len__(self):
        return len(self.stones)


def _collect(board: Board, start: Position, color: StoneColor, visited=None):
    """Walk the group from `start`; return (stone indices, liberty indices)."""
    size = board.size
    cells = board.cells
    start_idx = start.y * size + start.x
    stones = {start_idx}
    liberties = set()
    stack = [start_idx]
    while stack:
        idx = stack.pop()
        y, x = divmod(idx, size)
        for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
            if not (0 <= nx < size and 0 <= ny < size):
                continue
            n_idx = ny * size + nx
            v = cells[ny][nx]
            if v == StoneColor.EMPTY:
                liberties.add(n_idx)
            elif v == color and n_idx not in stones:
                stones.add(n_idx)
                stack.append(n_idx)
    if visited is not None:
        for idx in stones:
            visited[idx] = 1
    return stones, liberties


def _to_group(board, stones, liberties, color):
    size = board.size
    return Group(
        stones=frozenset(Position.from_index(i, size) for i in stones),
        color=color,
        liberties=frozenset(Position.from_index(i, size) for i in liberties),
    )


def group_at(board: Board, pos: Position) -> Group | None:
    """Group containing `pos`, or None if the cell is empty."""
    color = board.get(pos)
    if color == StoneColor.EMPTY:
        return None
    stones, liberties = _collect(board, pos, color)
    return _to_group(board, stones, liberties, color)


def all_groups(board: Board) -> list[Group]:
    """Partition every stone into exactly one group, in row-major order of first stone."""
    size = board.size
    visited = bytearray(size * size)
    groups = []
    for y, row in enumerate(board.cells):
        for x, v in enumerate(row):
            if v == StoneColor.EMPTY or visited[y * size + x]:
                continue
            stones, liberties = _collect(board, Position(x, y), v, visited)
            groups.append(_to_group(board, stones, liberties, v))
    return groups


def liberty_count(board: Board, pos: Position) -> int:
    if board.get(pos) == StoneColor.EMPTY:
        return 0
    _, liberties = _collect(board, pos, board.get(pos))
    return len(liberties)


def group_liberties(board: Board, pos: Position) -> list[Position]:
    group = group_at(board, pos)
    if group is None:
        return []
    return sorted(group.liberties)


def liberty_index(board: Board) -> dict[Position, Group]:
    """Map every stone to the group it belongs to."""
    index = {}
    for group in all_groups(board):
        for stone in group.stones:
            index[stone] = group
    return index


def find_captured(board: Board) -> list[Group]:
    return [g for g in all_groups(board) if g.is_captured]
