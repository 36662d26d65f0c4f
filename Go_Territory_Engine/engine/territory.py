"""Territory by enclosure flood-fill, influence tinting, and map diffing.

Ownership is decided by a strict rule: a maximal region of empty cells
belongs to a colour only when every stone bordering it has that colour.
Regions touching both colours, or no stones at all, are neutral. There is
no dead-stone inference.

The influence heuristic is independent of ownership and exists only for
display tinting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from Go_Territory_Engine.Board import NEUTRAL, Board, Position, StoneColor
from Go_Territory_Engine.utils import timer

LOGGER = logging.getLogger(__name__)

INFLUENCE_RADIUS = 5
INFLUENCE_THRESHOLD = 0.2
INFLUENCE_DECAY = 0.5


@dataclass(frozen=True)
class Region:
    cells: frozenset
    border_colors: frozenset

    @property
    def owner(self) -> StoneColor:
        if len(self.border_colors) == 1:
            return next(iter(self.border_colors))
        return NEUTRAL


@dataclass(frozen=True)
class MoveContext:
    color: StoneColor
    position: Position
    captured: int


@dataclass(frozen=True)
class TerritoryChange:
    position: Position
    previous_owner: StoneColor
    new_owner: StoneColor

    @property
    def kind(self) -> str | None:
        if self.previous_owner == self.new_owner:
            return None
        if self.new_owner == NEUTRAL:
            return "loss"
        if self.previous_owner == NEUTRAL:
            return "gain"
        return "flip"


@dataclass(frozen=True)
class TerritorySummary:
    black_gain: int
    black_loss: int
    white_gain: int
    white_loss: int
    black_total: int
    white_total: int
    changes: tuple
    message: str


@dataclass(frozen=True)
class TerritoryInfo:
    black: tuple
    white: tuple
    neutral: tuple

    @property
    def black_score(self) -> int:
        return len(self.black)

    @property
    def white_score(self) -> int:
        return len(self.white)


@dataclass(frozen=True)
class TerritoryHighlight:
    position: Position
    kind: str
    owner: StoneColor
    previous_owner: StoneColor
    expires_at: float

    def is_active(self, now=None) -> bool:
        return timer.time_remaining(self.expires_at, now=now) > 0


def empty_map(size: int):
    return tuple((NEUTRAL,) * size for _ in range(size))


def flood_region(board: Board, start: Position, visited: bytearray | None = None) -> Region:
    """Maximal empty region around `start` and the colours of the stones bordering it."""
    size = board.size
    cells = board.cells
    if visited is None:
        visited = bytearray(size * size)
    start_idx = start.y * size + start.x
    visited[start_idx] = 1
    region = [start_idx]
    border = set()
    stack = [start_idx]
    while stack:
        idx = stack.pop()
        y, x = divmod(idx, size)
        for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
            if not (0 <= nx < size and 0 <= ny < size):
                continue
            v = cells[ny][nx]
            if v != StoneColor.EMPTY:
                border.add(v)
                continue
            n_idx = ny * size + nx
            if not visited[n_idx]:
                visited[n_idx] = 1
                region.append(n_idx)
                stack.append(n_idx)
    return Region(
        cells=frozenset(Position.from_index(i, size) for i in region),
        border_colors=frozenset(border),
    )


def empty_regions(board: Board) -> list[Region]:
    """Every maximal empty region, in row-major order of its first cell."""
    size = board.size
    visited = bytearray(size * size)
    regions = []
    for y, row in enumerate(board.cells):
        for x, v in enumerate(row):
            if v == StoneColor.EMPTY and not visited[y * size + x]:
                regions.append(flood_region(board, Position(x, y), visited))
    return regions


def territory_map(board: Board):
    """Owner of every empty cell (NEUTRAL for occupied cells). Pure function of the board."""
    size = board.size
    grid = [[NEUTRAL] * size for _ in range(size)]
    for region in empty_regions(board):
        owner = region.owner
        if owner == NEUTRAL:
            continue
        for pos in region.cells:
            grid[pos.y][pos.x] = owner
    return tuple(tuple(row) for row in grid)


def combined_map(board: Board, territory):
    """Territory view where occupied cells report their own stone colour."""
    return tuple(
        tuple(stone if stone != StoneColor.EMPTY else owner for stone, owner in zip(stones, owners))
        for stones, owners in zip(board.cells, territory)
    )


def territory_info(board: Board, territory) -> TerritoryInfo:
    black, white, neutral = [], [], []
    for y, row in enumerate(board.cells):
        for x, v in enumerate(row):
            if v != StoneColor.EMPTY:
                continue
            owner = territory[y][x]
            if owner == StoneColor.BLACK:
                black.append(Position(x, y))
            elif owner == StoneColor.WHITE:
                white.append(Position(x, y))
            else:
                neutral.append(Position(x, y))
    return TerritoryInfo(black=tuple(black), white=tuple(white), neutral=tuple(neutral))


def is_area_surrounded(board: Board, start: Position, by_color: StoneColor) -> bool:
    """True if the empty region containing `start` touches no stone other than `by_color`."""
    if board.get(start) != StoneColor.EMPTY:
        return False
    region = flood_region(board, start)
    return region.border_colors <= {StoneColor(by_color)}


def influence_map(board: Board, radius=INFLUENCE_RADIUS):
    """Signed influence per cell: +1 black / -1 white per stone, decaying with Manhattan distance."""
    size = board.size
    grid = [[0.0] * size for _ in range(size)]
    for pos, color in board.stones():
        strength = 1.0 if color == StoneColor.BLACK else -1.0
        for ty in range(max(0, pos.y - radius), min(size - 1, pos.y + radius) + 1):
            dy = abs(ty - pos.y)
            for tx in range(max(0, pos.x - radius), min(size - 1, pos.x + radius) + 1):
                distance = dy + abs(tx - pos.x)
                if 0 < distance <= radius:
                    grid[ty][tx] += strength / (1 + distance * INFLUENCE_DECAY)
    return grid


def influence_tint(board: Board, threshold=INFLUENCE_THRESHOLD, radius=INFLUENCE_RADIUS):
    """Display-only colouring of empty cells by influence; never used for ownership."""
    influence = influence_map(board, radius=radius)
    tint = []
    for row_stones, row_inf in zip(board.cells, influence):
        row = []
        for stone, inf in zip(row_stones, row_inf):
            if stone != StoneColor.EMPTY:
                row.append(stone)
            elif inf > threshold:
                row.append(StoneColor.BLACK)
            elif inf < -threshold:
                row.append(StoneColor.WHITE)
            else:
                row.append(NEUTRAL)
        tint.append(tuple(row))
    return tuple(tint)


def diff_territory(previous, new, context: MoveContext | None = None) -> TerritorySummary:
    """Compare two territory maps cell by cell and summarise the transitions."""
    counts = {
        "black_gain": 0,
        "black_loss": 0,
        "white_gain": 0,
        "white_loss": 0,
        "black_total": 0,
        "white_total": 0,
    }
    changes = []
    for y, row in enumerate(new):
        for x, next_owner in enumerate(row):
            prev_owner = NEUTRAL
            if previous is not None and y < len(previous) and x < len(previous[y]):
                prev_owner = previous[y][x]

            if next_owner == StoneColor.BLACK:
                counts["black_total"] += 1
            elif next_owner == StoneColor.WHITE:
                counts["white_total"] += 1

            if prev_owner == next_owner:
                continue
            if prev_owner == StoneColor.BLACK:
                counts["black_loss"] += 1
            elif prev_owner == StoneColor.WHITE:
                counts["white_loss"] += 1
            if next_owner == StoneColor.BLACK:
                counts["black_gain"] += 1
            elif next_owner == StoneColor.WHITE:
                counts["white_gain"] += 1
            changes.append(TerritoryChange(Position(x, y), StoneColor(prev_owner), StoneColor(next_owner)))

    return TerritorySummary(
        changes=tuple(changes),
        message=territory_message(context, counts),
        **counts,
    )


def territory_message(context: MoveContext | None, counts) -> str:
    """Human-readable account of a territory change. Presentation only."""
    totals = (
        f"Current assessment: Black controls {counts['black_total']} empty points, "
        f"White controls {counts['white_total']}."
    )

    if context is None:
        if not any(counts[k] for k in ("black_gain", "black_loss", "white_gain", "white_loss")):
            return f"Territory reassessed with no noticeable change. {totals}"
        black_net = counts["black_gain"] - counts["black_loss"]
        white_net = counts["white_gain"] - counts["white_loss"]
        return f"Territory reassessed. Black net {black_net:+d}, White net {white_net:+d}. {totals}"

    if context.color == StoneColor.BLACK:
        player, opponent = "Black", "White"
        gained, lost, opponent_gain = counts["black_gain"], counts["black_loss"], counts["white_gain"]
    else:
        player, opponent = "White", "Black"
        gained, lost, opponent_gain = counts["white_gain"], counts["white_loss"], counts["black_gain"]

    parts = []
    if context.captured > 0:
        parts.append(f"captured {context.captured} stone(s)")
    if gained > 0:
        parts.append(f"enclosed {gained} new empty point(s)")
    if lost > 0:
        parts.append(f"gave up {lost} empty point(s)")
    elif opponent_gain > 0:
        parts.append(f"let {opponent} take {opponent_gain} empty point(s)")
    if not parts:
        return f"{player}'s move at {tuple(context.position)} reshaped the position; territory is stable. {totals}"
    return f"{player}'s move at {tuple(context.position)} {', '.join(parts)}. {totals}"


def highlights_for(changes, context: MoveContext | None, duration: float, now=None):
    """Transient gain/loss/flip annotations; empty without a triggering move."""
    if context is None or not changes:
        return []
    expires_at = timer.deadline_after(duration, now=now)
    out = []
    for change in changes:
        kind = change.kind
        if kind is None:
            continue
        owner = change.previous_owner if kind == "loss" else change.new_owner
        out.append(
            TerritoryHighlight(
                position=change.position,
                kind=kind,
                owner=owner,
                previous_owner=change.previous_owner,
                expires_at=expires_at,
            )
        )
    return out


class TerritoryCache:
    """Memo of the last (board content, territory map) pair for one session.

    The Zobrist key rejects changed boards in O(1); on a key match the full
    cell snapshot must also match, so clones and replays of the same
    position hit the cache and hash collisions never do.
    """

    def __init__(self):
        self.hits = 0
        self.misses = 0
        self._key = None
        self._snapshot = None
        self._map = None

    def invalidate(self):
        self._key = None
        self._snapshot = None
        self._map = None

    def territory_map(self, board: Board):
        if self._map is not None and self._key == board.hash_key:
            snapshot = board.snapshot()
            if snapshot == self._snapshot:
                self.hits += 1
                LOGGER.debug("territory cache hit")
                return self._map
        else:
            snapshot = board.snapshot()

        self.misses += 1
        self._map = territory_map(board)
        self._snapshot = snapshot
        self._key = board.hash_key
        LOGGER.debug("territory recomputed (%d misses)", self.misses)
        return self._map
