"""Game session: turn order, captures, ko, move history, and the territory overlay."""

import logging

from Go_Territory_Engine.Board import SUPPORTED_SIZES, Board, Position, StoneColor
from Go_Territory_Engine.engine import connectivity, go_rules, referee, territory
from Go_Territory_Engine.engine.errors import ConfigurationError, InvalidMove, MoveError
from Go_Territory_Engine.utils.logger import describe_move

LOGGER = logging.getLogger(__name__)


def _as_position(position):
    """Coerce an (x, y) pair of integers; anything else is an off-board move."""
    if isinstance(position, Position):
        return position
    try:
        x, y = position
        return Position(x, y)
    except (TypeError, ValueError):
        raise InvalidMove(MoveError.OUT_OF_BOUNDS) from None


class Gogame:
    def __init__(self, board_size=19, komi=6.5, highlight_seconds=4.0, logger=None,
                 influence_radius=territory.INFLUENCE_RADIUS,
                 influence_threshold=territory.INFLUENCE_THRESHOLD):
        if board_size not in SUPPORTED_SIZES:
            raise ConfigurationError(f"Board size must be one of {SUPPORTED_SIZES}, got {board_size!r}")
        self.board_size = board_size
        self.komi = komi
        self.highlight_seconds = highlight_seconds
        self.influence_radius = influence_radius
        self.influence_threshold = influence_threshold
        self.logger = logger or LOGGER.info
        self._cache = territory.TerritoryCache()
        self.show_territory = False
        self.reset()

    @classmethod
    def from_settings(cls, settings, logger=None):
        game = cls(
            board_size=settings["board_size"],
            komi=settings["komi"],
            highlight_seconds=settings["highlight_seconds"],
            influence_radius=settings["influence_radius"],
            influence_threshold=settings["influence_threshold"],
            logger=logger,
        )
        if settings.get("show_territory"):
            game.toggle_territory_display()
        return game

    # -- commands -------------------------------------------------------

    def reset(self):
        """Empty board, Black to play, counters and history cleared. Display toggle is kept."""
        self.board = Board(self.board_size)
        self.current_player = StoneColor.BLACK
        self.captured_black = 0
        self.captured_white = 0
        self._history = []
        self.ko_position = None
        self.last_error = None
        self.territory_map = territory.empty_map(self.board_size)
        self.last_territory_change = None
        self._highlights = []
        self._cache.invalidate()
        if self.show_territory:
            self.update_territory()

    def change_board_size(self, size):
        if size not in SUPPORTED_SIZES:
            raise ConfigurationError(f"Board size must be one of {SUPPORTED_SIZES}, got {size!r}")
        self.board_size = size
        self._cache.invalidate()
        self.reset()

    def place_stone(self, position):
        """Play for the side to move. Returns False, changing nothing, if the move is illegal."""
        color = self.current_player
        try:
            pos = _as_position(position)
            referee.check_move(self.board, pos, color, self.ko_position)
        except InvalidMove as exc:
            self.last_error = exc.reason
            self.logger(f"Rejected: {'Black' if color == StoneColor.BLACK else 'White'} - {exc}")
            return False

        outcome = go_rules.execute_move(self.board, pos, color)
        if color == StoneColor.BLACK:
            self.captured_white += len(outcome.captured)
        else:
            self.captured_black += len(outcome.captured)

        move = go_rules.Move(
            position=pos,
            color=color,
            captured=outcome.captured,
            move_number=len(self._history) + 1,
        )
        self._history.append(move)
        self.ko_position = outcome.ko_position
        self.last_error = None
        self.current_player = color.opponent()
        self.logger(describe_move(move))

        if self.show_territory:
            self.update_territory(territory.MoveContext(color, pos, len(outcome.captured)))
        return True

    def undo(self):
        """Take back the last move. The previous ko point is not restored."""
        if not self._history:
            return False
        move = self._history.pop()
        go_rules.undo_move(self.board, move)
        if move.color == StoneColor.BLACK:
            self.captured_white -= len(move.captured)
        else:
            self.captured_black -= len(move.captured)
        self.current_player = move.color
        self.ko_position = None
        self.last_error = None
        self.logger(f"Undo move {move.move_number}")
        if self.show_territory:
            self.update_territory()
        return True

    def toggle_territory_display(self):
        self.show_territory = not self.show_territory
        if self.show_territory:
            self.update_territory()
        else:
            self.territory_map = territory.empty_map(self.board_size)
            self.last_territory_change = None
            self.clear_territory_highlights()
        return self.show_territory

    def update_territory(self, context=None):
        """Recompute the territory map (cached) and the change summary against the previous map."""
        if not self.show_territory:
            self.territory_map = territory.empty_map(self.board_size)
            self.last_territory_change = None
            self.clear_territory_highlights()
            return None
        previous = self.territory_map
        self.territory_map = self._cache.territory_map(self.board)
        summary = territory.diff_territory(previous, self.territory_map, context)
        self.last_territory_change = summary
        self._highlights = territory.highlights_for(summary.changes, context, self.highlight_seconds)
        return summary

    def clear_territory_highlights(self):
        self._highlights = []

    # -- read-only views --------------------------------------------------

    @property
    def history(self):
        return tuple(self._history)

    @property
    def move_number(self):
        return len(self._history)

    @property
    def last_move(self):
        return self._history[-1] if self._history else None

    def board_snapshot(self):
        return self.board.snapshot()

    def groups(self):
        return connectivity.all_groups(self.board)

    def liberty_count(self, position):
        return connectivity.liberty_count(self.board, Position(*position))

    def group_liberties(self, position):
        return connectivity.group_liberties(self.board, Position(*position))

    def legal_moves(self):
        return referee.legal_moves(self.board, self.current_player, self.ko_position)

    def territory_info(self):
        return territory.territory_info(self.board, self.territory_map)

    def ownership_view(self):
        return territory.combined_map(self.board, self.territory_map)

    def influence_tint(self):
        return territory.influence_tint(
            self.board, threshold=self.influence_threshold, radius=self.influence_radius
        )

    def active_highlights(self, now=None):
        return [h for h in self._highlights if h.is_active(now)]

    def _owned(self, color):
        if not self.show_territory:
            return 0
        return sum(1 for row in self.territory_map for owner in row if owner == color)

    @property
    def black_score(self):
        return self.captured_white + self._owned(StoneColor.BLACK)

    @property
    def white_score(self):
        return self.captured_black + self._owned(StoneColor.WHITE) + self.komi

    def __str__(self):
        to_move = "Black" if self.current_player == StoneColor.BLACK else "White"
        ko = f", ko at {tuple(self.ko_position)}" if self.ko_position is not None else ""
        return f"{self.board}\n{to_move} to move (move {self.move_number}{ko})"
