"""Entry point: load settings, replay a move list through a Gogame, print the result."""

import sys

from Go_Territory_Engine.Board import StoneColor
from Go_Territory_Engine.Gogame import Gogame
from Go_Territory_Engine.engine.errors import ConfigurationError
from Go_Territory_Engine.utils.cli import parse_args, parse_move_list
from Go_Territory_Engine.utils.config import load_settings, validate_settings
from Go_Territory_Engine.utils.logger import log_event

_STONE_SYMBOLS = {StoneColor.BLACK: "X", StoneColor.WHITE: "O"}
_TINT_SYMBOLS = {StoneColor.EMPTY: ".", StoneColor.BLACK: "b", StoneColor.WHITE: "w"}


def render_overlay(cells, grid):
    """Stones as X/O, empty cells as b/w by owner or tint, . when neutral."""
    lines = []
    for stones, owners in zip(cells, grid):
        lines.append(" ".join(_STONE_SYMBOLS.get(s) or _TINT_SYMBOLS[o] for s, o in zip(stones, owners)))
    return "\n".join(lines)


def main(argv=None):
    args = parse_args(argv)
    try:
        settings = load_settings(args.settings)
        overrides = {}
        if args.board_size is not None:
            overrides["board_size"] = args.board_size
        if args.komi is not None:
            overrides["komi"] = args.komi
        if args.territory:
            overrides["show_territory"] = True
        settings = validate_settings({**settings, **overrides})
        moves = parse_move_list(args.moves)
    except (ConfigurationError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    game = Gogame.from_settings(settings, logger=log_event)
    rejected = 0
    for move in moves:
        if not game.place_stone(move):
            rejected += 1
    for _ in range(args.undo):
        if not game.undo():
            break

    print(game)
    print(f"Captures: Black lost {game.captured_black}, White lost {game.captured_white}")
    print(f"Score: Black {game.black_score}, White {game.white_score}")
    if game.show_territory:
        print(render_overlay(game.board_snapshot(), game.territory_map))
        if game.last_territory_change is not None:
            print(game.last_territory_change.message)
    if args.influence:
        print(render_overlay(game.board_snapshot(), game.influence_tint()))
    return 1 if rejected else 0


if __name__ == "__main__":
    sys.exit(main())
