"""CLI options for replaying a move list through a session."""


def parse_move_list(text):
    """Parse 'x,y x,y ...' into a list of (x, y) integer pairs."""
    moves = []
    for token in text.split():
        try:
            x_str, y_str = token.split(",")
            moves.append((int(x_str), int(y_str)))
        except ValueError as exc:
            raise ValueError(f"Invalid move {token!r}; expected 'x,y' with integers") from exc
    return moves


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Go rules and territory engine")
    parser.add_argument("--board-size", type=int, choices=[9, 13, 19], help="Board size (default from settings)")
    parser.add_argument("--komi", type=float, help="Compensation for White (default from settings)")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--moves", default="", help="Space separated moves to replay, e.g. '4,4 4,3 3,3'")
    parser.add_argument("--undo", type=int, default=0, help="Number of moves to take back after the replay")
    parser.add_argument("--territory", action="store_true", help="Enable the territory overlay and scoring")
    parser.add_argument("--influence", action="store_true", help="Also print the display-only influence tint")
    return parser.parse_args(argv)
