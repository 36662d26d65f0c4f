"""Lightweight logging utilities for game sessions and debugging."""

import datetime

_COLOR_TAGS = {1: "B", 2: "W"}


def log_event(message):
    timestamp = datetime.datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {message}")


def describe_move(move):
    """One-line text for a recorded move, e.g. 'Move 3: B (3, 3) captured 1'."""
    text = f"Move {move.move_number}: {_COLOR_TAGS.get(int(move.color), '?')} {tuple(move.position)}"
    if move.captured:
        text += f" captured {len(move.captured)}"
    return text
