"""Go_Territory_Engine package exports."""

from .Board import Board, Position, StoneColor, NEUTRAL
from .Gogame import Gogame

# Subpackages for the rule engine and helpers
from . import engine, utils

__all__ = [
    "Board",
    "Position",
    "StoneColor",
    "NEUTRAL",
    "Gogame",
    "engine",
    "utils",
]
