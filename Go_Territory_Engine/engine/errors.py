"""Exception hierarchy for move validation, configuration, and engine faults."""

from enum import Enum


class MoveError(Enum):
    OUT_OF_BOUNDS = "Move out of bounds"
    OCCUPIED = "Cell already occupied"
    KO = "Ko rule violation"
    SUICIDE = "Suicide move not allowed"


class GoEngineError(Exception):
    """Base class for every error raised by the engine."""


class InvalidMove(GoEngineError, ValueError):
    """A candidate move failed a legality check. Recoverable; nothing was mutated."""

    def __init__(self, reason: MoveError, position=None):
        self.reason = reason
        self.position = position
        where = f" at {tuple(position)}" if position is not None else ""
        super().__init__(f"{reason.value}{where}")


class ConfigurationError(GoEngineError, ValueError):
    """Unsupported settings, rejected before any game state is built."""


class InternalInvariantViolation(GoEngineError, RuntimeError):
    """The engine produced a state it should never reach (e.g. a zero-liberty group)."""
