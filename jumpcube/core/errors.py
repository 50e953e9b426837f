"""
Exceptions raised by the jumpcube game core.

All of them derive from GameError so callers can catch the whole family.
"""


class GameError(Exception):
    """Base class for errors raised by boards and agents."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class IllegalMoveError(GameError):
    """A spot was added where the rules do not allow it."""


class OutOfRangeError(GameError, IndexError):
    """A row, column or square number lies off the board."""
