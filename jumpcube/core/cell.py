"""
Sides and cell values for the jumpcube board.
"""
from dataclasses import dataclass
from enum import Enum


class Side(Enum):
    """
    Owner of a cell.

    NONE marks an unowned cell; A and B are the two players.
    """
    NONE = '-'
    A = 'a'
    B = 'b'

    @property
    def letter(self):
        """Single character used when rendering a board."""
        return self.value

    def opposite(self):
        """Return the other player. NONE has no opposite and maps to itself."""
        if self is Side.A:
            return Side.B
        elif self is Side.B:
            return Side.A
        return Side.NONE


@dataclass(frozen=True)
class Cell:
    """
    Contents of one board square: an owner and a number of units.

    Cells are immutable; the board replaces them wholesale on change.
    An unowned cell holds 0 units, or 1 on a freshly cleared board.
    """
    owner: Side
    count: int

    def __post_init__(self):
        if self.count < 0:
            raise ValueError(f"Cell count must be non-negative, got {self.count}")
        if self.owner is Side.NONE and self.count > 1:
            raise ValueError(f"Unowned cell cannot hold {self.count} units")
        if self.owner is not Side.NONE and self.count == 0:
            raise ValueError(f"Cell owned by {self.owner.name} must hold at least one unit")

    def __str__(self):
        return f"{self.count}{self.owner.letter}"


# Initial contents of every square of a cleared board.
INITIAL_CELL = Cell(Side.NONE, 1)

# Contents of a square emptied by set(..., 0, ...).
EMPTY_CELL = Cell(Side.NONE, 0)
