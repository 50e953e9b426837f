"""
Board implementation for the jumpcube game.
"""
import logging

from .cell import Cell, Side, INITIAL_CELL, EMPTY_CELL
from .errors import GameError, IllegalMoveError, OutOfRangeError

logger = logging.getLogger(__name__)


def _no_op(board):
    pass


class Board:
    """
    Represents an N x N jumpcube board.

    Squares are addressed either by 1-based (row, col) or by square number,
    counting row by row from 0 (square n is at row n // N + 1, col n % N + 1).

    A square whose unit count exceeds its number of orthogonal neighbours
    overflows: it hands one unit to each neighbour, capturing it, and the
    neighbours may overflow in turn. A side wins by owning every square.

    Board state representation:
    - cells: row-major list of immutable Cell values
    - history: snapshots of the cells taken before each add_spot, popped by undo
    - notifier: callable(board) announced after set() and clear()
    """

    def __init__(self, size):
        """
        Initialize a cleared board.

        Args:
            size (int): Number of rows and of columns (at least 2)
        """
        self._notifier = _no_op
        self._readonly = None
        self._reset(size)

    @classmethod
    def from_board(cls, board):
        """
        Create a board with the same contents as BOARD.

        The copy has an empty undo history and a notifier that does nothing.
        """
        result = cls(board.size)
        result._load(board._snapshot())
        return result

    def _reset(self, size):
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}")
        self._size = size
        self._neighbors = [self._enumerate_neighbors(n) for n in range(size * size)]
        self._history = []
        self._cursor = 0
        self._load([INITIAL_CELL] * (size * size))

    def _load(self, cells):
        """Replace the whole grid and recount the per-side totals."""
        self._cells = list(cells)
        self._owned = {Side.NONE: 0, Side.A: 0, Side.B: 0}
        self._units = 0
        for cell in self._cells:
            self._owned[cell.owner] += 1
            self._units += cell.count

    def _snapshot(self):
        return tuple(self._cells)

    def _put(self, n, cell):
        """Store CELL at square N, keeping the running totals current."""
        old = self._cells[n]
        self._owned[old.owner] -= 1
        self._owned[cell.owner] += 1
        self._units += cell.count - old.count
        self._cells[n] = cell

    def clear(self, size):
        """
        Reinitialize to a cleared SIZE x SIZE board.

        Clears the undo history and announces the change.
        """
        logger.debug(f"Clearing board to {size}x{size}")
        self._reset(size)
        self._announce()

    def copy(self, board):
        """Copy the contents of BOARD into this board, clearing the undo history."""
        if board.size != self._size:
            self._reset(board.size)
        self._history = []
        self._cursor = 0
        self._load(board._snapshot())

    def readonly_board(self):
        """Return a read-only view of this board."""
        if self._readonly is None:
            self._readonly = ReadonlyBoard(self)
        return self._readonly

    @property
    def size(self):
        """Number of rows and of columns."""
        return self._size

    # Geometry

    def exists(self, row, col):
        """Return True iff (ROW, COL) denotes a square on the board."""
        return 1 <= row <= self._size and 1 <= col <= self._size

    def exists_index(self, n):
        """Return True iff N is a valid square number."""
        return 0 <= n < self._size * self._size

    def row(self, n):
        """Return the 1-based row of square N."""
        self._check_index(n)
        return n // self._size + 1

    def col(self, n):
        """Return the 1-based column of square N."""
        self._check_index(n)
        return n % self._size + 1

    def square(self, row, col):
        """Return the square number of (ROW, COL)."""
        if not self.exists(row, col):
            raise OutOfRangeError(f"No square at row {row}, column {col} on a {self._size}x{self._size} board")
        return (row - 1) * self._size + (col - 1)

    def _check_index(self, n):
        if not self.exists_index(n):
            raise OutOfRangeError(f"Square {n} is not on a {self._size}x{self._size} board")

    def move_string(self, n):
        """Return the text "<row> <col>" for square N."""
        return f"{self.row(n)} {self.col(n)}"

    def neighbor_count(self, n):
        """Return the number of orthogonal neighbours of square N (2, 3 or 4)."""
        self._check_index(n)
        return len(self._neighbors[n])

    def neighbors(self, n):
        """
        Return the orthogonal neighbours of square N.

        The order is fixed per position class and decides the order in
        which an overflow feeds its neighbours.
        """
        self._check_index(n)
        return self._neighbors[n]

    def _enumerate_neighbors(self, s):
        size = self._size
        last = size * size - 1
        if s == 0:
            return (1, size)
        elif 1 <= s <= size - 2:
            return (s - 1, s + 1, s + size)
        elif s == size - 1:
            return (s - 1, s + size)
        elif s % size == 0 and size <= s < last + 1 - size:
            return (s - size, s + size, s + 1)
        elif (s + 1) % size == 0 and s > size and s < last:
            return (s - size, s + size, s - 1)
        elif s == last + 1 - size:
            return (s - size, s + 1)
        elif last + 1 - size < s < last:
            return (s + 1, s - 1, s - size)
        elif s == last:
            return (s - size, s - 1)
        else:
            return (s - 1, s + 1, s + size, s - size)

    # Queries

    def get(self, row, col):
        """Return the Cell at (ROW, COL)."""
        return self._cells[self.square(row, col)]

    def get_index(self, n):
        """Return the Cell at square N."""
        self._check_index(n)
        return self._cells[n]

    def num_pieces(self):
        """Return the total number of units on the board."""
        return self._units

    def num_of_side(self, side):
        """Return the number of squares owned by SIDE."""
        return self._owned[side]

    def side_to_move(self):
        """
        Return the side that moves next.

        Derived from the parity of the unit count, which assumes every move
        adds one unit and turns alternate. Once the game is won this is the
        loser.
        """
        return Side.A if (self._units + self._size) % 2 == 0 else Side.B

    def winner(self):
        """
        Return the side that owns every square, or None if the game is not over.
        """
        total = self._size * self._size
        if self._owned[Side.A] == total:
            return Side.A
        elif self._owned[Side.B] == total:
            return Side.B
        return None

    def is_legal_move(self, side, row, col):
        """Return True iff SIDE may add a spot at (ROW, COL)."""
        if not self.exists(row, col):
            return False
        return self.is_legal_index(side, self.square(row, col))

    def is_legal_index(self, side, n):
        """
        Return True iff SIDE may add a spot at square N.

        Turn order is not checked here; see is_legal_turn.
        """
        if side is Side.NONE or not self.exists_index(n):
            return False
        if self._cells[n].owner is side.opposite():
            return False
        return self.winner() is None

    def is_legal_turn(self, side):
        """Return True iff it is SIDE's turn and SIDE has not lost."""
        if self.winner() is side.opposite():
            return False
        return self.side_to_move() is side

    def legal_moves(self, side):
        """
        Get all squares SIDE may add a spot to.

        Returns:
            list: Square numbers in increasing order
        """
        if side is Side.NONE or self.winner() is not None:
            return []
        opponent = side.opposite()
        return [n for n, cell in enumerate(self._cells) if cell.owner is not opponent]

    # Mutation

    def add_spot(self, side, row, col):
        """
        Add a unit for SIDE at (ROW, COL) and resolve any overflow.

        Raises:
            IllegalMoveError: if is_legal_move(SIDE, ROW, COL) is False
        """
        if not self.is_legal_move(side, row, col):
            raise IllegalMoveError(f"Illegal move for {side.name} at row {row}, column {col}")
        self._add_spot(side, self.square(row, col))

    def add_spot_index(self, side, n):
        """
        Add a unit for SIDE at square N and resolve any overflow.

        Raises:
            IllegalMoveError: if is_legal_index(SIDE, N) is False
        """
        if not self.is_legal_index(side, n):
            raise IllegalMoveError(f"Illegal move for {side.name} at square {n}")
        self._add_spot(side, n)

    def _add_spot(self, side, n):
        self._mark_undo()
        self._put(n, Cell(side, self._cells[n].count + 1))
        if self._cells[n].count > len(self._neighbors[n]):
            self._jump(n)
        self._cursor += 1

    def _jump(self, start):
        """
        Resolve all overflows, assuming START is the only over-full square.

        Equivalent to the recursive rule "overflow S, then for each neighbour
        in order add a unit and resolve that neighbour fully, then look at S
        again", but kept on an explicit stack. Each frame is
        [square, neighbours being fed or None, position of next neighbour].
        Stops redistributing as soon as one side owns every square.
        """
        total = self._size * self._size
        stack = [[start, None, 0]]
        while stack:
            frame = stack[-1]
            s, fed, pos = frame
            if fed is None or pos == len(fed):
                cell = self._cells[s]
                neighbors = self._neighbors[s]
                if (self._owned[Side.A] == total or self._owned[Side.B] == total
                        or cell.count <= len(neighbors)):
                    stack.pop()
                    continue
                self._put(s, Cell(cell.owner, cell.count - len(neighbors)))
                frame[1] = neighbors
                frame[2] = 0
                continue
            m = fed[pos]
            frame[2] = pos + 1
            owner = self._cells[s].owner
            self._put(m, Cell(owner, self._cells[m].count + 1))
            stack.append([m, None, 0])

    def set(self, row, col, count, side):
        """
        Put COUNT units of SIDE at (ROW, COL), bypassing the overflow rules.

        A count of 0 leaves the square unowned. Announces the change.
        """
        n = self.square(row, col)
        self._put(n, EMPTY_CELL if count == 0 else Cell(side, count))
        self._announce()

    def undo(self):
        """
        Undo the most recent add_spot.

        Does nothing when there is nothing to undo. If the history has run
        out, restores a cleared board of the same size.
        """
        if self._cursor == 0:
            return
        self._cursor -= 1
        if self._cursor < len(self._history):
            self._load(self._history.pop(self._cursor))
        else:
            self._load([INITIAL_CELL] * (self._size * self._size))

    def _mark_undo(self):
        """Record the position before a move in the undo history."""
        del self._history[self._cursor:]
        self._history.append(self._snapshot())

    # Notification

    def set_notifier(self, notify):
        """Set the callable announced with this board after set() and clear()."""
        self._notifier = notify
        self._announce()

    def _announce(self):
        self._notifier(self)

    # Rendering

    def __str__(self):
        lines = ["==="]
        for row in range(1, self._size + 1):
            cells = (str(self.get(row, col)) for col in range(1, self._size + 1))
            lines.append("    " + " ".join(cells))
        lines.append("===")
        return "\n".join(lines) + "\n"

    def to_display_string(self):
        """
        Render the board for a human, with row numbers on the left and
        column numbers underneath.
        """
        rows = str(self).strip().splitlines()[1:-1]
        lines = [f"{i:2d} {line.strip()}" for i, line in enumerate(rows, start=1)]
        lines.append("  " + "".join(f"{col:3d}" for col in range(1, self._size + 1)))
        return "\n".join(lines)

    def __repr__(self):
        return f"Board(size={self._size}, pieces={self._units})"

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self._snapshot() == other._snapshot()

    __hash__ = None


class ReadonlyBoard(Board):
    """
    A read-only view of another board.

    Queries see the wrapped board's current contents; every mutator raises
    GameError. The view has no undo history and never announces.
    """

    def __init__(self, board):
        self._board = board
        self._notifier = _no_op
        self._readonly = self

    def _snapshot(self):
        return self._board._snapshot()

    def __getattr__(self, name):
        # Private state (_cells, _owned, _units, _size, _neighbors) of the wrapped board.
        if name.startswith('_') and not name.startswith('__') and name != '_board':
            return getattr(self._board, name)
        raise AttributeError(name)

    def _refuse(self, *args, **kwargs):
        raise GameError("Board is read-only")

    clear = copy = add_spot = add_spot_index = set = undo = set_notifier = _refuse
