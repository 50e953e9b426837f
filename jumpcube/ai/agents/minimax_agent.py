"""
Minimax agent for jumpcube.

Searches the game tree to a fixed depth with alpha-beta pruning. The search
walks a private copy of the board, applying each move with add_spot_index
and taking it back with undo, so no board is allocated per tree node.
"""
import logging
import time
from typing import Callable, Dict, Optional, Tuple

from ...core.board import Board
from ...core.cell import Side
from ...core.errors import GameError

logger = logging.getLogger(__name__)

# Score of a position won by A (negated for B).
WIN_SCORE = 1000


class SearchConfig:
    """Configuration for minimax search."""

    def __init__(self,
                 depth: int = 4,
                 win_score: int = WIN_SCORE,
                 prune: bool = True):

        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.win_score = win_score
        self.prune = prune

    def to_dict(self) -> Dict:
        """Convert config to dictionary."""
        return {k: v for k, v in self.__dict__.items()}

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'SearchConfig':
        """Create config from dictionary."""
        return cls(**config_dict)


def static_eval(board, win_score=WIN_SCORE):
    """
    Heuristic value of a position, from A's point of view.

    Args:
        board: Board to evaluate
        win_score: Value of a won position

    Returns:
        int: win_score if A has won, -win_score if B has won, otherwise
            the number of squares A owns minus the number B owns
    """
    winner = board.winner()
    if winner is Side.A:
        return win_score
    elif winner is Side.B:
        return -win_score
    return board.num_of_side(Side.A) - board.num_of_side(Side.B)


class MinimaxAgent:
    """
    An agent that picks moves by depth-limited minimax with alpha-beta pruning.

    A is always the maximizing side. Moves are tried in increasing square
    order and the chosen move only changes on a strict improvement, so
    among equally good moves the lowest-numbered one wins.
    """

    def __init__(self,
                 config: Optional[SearchConfig] = None,
                 reporter: Optional[Callable[[int, int], None]] = None):
        """
        Initialize the minimax agent.

        Args:
            config: Search settings (defaults to SearchConfig())
            reporter: Optional callable(row, col) told about every chosen move
        """
        self.config = config if config is not None else SearchConfig()
        self.reporter = reporter
        self.nodes_searched = 0
        self.last_value = None
        self._found_move = None

    def select_action(self, board) -> Optional[Tuple[int, int]]:
        """
        Select a move for the side whose turn it is.

        Args:
            board: Board with the current position

        Returns:
            tuple: (row, col) of the chosen move, or None if the game is over
        """
        if board.winner() is not None:
            return None
        n = self.choose_move(board, board.side_to_move())
        return (board.row(n), board.col(n))

    def choose_move(self, board, side, depth=None) -> int:
        """
        Search for the best move for SIDE.

        The caller's board is left untouched.

        Args:
            board: Board with the current position
            side: Side to move; must equal board.side_to_move()
            depth: Search depth in plies (defaults to config.depth)

        Returns:
            int: Square number of the chosen move

        Raises:
            GameError: if the game is over or it is not SIDE's turn
        """
        if board.winner() is not None:
            raise GameError("Game is already over")
        if side is not board.side_to_move():
            raise GameError(f"It is not {side.name}'s turn to move")
        if depth is None:
            depth = self.config.depth
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")

        work = Board.from_board(board)
        sense = 1 if side is Side.A else -1
        self._found_move = None
        self.nodes_searched = 0

        start_time = time.time()
        value = self._minimax(work, depth, True, sense, float('-inf'), float('inf'))
        elapsed = time.time() - start_time

        move = self._found_move
        self.last_value = value
        logger.debug(f"{side.name} chose {board.move_string(move)} (value {value}, "
                     f"depth {depth}, {self.nodes_searched} nodes, {elapsed:.3f}s)")

        if self.reporter is not None:
            self.reporter(board.row(move), board.col(move))
        return move

    def _minimax(self, board, depth, save_move, sense, alpha, beta):
        """
        Return the value of BOARD searched to DEPTH plies.

        SENSE is 1 when the side to move maximizes and -1 when it minimizes.
        When SAVE_MOVE is set, the best move found is kept in _found_move.
        A node stops trying moves once alpha >= beta (if pruning is enabled).
        """
        self.nodes_searched += 1
        if depth == 0 or board.winner() is not None:
            return static_eval(board, self.config.win_score)

        best = float('-inf') if sense == 1 else float('inf')
        mover = board.side_to_move()
        for n in board.legal_moves(mover):
            board.add_spot_index(mover, n)
            response = self._minimax(board, depth - 1, False, -sense, alpha, beta)
            board.undo()

            if sense == 1:
                if response > best:
                    best = response
                    alpha = max(alpha, best)
                    if save_move:
                        self._found_move = n
            elif response < best:
                best = response
                beta = min(beta, best)
                if save_move:
                    self._found_move = n

            if self.config.prune and alpha >= beta:
                break

        return best
