"""
Random agent for jumpcube.
"""
import random


class RandomAgent:
    """
    An agent that plays random legal moves.

    This is the simplest possible agent - it just selects uniformly
    at random from all squares the side to move may add a spot to.
    """

    def __init__(self, seed=None):
        """
        Initialize the random agent.

        Args:
            seed (int, optional): Random seed for reproducible behavior
        """
        self.rng = random.Random(seed)

    def select_action(self, board):
        """
        Select a random legal move for the side whose turn it is.

        Args:
            board: Board with the current position

        Returns:
            tuple: (row, col) coordinates of selected move, or None if no legal moves
        """
        legal_moves = board.legal_moves(board.side_to_move())

        if not legal_moves:
            return None

        n = self.rng.choice(legal_moves)
        return (board.row(n), board.col(n))
