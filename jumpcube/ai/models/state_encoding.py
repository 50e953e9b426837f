"""
Array encodings of jumpcube positions.

Converts a board into numpy planes for analysis or learned evaluators.
"""
import numpy as np

from ...core.cell import Side


def encode_board(board):
    """
    Encode a board into a 3-channel array.

    Args:
        board: Board to encode

    Returns:
        np.ndarray: float32 array of shape (3, N, N) with channels:
            - Channel 0: Unit counts on squares owned by A (0 elsewhere)
            - Channel 1: Unit counts on squares owned by B (0 elsewhere)
            - Channel 2: Turn plane (1 when A is to move, 0 when B is, constant across board)
    """
    size = board.size
    state = np.zeros((3, size, size), dtype=np.float32)

    for n in range(size * size):
        cell = board.get_index(n)
        row, col = divmod(n, size)
        if cell.owner is Side.A:
            state[0, row, col] = cell.count
        elif cell.owner is Side.B:
            state[1, row, col] = cell.count

    turn_value = 1.0 if board.side_to_move() is Side.A else 0.0
    state[2].fill(turn_value)

    return state


def get_legal_moves_mask(board, side):
    """
    Create boolean mask for legal moves.

    Args:
        board: Board instance
        side: Side whose moves are considered

    Returns:
        np.ndarray: Shape (N*N,) boolean mask where True = legal move
    """
    mask = np.zeros(board.size * board.size, dtype=bool)
    legal_moves = board.legal_moves(side)
    if legal_moves:
        mask[legal_moves] = True
    return mask
