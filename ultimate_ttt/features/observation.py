from __future__ import annotations

from typing import Tuple

import numpy as np

from ultimate_ttt.core import (
    ACTION_VECTOR_SIZE,
    BOARD_SIZE,
    Game,
    encode_move,
    legal_moves,
)

BOARD_DIM = BOARD_SIZE * BOARD_SIZE
# mover stones, opponent stones, legal targets, finished boards
BOARD_CHANNELS = 4
# current player one-hot (2) + free move flag (1)
AUX_VECTOR_SIZE = 3


def legal_action_mask(game: Game) -> np.ndarray:
    mask = np.zeros(ACTION_VECTOR_SIZE, dtype=np.int8)
    if game.is_terminal:
        return mask
    for move in legal_moves(game):
        mask[encode_move(move)] = 1
    return mask


def build_board_tensor(game: Game) -> np.ndarray:
    """Return board tensor with shape (4, 9, 9) channel-first, in global square coordinates."""
    grid = game.to_numpy()
    tensor = np.zeros((BOARD_CHANNELS, BOARD_DIM, BOARD_DIM), dtype=np.float32)
    tensor[0] = grid == int(game.current_player)
    tensor[1] = grid == int(game.current_player.other)

    if not game.is_terminal:
        for move in legal_moves(game):
            tensor[2, move.board_row * BOARD_SIZE + move.cell_row, move.board_col * BOARD_SIZE + move.cell_col] = 1.0

    for board_row, row in enumerate(game.board_results):
        for board_col, result in enumerate(row):
            if result.is_terminal:
                rows = slice(board_row * BOARD_SIZE, (board_row + 1) * BOARD_SIZE)
                cols = slice(board_col * BOARD_SIZE, (board_col + 1) * BOARD_SIZE)
                tensor[3, rows, cols] = 1.0
    return tensor


def build_aux_vector(game: Game) -> np.ndarray:
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[int(game.current_player) - 1] = 1.0
    aux[2] = 1.0 if game.active_board is None else 0.0
    return aux


def game_to_numpy(game: Game) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(game), build_aux_vector(game)
