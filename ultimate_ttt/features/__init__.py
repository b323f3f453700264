"""Numpy encodings of game states."""

from .observation import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    BOARD_DIM,
    build_aux_vector,
    build_board_tensor,
    game_to_numpy,
    legal_action_mask,
)

__all__ = [
    "AUX_VECTOR_SIZE",
    "BOARD_CHANNELS",
    "BOARD_DIM",
    "build_aux_vector",
    "build_board_tensor",
    "game_to_numpy",
    "legal_action_mask",
]
