"""Core game logic for Ultimate Tic-Tac-Toe."""

from .display import format_game
from .errors import CellAlreadyOccupied, InvalidBoard, InvalidMoveError
from .state import BOARD_SIZE, Board, Game, GameResult, Move, Player, Square
from .rules import (
    ACTION_VECTOR_SIZE,
    apply_move,
    decode_move,
    encode_move,
    get_winner,
    legal_moves,
    new_game,
)

__all__ = [
    "Board",
    "Game",
    "GameResult",
    "Move",
    "Player",
    "Square",
    "InvalidMoveError",
    "CellAlreadyOccupied",
    "InvalidBoard",
    "ACTION_VECTOR_SIZE",
    "BOARD_SIZE",
    "apply_move",
    "decode_move",
    "encode_move",
    "format_game",
    "get_winner",
    "legal_moves",
    "new_game",
]
