from __future__ import annotations

from typing import List

from .errors import CellAlreadyOccupied, InvalidBoard
from .state import BOARD_SIZE, Game, GameResult, Move

ACTION_VECTOR_SIZE = BOARD_SIZE ** 4


def new_game() -> Game:
    """Empty boards, X to move and no previous move."""
    return Game()


def get_winner(game: Game) -> GameResult:
    return game.result


def apply_move(game: Game, move: Move) -> Game:
    if game.is_terminal:
        raise ValueError("Cannot apply a move to a finished game.")

    if game.square(move) is not None:
        raise CellAlreadyOccupied()

    if game.last_move is not None:
        # The opponent's last cell names the board we must play in, unless
        # that board is already finished.
        x, y = game.last_move
        if move.board != (x, y) and not game.board_results[x][y].is_terminal:
            raise InvalidBoard()

    if game.board_results[move.board_row][move.board_col].is_terminal:
        raise InvalidBoard("the specified board is already finished")

    rows = [list(row) for row in game.boards]
    target = rows[move.board_row][move.board_col]
    rows[move.board_row][move.board_col] = target.with_square(move.cell_row, move.cell_col, game.current_player)

    return Game(
        boards=tuple(tuple(row) for row in rows),
        current_player=game.current_player.other,
        last_move=move.cell,
    )


def legal_moves(game: Game) -> List[Move]:
    if game.is_terminal:
        raise ValueError("Cannot enumerate moves of a finished game.")

    active = game.active_board
    if active is not None:
        boards_to_consider = [active]
    else:
        boards_to_consider = [
            (row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if not game.board_results[row][col].is_terminal
        ]

    moves: List[Move] = []
    for board_row, board_col in boards_to_consider:
        for cell_row, cell_col in game.boards[board_row][board_col].empty_cells():
            moves.append(Move(board_row, board_col, cell_row, cell_col))
    return moves


def encode_move(move: Move) -> int:
    board_index = move.board_row * BOARD_SIZE + move.board_col
    cell_index = move.cell_row * BOARD_SIZE + move.cell_col
    return board_index * BOARD_SIZE * BOARD_SIZE + cell_index


def decode_move(index: int) -> Move:
    if not 0 <= index < ACTION_VECTOR_SIZE:
        raise ValueError("Move index out of range.")
    board_index, cell_index = divmod(index, BOARD_SIZE * BOARD_SIZE)
    board_row, board_col = divmod(board_index, BOARD_SIZE)
    cell_row, cell_col = divmod(cell_index, BOARD_SIZE)
    return Move(board_row, board_col, cell_row, cell_col)
