from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from functools import cached_property
from typing import Iterator, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

BOARD_SIZE = 3

BoardArray = NDArray[np.int8]
Coordinates = Tuple[int, int]


class Player(IntEnum):
    X = 1
    O = 2

    @property
    def other(self) -> "Player":
        return Player.O if self is Player.X else Player.X


# ``None`` marks an empty square.
Square = Optional[Player]
SquareRow = Tuple[Square, Square, Square]


class GameResult(Enum):
    IN_PROGRESS = "in_progress"
    TIE = "tie"
    X_WON = "x_won"
    O_WON = "o_won"

    @property
    def is_terminal(self) -> bool:
        return self is not GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self is GameResult.X_WON:
            return Player.X
        if self is GameResult.O_WON:
            return Player.O
        return None

    @property
    def score(self) -> int:
        """Signed outcome from X's point of view: +1, -1 or 0 for a tie."""
        if self is GameResult.X_WON:
            return 1
        if self is GameResult.O_WON:
            return -1
        if self is GameResult.TIE:
            return 0
        raise ValueError("A game in progress has no score.")

    @staticmethod
    def won_by(player: Player) -> "GameResult":
        return GameResult.X_WON if player is Player.X else GameResult.O_WON


LINES: Tuple[Tuple[Coordinates, Coordinates, Coordinates], ...] = (
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


def _empty_rows() -> Tuple[SquareRow, SquareRow, SquareRow]:
    return ((None, None, None), (None, None, None), (None, None, None))


@dataclass(frozen=True)
class Move:
    board_row: int
    board_col: int
    cell_row: int
    cell_col: int

    def __post_init__(self) -> None:
        for value in self.as_tuple():
            if not 0 <= value < BOARD_SIZE:
                raise ValueError(f"Move coordinates must be in [0, {BOARD_SIZE - 1}], got {self.as_tuple()}.")

    @property
    def board(self) -> Coordinates:
        return (self.board_row, self.board_col)

    @property
    def cell(self) -> Coordinates:
        return (self.cell_row, self.cell_col)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.board_row, self.board_col, self.cell_row, self.cell_col)


@dataclass(frozen=True)
class Board:
    """A traditional 3x3 tic-tac-toe board inside the larger game."""

    squares: Tuple[SquareRow, SquareRow, SquareRow] = field(default_factory=_empty_rows)

    def __getitem__(self, cell: Coordinates) -> Square:
        row, col = cell
        return self.squares[row][col]

    def with_square(self, row: int, col: int, player: Player) -> "Board":
        rows = list(self.squares)
        cells = list(rows[row])
        cells[col] = player
        rows[row] = tuple(cells)
        return Board(tuple(rows))

    def empty_cells(self) -> Iterator[Coordinates]:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if self.squares[row][col] is None:
                    yield row, col

    def _has_line(self, player: Player) -> bool:
        return any(all(self[cell] is player for cell in line) for line in LINES)

    def get_winner(self) -> GameResult:
        if self._has_line(Player.O):
            return GameResult.O_WON
        if self._has_line(Player.X):
            return GameResult.X_WON
        if all(square is not None for row in self.squares for square in row):
            return GameResult.TIE
        return GameResult.IN_PROGRESS

    @property
    def is_finished(self) -> bool:
        return self.get_winner().is_terminal


def _empty_boards() -> Tuple[Tuple[Board, Board, Board], ...]:
    return tuple(tuple(Board() for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE))


@dataclass(frozen=True)
class Game:
    """Snapshot of a full game: nine boards, the mover and the last cell played.

    ``last_move`` holds the cell-level coordinates of the previous move, which
    is the address of the board the current player is sent to. Instances are
    immutable and compare/hash by value, so they can key search statistics.
    """

    boards: Tuple[Tuple[Board, Board, Board], ...] = field(default_factory=_empty_boards)
    current_player: Player = Player.X
    last_move: Optional[Coordinates] = None

    def board(self, row: int, col: int) -> Board:
        return self.boards[row][col]

    def square(self, move: Move) -> Square:
        return self.boards[move.board_row][move.board_col][move.cell]

    @cached_property
    def board_results(self) -> Tuple[Tuple[GameResult, ...], ...]:
        return tuple(tuple(board.get_winner() for board in row) for row in self.boards)

    @cached_property
    def result(self) -> GameResult:
        results = self.board_results
        for player in (Player.O, Player.X):
            won = GameResult.won_by(player)
            if any(all(results[r][c] is won for r, c in line) for line in LINES):
                return won
        if all(result.is_terminal for row in results for result in row):
            return GameResult.TIE
        return GameResult.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self.result.is_terminal

    @property
    def active_board(self) -> Optional[Coordinates]:
        """Board the current player is forced into, or ``None`` for a free move."""
        if self.last_move is None:
            return None
        row, col = self.last_move
        if self.board_results[row][col].is_terminal:
            return None
        return self.last_move

    def to_numpy(self) -> BoardArray:
        grid = np.zeros((BOARD_SIZE * BOARD_SIZE, BOARD_SIZE * BOARD_SIZE), dtype=np.int8)
        for board_row in range(BOARD_SIZE):
            for board_col in range(BOARD_SIZE):
                squares = self.boards[board_row][board_col].squares
                for cell_row in range(BOARD_SIZE):
                    for cell_col in range(BOARD_SIZE):
                        square = squares[cell_row][cell_col]
                        if square is not None:
                            grid[board_row * BOARD_SIZE + cell_row, board_col * BOARD_SIZE + cell_col] = int(square)
        return grid

    @classmethod
    def from_numpy(
        cls,
        grid: np.ndarray,
        current_player: Player = Player.X,
        last_move: Optional[Coordinates] = None,
    ) -> "Game":
        """Inverse of :meth:`to_numpy`: 0 empty, 1 X, 2 O in global square coordinates."""
        grid = np.asarray(grid)
        if grid.shape != (BOARD_SIZE * BOARD_SIZE, BOARD_SIZE * BOARD_SIZE):
            raise ValueError(f"Expected a 9x9 grid, got shape {grid.shape}.")
        boards = []
        for board_row in range(BOARD_SIZE):
            row_boards = []
            for board_col in range(BOARD_SIZE):
                block = grid[
                    board_row * BOARD_SIZE : (board_row + 1) * BOARD_SIZE,
                    board_col * BOARD_SIZE : (board_col + 1) * BOARD_SIZE,
                ]
                squares = tuple(
                    tuple(Player(int(value)) if value else None for value in cells) for cells in block
                )
                row_boards.append(Board(squares))
            boards.append(tuple(row_boards))
        return cls(boards=tuple(boards), current_player=current_player, last_move=last_move)

    def __repr__(self) -> str:
        return f"Game(current={self.current_player.name}, last_move={self.last_move}, result={self.result.value})"
