"""Errors raised when a move cannot be applied to a game."""

from __future__ import annotations


class InvalidMoveError(ValueError):
    """Making a move wasn't possible. Callers may report it and ask again."""


class CellAlreadyOccupied(InvalidMoveError):
    def __init__(self, message: str = "the specified cell is already occupied") -> None:
        super().__init__(message)


class InvalidBoard(InvalidMoveError):
    def __init__(
        self,
        message: str = "the specified board does not match the coordinates of the opponent's last move",
    ) -> None:
        super().__init__(message)
