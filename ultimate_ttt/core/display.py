from __future__ import annotations

from typing import Dict, List, Optional

from .state import BOARD_SIZE, Game, Player

SYMBOLS: Dict[Optional[Player], str] = {None: " ", Player.X: "X", Player.O: "O"}

TOP = "┏━━━┳━━━┳━━━┓"
MIDDLE = "┣━━━╋━━━╋━━━┫"
BOTTOM = "┗━━━┻━━━┻━━━┛"


def format_game(game: Game) -> str:
    """Render the nine boards as a box-drawing grid, one text row per cell row."""
    lines: List[str] = [TOP]
    for board_row in range(BOARD_SIZE):
        for cell_row in range(BOARD_SIZE):
            parts = ["┃"]
            for board_col in range(BOARD_SIZE):
                row = game.boards[board_row][board_col].squares[cell_row]
                parts.append("".join(SYMBOLS[square] for square in row))
                parts.append("┃")
            lines.append("".join(parts))
        lines.append(BOTTOM if board_row == BOARD_SIZE - 1 else MIDDLE)
    return "\n".join(lines)
