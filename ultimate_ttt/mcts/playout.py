from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from ultimate_ttt.core import Game, apply_move, legal_moves


def simulate(game: Game, rng: Optional[np.random.Generator] = None) -> Tuple[List[Game], int]:
    """Play uniformly random moves until the game ends.

    Returns every state from ``game`` to the terminal one (both included) and
    the outcome from X's point of view.
    """
    rng = rng or np.random.default_rng()
    path = [game]
    state = game
    while not state.is_terminal:
        moves = legal_moves(state)
        state = apply_move(state, moves[int(rng.integers(len(moves)))])
        path.append(state)
    return path, state.result.score
