"""Monte Carlo Tree Search with uniform random playouts."""

from .playout import simulate
from .tree import SearchTree, TreeData
from .uct import MCTS, MCTSConfig, MCTSResult, mover_sign, search

__all__ = [
    "MCTS",
    "MCTSConfig",
    "MCTSResult",
    "SearchTree",
    "TreeData",
    "mover_sign",
    "search",
    "simulate",
]
