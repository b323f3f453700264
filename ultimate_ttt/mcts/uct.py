from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

import numpy as np

from ultimate_ttt.core import (
    ACTION_VECTOR_SIZE,
    Game,
    Move,
    Player,
    apply_move,
    encode_move,
    legal_moves,
)

from .playout import simulate
from .tree import SearchTree


def mover_sign(game: Game) -> int:
    """+1 when X is to move, -1 for O. Scores are stored from X's side."""
    return 1 if game.current_player is Player.X else -1


@dataclass
class MCTSConfig:
    num_simulations: int = 100
    # 1.0 reproduces the plain UCB1 bonus sqrt(2 * log2(N) / n).
    exploration: float = 1.0
    random_expansion: bool = True


@dataclass
class MCTSResult:
    state: Game
    move: Move
    visit_counts: np.ndarray
    value: float


class MCTS:
    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
        tree: Optional[SearchTree] = None,
    ) -> None:
        self.config = config or MCTSConfig()
        self.rng = rng or np.random.default_rng()
        self.tree = tree if tree is not None else SearchTree()
        self._successor_cache: Dict[Game, List[Tuple[Move, Game]]] = {}

    # ------------------------------------------------------------------
    def run(self, root: Game) -> MCTSResult:
        if self.config.num_simulations <= 0:
            raise ValueError("num_simulations must be positive.")
        if root.is_terminal:
            raise RuntimeError("Cannot search from a finished game.")
        if self.is_fully_expanded(root):
            raise RuntimeError(
                "Root is already fully expanded in this search tree; start from a fresh SearchTree."
            )

        self.tree.get_or_create(root)
        for _ in range(self.config.num_simulations):
            self._iterate(root)
        return self._best_child(root)

    def search(self, root: Game) -> Game:
        return self.run(root).state

    def is_fully_expanded(self, game: Game) -> bool:
        if game.is_terminal:
            return True
        return len(self._successors(game)) == len(self.tree.children(game))

    def ucb1(self, node: Game, parent: Game) -> float:
        data = self.tree.get(node)
        if data is None or data.visit_count == 0:
            return math.inf
        if self.is_fully_expanded(node):
            return -math.inf
        parent_data = self.tree.get(parent)
        parent_visits = max(parent_data.visit_count if parent_data else 0, 1)
        exploitation = mover_sign(parent) * data.total_score / data.visit_count
        exploration = self.config.exploration * math.sqrt(
            2.0 * math.log2(parent_visits) / data.visit_count
        )
        return exploitation + exploration

    # ------------------------------------------------------------------
    def _iterate(self, root: Game) -> None:
        path = self._select(root)
        leaf = path[-1]
        if leaf.is_terminal:
            outcome = leaf.result.score
        else:
            child = self._expand(leaf)
            self.tree.record_child(leaf, child)
            playout, outcome = simulate(child, self.rng)
            path.extend(playout)
        self._backpropagate(path, outcome)

    def _select(self, root: Game) -> List[Game]:
        path = [root]
        node = root
        while not node.is_terminal and self.is_fully_expanded(node):
            node = self._select_child(node)
            path.append(node)
        return path

    def _select_child(self, node: Game) -> Game:
        best_score = -math.inf
        best_child: Optional[Game] = None
        for _, child in self._successors(node):
            score = self.ucb1(child, node)
            if best_child is None or score > best_score:
                best_score = score
                best_child = child

        if best_child is None:
            raise RuntimeError(f"Failed to select a child of {node!r}.")
        return best_child

    def _expand(self, node: Game) -> Game:
        tried = self.tree.children(node)
        untried = [child for _, child in self._successors(node) if child not in tried]
        if not untried:
            raise RuntimeError(
                f"Selection stopped at {node!r}, which has no untried moves; "
                "expansion bookkeeping is inconsistent."
            )
        if self.config.random_expansion:
            return untried[int(self.rng.integers(len(untried)))]
        return untried[0]

    def _backpropagate(self, path: List[Game], outcome: int) -> None:
        for parent, child in zip(path, path[1:]):
            self.tree.record_child(parent, child)
        for state in path:
            self.tree.add_visit(state)
            self.tree.add_score(state, outcome)

    def _best_child(self, root: Game) -> MCTSResult:
        sign = mover_sign(root)
        explored = self.tree.children(root)
        visit_counts = np.zeros(ACTION_VECTOR_SIZE, dtype=np.float32)
        best_value = -math.inf
        best: Optional[Tuple[Move, Game]] = None

        for move, child in self._successors(root):
            data = self.tree.get(child)
            if child not in explored or data is None or data.visit_count == 0:
                continue
            visit_counts[encode_move(move)] = data.visit_count
            value = sign * data.mean_score()
            if best is None or value > best_value:
                best_value = value
                best = (move, child)

        if best is None:
            raise RuntimeError("Search finished without visiting any child of the root.")
        root_data = self.tree.get_or_create(root)
        return MCTSResult(
            state=best[1],
            move=best[0],
            visit_counts=visit_counts,
            value=sign * root_data.mean_score(),
        )

    def _successors(self, game: Game) -> List[Tuple[Move, Game]]:
        cached = self._successor_cache.get(game)
        if cached is None:
            cached = [(move, apply_move(game, move)) for move in legal_moves(game)]
            self._successor_cache[game] = cached
        return cached


def search(
    root: Game,
    budget: int,
    *,
    rng: Optional[np.random.Generator] = None,
    tree: Optional[SearchTree] = None,
    config: Optional[MCTSConfig] = None,
) -> Game:
    """Run ``budget`` MCTS iterations from ``root`` and return the state after the chosen move."""
    if budget <= 0:
        raise ValueError("Search budget must be a positive integer.")
    run_config = replace(config or MCTSConfig(), num_simulations=budget)
    return MCTS(run_config, rng=rng, tree=tree).search(root)
