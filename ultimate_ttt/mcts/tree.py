from __future__ import annotations

from typing import Dict, List, Optional, Set

from ultimate_ttt.core import Game


class TreeData:
    __slots__ = ("visit_count", "total_score", "children")

    def __init__(self) -> None:
        self.visit_count: int = 0
        # Sum of playout outcomes from X's point of view.
        self.total_score: int = 0
        self.children: Set[Game] = set()

    def mean_score(self) -> float:
        if self.visit_count == 0:
            return 0.0
        return self.total_score / self.visit_count


class SearchTree:
    """Statistics per game state, shared by every path that reaches it.

    Entries live in a flat list and are addressed through a state -> index
    map. The tree belongs to one search session; callers that want to reuse
    statistics between moves pass the same instance along explicitly.
    """

    def __init__(self) -> None:
        self._index: Dict[Game, int] = {}
        self._nodes: List[TreeData] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, game: Game) -> bool:
        return game in self._index

    def get(self, game: Game) -> Optional[TreeData]:
        index = self._index.get(game)
        if index is None:
            return None
        return self._nodes[index]

    def get_or_create(self, game: Game) -> TreeData:
        index = self._index.get(game)
        if index is None:
            index = len(self._nodes)
            self._index[game] = index
            self._nodes.append(TreeData())
        return self._nodes[index]

    def children(self, game: Game) -> Set[Game]:
        data = self.get(game)
        if data is None:
            return set()
        return data.children

    def record_child(self, parent: Game, child: Game) -> None:
        self.get_or_create(parent).children.add(child)

    def add_visit(self, game: Game) -> None:
        self.get_or_create(game).visit_count += 1

    def add_score(self, game: Game, delta: int) -> None:
        self.get_or_create(game).total_score += delta

    def clear(self) -> None:
        self._index.clear()
        self._nodes.clear()
