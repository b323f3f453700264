from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

from ultimate_ttt.core import Game, GameResult, Move, Player, apply_move, legal_moves, new_game
from ultimate_ttt.mcts import MCTS, MCTSConfig, simulate


class Policy:
    """Chooses one legal move for the player to move."""

    def act(self, game: Game) -> Move:
        raise NotImplementedError

    def spawn(self, seed: Optional[int] = None) -> "Policy":
        """Return a copy of this policy for parallel execution."""
        return self


class RandomPolicy(Policy):
    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng or np.random.default_rng()

    def act(self, game: Game) -> Move:
        moves = legal_moves(game)
        return moves[int(self.rng.integers(len(moves)))]

    def spawn(self, seed: Optional[int] = None) -> "RandomPolicy":
        return RandomPolicy(np.random.default_rng(seed))


class MCTSPolicy(Policy):
    """Runs a fresh search for every move; statistics are not kept between moves."""

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._config = deepcopy(config) if config else MCTSConfig()
        self.rng = rng or np.random.default_rng()

    @property
    def config(self) -> MCTSConfig:
        return self._config

    def act(self, game: Game) -> Move:
        return MCTS(self._config, rng=self.rng).run(game).move

    def spawn(self, seed: Optional[int] = None) -> "MCTSPolicy":
        return MCTSPolicy(self._config, rng=np.random.default_rng(seed))


@dataclass
class PlayedGame:
    final_state: Game
    moves: List[Move] = field(default_factory=list)

    @property
    def result(self) -> GameResult:
        return self.final_state.result


def play_game(
    policy_x: Policy,
    policy_o: Policy,
    *,
    start: Optional[Game] = None,
) -> PlayedGame:
    state = start or new_game()
    moves: List[Move] = []
    while not state.is_terminal:
        policy = policy_x if state.current_player is Player.X else policy_o
        move = policy.act(state)
        state = apply_move(state, move)
        moves.append(move)
    return PlayedGame(final_state=state, moves=moves)


def _empty_results() -> Dict[str, object]:
    return {
        "games_played": 0,
        "x_wins": 0,
        "o_wins": 0,
        "ties": 0,
        "total_moves": 0,
    }


class SelfPlayManager:
    """Plays independent games and tallies outcomes.

    Without policies every game is a uniform random playout from the empty
    board. Games can be spread over worker threads; each worker owns its
    generator, policies and tallies, which are summed once all workers finish.
    """

    def __init__(
        self,
        policy_x: Optional[Policy] = None,
        policy_o: Optional[Policy] = None,
        *,
        seed: Optional[int] = None,
    ) -> None:
        if (policy_x is None) != (policy_o is None):
            raise ValueError("Provide both policies or neither.")
        self.policy_x = policy_x
        self.policy_o = policy_o
        self.rng = np.random.default_rng(seed)

    def generate(self, episodes: int, workers: int = 1) -> Dict[str, object]:
        results = _empty_results()
        if workers <= 1:
            worker_results = self._run_worker(self.policy_x, self.policy_o, episodes, self.rng)
            self._merge(results, worker_results)
        else:
            counts = [episodes // workers] * workers
            for i in range(episodes % workers):
                counts[i] += 1
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = []
                for count in counts:
                    if count == 0:
                        continue
                    seed = int(self.rng.integers(2**32))
                    policy_x, policy_o = self._spawn_policies(seed)
                    futures.append(
                        executor.submit(
                            self._run_worker,
                            policy_x,
                            policy_o,
                            count,
                            np.random.default_rng(seed),
                        )
                    )
                for future in futures:
                    self._merge(results, future.result())

        games = results["games_played"]
        results["average_moves"] = results["total_moves"] / games if games else 0.0
        results["x_win_rate"] = results["x_wins"] / games if games else 0.0
        results["o_win_rate"] = results["o_wins"] / games if games else 0.0
        results["tie_rate"] = results["ties"] / games if games else 0.0
        return results

    def _spawn_policies(self, seed: int) -> Tuple[Optional[Policy], Optional[Policy]]:
        if self.policy_x is None or self.policy_o is None:
            return None, None
        # Distinct seeds so the two sides do not mirror each other's draws.
        return self.policy_x.spawn(seed), self.policy_o.spawn(seed + 1)

    def _play_single_episode(
        self,
        policy_x: Optional[Policy],
        policy_o: Optional[Policy],
        rng: np.random.Generator,
    ) -> Tuple[GameResult, int]:
        if policy_x is None or policy_o is None:
            path, _ = simulate(new_game(), rng)
            return path[-1].result, len(path) - 1
        played = play_game(policy_x, policy_o)
        return played.result, len(played.moves)

    def _run_worker(
        self,
        policy_x: Optional[Policy],
        policy_o: Optional[Policy],
        episodes: int,
        rng: np.random.Generator,
    ) -> Dict[str, object]:
        worker_results = _empty_results()
        for _ in range(episodes):
            game_result, move_count = self._play_single_episode(policy_x, policy_o, rng)
            worker_results["games_played"] += 1
            worker_results["total_moves"] += move_count
            if game_result is GameResult.X_WON:
                worker_results["x_wins"] += 1
            elif game_result is GameResult.O_WON:
                worker_results["o_wins"] += 1
            else:
                worker_results["ties"] += 1
        return worker_results

    @staticmethod
    def _merge(results: Dict[str, object], worker_results: Dict[str, object]) -> None:
        for key in ("games_played", "x_wins", "o_wins", "ties", "total_moves"):
            results[key] += worker_results[key]


def random_playout_summary(
    episodes: int,
    *,
    workers: int = 1,
    seed: Optional[int] = None,
) -> Dict[str, object]:
    """Win/tie rates of uniform random self-play from the empty board."""
    return SelfPlayManager(seed=seed).generate(episodes, workers=workers)
