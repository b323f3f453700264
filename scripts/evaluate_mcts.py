#!/usr/bin/env python3
"""Evaluate the MCTS player against a random baseline, or watch it play itself."""

import argparse
import json
from dataclasses import replace
from typing import Optional

import numpy as np

from ultimate_ttt import MCTSConfig, MCTSPolicy, RandomPolicy, format_game, new_game, search
from ultimate_ttt.config import ExperimentConfig, load_yaml_config
from ultimate_ttt.evaluation import evaluate_policies


def watch_self_play(config: MCTSConfig, seed: Optional[int] = None) -> None:
    rng = np.random.default_rng(seed)
    game = new_game()
    print(format_game(game))
    while not game.is_terminal:
        game = search(game, config.num_simulations, rng=rng, config=config)
        print(format_game(game))
    print(json.dumps({"result": game.result.value}, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--episodes", type=int, default=20)
    parser.add_argument("--mcts-simulations", type=int)
    parser.add_argument("--exploration", type=float)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--self-play", action="store_true", help="Print an MCTS vs MCTS game and exit")
    args = parser.parse_args()

    config = ExperimentConfig.from_dict(load_yaml_config(args.config))
    mcts_config = config.mcts_config
    if args.mcts_simulations is not None:
        mcts_config = replace(mcts_config, num_simulations=args.mcts_simulations)
    if args.exploration is not None:
        mcts_config = replace(mcts_config, exploration=args.exploration)
    seed = args.seed if args.seed is not None else config.seed

    if args.self_play:
        watch_self_play(mcts_config, seed=seed)
        return

    rng = np.random.default_rng(seed)
    policy_mcts = MCTSPolicy(mcts_config, rng=np.random.default_rng(int(rng.integers(2**32))))
    baseline = RandomPolicy(np.random.default_rng(int(rng.integers(2**32))))

    result = evaluate_policies(policy_mcts, baseline, episodes=args.episodes)

    output = {
        "games": result.games_played,
        "mcts_wins": result.policy_a_wins,
        "random_wins": result.policy_b_wins,
        "draws": result.draws,
        "average_length": result.average_length,
        "mcts_winrate": result.winrate_a(),
        "random_winrate": result.winrate_b(),
        "mcts": vars(mcts_config),
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
