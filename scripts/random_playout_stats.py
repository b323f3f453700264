#!/usr/bin/env python3
"""Estimate first-player, second-player and tie rates of uniform random self-play."""

import argparse
import json

from tqdm.auto import tqdm

from ultimate_ttt.config import ExperimentConfig, load_yaml_config
from ultimate_ttt.selfplay import SelfPlayManager


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--workers", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--chunks", type=int, default=10, help="Report progress after each chunk of games")
    args = parser.parse_args()

    config = ExperimentConfig.from_dict(load_yaml_config(args.config))
    episodes = args.episodes if args.episodes is not None else config.episodes
    workers = args.workers if args.workers is not None else config.workers
    seed = args.seed if args.seed is not None else config.seed

    manager = SelfPlayManager(seed=seed)
    totals = {"games_played": 0, "x_wins": 0, "o_wins": 0, "ties": 0, "total_moves": 0}
    chunks = max(1, min(args.chunks, episodes))
    sizes = [episodes // chunks] * chunks
    for i in range(episodes % chunks):
        sizes[i] += 1

    with tqdm(total=episodes, desc="Random playouts") as progress:
        for size in sizes:
            result = manager.generate(size, workers=workers)
            for key in totals:
                totals[key] += result[key]
            progress.update(size)

    games = totals["games_played"]
    output = {
        "games": games,
        "first_player_wins": totals["x_wins"] / games if games else 0.0,
        "second_player_wins": totals["o_wins"] / games if games else 0.0,
        "ties": totals["ties"] / games if games else 0.0,
        "average_moves": totals["total_moves"] / games if games else 0.0,
        "workers": workers,
        "seed": seed,
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
