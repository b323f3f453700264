#!/usr/bin/env python3
"""Play Ultimate Tic-Tac-Toe in the console, against a friend or the MCTS player."""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from ultimate_ttt import (
    Game,
    GameResult,
    InvalidMoveError,
    MCTSPolicy,
    Move,
    Player,
    apply_move,
    format_game,
    new_game,
)
from ultimate_ttt.config import ExperimentConfig, load_yaml_config


def parse_move(raw: str) -> Move:
    parts = raw.split()
    if len(parts) != 4 or not all(part.isdigit() for part in parts):
        raise ValueError("Enter four integers between 0 and 2, e.g. 0 0 1 1.")
    return Move(*(int(part) for part in parts))


def prompt_human_move(game: Game, input_fn: Callable[[str], str] = input) -> Tuple[Move, Game]:
    """Ask until the entered move is accepted; returns it and the resulting game."""
    while True:
        raw = input_fn("Enter board row, board column, cell row and cell column (q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        try:
            move = parse_move(raw)
            return move, apply_move(game, move)
        except InvalidMoveError as exc:
            print(f"Invalid move: {exc}")
        except ValueError as exc:
            print(exc)


def describe_result(result: GameResult) -> str:
    if result.winner is not None:
        return f"{result.winner.name} won"
    if result is GameResult.TIE:
        return "It's a tie"
    return "The game is still in progress"


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Saved game log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text(encoding="utf-8"))
    moves = data.get("moves", [])
    game = new_game()
    if verbose:
        print("Replaying logged game.")
        print(format_game(game))
    for entry in moves:
        move = Move(*entry["move"])
        game = apply_move(game, move)
        if verbose:
            actor = entry.get("actor", "unknown")
            player = entry.get("player", "?")
            print(f"{actor} ({player}) moved in board {move.board} in cell {move.cell}")
            print(format_game(game))
    summary = {
        "result": game.result.value,
        "moves": len(moves),
        "board": game.to_numpy().tolist(),
    }
    if verbose:
        print(describe_result(game.result))
    return summary


def build_config(args: argparse.Namespace) -> ExperimentConfig:
    """File settings with command-line flags taking precedence."""
    config = ExperimentConfig.from_dict(load_yaml_config(args.config))
    if args.mcts_simulations is not None:
        config = replace(config, mcts_config=replace(config.mcts_config, num_simulations=args.mcts_simulations))
    if args.seed is not None:
        config = replace(config, seed=args.seed)
    if args.log_file:
        config = replace(config, log_file=args.log_file)
    return config


def play_interactive(args: argparse.Namespace) -> None:
    config = build_config(args)
    mcts_config = config.mcts_config

    ai_player: Optional[Player] = None
    policy_ai: Optional[MCTSPolicy] = None
    if args.ai != "none":
        ai_player = Player[args.ai.upper()]
        policy_ai = MCTSPolicy(mcts_config, rng=np.random.default_rng(config.seed))
        print(f"MCTS plays {ai_player.name} with {mcts_config.num_simulations} simulations per move.")

    log_records: List[Dict] = []
    game = new_game()
    while True:
        print(format_game(game))
        if game.is_terminal:
            break

        current_player = game.current_player
        print(f"Current player: {current_player.name}")
        if current_player is ai_player and policy_ai is not None:
            move = policy_ai.act(game)
            game = apply_move(game, move)
            actor = "ai"
        else:
            move, game = prompt_human_move(game)
            actor = "human"

        print(f"{current_player.name} moved in board {move.board} in cell {move.cell}")
        log_records.append(
            {
                "move_index": len(log_records),
                "actor": actor,
                "player": current_player.name,
                "move": list(move.as_tuple()),
            }
        )

    print(describe_result(game.result))

    if config.log_file:
        metadata = {
            "ai": args.ai,
            "mcts": vars(mcts_config),
            "seed": config.seed,
            "result": game.result.value,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(config.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Ultimate Tic-Tac-Toe in the console.")
    parser.add_argument("--ai", choices=["none", "x", "o"], default="o", help="Side played by MCTS")
    parser.add_argument("--config", type=str, default="configs/default.yaml")
    parser.add_argument("--mcts-simulations", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
